"""
Notification Store
In-memory notification cache with an unread counter
"""
import logging
import threading

from schooladmin.errors import RemoteError
from schooladmin.services.sequencer import RequestSequencer

logger = logging.getLogger(__name__)


class NotificationStore:
    """
    Notification cache for one signed-in user.

    unread_count always equals the number of cached notifications with
    is_read False. Mutations call the backend first and only touch the cache
    once that call succeeds; backend failures are logged and the cache is
    left as it was.
    """

    def __init__(self, gateway=None, limit=10):
        self.gateway = gateway
        self.limit = limit
        self._notifications = []
        self._unread_count = 0
        self._is_loading = False
        self._lock = threading.RLock()
        self._sequencer = RequestSequencer()

    def init_app(self, app):
        self.limit = app.config['NOTIFICATION_LIMIT']

    # ================= READ ACCESS =================

    @property
    def notifications(self):
        with self._lock:
            return [n.copy() for n in self._notifications]

    @property
    def unread_count(self):
        with self._lock:
            return self._unread_count

    @property
    def is_loading(self):
        with self._lock:
            return self._is_loading

    def snapshot(self):
        with self._lock:
            return {
                'notifications': [n.to_dict() for n in self._notifications],
                'unread_count': self._unread_count,
                'is_loading': self._is_loading,
            }

    # ================= LIFECYCLE =================

    def reset(self):
        """Empty the cache, e.g. on logout"""
        with self._lock:
            self._notifications = []
            self._unread_count = 0
            self._is_loading = False
        self._sequencer.reset()

    def fetch_notifications(self):
        """Replace the cache from the backend and recount unread items"""
        seq = self._sequencer.issue('fetch')
        with self._lock:
            self._is_loading = True
        try:
            notifications = self.gateway.get_notifications(self.limit)
        except RemoteError as e:
            logger.error("Failed to fetch notifications: %s", e.message)
            return False
        else:
            with self._lock:
                if not self._sequencer.is_current('fetch', seq):
                    logger.info("Discarding stale notification fetch #%s", seq)
                    return False
                self._notifications = [n.copy() for n in notifications]
                self._unread_count = sum(1 for n in self._notifications if not n.is_read)
            return True
        finally:
            with self._lock:
                if self._sequencer.is_current('fetch', seq):
                    self._is_loading = False

    # ================= MUTATIONS =================

    def mark_as_read(self, notification_id):
        try:
            self.gateway.mark_notification_read(notification_id)
        except RemoteError as e:
            logger.error("Failed to mark notification %s as read: %s", notification_id, e.message)
            return False

        with self._lock:
            for notification in self._notifications:
                if notification.id == notification_id and not notification.is_read:
                    notification.is_read = True
                    self._unread_count = max(0, self._unread_count - 1)
                    break
        return True

    def mark_all_as_read(self):
        try:
            self.gateway.mark_all_notifications_read()
        except RemoteError as e:
            logger.error("Failed to mark all notifications as read: %s", e.message)
            return False

        with self._lock:
            for notification in self._notifications:
                notification.is_read = True
            self._unread_count = 0
        return True

    def delete_notification(self, notification_id):
        try:
            self.gateway.delete_notification(notification_id)
        except RemoteError as e:
            logger.error("Failed to delete notification %s: %s", notification_id, e.message)
            return False

        with self._lock:
            removed = next((n for n in self._notifications if n.id == notification_id), None)
            if removed is None:
                return True
            self._notifications = [n for n in self._notifications if n.id != notification_id]
            if not removed.is_read:
                self._unread_count = max(0, self._unread_count - 1)
        return True


class UserNotificationStores:
    """
    One NotificationStore per signed-in user, keyed by user id.

    Stores are created on first use and share the gateway, whose bearer
    token comes from the caller's own session.
    """

    def __init__(self, gateway=None, limit=10):
        self.gateway = gateway
        self.limit = limit
        self._stores = {}
        self._lock = threading.Lock()

    def init_app(self, app):
        self.limit = app.config['NOTIFICATION_LIMIT']

    def for_user(self, user_id):
        with self._lock:
            store = self._stores.get(user_id)
            if store is None:
                store = self._stores[user_id] = NotificationStore(self.gateway, self.limit)
            return store

    def reset(self, user_id=None):
        """Drop one user's cache, or every cache when user_id is None"""
        with self._lock:
            if user_id is None:
                self._stores.clear()
            else:
                self._stores.pop(user_id, None)
