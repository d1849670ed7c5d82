"""
Notification Routes
Notification panel: list, mark read, mark all read, delete
"""
from flask import Blueprint, jsonify
from schooladmin.extensions import notification_stores
from schooladmin.utils import get_current_user, require_login

notifications_bp = Blueprint('notifications', __name__)


def _store():
    """Cache belonging to the signed-in user"""
    return notification_stores.for_user(get_current_user().get('id'))


def _state(store, success):
    payload = store.snapshot()
    payload['success'] = success
    return jsonify(payload)


@notifications_bp.route('')
@require_login
def list_notifications():
    """Refresh from the backend and return the cache"""
    store = _store()
    return _state(store, store.fetch_notifications())


@notifications_bp.route('/<int:notification_id>/read', methods=['POST'])
@require_login
def mark_as_read(notification_id):
    store = _store()
    return _state(store, store.mark_as_read(notification_id))


@notifications_bp.route('/read-all', methods=['POST'])
@require_login
def mark_all_as_read():
    store = _store()
    return _state(store, store.mark_all_as_read())


@notifications_bp.route('/<int:notification_id>', methods=['DELETE'])
@require_login
def delete_notification(notification_id):
    store = _store()
    return _state(store, store.delete_notification(notification_id))
