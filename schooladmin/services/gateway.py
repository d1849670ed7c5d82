"""
Remote Gateway
HTTP client for the school-management REST backend
"""
import logging

import requests
from flask import has_request_context, session

from schooladmin.errors import RemoteError
from schooladmin.models import Answer, Notification, Test, TestAttempt

logger = logging.getLogger(__name__)


def session_token():
    """Bearer token of the signed-in user, if any"""
    if has_request_context():
        return session.get('token')
    return None


class RemoteGateway:
    """
    Thin wrapper over requests.Session
    Every response is a {"success", "message", "data"} envelope; failures
    become RemoteError with the backend message passed through.
    """

    def __init__(self, base_url=None, timeout=15, token_getter=session_token, http=None):
        self.base_url = (base_url or '').rstrip('/')
        self.timeout = timeout
        self.token_getter = token_getter
        self.http = http or requests.Session()
        self.http.headers.update({'Content-Type': 'application/json'})

    def init_app(self, app):
        self.base_url = app.config['API_URL'].rstrip('/')
        self.timeout = app.config['API_TIMEOUT']

    # ================= TRANSPORT =================

    def _request(self, method, path, params=None, json=None):
        url = f'{self.base_url}{path}'
        headers = {}
        token = self.token_getter() if self.token_getter else None
        if token:
            headers['Authorization'] = f'Bearer {token}'

        try:
            response = self.http.request(
                method, url, params=params, json=json,
                headers=headers, timeout=self.timeout
            )
        except requests.exceptions.Timeout:
            logger.error("%s %s timed out", method, path)
            raise RemoteError('Backend request timed out', 504)
        except requests.exceptions.ConnectionError:
            logger.error("%s %s: could not connect to backend", method, path)
            raise RemoteError('Could not connect to backend', 503)
        except requests.exceptions.RequestException as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise RemoteError(str(e))

        payload = {}
        if response.content:
            try:
                payload = response.json()
            except ValueError:
                payload = {}

        if not response.ok:
            message = payload.get('message') if isinstance(payload, dict) else None
            logger.warning("%s %s -> %s %s", method, path, response.status_code, message)
            raise RemoteError(message or f'Backend returned {response.status_code}',
                              response.status_code)

        if isinstance(payload, dict) and payload.get('success') is False:
            raise RemoteError(payload.get('message') or 'Request failed', response.status_code)

        return payload

    def _data(self, method, path, params=None, json=None):
        payload = self._request(method, path, params=params, json=json)
        return payload.get('data') if isinstance(payload, dict) else None

    def _entity(self, method, path, json=None):
        """Like _data, for calls that must return a single record"""
        data = self._data(method, path, json=json)
        if data is None:
            logger.warning("%s %s returned no data", method, path)
            raise RemoteError('Backend returned no data')
        return data

    # ================= TESTS =================

    def get_test(self, test_id):
        return Test.from_dict(self._entity('GET', f'/tests/{test_id}'))

    # ================= ATTEMPTS =================

    def get_attempt(self, attempt_id):
        return TestAttempt.from_dict(self._entity('GET', f'/test-attempts/{attempt_id}'))

    def get_test_attempts(self, test_id):
        data = self._data('GET', f'/tests/{test_id}/attempts') or []
        return [TestAttempt.from_dict(item) for item in data]

    def get_my_attempts(self, subject_id=None):
        params = {'subject_id': subject_id} if subject_id else None
        data = self._data('GET', '/my-test-attempts', params=params) or []
        return [TestAttempt.from_dict(item) for item in data]

    def start_attempt(self, test_id):
        return TestAttempt.from_dict(self._entity('POST', f'/tests/{test_id}/start'))

    def save_answer(self, attempt_id, question_id, answer_text):
        data = self._entity('POST', f'/test-attempts/{attempt_id}/answers', json={
            'question_id': question_id,
            'answer_text': answer_text,
        })
        return Answer.from_dict(data)

    def submit_attempt(self, attempt_id):
        return TestAttempt.from_dict(self._entity('POST', f'/test-attempts/{attempt_id}/submit'))

    def grade_attempt(self, attempt_id, grades):
        data = self._entity('POST', f'/test-attempts/{attempt_id}/grade', json={'grades': grades})
        return TestAttempt.from_dict(data)

    # ================= NOTIFICATIONS =================

    def get_notifications(self, limit=10):
        data = self._data('GET', '/notifications', params={'limit': limit}) or {}
        items = data.get('data', []) if isinstance(data, dict) else data
        return [Notification.from_dict(item) for item in items]

    def mark_notification_read(self, notification_id):
        self._request('PATCH', f'/notifications/{notification_id}/read')

    def mark_all_notifications_read(self):
        self._request('PATCH', '/notifications/read-all')

    def delete_notification(self, notification_id):
        self._request('DELETE', f'/notifications/{notification_id}')
