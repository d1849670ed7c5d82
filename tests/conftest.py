"""
Test Configuration and Fixtures
"""
import copy

import pytest

from schooladmin import create_app
from schooladmin.errors import RemoteError
from schooladmin.extensions import attempt_service, notification_stores
from schooladmin.models import Answer, Notification, Test, TestAttempt
from schooladmin.utils.helpers import now_utc, to_iso


def make_test(test_id=1, total_marks=100, passing_marks=40, duration_minutes=30, questions=None):
    if questions is None:
        questions = [
            {'id': 11, 'question_type': 'MCQ', 'question_text': 'Capital of France?',
             'options': ['Paris', 'Rome'], 'correct_answer': 'Paris', 'marks': 40, 'order': 1},
            {'id': 12, 'question_type': 'TRUE_FALSE', 'question_text': 'The earth is round.',
             'options': ['True', 'False'], 'correct_answer': 'True', 'marks': 20, 'order': 2},
            {'id': 13, 'question_type': 'SHORT_ANSWER', 'question_text': 'Explain photosynthesis.',
             'options': None, 'correct_answer': None, 'marks': 40, 'order': 3},
        ]
    return {
        'id': test_id,
        'title': 'Science Unit Test',
        'subject_id': 5,
        'total_marks': total_marks,
        'passing_marks': passing_marks,
        'duration_minutes': duration_minutes,
        'is_published': True,
        'questions': questions,
    }


def make_attempt(attempt_id=10, test=None, submitted=True, graded=False, answers=None,
                 score=None, is_passed=None, started_at=None):
    test = test or make_test()
    if answers is None:
        answers = [
            {'id': 101, 'question_id': 11, 'answer_text': 'paris'},
            {'id': 102, 'question_id': 12, 'answer_text': 'False'},
            {'id': 103, 'question_id': 13, 'answer_text': 'Plants make food from light.'},
        ]
    started = started_at or now_utc()
    return {
        'id': attempt_id,
        'test_id': test['id'],
        'student_id': 7,
        'student': {'id': 7, 'user': {'id': 70, 'name': 'Asha', 'email': 'asha@example.com'}},
        'started_at': to_iso(started),
        'submitted_at': to_iso(now_utc()) if submitted or graded else None,
        'is_graded': graded,
        'score': score,
        'total_marks': test['total_marks'],
        'is_passed': is_passed,
        'graded_by': 3 if graded else None,
        'graded_at': to_iso(now_utc()) if graded else None,
        'test': test,
        'answers': answers,
    }


class FakeBackend:
    """In-memory stand-in for RemoteGateway"""

    def __init__(self):
        self.tests = {1: make_test()}
        self.attempts = {}
        self.notifications = []
        self.calls = []
        self.failures = set()
        self.hooks = {}
        self.next_attempt_id = 500

    def fail(self, *names):
        self.failures.update(names)

    def called(self, name):
        return [call for call in self.calls if call[0] == name]

    def _call(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.failures:
            raise RemoteError(f'{name} failed', 500)

    def _run_hook(self, name):
        hook = self.hooks.pop(name, None)
        if hook is not None:
            hook()

    # tests / attempts

    def get_test(self, test_id):
        self._call('get_test', test_id)
        return Test.from_dict(copy.deepcopy(self.tests[test_id]))

    def get_attempt(self, attempt_id):
        self._call('get_attempt', attempt_id)
        attempt = TestAttempt.from_dict(copy.deepcopy(self.attempts[attempt_id]))
        self._run_hook('get_attempt')
        return attempt

    def get_test_attempts(self, test_id):
        self._call('get_test_attempts', test_id)
        return [TestAttempt.from_dict(copy.deepcopy(a))
                for a in self.attempts.values() if a['test_id'] == test_id]

    def get_my_attempts(self, subject_id=None):
        self._call('get_my_attempts', subject_id)
        return [TestAttempt.from_dict(copy.deepcopy(a)) for a in self.attempts.values()
                if subject_id is None or a['test']['subject_id'] == subject_id]

    def start_attempt(self, test_id):
        self._call('start_attempt', test_id)
        self.next_attempt_id += 1
        payload = make_attempt(self.next_attempt_id, test=copy.deepcopy(self.tests[test_id]),
                               submitted=False, answers=[])
        self.attempts[payload['id']] = payload
        return TestAttempt.from_dict(copy.deepcopy(payload))

    def save_answer(self, attempt_id, question_id, answer_text):
        self._call('save_answer', attempt_id, question_id, answer_text)
        payload = self.attempts[attempt_id]
        answer = {'id': attempt_id * 1000 + question_id, 'question_id': question_id,
                  'answer_text': answer_text}
        payload['answers'] = [a for a in payload['answers'] if a['question_id'] != question_id]
        payload['answers'].append(answer)
        return Answer.from_dict(dict(answer))

    def submit_attempt(self, attempt_id):
        self._call('submit_attempt', attempt_id)
        payload = self.attempts[attempt_id]
        payload['submitted_at'] = to_iso(now_utc())
        return TestAttempt.from_dict(copy.deepcopy(payload))

    def grade_attempt(self, attempt_id, grades):
        self._call('grade_attempt', attempt_id, grades)
        payload = self.attempts[attempt_id]
        by_id = {g['answer_id']: g for g in grades}
        for answer in payload['answers']:
            answer['marks_obtained'] = by_id[answer['id']]['marks_obtained']
            answer['is_correct'] = by_id[answer['id']]['is_correct']
        payload['score'] = sum(g['marks_obtained'] for g in grades)
        payload['is_passed'] = payload['score'] >= self.tests[payload['test_id']]['passing_marks']
        payload['is_graded'] = True
        payload['graded_by'] = 3
        payload['graded_at'] = to_iso(now_utc())
        return TestAttempt.from_dict(copy.deepcopy(payload))

    # notifications

    def get_notifications(self, limit=10):
        self._call('get_notifications', limit)
        items = [Notification.from_dict(dict(n)) for n in self.notifications[:limit]]
        self._run_hook('get_notifications')
        return items

    def mark_notification_read(self, notification_id):
        self._call('mark_notification_read', notification_id)
        for n in self.notifications:
            if n['id'] == notification_id:
                n['is_read'] = True

    def mark_all_notifications_read(self):
        self._call('mark_all_notifications_read')
        for n in self.notifications:
            n['is_read'] = True

    def delete_notification(self, notification_id):
        self._call('delete_notification', notification_id)
        self.notifications = [n for n in self.notifications if n['id'] != notification_id]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def app(backend):
    app = create_app('testing', remote=backend)
    yield app
    notification_stores.reset()
    attempt_service.reset()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Sign the test client in with a role"""
    def _login(role='TEACHER', user_id=3, name='Mr. Rao'):
        response = client.post('/auth/session', json={
            'token': 'token-123',
            'user': {'id': user_id, 'name': name, 'role': role},
        })
        assert response.status_code == 200
        return response
    return _login
