"""
Results Service Tests
"""
from conftest import make_attempt
from schooladmin.models import TestAttempt
from schooladmin.services import Badge, ResultsService


def graded(score=72, is_passed=True, attempt_id=10):
    payload = make_attempt(attempt_id, graded=True, score=score, is_passed=is_passed)
    for answer, marks in zip(payload['answers'], (40, 0, 32)):
        answer['marks_obtained'] = marks
        answer['is_correct'] = marks > 0
    return TestAttempt.from_dict(payload)


def test_badges():
    assert ResultsService.badge(TestAttempt.from_dict(make_attempt(submitted=False))) == Badge.PENDING
    assert ResultsService.badge(TestAttempt.from_dict(make_attempt())) == Badge.PENDING
    assert ResultsService.badge(graded()) == Badge.PASSED
    assert ResultsService.badge(graded(score=18, is_passed=False)) == Badge.FAILED


def test_pending_view_hides_scores():
    view = ResultsService('UTC').present(TestAttempt.from_dict(make_attempt()))

    assert view['badge'] == Badge.PENDING
    assert view['status'] == 'SUBMITTED'
    assert view['submitted_at'] is not None
    assert view['score'] is None
    assert view['percentage'] is None
    assert view['is_passed'] is None
    assert 'answers' not in view


def test_zero_score_is_not_pending():
    view = ResultsService('UTC').present(graded(score=0, is_passed=False))

    assert view['score'] == 0
    assert view['percentage'] == '0.0'
    assert view['badge'] == Badge.FAILED


def test_graded_view():
    view = ResultsService('UTC').present(graded())

    assert view['score'] == 72
    assert view['total_marks'] == 100
    assert view['percentage'] == '72.0'
    assert view['graded_by'] == 3

    first, second, third = view['answers']
    assert first['marks'] == '40 / 40'
    assert first['correct_answer'] == 'Paris'
    assert second['is_correct'] is False
    assert third['question_type'] == 'SHORT_ANSWER'
    assert third['correct_answer'] is None


def test_timestamps_use_configured_timezone():
    attempt = TestAttempt.from_dict(make_attempt())
    attempt.submitted_at = attempt.submitted_at.replace(hour=0, minute=0)

    view = ResultsService('Asia/Kolkata').present(attempt)

    assert view['submitted_at'].endswith('05:30 AM')


def test_attempt_rows():
    service = ResultsService('UTC')

    pending = service.attempt_row(TestAttempt.from_dict(make_attempt()))
    done = service.attempt_row(graded())

    assert pending['can_grade'] is True
    assert pending['score'] is None
    assert pending['student_name'] == 'Asha'
    assert done['can_grade'] is False
    assert done['percentage'] == '72.0'


def test_summary():
    attempts = [
        TestAttempt.from_dict(make_attempt(1, submitted=False)),
        TestAttempt.from_dict(make_attempt(2)),
        graded(72, True, attempt_id=3),
        graded(30, False, attempt_id=4),
    ]

    summary = ResultsService.summarize(attempts)

    assert summary == {
        'total': 4,
        'in_progress': 1,
        'pending': 1,
        'graded': 2,
        'passed': 1,
        'failed': 1,
        'average_percentage': 51.0,
    }


def test_summary_without_graded_attempts():
    summary = ResultsService.summarize([TestAttempt.from_dict(make_attempt())])

    assert summary['average_percentage'] is None
