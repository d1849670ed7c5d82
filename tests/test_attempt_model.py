"""
TestAttempt Model Tests
"""
import pytest

from conftest import make_attempt, make_test
from schooladmin.errors import InvalidStateError, ValidationError
from schooladmin.models import Answer, AttemptStatus, Test, TestAttempt


def test_status_decoded_from_payload():
    assert TestAttempt.from_dict(make_attempt(submitted=False)).status == AttemptStatus.IN_PROGRESS
    assert TestAttempt.from_dict(make_attempt()).status == AttemptStatus.SUBMITTED
    graded = make_attempt(graded=True, score=72, is_passed=True)
    assert TestAttempt.from_dict(graded).status == AttemptStatus.GRADED


def test_ungraded_attempt_never_carries_score():
    payload = make_attempt(score=0, is_passed=False)
    payload['answers'][0]['marks_obtained'] = 0

    attempt = TestAttempt.from_dict(payload)

    assert attempt.score is None
    assert attempt.is_passed is None
    assert attempt.answers[0].marks_obtained is None


def test_graded_without_submission_rejected():
    payload = make_attempt(graded=True, score=10, is_passed=False)
    payload['submitted_at'] = None

    with pytest.raises(ValidationError):
        TestAttempt.from_dict(payload)


def test_graded_without_score_rejected():
    with pytest.raises(ValidationError):
        TestAttempt.from_dict(make_attempt(graded=True, score=None, is_passed=None))


def test_answers_linked_to_questions():
    attempt = TestAttempt.from_dict(make_attempt())

    assert attempt.get_answer(103).question.question_type == 'SHORT_ANSWER'
    assert attempt.answer_for_question(11).max_marks == 40


def test_total_marks_frozen_at_start():
    test = Test.from_dict(make_test(total_marks=100))
    attempt = TestAttempt.start(test, student_id=7)

    test.total_marks = 120

    assert attempt.total_marks == 100
    assert attempt.status == AttemptStatus.IN_PROGRESS


def test_submit_is_one_way():
    attempt = TestAttempt.from_dict(make_attempt(submitted=False))
    attempt.mark_submitted()

    assert attempt.submitted_at is not None
    with pytest.raises(InvalidStateError):
        attempt.mark_submitted()


def test_answers_locked_after_submit():
    attempt = TestAttempt.from_dict(make_attempt())

    with pytest.raises(InvalidStateError):
        attempt.record_answer(Answer(id=1, question_id=11, answer_text='Rome'))


def test_record_answer_replaces_previous_answer():
    attempt = TestAttempt.from_dict(make_attempt(submitted=False))

    attempt.record_answer(Answer(id=999, question_id=11, answer_text='Rome'))

    assert len(attempt.answers) == 3
    assert attempt.answer_for_question(11).answer_text == 'Rome'
    assert attempt.answer_for_question(11).question.marks == 40


def test_cannot_grade_in_progress_attempt():
    attempt = TestAttempt.from_dict(make_attempt(submitted=False))

    with pytest.raises(InvalidStateError):
        attempt.mark_graded(10, False, [])
    assert attempt.score is None


def test_cannot_grade_twice():
    attempt = TestAttempt.from_dict(make_attempt())
    attempt.mark_graded(72, True, [], graded_by=3)

    assert attempt.is_graded
    with pytest.raises(InvalidStateError):
        attempt.mark_graded(80, True, [])
    assert attempt.score == 72
