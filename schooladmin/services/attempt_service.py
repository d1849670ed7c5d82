"""
Attempt Service
Test attempt lifecycle: start, answer, submit, grade
"""
import logging
import threading

from schooladmin.errors import InvalidStateError, ValidationError
from schooladmin.models import AttemptStatus
from schooladmin.services.grading_service import GradingService
from schooladmin.services.sequencer import RequestSequencer
from schooladmin.utils.helpers import now_utc

logger = logging.getLogger(__name__)


class AttemptService:
    """
    Drives attempts through IN_PROGRESS -> SUBMITTED -> GRADED.

    Keeps the latest known copy of each attempt. Every backend call is tagged
    with a per-attempt sequence number and a response that is no longer the
    latest for its attempt is dropped in favour of the newer copy.
    """

    def __init__(self, gateway, clock=now_utc):
        self.gateway = gateway
        self.clock = clock
        self._sequencer = RequestSequencer()
        self._attempts = {}
        self._lock = threading.Lock()

    # ================= CACHE =================

    def _issue(self, attempt_id):
        return self._sequencer.issue(attempt_id)

    def _apply(self, attempt_id, seq, attempt):
        """Keep attempt unless a newer request for the same id has been issued"""
        with self._lock:
            if self._sequencer.is_current(attempt_id, seq):
                self._attempts[attempt_id] = attempt
                return attempt
            logger.info("Discarding stale response #%s for attempt %s", seq, attempt_id)
            return self._attempts.get(attempt_id, attempt)

    def cached(self, attempt_id):
        with self._lock:
            return self._attempts.get(attempt_id)

    def reset(self):
        with self._lock:
            self._attempts.clear()
        self._sequencer.reset()

    # ================= QUERIES =================

    def get_attempt(self, attempt_id):
        seq = self._issue(attempt_id)
        attempt = self.gateway.get_attempt(attempt_id)
        return self._apply(attempt_id, seq, attempt)

    def list_test_attempts(self, test_id):
        return self.gateway.get_test_attempts(test_id)

    def list_my_attempts(self, subject_id=None):
        return self.gateway.get_my_attempts(subject_id)

    # ================= LIFECYCLE =================

    def start_attempt(self, test_id, student_id):
        """
        Start a new attempt
        Attempt limits are enforced by the backend; total_marks is frozen
        from the test definition as it is right now.
        """
        test = self.gateway.get_test(test_id)
        attempt = self.gateway.start_attempt(test_id)

        if attempt.status != AttemptStatus.IN_PROGRESS:
            raise InvalidStateError(f'Attempt {attempt.id} is not in progress')
        if attempt.student_id is None:
            attempt.student_id = student_id
        if attempt.total_marks is None:
            attempt.total_marks = test.total_marks
        if attempt.test is None:
            attempt.test = test

        logger.info("Student %s started attempt %s on test %s", student_id, attempt.id, test_id)
        seq = self._issue(attempt.id)
        return self._apply(attempt.id, seq, attempt)

    def save_answer(self, attempt_id, question_id, answer_text):
        """Auto-save a single answer while the attempt is open"""
        attempt = self.get_attempt(attempt_id)
        attempt.ensure_status(AttemptStatus.IN_PROGRESS,
                              'Answers cannot be changed after the test is submitted')
        if attempt.test is not None and attempt.test.get_question(question_id) is None:
            raise ValidationError(f'Question {question_id} is not part of this test')

        answer = self.gateway.save_answer(attempt_id, question_id, answer_text)
        return attempt.record_answer(answer)

    def submit(self, attempt_id, answers=None):
        """
        Submit an attempt
        answers: optional {question_id: answer_text} saved before submitting.
        Remote failures propagate to the caller.
        """
        attempt = self.get_attempt(attempt_id)
        attempt.ensure_status(AttemptStatus.IN_PROGRESS, 'Test attempt already submitted')

        answers = answers or {}
        if attempt.test is not None:
            unknown = [qid for qid in answers if attempt.test.get_question(qid) is None]
            if unknown:
                raise ValidationError(f'Questions not part of this test: {unknown}')

        for question_id, answer_text in answers.items():
            self.gateway.save_answer(attempt_id, question_id, answer_text)

        seq = self._issue(attempt_id)
        submitted = self.gateway.submit_attempt(attempt_id)
        if submitted.status == AttemptStatus.IN_PROGRESS:
            submitted.mark_submitted(self.clock())
        if submitted.test is None:
            submitted.test = attempt.test

        logger.info("Attempt %s submitted", attempt_id)
        return self._apply(attempt_id, seq, submitted)

    def grade(self, attempt_id, grades, grader_id=None):
        """
        Grade a submitted attempt
        Validation happens locally before anything is sent to the backend.
        """
        attempt = self.get_attempt(attempt_id)
        if attempt.status == AttemptStatus.IN_PROGRESS:
            raise InvalidStateError('Cannot grade an attempt that has not been submitted')
        if attempt.status == AttemptStatus.GRADED:
            raise InvalidStateError('Test attempt has already been graded')

        if attempt.test is None:
            attempt.test = self.gateway.get_test(attempt.test_id)
            for answer in attempt.answers:
                if answer.question is None:
                    answer.question = attempt.test.get_question(answer.question_id)

        result = GradingService.grade(attempt, grades)

        seq = self._issue(attempt_id)
        graded = self.gateway.grade_attempt(attempt_id, result.to_payload())
        if not graded.is_graded:
            graded.test = graded.test or attempt.test
            graded.mark_graded(result.score, result.is_passed, result.graded_answers,
                               graded_by=grader_id, graded_at=self.clock())

        logger.info("Attempt %s graded: %s/%s passed=%s",
                    attempt_id, graded.score, graded.total_marks, graded.is_passed)
        return self._apply(attempt_id, seq, graded)

    def grading_form(self, attempt_id):
        attempt = self.get_attempt(attempt_id)
        if attempt.status == AttemptStatus.IN_PROGRESS:
            raise InvalidStateError('Attempt has not been submitted yet')
        return attempt, GradingService.suggest_grades(attempt)

    # ================= TIMER =================

    def time_remaining(self, attempt, now=None):
        """
        Seconds left on the test timer, None when the test is untimed
        Submitted attempts have no time left.
        """
        if attempt.status != AttemptStatus.IN_PROGRESS:
            return 0
        if attempt.test is None or not attempt.test.duration_minutes or attempt.started_at is None:
            return None
        elapsed = ((now or self.clock()) - attempt.started_at).total_seconds()
        return max(0, int(attempt.test.duration_minutes * 60 - elapsed))

    def submit_if_expired(self, attempt_id):
        """Submit an in-progress attempt whose timer has run out"""
        attempt = self.get_attempt(attempt_id)
        if attempt.status == AttemptStatus.IN_PROGRESS and self.time_remaining(attempt) == 0:
            logger.info("Attempt %s timed out, submitting", attempt_id)
            return self.submit(attempt_id)
        return attempt
