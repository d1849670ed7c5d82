"""
TestAttempt Model
One student's attempt at a test: IN_PROGRESS -> SUBMITTED -> GRADED
"""
from schooladmin.errors import InvalidStateError, ValidationError
from schooladmin.models.answer import Answer
from schooladmin.models.test import Test
from schooladmin.utils.helpers import now_utc, parse_timestamp, to_iso


class AttemptStatus:
    """Attempt lifecycle states; transitions only move forward one step"""
    IN_PROGRESS = 'IN_PROGRESS'
    SUBMITTED = 'SUBMITTED'
    GRADED = 'GRADED'


class TestAttempt:
    """
    Test attempt
    The status is decoded once from the API payload and afterwards only
    changed through mark_submitted() / mark_graded().
    """
    __test__ = False

    def __init__(self, id, test_id, student_id, total_marks, answers=None,
                 started_at=None, test=None, student_name=None):
        self.id = id
        self.test_id = test_id
        self.student_id = student_id
        self.student_name = student_name
        self.total_marks = total_marks
        self.answers = list(answers or [])
        self.started_at = started_at
        self.test = test

        self.status = AttemptStatus.IN_PROGRESS
        self.submitted_at = None
        self.score = None
        self.is_passed = None
        self.graded_by = None
        self.grader_name = None
        self.graded_at = None

    def __repr__(self):
        return f'<TestAttempt {self.id} of test {self.test_id}: {self.status}>'

    # ================= CONSTRUCTION =================

    @classmethod
    def start(cls, test, student_id, attempt_id=None, started_at=None):
        """New in-progress attempt; total_marks is frozen from the test now"""
        return cls(
            id=attempt_id,
            test_id=test.id,
            student_id=student_id,
            total_marks=test.total_marks,
            started_at=started_at or now_utc(),
            test=test,
        )

    @classmethod
    def from_dict(cls, data):
        test = Test.from_dict(data['test']) if data.get('test') else None

        total_marks = data.get('total_marks')
        if total_marks is None and test is not None:
            total_marks = test.total_marks

        student = data.get('student') or {}
        grader = data.get('grader') or {}

        attempt = cls(
            id=data['id'],
            test_id=data.get('test_id'),
            student_id=data.get('student_id'),
            student_name=(student.get('user') or {}).get('name'),
            total_marks=total_marks,
            answers=[Answer.from_dict(a, test) for a in data.get('answers') or []],
            started_at=parse_timestamp(data.get('started_at')),
            test=test,
        )

        submitted_at = parse_timestamp(data.get('submitted_at'))
        if data.get('is_graded'):
            if submitted_at is None:
                raise ValidationError(f'Attempt {attempt.id} is graded but was never submitted')
            if data.get('score') is None or data.get('is_passed') is None:
                raise ValidationError(f'Attempt {attempt.id} is graded but has no score')
            attempt.status = AttemptStatus.GRADED
            attempt.submitted_at = submitted_at
            attempt.score = data['score']
            attempt.is_passed = bool(data['is_passed'])
            attempt.graded_by = data.get('graded_by')
            attempt.grader_name = grader.get('name')
            attempt.graded_at = parse_timestamp(data.get('graded_at'))
        else:
            if submitted_at is not None:
                attempt.status = AttemptStatus.SUBMITTED
                attempt.submitted_at = submitted_at
            # Backend defaults (score 0, marks 0) are not real grades yet
            for answer in attempt.answers:
                answer.marks_obtained = None
                answer.is_correct = None

        return attempt

    # ================= STATE =================

    @property
    def is_submitted(self):
        return self.status != AttemptStatus.IN_PROGRESS

    @property
    def is_graded(self):
        return self.status == AttemptStatus.GRADED

    def ensure_status(self, expected, message):
        if self.status != expected:
            raise InvalidStateError(message)

    def get_answer(self, answer_id):
        for answer in self.answers:
            if answer.id == answer_id:
                return answer
        return None

    def answer_for_question(self, question_id):
        for answer in self.answers:
            if answer.question_id == question_id:
                return answer
        return None

    # ================= TRANSITIONS =================

    def record_answer(self, answer):
        """Store or replace the answer for a question while the attempt is open"""
        self.ensure_status(AttemptStatus.IN_PROGRESS,
                           'Answers cannot be changed after the test is submitted')
        if answer.question is None and self.test is not None:
            answer.question = self.test.get_question(answer.question_id)
        self.answers = [a for a in self.answers if a.question_id != answer.question_id]
        self.answers.append(answer)
        return answer

    def mark_submitted(self, submitted_at=None):
        self.ensure_status(AttemptStatus.IN_PROGRESS, 'Test attempt already submitted')
        self.submitted_at = submitted_at or now_utc()
        self.status = AttemptStatus.SUBMITTED

    def mark_graded(self, score, is_passed, graded_answers, graded_by=None, graded_at=None):
        if self.status == AttemptStatus.IN_PROGRESS:
            raise InvalidStateError('Cannot grade an attempt that has not been submitted')
        if self.status == AttemptStatus.GRADED:
            raise InvalidStateError('Test attempt has already been graded')

        for graded in graded_answers:
            answer = self.get_answer(graded.answer_id)
            if answer is None:
                continue
            answer.marks_obtained = graded.marks_obtained
            answer.is_correct = graded.is_correct

        self.score = score
        self.is_passed = is_passed
        self.graded_by = graded_by
        self.graded_at = graded_at or now_utc()
        self.status = AttemptStatus.GRADED

    def to_dict(self):
        return {
            'id': self.id,
            'test_id': self.test_id,
            'student_id': self.student_id,
            'status': self.status,
            'started_at': to_iso(self.started_at),
            'submitted_at': to_iso(self.submitted_at),
            'is_graded': self.is_graded,
            'score': self.score,
            'total_marks': self.total_marks,
            'is_passed': self.is_passed,
            'graded_by': self.graded_by,
            'graded_at': to_iso(self.graded_at),
            'answers': [a.to_dict() for a in self.answers],
        }
