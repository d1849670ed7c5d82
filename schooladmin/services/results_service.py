"""
Results Service
Read-only views of attempts for result pages and attempt lists
"""
from schooladmin.models import AttemptStatus, QuestionType
from schooladmin.services.grading_service import percentage_of
from schooladmin.utils.helpers import format_timestamp, round_percentage


class Badge:
    PASSED = 'PASSED'
    FAILED = 'FAILED'
    PENDING = 'PENDING'


class ResultsService:
    """Presentation model for attempts; never mutates them"""

    def __init__(self, timezone_name='Asia/Kolkata'):
        self.timezone_name = timezone_name

    def init_app(self, app):
        self.timezone_name = app.config['TIMEZONE']

    @staticmethod
    def badge(attempt):
        if not attempt.is_graded:
            return Badge.PENDING
        return Badge.PASSED if attempt.is_passed else Badge.FAILED

    @staticmethod
    def percentage(attempt):
        """Percentage as a one-decimal string, None until graded"""
        if not attempt.is_graded:
            return None
        return f'{percentage_of(attempt.score, attempt.total_marks):.1f}'

    def _time(self, value):
        return format_timestamp(value, self.timezone_name)

    def present(self, attempt):
        """
        Full result view
        Score fields are None unless the attempt is graded; answers and grader
        are only included once graded.
        """
        view = {
            'attempt_id': attempt.id,
            'test_id': attempt.test_id,
            'test_title': attempt.test.title if attempt.test else None,
            'status': attempt.status,
            'badge': self.badge(attempt),
            'submitted_at': self._time(attempt.submitted_at),
            'score': None,
            'total_marks': None,
            'percentage': None,
            'is_passed': None,
        }

        if not attempt.is_graded:
            return view

        view.update({
            'score': attempt.score,
            'total_marks': attempt.total_marks,
            'percentage': self.percentage(attempt),
            'is_passed': attempt.is_passed,
            'graded_by': attempt.graded_by,
            'grader_name': attempt.grader_name,
            'graded_at': self._time(attempt.graded_at),
            'answers': [self._answer_row(i, answer) for i, answer in enumerate(attempt.answers, 1)],
        })
        return view

    @staticmethod
    def _answer_row(number, answer):
        question = answer.question
        question_type = question.question_type if question else None
        marks = answer.marks_obtained if answer.marks_obtained is not None else 0
        max_marks = question.marks if question else None
        return {
            'number': number,
            'question_id': answer.question_id,
            'question_text': question.question_text if question else None,
            'question_type': question_type,
            'answer_text': answer.answer_text,
            'marks_obtained': marks,
            'max_marks': max_marks,
            'marks': f'{marks} / {max_marks}',
            'is_correct': bool(answer.is_correct),
            'correct_answer': (
                question.correct_answer
                if question and question_type != QuestionType.SHORT_ANSWER else None
            ),
        }

    def attempt_row(self, attempt):
        """One line of an attempts list"""
        row = {
            'attempt_id': attempt.id,
            'test_id': attempt.test_id,
            'test_title': attempt.test.title if attempt.test else None,
            'student_id': attempt.student_id,
            'student_name': attempt.student_name,
            'status': attempt.status,
            'badge': self.badge(attempt),
            'submitted_at': self._time(attempt.submitted_at),
            'can_grade': attempt.status == AttemptStatus.SUBMITTED,
            'score': None,
            'total_marks': None,
            'percentage': None,
        }
        if attempt.is_graded:
            row.update({
                'score': attempt.score,
                'total_marks': attempt.total_marks,
                'percentage': self.percentage(attempt),
            })
        return row

    @staticmethod
    def summarize(attempts):
        """Counts per state plus the average percentage of graded attempts"""
        graded = [a for a in attempts if a.is_graded]
        average = None
        if graded:
            average = round_percentage(
                sum(percentage_of(a.score, a.total_marks) for a in graded) / len(graded)
            )
        return {
            'total': len(attempts),
            'in_progress': sum(1 for a in attempts if a.status == AttemptStatus.IN_PROGRESS),
            'pending': sum(1 for a in attempts if a.status == AttemptStatus.SUBMITTED),
            'graded': len(graded),
            'passed': sum(1 for a in graded if a.is_passed),
            'failed': sum(1 for a in graded if not a.is_passed),
            'average_percentage': average,
        }
