"""
Grading Service
Validates per-answer marks and aggregates them into a score and a pass/fail result
"""
import numbers

from schooladmin.errors import ValidationError
from schooladmin.models import QuestionType
from schooladmin.utils.helpers import round_percentage


class GradedAnswer:
    """Validated marks for one answer"""

    def __init__(self, answer_id, marks_obtained, is_correct):
        self.answer_id = answer_id
        self.marks_obtained = marks_obtained
        self.is_correct = is_correct

    def __repr__(self):
        return f'<GradedAnswer {self.answer_id}: {self.marks_obtained}>'

    def to_dict(self):
        return {
            'answer_id': self.answer_id,
            'marks_obtained': self.marks_obtained,
            'is_correct': self.is_correct,
        }


class GradeResult:
    """Outcome of grading an attempt"""

    def __init__(self, score, is_passed, graded_answers):
        self.score = score
        self.is_passed = is_passed
        self.graded_answers = graded_answers

    def __repr__(self):
        return f'<GradeResult {self.score} passed={self.is_passed}>'

    def to_payload(self):
        """Request body for POST /test-attempts/<id>/grade"""
        return [graded.to_dict() for graded in self.graded_answers]


def percentage_of(score, total_marks):
    """Score as a percentage rounded for display"""
    if not total_marks:
        return 0.0
    return round_percentage(score / total_marks * 100)


class GradingService:
    """Pure grading functions; nothing here talks to the backend"""

    @staticmethod
    def grade(attempt, grades, passing_ratio=None):
        """
        Grade an attempt.

        grades: list of {"answer_id", "marks_obtained", "is_correct"} dicts,
        one per answer in the attempt. Every entry is validated before the
        score is computed, so a single bad entry rejects the whole set.

        passing_ratio defaults to the embedded test's passing_marks / total_marks.
        """
        if not attempt.total_marks or attempt.total_marks <= 0:
            raise ValidationError(f'Attempt {attempt.id} has no total marks')

        if passing_ratio is None:
            if attempt.test is None:
                raise ValidationError('Passing ratio is unknown for this attempt')
            passing_ratio = attempt.test.passing_ratio

        by_answer = GradingService._index_grades(grades)

        unknown = [answer_id for answer_id in by_answer if attempt.get_answer(answer_id) is None]
        if unknown:
            raise ValidationError(f'Unknown answer ids: {sorted(unknown, key=str)}')

        graded_answers = []
        for answer in attempt.answers:
            entry = by_answer.get(answer.id)
            if entry is None:
                raise ValidationError(f'Missing marks for answer {answer.id}')
            graded_answers.append(GradingService._validate(answer, entry))

        score = sum(graded.marks_obtained for graded in graded_answers)
        if float(score).is_integer():
            score = int(score)
        if score > attempt.total_marks:
            # total_marks is frozen at start; the test may have grown since
            raise ValidationError(
                f'Score {score} exceeds the attempt total of {attempt.total_marks}'
            )

        is_passed = percentage_of(score, attempt.total_marks) >= round_percentage(passing_ratio * 100)

        return GradeResult(score, is_passed, graded_answers)

    @staticmethod
    def _index_grades(grades):
        if not isinstance(grades, (list, tuple)):
            raise ValidationError('Grades must be a list')

        by_answer = {}
        for entry in grades:
            if not isinstance(entry, dict) or 'answer_id' not in entry:
                raise ValidationError('Each grade needs an answer_id')
            answer_id = entry['answer_id']
            if answer_id in by_answer:
                raise ValidationError(f'Duplicate marks for answer {answer_id}')
            by_answer[answer_id] = entry
        return by_answer

    @staticmethod
    def _validate(answer, entry):
        question = answer.question
        if question is None:
            raise ValidationError(f'Question details missing for answer {answer.id}')

        marks = entry.get('marks_obtained')
        if isinstance(marks, bool) or not isinstance(marks, numbers.Real):
            raise ValidationError(f'Marks for answer {answer.id} must be a number')
        if marks < 0 or marks > question.marks:
            raise ValidationError(
                f'Marks for answer {answer.id} must be between 0 and {question.marks}'
            )

        is_correct = entry.get('is_correct')
        if question.question_type == QuestionType.SHORT_ANSWER:
            # Free text is never auto-matched; a grader has to decide
            if not isinstance(is_correct, bool):
                raise ValidationError(
                    f'Short answer {answer.id} needs an is_correct decision from the grader'
                )
        elif is_correct is None:
            is_correct = marks > 0
        elif not isinstance(is_correct, bool):
            raise ValidationError(f'is_correct for answer {answer.id} must be true or false')

        return GradedAnswer(answer.id, marks, is_correct)

    @staticmethod
    def suggest_grades(attempt):
        """
        Initial values for the grading form
        MCQ / TRUE_FALSE answers are pre-marked against correct_answer;
        short answers start at zero for the grader to fill in.
        """
        suggestions = []
        for answer in attempt.answers:
            question = answer.question
            if answer.marks_obtained is not None:
                marks = answer.marks_obtained
                is_correct = bool(answer.is_correct)
                automatic = False
            elif question is not None and question.is_auto_markable:
                is_correct = question.matches(answer.answer_text)
                marks = question.marks if is_correct else 0
                automatic = True
            else:
                marks = 0
                is_correct = False
                automatic = False

            suggestions.append({
                'answer_id': answer.id,
                'question_id': answer.question_id,
                'question_type': question.question_type if question else None,
                'max_marks': question.marks if question else None,
                'marks_obtained': marks,
                'is_correct': is_correct,
                'automatic': automatic,
            })
        return suggestions
