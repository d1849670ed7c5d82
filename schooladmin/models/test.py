"""
Test Model
Test definition as returned by the backend
"""
from schooladmin.models.question import Question


class Test:
    """Test definition"""
    __test__ = False

    def __init__(self, id, title='', total_marks=0, passing_marks=0,
                 duration_minutes=0, questions=None, subject_id=None, is_published=False):
        self.id = id
        self.title = title
        self.subject_id = subject_id
        self.total_marks = total_marks
        self.passing_marks = passing_marks
        self.duration_minutes = duration_minutes
        self.is_published = is_published
        self.questions = sorted(questions or [], key=lambda q: q.order)

    def __repr__(self):
        return f'<Test {self.title}>'

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            title=data.get('title') or '',
            subject_id=data.get('subject_id'),
            total_marks=data.get('total_marks') or 0,
            passing_marks=data.get('passing_marks') or 0,
            duration_minutes=data.get('duration_minutes') or 0,
            is_published=bool(data.get('is_published')),
            questions=[Question.from_dict(q) for q in data.get('questions') or []],
        )

    @property
    def passing_ratio(self):
        """Minimum score / total_marks fraction needed to pass"""
        if not self.total_marks:
            return 0.0
        return self.passing_marks / self.total_marks

    def get_question(self, question_id):
        for question in self.questions:
            if question.id == question_id:
                return question
        return None
