"""
Answer Model
One answer inside a test attempt
"""
from schooladmin.models.question import Question


class Answer:
    """Answer to a single question; marks stay None until the attempt is graded"""

    def __init__(self, id, question_id, answer_text=None, is_correct=None,
                 marks_obtained=None, question=None):
        self.id = id
        self.question_id = question_id
        self.answer_text = answer_text
        self.is_correct = is_correct
        self.marks_obtained = marks_obtained
        self.question = question

    def __repr__(self):
        return f'<Answer Q{self.question_id}: {self.answer_text!r}>'

    @classmethod
    def from_dict(cls, data, test=None):
        question = None
        if data.get('question'):
            question = Question.from_dict(data['question'])
        elif test is not None:
            question = test.get_question(data.get('question_id'))

        return cls(
            id=data.get('id'),
            question_id=data.get('question_id'),
            answer_text=data.get('answer_text'),
            is_correct=data.get('is_correct'),
            marks_obtained=data.get('marks_obtained'),
            question=question,
        )

    @property
    def max_marks(self):
        return self.question.marks if self.question is not None else None

    def to_dict(self):
        return {
            'id': self.id,
            'question_id': self.question_id,
            'answer_text': self.answer_text,
            'is_correct': self.is_correct,
            'marks_obtained': self.marks_obtained,
        }
