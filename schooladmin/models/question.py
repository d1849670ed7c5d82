"""
Question Model
Question types: MCQ, TRUE_FALSE, SHORT_ANSWER
"""


class QuestionType:
    """Question type values used by the backend"""
    MCQ = 'MCQ'
    TRUE_FALSE = 'TRUE_FALSE'
    SHORT_ANSWER = 'SHORT_ANSWER'

    # Types whose answers can be checked against correct_answer
    AUTO_MARKABLE = (MCQ, TRUE_FALSE)


def normalize_answer(text):
    """Case-insensitive, whitespace-collapsed comparison form"""
    if text is None:
        return ''
    return ' '.join(str(text).split()).lower()


class Question:
    """Question belonging to a test"""

    def __init__(self, id, question_type=QuestionType.MCQ, question_text='',
                 marks=1, options=None, correct_answer=None, order=0, test_id=None):
        self.id = id
        self.test_id = test_id
        self.question_type = question_type
        self.question_text = question_text
        self.options = options
        self.correct_answer = correct_answer
        self.marks = marks
        self.order = order

    def __repr__(self):
        return f'<Question {self.id}: {self.question_text[:50]}>'

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            test_id=data.get('test_id'),
            question_type=data.get('question_type') or QuestionType.MCQ,
            question_text=data.get('question_text') or '',
            options=data.get('options'),
            correct_answer=data.get('correct_answer'),
            marks=data.get('marks', 1),
            order=data.get('order', 0),
        )

    @property
    def is_auto_markable(self):
        return self.question_type in QuestionType.AUTO_MARKABLE

    def matches(self, answer_text):
        """
        Check an answer against correct_answer
        Only defined for MCQ / TRUE_FALSE; short answers need a human grader
        """
        if not self.is_auto_markable or self.correct_answer is None:
            return False
        if answer_text is None or str(answer_text).strip() == '':
            return False
        return normalize_answer(answer_text) == normalize_answer(self.correct_answer)
