"""
Models Package
Exports the API data models
"""
from schooladmin.models.question import Question, QuestionType
from schooladmin.models.test import Test
from schooladmin.models.answer import Answer
from schooladmin.models.attempt import TestAttempt, AttemptStatus
from schooladmin.models.notification import Notification

__all__ = [
    'Question', 'QuestionType', 'Test', 'Answer',
    'TestAttempt', 'AttemptStatus', 'Notification'
]
