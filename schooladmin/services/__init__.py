"""
Services Package
"""
from schooladmin.services.gateway import RemoteGateway
from schooladmin.services.grading_service import GradingService, GradeResult, GradedAnswer
from schooladmin.services.attempt_service import AttemptService
from schooladmin.services.results_service import ResultsService, Badge
from schooladmin.services.notification_store import NotificationStore, UserNotificationStores

__all__ = [
    'RemoteGateway', 'GradingService', 'GradeResult', 'GradedAnswer',
    'AttemptService', 'ResultsService', 'Badge', 'NotificationStore',
    'UserNotificationStores'
]
