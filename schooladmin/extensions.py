"""
Extensions
Service singletons, bound to the app in create_app()
"""
from schooladmin.services import AttemptService, RemoteGateway, ResultsService, UserNotificationStores

# Initialize services (without app binding)
gateway = RemoteGateway()
attempt_service = AttemptService(gateway)
results_service = ResultsService()

# Notification caches keyed by session user; a user's entry is dropped on logout
notification_stores = UserNotificationStores(gateway)
