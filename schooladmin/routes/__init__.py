"""
Routes Package
Exports all route blueprints
"""
from schooladmin.routes.auth import auth_bp
from schooladmin.routes.attempts import attempts_bp
from schooladmin.routes.notifications import notifications_bp

__all__ = ['auth_bp', 'attempts_bp', 'notifications_bp']
