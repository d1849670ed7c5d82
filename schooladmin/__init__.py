"""
Application Factory
Creates and configures the dashboard Flask application
"""
import logging

from flask import Flask, jsonify

from schooladmin.config import get_config
from schooladmin.errors import SchoolAdminError
from schooladmin.extensions import attempt_service, gateway, notification_stores, results_service


def create_app(config_name=None, remote=None):
    """
    Application factory pattern
    remote replaces the HTTP gateway (tests pass a fake backend here)
    """
    app = Flask(__name__)

    # Load configuration
    if config_name:
        from schooladmin.config import config
        app.config.from_object(config[config_name])
    else:
        app.config.from_object(get_config())

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    # Initialize services
    gateway.init_app(app)
    results_service.init_app(app)
    notification_stores.init_app(app)

    backend = remote or gateway
    attempt_service.gateway = backend
    notification_stores.gateway = backend

    # Register blueprints
    from schooladmin.routes import auth_bp, attempts_bp, notifications_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(attempts_bp)
    app.register_blueprint(notifications_bp, url_prefix='/notifications')

    @app.errorhandler(SchoolAdminError)
    def handle_school_admin_error(error):
        return jsonify(error.to_dict()), error.status_code

    return app
