"""
Application Configuration
Handles environment-specific settings for the dashboard service
"""

import os


class Config:
    """Base configuration"""

    # ================= SECURITY =================
    SECRET_KEY = os.getenv("SECRET_KEY", "schooladmin_secret_key_change_later")

    # ================= BACKEND API =================
    API_URL = os.getenv("API_URL", "http://localhost:3000/api").rstrip("/")

    # Seconds; handed straight to requests
    API_TIMEOUT = float(os.getenv("API_TIMEOUT", 15))

    # ================= NOTIFICATIONS =================
    NOTIFICATION_LIMIT = int(os.getenv("NOTIFICATION_LIMIT", 10))

    # ================= SESSION =================
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SECURE = os.getenv(
        "SESSION_COOKIE_SECURE", "False"
    ).lower() == "true"

    # ================= APP =================
    TIMEZONE = os.getenv("TIMEZONE", "Asia/Kolkata")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    SESSION_COOKIE_SECURE = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    SESSION_COOKIE_SECURE = True


class TestingConfig(Config):
    """Test configuration"""
    TESTING = True
    SECRET_KEY = "testing"
    API_URL = "http://backend.test/api"
    API_TIMEOUT = 1
    TIMEZONE = "UTC"


# ================= CONFIG MAP =================
config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}


def get_config():
    """Return config class based on FLASK_ENV"""
    env = os.getenv("FLASK_ENV", "development").lower()
    return config.get(env, config["default"])
