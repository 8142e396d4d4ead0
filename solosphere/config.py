import os
from datetime import timedelta

from dotenv import load_dotenv

basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(basedir, '.env'))


def _split_origins(value):
    return [origin.strip() for origin in value.split(',') if origin.strip()]


class Config:
    """Settings shared by every environment."""

    # --- Server ---
    PORT = int(os.environ.get('PORT', 9000))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # --- Database ---
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///' + os.path.join(basedir, 'solosphere.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # --- JWT (carried in an httpOnly cookie) ---
    JWT_SECRET_KEY = os.environ.get('ACCESS_TOKEN_SECRET') or 'dev-access-token-secret-change-me-in-env'
    JWT_TOKEN_LOCATION = ['cookies']
    JWT_ACCESS_COOKIE_NAME = 'token'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=365)
    JWT_SESSION_COOKIE = False
    JWT_COOKIE_CSRF_PROTECT = False
    JWT_COOKIE_SECURE = False
    JWT_COOKIE_SAMESITE = 'Strict'

    # --- CORS ---
    CORS_ORIGINS = _split_origins(
        os.environ.get('CLIENT_ORIGINS', 'http://localhost:5173,http://localhost:5174')
    )


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False
    JWT_COOKIE_SECURE = True
    JWT_COOKIE_SAMESITE = 'None'

    def __init__(self):
        secret = os.environ.get('ACCESS_TOKEN_SECRET')
        if not secret:
            raise ValueError('ACCESS_TOKEN_SECRET environment variable is required for production')
        self.JWT_SECRET_KEY = secret


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    JWT_SECRET_KEY = 'testing-access-token-secret-not-for-production'
    CORS_ORIGINS = ['http://localhost:5173']
    LOG_LEVEL = 'WARNING'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig,
}


def get_config_name():
    """Pick the environment from SOLOSPHERE_ENV or FLASK_ENV, defaulting to development."""
    name = (os.environ.get('SOLOSPHERE_ENV') or os.environ.get('FLASK_ENV') or '').lower()
    if name in config:
        return name
    return 'default'
