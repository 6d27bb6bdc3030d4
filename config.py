import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


def _csv(name, default=''):
    return [v.strip().lower() for v in os.environ.get(name, default).split(',') if v.strip()]


class Config:
    """Base configuration shared across all environments."""
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')

    # Backend REST collaborator (users, products, orders)
    BACKEND_API_URL = os.environ.get('BACKEND_API_URL', 'http://localhost:8000')
    BACKEND_TIMEOUT = float(os.environ.get('BACKEND_TIMEOUT', '10'))

    # Address autocomplete (Nominatim-compatible search endpoint)
    GEOCODER_URL           = os.environ.get('GEOCODER_URL', 'https://nominatim.openstreetmap.org/search')
    GEOCODER_COUNTRY_CODES = os.environ.get('GEOCODER_COUNTRY_CODES', 'ar')
    GEOCODER_RESULT_LIMIT  = int(os.environ.get('GEOCODER_RESULT_LIMIT', '5'))
    GEOCODER_TIMEOUT       = float(os.environ.get('GEOCODER_TIMEOUT', '5'))
    GEOCODER_USER_AGENT    = os.environ.get('GEOCODER_USER_AGENT', 'roastery-storefront/1.0')
    DEFAULT_COUNTRY        = os.environ.get('DEFAULT_COUNTRY', 'Argentina')

    # Accounts allowed to use /admin (comma separated e-mails)
    ADMIN_EMAILS = _csv('ADMIN_EMAILS')

    # Tests swap this for an httpx.MockTransport
    HTTPX_TRANSPORT = None

    # A shopping session lasts a day at most
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)


class DevelopmentConfig(Config):
    """Development environment configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production environment configuration."""
    DEBUG = False

    SECRET_KEY = os.environ.get('SECRET_KEY')

    # Session Cookie Security
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'


class TestingConfig(Config):
    """Testing environment configuration."""
    TESTING = True
    SECRET_KEY = 'testing-secret'
    BACKEND_API_URL = 'http://backend.test'
    GEOCODER_URL = 'http://geocoder.test/search'
    ADMIN_EMAILS = ['admin@roastery.test']
    SESSION_COOKIE_SECURE = False


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
