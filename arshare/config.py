import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


def _flag(name, default):
    return os.environ.get(name, default).lower() not in ('0', 'false', 'no')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev')
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///local.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    REDIS_URL = os.environ.get('REDIS_URL', 'redis://localhost:6379/0')
    USE_REDIS = _flag('USE_REDIS', '1')
    # Empty means "whatever host the request came in on"
    BASE_URL = os.environ.get('BASE_URL', '')
    PREVIEW_PATH = os.environ.get('PREVIEW_PATH', '/ar-client-preview')
    ADMIN_API_KEY = os.environ.get('ADMIN_API_KEY')
    # session: signed cookie in the browser; device: Redis keyed by the did cookie
    GRANT_BACKEND = os.environ.get('GRANT_BACKEND', 'session')
    GRANT_COOKIE_DAYS = int(os.environ.get('GRANT_COOKIE_DAYS', '365'))
    ACCESS_RATE_LIMIT = int(os.environ.get('ACCESS_RATE_LIMIT', '20'))
    ACCESS_RATE_WINDOW = int(os.environ.get('ACCESS_RATE_WINDOW', '60'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    SESSION_COOKIE_SAMESITE = 'Lax'

    def __init__(self):
        self.PERMANENT_SESSION_LIFETIME = timedelta(days=self.GRANT_COOKIE_DAYS)
        # Optional fallbacks to support Secret Files on Render (/etc/secrets)
        if (not self.SECRET_KEY) or self.SECRET_KEY == 'dev':
            try:
                with open('/etc/secrets/secret_key', 'r') as f:
                    self.SECRET_KEY = f.read().strip()
            except OSError:
                pass
        if not self.ADMIN_API_KEY:
            try:
                with open('/etc/secrets/admin_api_key', 'r') as f:
                    self.ADMIN_API_KEY = f.read().strip()
            except OSError:
                pass
