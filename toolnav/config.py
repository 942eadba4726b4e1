import os
import secrets
from datetime import timedelta

class Config:
    # Persistent Secret Key
    SECRET_KEY = os.environ.get('TOOLNAV_SECRET_KEY')
    if not SECRET_KEY:
        key_file = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'secret.key')
        if os.path.exists(key_file):
            with open(key_file, 'r') as f:
                SECRET_KEY = f.read().strip()
        else:
            SECRET_KEY = secrets.token_hex(32)
            try:
                with open(key_file, 'w') as f:
                    f.write(SECRET_KEY)
            except OSError:
                # Read-only checkout; the key only lives for this process
                pass

    SQLALCHEMY_DATABASE_URI = os.environ.get('TOOLNAV_DATABASE_URI', 'sqlite:///toolnav.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = timedelta(days=int(os.environ.get('TOOLNAV_SESSION_DAYS', '30')))

    DEFAULT_PAGE_SIZE = 12
    MAX_PAGE_SIZE = int(os.environ.get('TOOLNAV_MAX_PAGE_SIZE', '100'))

    LOG_LEVEL = os.environ.get('TOOLNAV_LOG_LEVEL', 'INFO')

    ADMIN_USERNAME = os.environ.get('TOOLNAV_ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.environ.get('TOOLNAV_ADMIN_PASSWORD', 'admin123')
    ADMIN_EMAIL = os.environ.get('TOOLNAV_ADMIN_EMAIL', 'admin@example.com')
