"""Test settings.

Uses a file backed SQLite test database and keeps log output quiet.
Run with ``DJANGO_SETTINGS_MODULE=config.settings.test``.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

ALLOWED_HOSTS = ['*']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',  # noqa: F405
        # File backed so that threads in concurrency tests share one database
        'TEST': {'NAME': BASE_DIR / 'test_db.sqlite3'},  # noqa: F405
        'OPTIONS': {'transaction_mode': 'IMMEDIATE', 'timeout': 20},
    }
}

STORAGES = {
    **STORAGES,  # noqa: F405
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

ROOM_BOOKING_LOCK_TIMEOUT = 5.0

LOG_LEVEL = 'WARNING'
LOGGING['loggers']['apps']['level'] = LOG_LEVEL  # noqa: F405
LOGGING['loggers']['shared']['level'] = LOG_LEVEL  # noqa: F405
LOGGING['loggers']['django']['level'] = LOG_LEVEL  # noqa: F405
