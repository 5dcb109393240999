"""Settings used by the test suite."""

from .base import *  # noqa: F401,F403

DEBUG = False

SECRET_KEY = 'test-secret-key-not-for-production'

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

# Tests never collect static files
STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

LOGGING['loggers']['apps']['level'] = 'WARNING'  # noqa: F405
LOGGING['loggers']['shared']['level'] = 'WARNING'  # noqa: F405

# Threads in the approval race test need a shared database that honours the
# busy timeout; in-memory SQLite fails them with "database table is locked"
if DATABASES['default']['ENGINE'].endswith('sqlite3'):  # noqa: F405
    DATABASES['default']['TEST'] = {'NAME': BASE_DIR / 'test_db.sqlite3'}  # noqa: F405
    DATABASES['default']['OPTIONS']['timeout'] = 20  # noqa: F405
