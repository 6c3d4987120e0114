"""
Settings used by the pytest suite: in-memory SQLite, no outbound webhooks.
"""
import os
import tempfile

os.environ.setdefault('SECRET_KEY', 'test-secret-key')

from .base import *  # noqa: E402,F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

MEDIA_ROOT = Path(tempfile.mkdtemp(prefix='slotdesk-media-'))

AXES_ENABLED = False

WECOM_WEBHOOK_URL = ''
