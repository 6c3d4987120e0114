from .base import *

DEBUG = True

try:
    import debug_toolbar
    INSTALLED_APPS += ['debug_toolbar']
    MIDDLEWARE.insert(1, 'debug_toolbar.middleware.DebugToolbarMiddleware')
except ImportError:
    pass

INTERNAL_IPS = ['127.0.0.1']

# Local front-end dev server posts to the API from its own port
CSRF_TRUSTED_ORIGINS += ['http://localhost:5173', 'http://127.0.0.1:5173']

AXES_ENABLED = False

# Keep a slow or unreachable robot from stalling local bookings
NOTIFICATION_TIMEOUT_SECONDS = min(NOTIFICATION_TIMEOUT_SECONDS, 2.0)

LOGGING['loggers']['apps']['level'] = 'DEBUG'
