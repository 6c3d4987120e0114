from .base import *

DEBUG = False

# Packing lists live on a mounted volume outside the release directory
MEDIA_ROOT = Path(config('MEDIA_ROOT'))

SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
USE_X_FORWARDED_HOST = True

# nginx terminates TLS and redirects plain HTTP
SECURE_SSL_REDIRECT = False
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True

SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
X_FRAME_OPTIONS = 'DENY'
SECURE_CONTENT_TYPE_NOSNIFF = True

# Lock out per username + IP pair
AXES_LOCKOUT_PARAMETERS = [['username', 'ip_address']]

LOGGING['handlers']['console']['level'] = 'INFO'
