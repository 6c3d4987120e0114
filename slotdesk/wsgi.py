"""
WSGI config for the Slotdesk reservation service.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'slotdesk.settings.production')

application = get_wsgi_application()
