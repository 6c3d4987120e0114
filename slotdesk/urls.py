"""
URL configuration for the Slotdesk reservation service.
"""
from django.contrib import admin
from django.conf import settings
from django.urls import path, include

urlpatterns = [
    path(settings.ADMIN_URL, admin.site.urls),
    path('api/auth/',     include('apps.accounts.urls', namespace='accounts')),
    path('api/closures/', include('apps.closures.urls', namespace='closures')),
    path('api/',          include('apps.reservations.urls', namespace='reservations')),
    path('api/',          include('apps.dashboard.urls', namespace='dashboard')),
]

if settings.DEBUG:
    try:
        import debug_toolbar
        urlpatterns = [path('__debug__/', include(debug_toolbar.urls))] + urlpatterns
    except ImportError:
        pass
