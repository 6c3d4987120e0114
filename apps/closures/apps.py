from django.apps import AppConfig


class ClosuresConfig(AppConfig):
    name = 'apps.closures'
    label = 'closures'
