"""
View decorator for the JSON API.

Replaces per-role copies of the same handler: each view declares the
capability it needs and the decorator answers 401 for everyone else.
"""
from functools import wraps

from django.http import JsonResponse

from apps.core.exceptions import UnauthorizedError

from .permissions import authorize


def capability_required(capability: str):
    """Require an authenticated, active user whose role holds `capability`."""
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            try:
                authorize(request.user, capability)
            except UnauthorizedError as exc:
                return JsonResponse({'error': exc.code, 'message': str(exc)}, status=exc.status)
            return view_func(request, *args, **kwargs)
        return wrapper
    return decorator
