"""
Session endpoints. Credential checking is Django's (plus django-axes
lockout); these views only translate it to JSON.
"""
import logging

from django.contrib.auth import authenticate, login, logout
from django.http import JsonResponse
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET, require_POST

from apps.core.http import json_errors, read_json_body

from .forms import LoginForm

logger = logging.getLogger(__name__)


def user_payload(user) -> dict:
    return {
        'id':           user.id,
        'username':     user.username,
        'role':         user.role,
        'display_name': user.display_name,
        'company_name': user.company_name,
        'phone':        user.phone,
        'email':        user.email,
    }


@require_POST
@json_errors
def login_view(request):
    body = read_json_body(request) if request.content_type == 'application/json' else request.POST
    data = LoginForm(body).cleaned_or_raise()
    username, password = data['username'], data['password']

    user = authenticate(request, username=username, password=password)
    if user is None:
        logger.info('Failed login for username %r', username)
        return JsonResponse(
            {'error': 'unauthorized', 'message': 'Invalid username or password.'}, status=401,
        )

    login(request, user)
    return JsonResponse({'user': user_payload(user)})


@require_POST
def logout_view(request):
    logout(request)
    return JsonResponse({}, status=200)


@require_GET
@ensure_csrf_cookie
def me(request):
    if not request.user.is_authenticated:
        return JsonResponse({'error': 'unauthorized', 'message': 'Unauthorized.'}, status=401)
    return JsonResponse({'user': user_payload(request.user)})
