"""
Shared helpers for the JSON views.

  json_errors     decorator turning ReservationEngineError into a JSON response
  parse_date      'YYYY-MM-DD' -> date, or None
  read_json_body  request body -> dict (empty dict when there is no body)
"""
import json
import logging
from datetime import datetime
from functools import wraps

from django.http import JsonResponse

from .exceptions import InvalidPayloadError, ReservationEngineError

logger = logging.getLogger(__name__)


def json_errors(view_func):
    """Render engine rejections as {"error": code, "message": text} with the error's status."""
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)
        except ReservationEngineError as exc:
            logger.info('%s %s rejected: %s', request.method, request.path, exc.code)
            return JsonResponse({'error': exc.code, 'message': str(exc)}, status=exc.status)
    return wrapper


def parse_date(date_str):
    try:
        return datetime.strptime(date_str, '%Y-%m-%d').date()
    except (ValueError, TypeError):
        return None


def read_json_body(request) -> dict:
    """Decode a JSON object body; raise InvalidPayloadError for anything else."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError) as exc:
        raise InvalidPayloadError('The request body is not valid JSON.') from exc
    if not isinstance(data, dict):
        raise InvalidPayloadError('The request body must be a JSON object.')
    return data
