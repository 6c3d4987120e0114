"""
Closure views: JSON only.

  GET  /api/closures/              list all closures (admin, operator)
  POST /api/closures/              close a date or sub-range (admin)
  POST /api/closures/<id>/open/    re-open a closure (admin)
"""
import logging

from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_http_methods, require_POST

from apps.accounts.decorators import capability_required
from apps.accounts.permissions import CLOSE, OPEN, VIEW_CLOSURES
from apps.core.http import json_errors, read_json_body

from .engine import attempt_close, attempt_open
from .forms import ClosureForm, OpenClosureForm
from .models import ClosedSlot

logger = logging.getLogger(__name__)


def closure_payload(closure, today=None) -> dict:
    today = today or timezone.localdate()
    return {
        'id':            str(closure.id),
        'date':          closure.date.isoformat(),
        'start_time':    closure.start_time.strftime('%H:%M') if closure.start_time else None,
        'end_time':      closure.end_time.strftime('%H:%M') if closure.end_time else None,
        'reason':        closure.reason,
        'status':        closure.status,
        'created_by':    closure.created_by_id,
        'opened_reason': closure.opened_reason,
        'created_at':    closure.created_at.isoformat(),
        'opened_at':     closure.opened_at.isoformat() if closure.opened_at else None,
        # UI hint only: re-opening on the closure's own day is discouraged
        'is_same_day':   closure.date == today,
    }


@require_http_methods(['GET', 'POST'])
@json_errors
def closures(request):
    if request.method == 'POST':
        return _close(request)
    return _list(request)


@capability_required(VIEW_CLOSURES)
def _list(request):
    today = timezone.localdate()
    items = ClosedSlot.objects.order_by('-date', '-created_at')
    return JsonResponse({'items': [closure_payload(c, today) for c in items]})


@capability_required(CLOSE)
def _close(request):
    data = ClosureForm(read_json_body(request)).cleaned_or_raise()
    closure = attempt_close(
        request.user,
        data['date'],
        data['mode'],
        start_time=data['startTime'],
        end_time=data['endTime'],
        reason=data['reason'],
    )
    return JsonResponse({'item': closure_payload(closure)}, status=201)


@require_POST
@capability_required(OPEN)
@json_errors
def open_closure(request, closure_id):
    data = OpenClosureForm(read_json_body(request)).cleaned_or_raise()
    closure = attempt_open(request.user, closure_id, data['openedReason'])
    return JsonResponse({'item': closure_payload(closure)})
