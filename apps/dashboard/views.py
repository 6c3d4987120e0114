"""
Admin / operator dashboard views: JSON only.

One handler per resource; the capability table decides which roles reach it.
"""
import logging

from django.http import JsonResponse
from django.views.decorators.http import require_GET

from apps.accounts.decorators import capability_required
from apps.accounts.models import Role, User
from apps.accounts.permissions import VIEW_CLIENTS, VIEW_OVERVIEW, VIEW_RESERVATIONS
from apps.core.http import json_errors
from apps.reservations.availability import parse_date_range
from apps.reservations.engine import get_overview
from apps.reservations.models import Reservation
from apps.reservations.payloads import overview_payload, reservation_payload

logger = logging.getLogger(__name__)


def _reservations_in_range(start, end):
    return (
        Reservation.objects
        .filter(date__range=(start, end))
        .select_related('user')
        .order_by('date', 'start_time')
    )


# ─────────────────────────────────────────────────────────────────────────────
# Overview (admin): slot grid including cancelled windows
# ─────────────────────────────────────────────────────────────────────────────

@require_GET
@capability_required(VIEW_OVERVIEW)
@json_errors
def overview(request):
    start, end = parse_date_range(request.GET.get('start'), request.GET.get('end'))
    grid = get_overview(start, end, include_cancelled_status=True)
    return JsonResponse({
        'overview':     overview_payload(grid),
        'reservations': [reservation_payload(r, include_owner=True) for r in _reservations_in_range(start, end)],
    })


# ─────────────────────────────────────────────────────────────────────────────
# Reservation list (admin, operator)
# ─────────────────────────────────────────────────────────────────────────────

@require_GET
@capability_required(VIEW_RESERVATIONS)
@json_errors
def reservation_list(request):
    start, end = parse_date_range(request.GET.get('start'), request.GET.get('end'))
    qs = _reservations_in_range(start, end)

    status_filter = request.GET.get('status', '')
    if status_filter:
        qs = qs.filter(status=status_filter)

    return JsonResponse({'reservations': [reservation_payload(r, include_owner=True) for r in qs]})


# ─────────────────────────────────────────────────────────────────────────────
# Client directory (admin, operator)
# ─────────────────────────────────────────────────────────────────────────────

@require_GET
@capability_required(VIEW_CLIENTS)
def client_list(request):
    clients = User.objects.filter(role=Role.CLIENT).order_by('-date_joined')
    return JsonResponse({'clients': [
        {
            'id':           c.id,
            'username':     c.username,
            'display_name': c.display_name,
            'company_name': c.company_name,
            'phone':        c.phone,
            'email':        c.email,
            'created_at':   c.date_joined.isoformat(),
        }
        for c in clients
    ]})
