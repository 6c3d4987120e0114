"""
Client reservation views: JSON only.

  GET  /api/client/reservations/?start=&end=     slot grid + own reservations
  POST /api/client/reservations/                 book (multipart form)
  POST /api/client/reservations/<id>/cancel/     cancel own reservation
  GET  /api/reservations/<id>/packing-list/      download packing list (any role)
"""
import logging

from django.http import HttpResponse, JsonResponse
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.accounts.decorators import capability_required
from apps.accounts.models import Role
from apps.accounts.permissions import BOOK, CANCEL, DOWNLOAD_PACKING_LIST
from apps.core.exceptions import NotFoundError
from apps.core.http import json_errors, read_json_body

from .attachments import open_packing_list
from .availability import parse_date_range
from .engine import attempt_book, attempt_cancel, get_overview
from .forms import BookingForm, CancelForm
from .models import Reservation
from .payloads import overview_payload, reservation_payload

logger = logging.getLogger(__name__)


@require_http_methods(['GET', 'POST'])
@capability_required(BOOK)
@json_errors
def client_reservations(request):
    if request.method == 'POST':
        return _book(request)

    start, end = parse_date_range(request.GET.get('start'), request.GET.get('end'))
    overview = get_overview(start, end, include_cancelled_status=False)
    mine = Reservation.objects.filter(user=request.user).order_by('-date', 'start_time')
    return JsonResponse({
        'overview':       overview_payload(overview),
        'myReservations': [reservation_payload(r) for r in mine],
    })


def _book(request):
    data = BookingForm(request.POST, request.FILES).cleaned_or_raise()
    reservation = attempt_book(
        user=request.user,
        booking_date=data['date'],
        start_time=data['startTime'],
        container_no=data['containerNo'],
        packing_list=data['packingList'],
    )
    return JsonResponse(reservation_payload(reservation), status=201)


@require_POST
@capability_required(CANCEL)
@json_errors
def cancel_reservation(request, reservation_id):
    data = CancelForm(read_json_body(request)).cleaned_or_raise()
    attempt_cancel(request.user, reservation_id, reason=data['reason'])
    return HttpResponse(status=204)


@require_GET
@capability_required(DOWNLOAD_PACKING_LIST)
@json_errors
def packing_list(request, reservation_id):
    """Clients may only fetch their own files; operators and admins may fetch any."""
    qs = Reservation.objects.filter(id=reservation_id)
    if request.user.role == Role.CLIENT:
        qs = qs.filter(user=request.user)
    reservation = qs.first()
    if reservation is None or not reservation.packing_list_path:
        raise NotFoundError()

    data, filename, content_type = open_packing_list(reservation.packing_list_path)
    response = HttpResponse(data, content_type=content_type)
    response['Content-Disposition'] = f'inline; filename="{filename}"'
    return response
