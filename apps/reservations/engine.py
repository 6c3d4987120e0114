"""
Reservation engine: business rules for booking and cancelling, no HTTP/request awareness.

Public API:
  lock_day(date)
  booked_overlapping(date, start_time, end_time)
  get_overview(start, end, include_cancelled_status=False)
  attempt_book(user, booking_date, start_time, container_no, packing_list, today=None)
  attempt_cancel(user, reservation_id, reason=None, today=None)
"""
import logging
from datetime import date as date_type, time as time_type
from functools import partial

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.closures.models import ClosedSlot, ClosureStatus
from apps.core.exceptions import (
    InvalidPayloadError,
    InvalidWindowError,
    NotBookableError,
    NotFoundError,
    OutOfWindowError,
    SlotClosedError,
    SlotTakenError,
    TooLateToCancelError,
)
from apps.notifications.wecom import send_reservation_booked

from .attachments import discard_packing_list, store_packing_list, validate_packing_list
from .availability import build_range, closure_covers, is_bookable_day, resolve, window_for_start
from .models import Reservation, ReservationDay, ReservationStatus

logger = logging.getLogger(__name__)


# ── Shared helpers ────────────────────────────────────────────────────────────

def _lead_days(target: date_type, today: date_type) -> int:
    return (target - today).days


def lock_day(day: date_type) -> ReservationDay:
    """
    Row-lock the date's ReservationDay, creating it on first use.
    Must be called inside transaction.atomic; every guarded write for the
    same date waits here until the holder commits.
    """
    ReservationDay.objects.get_or_create(
        date=day,
        defaults={'last_sequence': Reservation.objects.filter(date=day).count()},
    )
    return ReservationDay.objects.select_for_update().get(date=day)


def _next_reservation_no(day_row: ReservationDay) -> str:
    """Issue the next YYYYMMDD-NNN number from the locked counter row."""
    day_row.last_sequence += 1
    day_row.save(update_fields=['last_sequence'])
    return f"{day_row.date:%Y%m%d}-{day_row.last_sequence:03d}"


def booked_overlapping(day: date_type, start_time: time_type, end_time: time_type):
    """Booked reservations on `day` whose [start, end) intersects [start_time, end_time)."""
    return Reservation.objects.filter(
        date=day,
        status=ReservationStatus.BOOKED,
        start_time__lt=end_time,
        end_time__gt=start_time,
    )


def _covering_closure(day: date_type, window):
    for closure in ClosedSlot.objects.filter(date=day, status=ClosureStatus.CLOSED):
        if closure_covers(closure, window):
            return closure
    return None


# ── Core: Overview ────────────────────────────────────────────────────────────

def get_overview(start: date_type, end: date_type, include_cancelled_status: bool = False) -> list:
    """Read the persisted state for [start, end] and resolve the slot grid."""
    days = build_range(start, end)
    reservations = Reservation.objects.filter(date__range=(start, end))
    closures = ClosedSlot.objects.filter(date__range=(start, end))
    return resolve(days, reservations, closures, include_cancelled_status=include_cancelled_status)


# ── Core: Booking ─────────────────────────────────────────────────────────────

def attempt_book(user, booking_date: date_type, start_time: time_type, container_no: str,
                 packing_list, today: date_type = None) -> Reservation:
    """
    Validate and create a BOOKED reservation.

    Checks, in order (first failure wins):
      1. date within [today + 1, today + 14]     OutOfWindowError
      2. date not on a closed weekday            NotBookableError
      3. start_time is a fixed window start      InvalidWindowError
      4. no active closure covers the window     SlotClosedError
      5. no booked reservation overlaps          SlotTakenError
      6. packing list present / size / type      InvalidAttachmentError

    Steps 4 onward run under the date's row lock, and the reservation number
    is drawn inside the same transaction. The chat notification is sent
    after commit and cannot fail the booking.
    """
    today = today or timezone.localdate()

    lead = _lead_days(booking_date, today)
    if lead < settings.RESERVATION_MIN_LEAD_DAYS or lead > settings.RESERVATION_HORIZON_DAYS:
        raise OutOfWindowError()

    if not is_bookable_day(booking_date):
        raise NotBookableError()

    window = window_for_start(start_time)
    if window is None:
        raise InvalidWindowError()

    container_no = (container_no or '').strip()
    if not container_no:
        raise InvalidPayloadError('A container number is required.')

    with transaction.atomic():
        day_row = lock_day(booking_date)

        if _covering_closure(booking_date, window):
            raise SlotClosedError()

        if booked_overlapping(booking_date, window.start, window.end).exists():
            raise SlotTakenError()

        validate_packing_list(packing_list)
        packing_list_path = store_packing_list(packing_list, user.pk)

        try:
            with transaction.atomic():
                reservation = Reservation.objects.create(
                    reservation_no=_next_reservation_no(day_row),
                    user=user,
                    date=booking_date,
                    start_time=window.start,
                    end_time=window.end,
                    status=ReservationStatus.BOOKED,
                    container_no=container_no,
                    packing_list_path=packing_list_path,
                )
        except IntegrityError as exc:
            discard_packing_list(packing_list_path)
            raise SlotTakenError() from exc

        transaction.on_commit(partial(send_reservation_booked, reservation), robust=True)

    logger.info(
        'Reservation %s booked by user %s for %s %s',
        reservation.reservation_no, user.pk, booking_date, window.label,
    )
    return reservation


# ── Core: Cancellation ────────────────────────────────────────────────────────

@transaction.atomic
def attempt_cancel(user, reservation_id, reason: str = None, today: date_type = None) -> Reservation:
    """
    Cancel the caller's own booked reservation.

    Raises:
      NotFoundError        : no such booked reservation owned by `user`
      TooLateToCancelError : the delivery date is today or already past
    """
    today = today or timezone.localdate()

    reservation = (
        Reservation.objects
        .select_for_update()
        .filter(id=reservation_id, user=user)
        .first()
    )
    if reservation is None or not reservation.is_booked:
        raise NotFoundError()

    if _lead_days(reservation.date, today) < 1:
        raise TooLateToCancelError()

    reason = (reason or '').strip() or None
    reservation.cancel(changed_by=user, reason=reason)
    logger.info('Reservation %s cancelled by user %s', reservation.reservation_no, user.pk)
    return reservation
