"""
Closure engine: closing and re-opening slots, no HTTP/request awareness.

Public API:
  attempt_close(admin, closure_date, mode, start_time=None, end_time=None, reason='')
  attempt_open(admin, closed_slot_id, opened_reason)

Closing takes the same per-date row lock as booking, so a closure and a
booking for the same date can never both pass their checks concurrently.
"""
import logging
from datetime import date as date_type

from django.db import transaction
from django.utils import timezone

from apps.audit.writer import CLOSE_SLOT, OPEN_CLOSED_SLOT, record_operation
from apps.core.exceptions import (
    HasBookingsError,
    InvalidRangeError,
    MissingReasonError,
    NotFoundError,
)
from apps.reservations.engine import booked_overlapping, lock_day
from apps.reservations.models import Reservation, ReservationStatus

from .models import ClosedSlot, ClosureStatus

logger = logging.getLogger(__name__)

MODE_FULL = 'full'
MODE_PARTIAL = 'partial'


def _fmt(t):
    return t.strftime('%H:%M') if t else None


def closure_snapshot(closure: ClosedSlot) -> dict:
    """JSON-safe view of a closure as it is right now, for the audit log."""
    return {
        'id':            str(closure.id),
        'date':          closure.date.isoformat(),
        'start_time':    _fmt(closure.start_time),
        'end_time':      _fmt(closure.end_time),
        'reason':        closure.reason,
        'status_before': closure.status,
        'created_at':    closure.created_at.isoformat(),
    }


# ── Core: Close ───────────────────────────────────────────────────────────────

def attempt_close(admin, closure_date: date_type, mode: str, start_time=None, end_time=None,
                  reason: str = '') -> ClosedSlot:
    """
    Record a full-day or partial closure.

    Raises:
      MissingReasonError : blank reason
      InvalidRangeError  : unknown mode, partial without both bounds, or start >= end
      HasBookingsError   : a booked reservation would fall inside the closure
    """
    reason = (reason or '').strip()
    if not reason:
        raise MissingReasonError()

    if mode == MODE_FULL:
        start_time = end_time = None
    elif mode == MODE_PARTIAL:
        if start_time is None or end_time is None:
            raise InvalidRangeError('A partial closure needs both a start and an end time.')
        if start_time >= end_time:
            raise InvalidRangeError('The closure must end after it starts.')
    else:
        raise InvalidRangeError("Mode must be 'full' or 'partial'.")

    with transaction.atomic():
        lock_day(closure_date)

        if mode == MODE_FULL:
            conflicts = Reservation.objects.filter(date=closure_date, status=ReservationStatus.BOOKED)
        else:
            conflicts = booked_overlapping(closure_date, start_time, end_time)
        if conflicts.exists():
            raise HasBookingsError()

        closure = ClosedSlot.objects.create(
            date=closure_date,
            start_time=start_time,
            end_time=end_time,
            reason=reason,
            status=ClosureStatus.CLOSED,
            created_by=admin,
        )
        record_operation(admin, CLOSE_SLOT, {
            'id':         str(closure.id),
            'date':       closure.date.isoformat(),
            'start_time': _fmt(start_time),
            'end_time':   _fmt(end_time),
            'reason':     reason,
        })

    logger.info('Closure %s recorded for %s %s', closure.id, closure_date, closure.window_label)
    return closure


# ── Core: Open ────────────────────────────────────────────────────────────────

@transaction.atomic
def attempt_open(admin, closed_slot_id, opened_reason: str) -> ClosedSlot:
    """
    Re-open an active closure, keeping the record and an audit snapshot.

    Raises:
      MissingReasonError : blank justification
      NotFoundError      : no such closure, or it is already opened
    """
    opened_reason = (opened_reason or '').strip()
    if not opened_reason:
        raise MissingReasonError('A reason for re-opening is required.')

    closure = (
        ClosedSlot.objects
        .select_for_update()
        .filter(id=closed_slot_id)
        .first()
    )
    if closure is None or not closure.is_active:
        raise NotFoundError()

    snapshot = closure_snapshot(closure)

    closure.status = ClosureStatus.OPENED
    closure.opened_reason = opened_reason
    closure.opened_by = admin
    closure.opened_at = timezone.now()
    closure.save(update_fields=['status', 'opened_reason', 'opened_by', 'opened_at', 'updated_at'])

    record_operation(admin, OPEN_CLOSED_SLOT, {**snapshot, 'opened_reason': opened_reason})
    logger.info('Closure %s re-opened by user %s', closure.id, admin.pk)
    return closure
