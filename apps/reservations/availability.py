"""
Slot availability: pure functions, no database or request awareness.

Public API:
  WINDOWS, window_for_start(start_time)
  build_range(start, end)                -> [Day, ...]
  parse_date_range(start_str, end_str)   -> (date, date)
  resolve(days, reservations, closures, include_cancelled_status=False)
                                         -> [DayOverview, ...]
  overlaps(a_start, a_end, b_start, b_end)
  closure_covers(closure, window)

Reservations and closures are read by attribute only (date, start_time,
end_time, status), so model instances and plain objects both work.
"""
from collections import defaultdict
from dataclasses import dataclass
from datetime import date as date_type, time as time_type, timedelta

from django.conf import settings
from django.db import models

from apps.closures.models import ClosureStatus
from apps.core.exceptions import InvalidRangeError
from apps.core.http import parse_date

from .models import ReservationStatus


# ── Windows ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Window:
    start: time_type
    end: time_type

    @property
    def label(self) -> str:
        return f"{self.start:%H:%M}-{self.end:%H:%M}"


WINDOWS = (
    Window(time_type(10, 0), time_type(13, 0)),
    Window(time_type(11, 0), time_type(14, 0)),
    Window(time_type(12, 0), time_type(15, 0)),
)


def window_for_start(start_time):
    """The fixed window starting at `start_time`, or None."""
    for window in WINDOWS:
        if window.start == start_time:
            return window
    return None


# ── Calendar ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Day:
    date: date_type
    weekday: int        # 0 = Sunday … 6 = Saturday
    bookable: bool


def sunday_based_weekday(day: date_type) -> int:
    return day.isoweekday() % 7


def is_bookable_day(day: date_type) -> bool:
    return sunday_based_weekday(day) not in settings.CLOSED_WEEKDAYS


def build_range(start: date_type, end: date_type) -> list:
    """Every calendar day from start to end inclusive, ascending."""
    if start > end:
        raise InvalidRangeError('Start date must not be after end date.')

    days = []
    current = start
    while current <= end:
        days.append(Day(
            date=current,
            weekday=sunday_based_weekday(current),
            bookable=is_bookable_day(current),
        ))
        current += timedelta(days=1)
    return days


def parse_date_range(start_str, end_str):
    """Parse the `start`/`end` query parameters; both are required."""
    if not start_str or not end_str:
        raise InvalidRangeError('Missing date range.')
    start, end = parse_date(start_str), parse_date(end_str)
    if start is None or end is None:
        raise InvalidRangeError('Dates must be formatted YYYY-MM-DD.')
    if start > end:
        raise InvalidRangeError('Start date must not be after end date.')
    return start, end


# ── Slot status ───────────────────────────────────────────────────────────────

class SlotStatus(models.TextChoices):
    AVAILABLE   = 'available',   'Available'
    BOOKED      = 'booked',      'Booked'
    CLOSED      = 'closed',      'Closed'
    CANCELLED   = 'cancelled',   'Cancelled'
    UNAVAILABLE = 'unavailable', 'Unavailable'


@dataclass(frozen=True)
class Slot:
    date: date_type
    start_time: time_type
    end_time: time_type
    status: str


@dataclass(frozen=True)
class DayOverview:
    date: date_type
    weekday: int
    bookable: bool
    slots: tuple


def overlaps(a_start, a_end, b_start, b_end) -> bool:
    """True if [a_start, a_end) intersects [b_start, b_end)."""
    return not (a_end <= b_start or a_start >= b_end)


def closure_covers(closure, window: Window) -> bool:
    """An active closure covers a window if it is full-day or fully contains it."""
    if closure.status != ClosureStatus.CLOSED:
        return False
    if closure.start_time is None and closure.end_time is None:
        return True
    if closure.start_time is None or closure.end_time is None:
        return False
    return window.start >= closure.start_time and window.end <= closure.end_time


def _group_by_date(records) -> dict:
    grouped = defaultdict(list)
    for record in records:
        grouped[record.date].append(record)
    return grouped


def _resolve_window(day: Day, window: Window, reservations, closures,
                    include_cancelled_status: bool) -> str:
    status = SlotStatus.AVAILABLE if day.bookable else SlotStatus.UNAVAILABLE

    # Clients see closed weekdays as plain unavailable; the admin view still
    # shows any records that land on them.
    if not day.bookable and not include_cancelled_status:
        return status

    if any(closure_covers(c, window) for c in closures):
        status = SlotStatus.CLOSED

    exact_booked = exact_cancelled = overlap_booked = False
    for r in reservations:
        if r.start_time == window.start and r.end_time == window.end:
            if r.status == ReservationStatus.BOOKED:
                exact_booked = True
            elif r.status == ReservationStatus.CANCELLED:
                exact_cancelled = True
        elif r.status == ReservationStatus.BOOKED and overlaps(
                window.start, window.end, r.start_time, r.end_time):
            overlap_booked = True

    # Exact match beats overlap; a booked exact match beats any closure.
    if exact_booked:
        return SlotStatus.BOOKED
    if exact_cancelled and include_cancelled_status:
        return SlotStatus.CANCELLED
    if overlap_booked and status == SlotStatus.AVAILABLE:
        return SlotStatus.UNAVAILABLE
    return status


def resolve(days, reservations, closures, include_cancelled_status: bool = False) -> list:
    """
    Merge calendar bookability, closures and reservations into a slot grid.

    `include_cancelled_status` selects the admin overview: historical
    cancellations show as `cancelled`, and records on closed weekdays are
    overlaid. With it off (client grid) a cancelled window reads as if it had
    never been booked, and closed weekdays are `unavailable` throughout.
    """
    reservations_by_date = _group_by_date(reservations)
    closures_by_date = _group_by_date(closures)

    overview = []
    for day in days:
        day_reservations = reservations_by_date.get(day.date, [])
        day_closures = closures_by_date.get(day.date, [])
        slots = tuple(
            Slot(
                date=day.date,
                start_time=window.start,
                end_time=window.end,
                status=_resolve_window(
                    day, window, day_reservations, day_closures, include_cancelled_status,
                ),
            )
            for window in WINDOWS
        )
        overview.append(DayOverview(date=day.date, weekday=day.weekday,
                                    bookable=day.bookable, slots=slots))
    return overview
