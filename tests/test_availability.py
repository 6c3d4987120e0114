from datetime import date, time
from types import SimpleNamespace

import pytest

from apps.closures.models import ClosureStatus
from apps.core.exceptions import InvalidRangeError
from apps.reservations.availability import (
    SlotStatus,
    build_range,
    closure_covers,
    overlaps,
    parse_date_range,
    resolve,
    window_for_start,
)
from apps.reservations.models import ReservationStatus

from .helpers import ELEVEN, MONDAY, NOON, TEN, TUESDAY


def _booking(day, start, end, status=ReservationStatus.BOOKED):
    return SimpleNamespace(date=day, start_time=start, end_time=end, status=status)


def _closure(day, start=None, end=None, status=ClosureStatus.CLOSED):
    return SimpleNamespace(date=day, start_time=start, end_time=end, status=status)


def _statuses(overview):
    return [[str(slot.status) for slot in day.slots] for day in overview]


def _one_day(day, reservations=(), closures=(), **kw):
    return _statuses(resolve(build_range(day, day), list(reservations), list(closures), **kw))[0]


# ── Calendar range ────────────────────────────────────────────────────────────

def test_range_crosses_month_boundary():
    days = build_range(date(2024, 1, 30), date(2024, 2, 2))
    assert [d.date for d in days] == [date(2024, 1, 30), date(2024, 1, 31), date(2024, 2, 1), date(2024, 2, 2)]


def test_range_crosses_year_and_leap_day():
    assert len(build_range(date(2023, 12, 31), date(2024, 1, 1))) == 2
    assert build_range(date(2024, 2, 28), date(2024, 3, 1))[1].date == date(2024, 2, 29)


def test_weekday_is_sunday_based_and_closed_days_flagged():
    # 2024-06-02 is a Sunday
    days = build_range(date(2024, 6, 2), date(2024, 6, 8))
    assert [d.weekday for d in days] == [0, 1, 2, 3, 4, 5, 6]
    assert [d.bookable for d in days] == [False, False, True, True, True, True, True]


def test_single_day_range():
    days = build_range(TUESDAY, TUESDAY)
    assert len(days) == 1 and days[0].bookable


def test_reversed_range_rejected():
    with pytest.raises(InvalidRangeError):
        build_range(date(2024, 6, 5), date(2024, 6, 4))


@pytest.mark.parametrize('start,end', [
    (None, '2024-06-05'),
    ('2024-06-05', ''),
    ('2024/06/05', '2024-06-06'),
    ('2024-06-06', '2024-06-05'),
])
def test_parse_date_range_rejects_bad_input(start, end):
    with pytest.raises(InvalidRangeError):
        parse_date_range(start, end)


def test_parse_date_range_accepts_iso_dates():
    assert parse_date_range('2024-06-04', '2024-06-08') == (date(2024, 6, 4), date(2024, 6, 8))


# ── Windows and intervals ─────────────────────────────────────────────────────

def test_window_for_start_only_matches_fixed_starts():
    assert window_for_start(TEN).end == time(13, 0)
    assert window_for_start(time(10, 30)) is None


def test_touching_intervals_do_not_overlap():
    assert not overlaps(time(10), time(13), time(13), time(15))
    assert overlaps(time(10), time(13), time(12), time(15))


def test_partial_closure_must_contain_window():
    window = window_for_start(TEN)
    assert closure_covers(_closure(TUESDAY, time(9), time(13)), window)
    assert not closure_covers(_closure(TUESDAY, time(11), time(13)), window)
    assert not closure_covers(_closure(TUESDAY, status=ClosureStatus.OPENED), window)


# ── Status resolution ─────────────────────────────────────────────────────────

def test_closed_weekday_is_unavailable_for_clients_whatever_the_data():
    reservations = [
        _booking(MONDAY, time(10), time(13)),
        _booking(MONDAY, time(11), time(14), ReservationStatus.CANCELLED),
    ]
    closures = [_closure(MONDAY, time(12), time(15))]
    assert _one_day(MONDAY, reservations, closures) == ['unavailable'] * 3


def test_closed_weekday_closure_stays_unavailable_for_clients():
    assert _one_day(MONDAY, closures=[_closure(MONDAY)]) == ['unavailable'] * 3


def test_admin_view_overlays_records_on_closed_weekday():
    reservations = [
        _booking(MONDAY, time(10), time(13)),
        _booking(MONDAY, time(11), time(14), ReservationStatus.CANCELLED),
    ]
    closures = [_closure(MONDAY, time(12), time(15))]
    statuses = _one_day(MONDAY, reservations, closures, include_cancelled_status=True)
    assert statuses == ['booked', 'cancelled', 'closed']


def test_empty_bookable_day_is_all_available():
    assert _one_day(TUESDAY) == ['available'] * 3


def test_exact_booking_marks_booked_and_overlaps_unavailable():
    statuses = _one_day(TUESDAY, reservations=[_booking(TUESDAY, time(10), time(13))])
    # 12:00-15:00 shares the 12:00-13:00 hour with the booking
    assert statuses == ['booked', 'unavailable', 'unavailable']


def test_late_booking_blocks_only_intersecting_windows():
    statuses = _one_day(TUESDAY, reservations=[_booking(TUESDAY, time(12), time(15))])
    assert statuses == ['unavailable', 'unavailable', 'booked']


def test_full_day_closure_closes_every_window():
    assert _one_day(TUESDAY, closures=[_closure(TUESDAY)]) == ['closed'] * 3


def test_partial_closure_closes_contained_windows_only():
    statuses = _one_day(TUESDAY, closures=[_closure(TUESDAY, time(10), time(14))])
    assert statuses == ['closed', 'closed', 'available']


def test_opened_closure_is_ignored():
    statuses = _one_day(TUESDAY, closures=[_closure(TUESDAY, status=ClosureStatus.OPENED)])
    assert statuses == ['available'] * 3


def test_booked_beats_closed():
    statuses = _one_day(
        TUESDAY,
        reservations=[_booking(TUESDAY, time(10), time(13))],
        closures=[_closure(TUESDAY)],
    )
    assert statuses == ['booked', 'closed', 'closed']


def test_cancelled_hidden_unless_requested():
    cancelled = [_booking(TUESDAY, time(11), time(14), ReservationStatus.CANCELLED)]
    assert _one_day(TUESDAY, reservations=cancelled) == ['available'] * 3
    assert _one_day(TUESDAY, reservations=cancelled, include_cancelled_status=True) == [
        'available', 'cancelled', 'available',
    ]


def test_rebooked_window_reads_booked_over_cancelled():
    reservations = [
        _booking(TUESDAY, time(10), time(13), ReservationStatus.CANCELLED),
        _booking(TUESDAY, time(10), time(13)),
    ]
    assert _one_day(TUESDAY, reservations=reservations, include_cancelled_status=True)[0] == 'booked'


def test_records_for_other_dates_are_ignored():
    wednesday = date(2024, 6, 5)
    statuses = _one_day(
        TUESDAY,
        reservations=[_booking(wednesday, time(10), time(13))],
        closures=[_closure(wednesday)],
    )
    assert statuses == ['available'] * 3


def test_resolve_is_idempotent_and_shaped():
    days = build_range(TUESDAY, date(2024, 6, 8))
    reservations = [_booking(TUESDAY, time(11), time(14))]
    first = resolve(days, reservations, [])
    second = resolve(days, reservations, [])
    assert first == second
    assert len(first) == 5
    assert all(len(day.slots) == 3 for day in first)
    assert [slot.start_time for slot in first[0].slots] == [TEN, ELEVEN, NOON]
    assert first[0].slots[1].status == SlotStatus.BOOKED
