from datetime import date, time

import httpx
import pytest
from django.core.files.storage import default_storage

from apps.closures.models import ClosedSlot
from apps.core.exceptions import (
    InvalidAttachmentError,
    InvalidPayloadError,
    InvalidWindowError,
    NotBookableError,
    OutOfWindowError,
    SlotClosedError,
    SlotTakenError,
)
from apps.reservations import engine
from apps.reservations.engine import attempt_book, attempt_cancel, get_overview
from apps.reservations.models import Reservation, ReservationDay, ReservationStatus

from .helpers import ELEVEN, MONDAY, NOON, TEN, TUESDAY, make_reservation, pdf_file

pytestmark = pytest.mark.django_db


def _book(user, day=TUESDAY, start=TEN, packing_list='default', container_no='MSCU1234567'):
    if packing_list == 'default':
        packing_list = pdf_file()
    return attempt_book(user, day, start, container_no, packing_list, today=MONDAY)


def _close(admin, day=TUESDAY, start=None, end=None):
    return ClosedSlot.objects.create(
        date=day, start_time=start, end_time=end, reason='stocktake', created_by=admin,
    )


# ── Happy path ────────────────────────────────────────────────────────────────

def test_book_creates_booked_reservation(client_account):
    reservation = _book(client_account)

    assert reservation.status == ReservationStatus.BOOKED
    assert reservation.reservation_no == '20240604-001'
    assert (reservation.start_time, reservation.end_time) == (TEN, time(13, 0))
    assert reservation.user == client_account
    assert reservation.packing_list_path.startswith('packing-lists/packing_')
    assert default_storage.exists(reservation.packing_list_path)


def test_booking_shows_in_overview(client_account):
    _book(client_account, start=ELEVEN)
    day = get_overview(TUESDAY, TUESDAY)[0]
    assert [str(s.status) for s in day.slots] == ['unavailable', 'booked', 'unavailable']


def test_container_number_is_trimmed(client_account):
    reservation = _book(client_account, container_no='  TGHU7654321 ')
    assert reservation.container_no == 'TGHU7654321'


def test_last_day_of_horizon_is_bookable(client_account):
    # 2024-06-15 is a Saturday, 12 days after MONDAY
    reservation = _book(client_account, day=date(2024, 6, 15))
    assert reservation.date == date(2024, 6, 15)


# ── Rejections, in check order ────────────────────────────────────────────────

@pytest.mark.parametrize('day', [MONDAY, date(2024, 6, 1), date(2024, 6, 18)])
def test_outside_horizon_rejected(client_account, day):
    with pytest.raises(OutOfWindowError):
        _book(client_account, day=day)


@pytest.mark.parametrize('day', [date(2024, 6, 9), date(2024, 6, 10)])
def test_closed_weekday_rejected(client_account, day):
    with pytest.raises(NotBookableError):
        _book(client_account, day=day)


def test_unknown_start_time_rejected(client_account):
    with pytest.raises(InvalidWindowError):
        _book(client_account, start=time(10, 30))


def test_blank_container_rejected(client_account):
    with pytest.raises(InvalidPayloadError):
        _book(client_account, container_no='   ')


def test_full_day_closure_rejects(client_account, admin_account):
    _close(admin_account)
    with pytest.raises(SlotClosedError):
        _book(client_account, start=NOON)


def test_partial_closure_rejects_contained_window(client_account, admin_account):
    _close(admin_account, start=time(10), end=time(14))
    with pytest.raises(SlotClosedError):
        _book(client_account, start=ELEVEN)
    assert _book(client_account, start=NOON).start_time == NOON


def test_opened_closure_does_not_reject(client_account, admin_account):
    closure = _close(admin_account)
    closure.status = 'opened'
    closure.save()
    assert _book(client_account).is_booked


def test_exact_window_taken(client_account, other_client_account):
    _book(other_client_account)
    with pytest.raises(SlotTakenError):
        _book(client_account)


def test_overlapping_window_taken(client_account, other_client_account):
    _book(other_client_account, start=TEN)
    with pytest.raises(SlotTakenError):
        _book(client_account, start=NOON)


def test_cancelled_window_can_be_rebooked(client_account, other_client_account):
    make_reservation(other_client_account, TUESDAY, TEN, status=ReservationStatus.CANCELLED)
    assert _book(client_account).is_booked


def test_taken_is_reported_before_attachment(client_account, other_client_account):
    _book(other_client_account)
    with pytest.raises(SlotTakenError):
        _book(client_account, packing_list=None)


def test_window_checked_before_closure(client_account, admin_account):
    _close(admin_account)
    with pytest.raises(OutOfWindowError):
        _book(client_account, day=MONDAY)


# ── Packing list ──────────────────────────────────────────────────────────────

def test_missing_attachment_rejected(client_account):
    with pytest.raises(InvalidAttachmentError):
        _book(client_account, packing_list=None)
    assert not Reservation.objects.exists()


def test_wrong_extension_rejected(client_account):
    with pytest.raises(InvalidAttachmentError):
        _book(client_account, packing_list=pdf_file('list.txt', b'plain text'))


def test_oversized_attachment_rejected(client_account, settings):
    settings.PACKING_LIST_MAX_BYTES = 8
    with pytest.raises(InvalidAttachmentError):
        _book(client_account, packing_list=pdf_file(content=b'0123456789'))


def test_docx_accepted(client_account):
    reservation = _book(client_account, packing_list=pdf_file('LIST.DOCX', b'PK\x03\x04'))
    assert reservation.packing_list_path.endswith('.docx')


# ── Reservation numbers ───────────────────────────────────────────────────────

def test_numbers_are_sequential_per_date(client_account):
    first = _book(client_account, start=TEN)
    attempt_cancel(client_account, first.id, today=MONDAY)
    second = _book(client_account, start=TEN)
    attempt_cancel(client_account, second.id, today=MONDAY)
    third = _book(client_account, start=NOON)
    other_day = _book(client_account, day=date(2024, 6, 5))

    assert [first.reservation_no, second.reservation_no, third.reservation_no] == [
        '20240604-001', '20240604-002', '20240604-003',
    ]
    assert other_day.reservation_no == '20240605-001'
    assert ReservationDay.objects.get(date=TUESDAY).last_sequence == 3


def test_counter_seeded_from_existing_rows(client_account):
    make_reservation(client_account, TUESDAY, TEN, status=ReservationStatus.CANCELLED)
    assert _book(client_account).reservation_no == '20240604-002'


# ── Database backstop ─────────────────────────────────────────────────────────

def test_unique_constraint_backstop_discards_file(client_account, other_client_account, monkeypatch):
    make_reservation(other_client_account, TUESDAY, TEN)
    monkeypatch.setattr(engine, 'booked_overlapping', lambda *args: Reservation.objects.none())

    stored = []
    real_store = engine.store_packing_list

    def spy_store(upload, user_id):
        stored.append(real_store(upload, user_id))
        return stored[-1]

    monkeypatch.setattr(engine, 'store_packing_list', spy_store)

    with pytest.raises(SlotTakenError):
        _book(client_account)

    assert Reservation.objects.filter(user=client_account).count() == 0
    assert len(stored) == 1
    assert not default_storage.exists(stored[0])


# ── Notification ──────────────────────────────────────────────────────────────

def test_notification_sent_after_commit(client_account, monkeypatch, django_capture_on_commit_callbacks):
    sent = []
    monkeypatch.setattr(engine, 'send_reservation_booked', sent.append)

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        reservation = _book(client_account)

    assert len(callbacks) == 1
    assert sent == [reservation]


def test_rejected_booking_sends_nothing(client_account, other_client_account, monkeypatch,
                                        django_capture_on_commit_callbacks):
    _book(other_client_account)
    sent = []
    monkeypatch.setattr(engine, 'send_reservation_booked', sent.append)

    with django_capture_on_commit_callbacks(execute=True):
        with pytest.raises(SlotTakenError):
            _book(client_account)

    assert sent == []


def test_webhook_failure_does_not_fail_booking(client_account, settings, monkeypatch,
                                               django_capture_on_commit_callbacks):
    settings.WECOM_WEBHOOK_URL = 'https://qyapi.example.com/cgi-bin/webhook/send?key=x'

    def boom(*args, **kwargs):
        raise httpx.ConnectTimeout('timed out')

    monkeypatch.setattr(httpx, 'post', boom)

    with django_capture_on_commit_callbacks(execute=True):
        reservation = _book(client_account)

    assert Reservation.objects.get(id=reservation.id).is_booked


def test_odd_robot_reply_does_not_fail_booking(client_account, settings, monkeypatch,
                                               django_capture_on_commit_callbacks):
    settings.WECOM_WEBHOOK_URL = 'https://qyapi.example.com/cgi-bin/webhook/send?key=x'
    monkeypatch.setattr(
        httpx, 'post',
        lambda url, **kwargs: httpx.Response(200, json=[], request=httpx.Request('POST', url)),
    )

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        reservation = _book(client_account)

    assert len(callbacks) == 1
    assert Reservation.objects.get(id=reservation.id).is_booked


def test_malformed_webhook_url_does_not_fail_booking(client_account, settings,
                                                     django_capture_on_commit_callbacks):
    settings.WECOM_WEBHOOK_URL = 'http://[::1'

    with django_capture_on_commit_callbacks(execute=True):
        reservation = _book(client_account)

    assert Reservation.objects.get(id=reservation.id).is_booked
