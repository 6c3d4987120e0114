from datetime import date
import uuid

import pytest

from apps.core.exceptions import NotFoundError, TooLateToCancelError
from apps.reservations.engine import attempt_cancel, get_overview
from apps.reservations.models import CancelLog, ReservationStatus

from .helpers import MONDAY, TEN, TUESDAY, make_reservation

pytestmark = pytest.mark.django_db


def test_cancel_the_day_before(client_account):
    reservation = make_reservation(client_account, TUESDAY, TEN)

    cancelled = attempt_cancel(client_account, reservation.id, reason='  ship delayed ', today=MONDAY)

    reservation.refresh_from_db()
    assert cancelled.status == reservation.status == ReservationStatus.CANCELLED
    assert reservation.cancel_reason == 'ship delayed'
    assert reservation.cancelled_at is not None

    log = CancelLog.objects.get(reservation=reservation)
    assert log.user == client_account
    assert log.reason == 'ship delayed'
    assert log.cancelled_date == TUESDAY


def test_blank_reason_stored_as_null(client_account):
    reservation = make_reservation(client_account, TUESDAY, TEN)
    attempt_cancel(client_account, reservation.id, reason='   ', today=MONDAY)
    reservation.refresh_from_db()
    assert reservation.cancel_reason is None


def test_cancelled_window_frees_up(client_account):
    reservation = make_reservation(client_account, TUESDAY, TEN)
    attempt_cancel(client_account, reservation.id, today=MONDAY)

    client_grid = get_overview(TUESDAY, TUESDAY)[0]
    admin_grid = get_overview(TUESDAY, TUESDAY, include_cancelled_status=True)[0]
    assert [str(s.status) for s in client_grid.slots] == ['available'] * 3
    assert str(admin_grid.slots[0].status) == 'cancelled'


@pytest.mark.parametrize('today', [TUESDAY, date(2024, 6, 5)])
def test_same_day_or_past_rejected(client_account, today):
    reservation = make_reservation(client_account, TUESDAY, TEN)
    with pytest.raises(TooLateToCancelError):
        attempt_cancel(client_account, reservation.id, today=today)
    reservation.refresh_from_db()
    assert reservation.is_booked
    assert not CancelLog.objects.exists()


def test_other_clients_reservation_is_not_found(client_account, other_client_account):
    reservation = make_reservation(other_client_account, TUESDAY, TEN)
    with pytest.raises(NotFoundError):
        attempt_cancel(client_account, reservation.id, today=MONDAY)
    reservation.refresh_from_db()
    assert reservation.is_booked


def test_unknown_reservation_is_not_found(client_account):
    with pytest.raises(NotFoundError):
        attempt_cancel(client_account, uuid.uuid4(), today=MONDAY)


def test_cancelling_twice_is_not_found(client_account):
    reservation = make_reservation(client_account, TUESDAY, TEN)
    attempt_cancel(client_account, reservation.id, today=MONDAY)
    with pytest.raises(NotFoundError):
        attempt_cancel(client_account, reservation.id, today=MONDAY)
    assert CancelLog.objects.count() == 1
