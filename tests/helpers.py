from datetime import date, time, timedelta

from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone

from apps.reservations.availability import WINDOWS, is_bookable_day
from apps.reservations.models import Reservation, ReservationStatus

# 2024-06-03 is a Monday, 2024-06-04 a Tuesday.
MONDAY = date(2024, 6, 3)
TUESDAY = date(2024, 6, 4)
TEN, ELEVEN, NOON = (w.start for w in WINDOWS)


def next_bookable_date(min_lead_days=2):
    """First open weekday at least `min_lead_days` after the real local date."""
    candidate = timezone.localdate() + timedelta(days=min_lead_days)
    while not is_bookable_day(candidate):
        candidate += timedelta(days=1)
    return candidate


def pdf_file(name='packing.pdf', content=b'%PDF-1.4 packing list'):
    return SimpleUploadedFile(name, content, content_type='application/pdf')


def make_reservation(user, day, start, status=ReservationStatus.BOOKED, **extra):
    """Insert a reservation row directly, bypassing the booking guard."""
    seq = Reservation.objects.filter(date=day).count() + 1
    return Reservation.objects.create(
        reservation_no=f"{day:%Y%m%d}-{seq:03d}",
        user=user,
        date=day,
        start_time=start,
        end_time=time(start.hour + 3, start.minute),
        status=status,
        container_no=extra.pop('container_no', 'MSCU1234567'),
        packing_list_path=extra.pop('packing_list_path', 'packing-lists/seeded.pdf'),
        **extra,
    )
