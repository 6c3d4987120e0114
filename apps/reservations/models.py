"""
Reservations app models:
  - ReservationDay : Per-date write lock and reservation-number counter
  - Reservation    : One booked (or cancelled) delivery window
  - CancelLog      : Append-only history of cancellations
"""
from django.conf import settings
from django.db import models
from django.utils import timezone

from apps.core.models import UUIDModel, TimestampedModel


# ── Per-date counter ──────────────────────────────────────────────────────────

class ReservationDay(models.Model):
    """
    One row per calendar date that has ever seen a guarded write.

    Guards take SELECT ... FOR UPDATE on this row before checking and writing,
    which serializes bookings and closures for the same date. `last_sequence`
    is the last issued reservation-number sequence for the date.
    """
    date = models.DateField(unique=True)
    last_sequence = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = 'Reservation Day'
        verbose_name_plural = 'Reservation Days'
        ordering = ['-date']

    def __str__(self):
        return f"{self.date} (#{self.last_sequence})"


# ── Reservation ───────────────────────────────────────────────────────────────

class ReservationStatus(models.TextChoices):
    BOOKED    = 'booked',    'Booked'
    CANCELLED = 'cancelled', 'Cancelled'


class Reservation(UUIDModel, TimestampedModel):
    """
    A client's claim on one delivery window. Created by a successful booking,
    mutated only by cancellation, never deleted.
    """
    reservation_no = models.CharField(max_length=20, unique=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='reservations',
    )
    date = models.DateField(db_index=True)
    start_time = models.TimeField()
    end_time = models.TimeField()
    status = models.CharField(
        max_length=10, choices=ReservationStatus.choices,
        default=ReservationStatus.BOOKED, db_index=True,
    )
    container_no = models.CharField(max_length=64)
    packing_list_path = models.CharField(max_length=255)
    cancel_reason = models.TextField(blank=True, null=True)
    cancelled_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        verbose_name = 'Reservation'
        verbose_name_plural = 'Reservations'
        ordering = ['date', 'start_time']
        indexes = [models.Index(fields=['user', 'date'], name='idx_reservation_user_date')]
        # DB-level guard: no two BOOKED reservations for the same window
        constraints = [
            models.UniqueConstraint(
                fields=['date', 'start_time', 'end_time'],
                condition=models.Q(status='booked'),
                name='uq_booked_reservation_window',
            )
        ]

    def __str__(self):
        return f"{self.reservation_no} | {self.date} {self.start_time:%H:%M}-{self.end_time:%H:%M} [{self.status}]"

    @property
    def is_booked(self):
        return self.status == ReservationStatus.BOOKED

    def cancel(self, changed_by, reason=None):
        """Transition to CANCELLED and append the matching CancelLog row."""
        self.status = ReservationStatus.CANCELLED
        self.cancel_reason = reason
        self.cancelled_at = timezone.now()
        self.save(update_fields=['status', 'cancel_reason', 'cancelled_at', 'updated_at'])
        CancelLog.objects.create(
            reservation=self,
            user=changed_by,
            reason=reason,
            cancelled_date=self.date,
        )


# ── Cancellation history ──────────────────────────────────────────────────────

class CancelLog(UUIDModel):
    """Immutable record of a cancellation, independent of the reservation row."""
    reservation = models.ForeignKey(Reservation, on_delete=models.PROTECT, related_name='cancel_logs')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='cancel_logs')
    reason = models.TextField(blank=True, null=True)
    cancelled_date = models.DateField(help_text='Delivery date of the cancelled reservation')
    cancelled_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Cancel Log'
        verbose_name_plural = 'Cancel Logs'
        ordering = ['cancelled_at']

    def __str__(self):
        return f"Reservation {self.reservation_id} cancelled at {self.cancelled_at:%Y-%m-%d %H:%M}"
