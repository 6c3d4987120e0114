"""
ClosedSlot: an admin-declared unavailability for a whole date or a sub-range
of it. Both times null means a full-day closure.
"""
from django.conf import settings
from django.db import models

from apps.core.models import UUIDModel, TimestampedModel


class ClosureStatus(models.TextChoices):
    CLOSED = 'closed', 'Closed'
    OPENED = 'opened', 'Opened'


class ClosedSlot(UUIDModel, TimestampedModel):
    date = models.DateField(db_index=True)
    start_time = models.TimeField(blank=True, null=True)
    end_time = models.TimeField(blank=True, null=True)
    reason = models.TextField()
    status = models.CharField(
        max_length=10, choices=ClosureStatus.choices,
        default=ClosureStatus.CLOSED, db_index=True,
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='closures_created',
    )
    opened_reason = models.TextField(blank=True, null=True)
    opened_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT,
        null=True, blank=True, related_name='closures_opened',
    )
    opened_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        verbose_name = 'Closed Slot'
        verbose_name_plural = 'Closed Slots'
        ordering = ['-date', '-created_at']
        constraints = [
            # Either both bounds are set (partial) or neither is (full day)
            models.CheckConstraint(
                condition=(
                    models.Q(start_time__isnull=True, end_time__isnull=True)
                    | models.Q(start_time__isnull=False, end_time__isnull=False)
                ),
                name='ck_closed_slot_bounds',
            )
        ]

    def __str__(self):
        return f"{self.date} {self.window_label} [{self.status}]"

    @property
    def is_full_day(self):
        return self.start_time is None and self.end_time is None

    @property
    def is_active(self):
        return self.status == ClosureStatus.CLOSED

    @property
    def window_label(self):
        if self.is_full_day:
            return 'full day'
        return f"{self.start_time:%H:%M}-{self.end_time:%H:%M}"
