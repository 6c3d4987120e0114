from django.conf import settings
from django.db import models

from apps.core.models import UUIDModel


class OperationLog(UUIDModel):
    """Immutable audit trail of privileged state changes (closures, re-openings)."""
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT,
        null=True, blank=True, related_name='operation_logs',
    )
    operation_type = models.CharField(max_length=40, db_index=True)
    detail = models.JSONField(default=dict)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Operation Log'
        verbose_name_plural = 'Operation Logs'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.operation_type} by {self.user_id or 'system'} at {self.created_at:%Y-%m-%d %H:%M}"
