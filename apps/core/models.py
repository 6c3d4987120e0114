"""
Abstract model mixins shared by reservations, closures and the audit log.
"""
import uuid
from django.db import models


class UUIDModel(models.Model):
    """UUID primary key; ids appear in URLs and audit snapshots."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta:
        abstract = True


class TimestampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
