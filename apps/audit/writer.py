"""
Audit log writer. Append-only: entries are created, never updated or deleted.

Public API:
  record_operation(user, operation_type, detail)
"""
import logging

from .models import OperationLog

logger = logging.getLogger(__name__)

CLOSE_SLOT = 'close_slot'
OPEN_CLOSED_SLOT = 'open_closed_slot'


def record_operation(user, operation_type: str, detail: dict) -> OperationLog:
    """Append one audit entry. Call inside the transaction of the change it records."""
    entry = OperationLog.objects.create(
        user=user,
        operation_type=operation_type,
        detail=detail,
    )
    logger.info('Audit %s by user %s: %s', operation_type, getattr(user, 'pk', None), detail)
    return entry
