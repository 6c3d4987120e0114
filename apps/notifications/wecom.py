"""
Chat notification service: posts plain-text messages to a WeCom group robot
webhook.

Delivery is best effort. Every call is bounded by NOTIFICATION_TIMEOUT_SECONDS,
and failures are logged and swallowed so they never fail or undo the write
that triggered them.

Public API:
  send_reservation_booked(reservation)
  send_text(content)
"""
import logging

import httpx
from django.conf import settings

logger = logging.getLogger(__name__)


def _reservation_context(reservation) -> dict:
    user = reservation.user
    return {
        'client_name':    user.display_name or user.username,
        'phone':          user.phone or '',
        'company':        user.company_name or '',
        'reservation_no': reservation.reservation_no,
        'date':           reservation.date.isoformat(),
        'window':         f"{reservation.start_time:%H:%M}-{reservation.end_time:%H:%M}",
        'container_no':   reservation.container_no,
    }


def _post(content: str, webhook_url: str = None) -> bool:
    """Low-level send helper. Returns True when the robot accepted the message."""
    url = webhook_url or settings.WECOM_WEBHOOK_URL
    if not url:
        logger.info('Notification skipped (no WeCom webhook configured)')
        return False

    payload = {'msgtype': 'text', 'text': {'content': content}}
    try:
        response = httpx.post(url, json=payload, timeout=settings.NOTIFICATION_TIMEOUT_SECONDS)
        response.raise_for_status()
        body = response.json()
    except Exception as exc:
        # Log but never crash the booking flow due to a chat failure
        logger.exception('WeCom notification failed: %s', exc)
        return False

    if not isinstance(body, dict):
        logger.warning('WeCom returned an unexpected reply: %r', body)
        return False
    if body.get('errcode', 0) != 0:
        logger.warning('WeCom rejected notification: %s %s', body.get('errcode'), body.get('errmsg'))
        return False
    logger.info('WeCom notification delivered')
    return True


# ─────────────────────────────────────────────────────────────────────────────
# Public API
# ─────────────────────────────────────────────────────────────────────────────

def send_reservation_booked(reservation) -> bool:
    """
    Tell the warehouse group chat about a new reservation.
    Triggered: after the booking transaction commits.
    """
    ctx = _reservation_context(reservation)
    content = (
        f"New delivery reservation {ctx['reservation_no']}\n"
        f"Client: {ctx['client_name']}\n"
        f"Phone: {ctx['phone']}\n"
        f"Company: {ctx['company']}\n"
        f"Delivery: {ctx['date']} {ctx['window']}\n"
        f"Container: {ctx['container_no']}"
    )
    return _post(content)


def send_text(content: str, webhook_url: str = None) -> bool:
    """Send an arbitrary message, e.g. to check the webhook configuration."""
    return _post(content, webhook_url=webhook_url)
