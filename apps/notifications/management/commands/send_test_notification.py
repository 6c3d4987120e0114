"""
management command: send_test_notification

Posts a test message to the configured WeCom group robot so operators can
check WECOM_WEBHOOK_URL without making a reservation.

Usage:
    python manage.py send_test_notification
    python manage.py send_test_notification --url https://qyapi.weixin.qq.com/cgi-bin/webhook/send?key=...
"""
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from apps.notifications.wecom import send_text


class Command(BaseCommand):
    help = 'Send a test message to the WeCom group robot webhook'

    def add_arguments(self, parser):
        parser.add_argument('--url', help='Webhook URL to use instead of WECOM_WEBHOOK_URL')
        parser.add_argument('--message', default='', help='Custom message text')

    def handle(self, *args, **options):
        url = options['url'] or settings.WECOM_WEBHOOK_URL
        if not url:
            raise CommandError('No webhook configured. Set WECOM_WEBHOOK_URL or pass --url.')

        message = options['message'] or (
            f"Slotdesk test message sent at {timezone.localtime():%Y-%m-%d %H:%M}"
        )
        if not send_text(message, webhook_url=url):
            raise CommandError('The webhook did not accept the message; see the log for details.')
        self.stdout.write(self.style.SUCCESS('send_test_notification: message delivered'))
