"""
Seed management command.

Creates the demo accounts the warehouse starts with:
  - admin      (admin)
  - client1    (client)
  - client2    (client)
  - operator   (operator)

Usage:
    python manage.py seed_data
    python manage.py seed_data --password s3cret-pass   # password for new accounts
    python manage.py seed_data --flush                  # wipe reservations/closures first
"""
from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import Role, User
from apps.audit.models import OperationLog
from apps.closures.models import ClosedSlot
from apps.reservations.models import CancelLog, Reservation, ReservationDay

DEMO_USERS = [
    {'username': 'admin',    'role': Role.ADMIN,    'display_name': 'Administrator'},
    {'username': 'client1',  'role': Role.CLIENT,   'display_name': 'Client One',
     'company_name': 'Client One Trading', 'phone': '13800000001'},
    {'username': 'client2',  'role': Role.CLIENT,   'display_name': 'Client Two',
     'company_name': 'Client Two Logistics', 'phone': '13800000002'},
    {'username': 'operator', 'role': Role.OPERATOR, 'display_name': 'Warehouse Operator'},
]


class Command(BaseCommand):
    help = 'Seed the demo admin, client and operator accounts'

    def add_arguments(self, parser):
        parser.add_argument(
            '--password', default='changeme123',
            help='Password assigned to newly created accounts',
        )
        parser.add_argument(
            '--flush', action='store_true',
            help='Delete all reservations, closures and logs before seeding',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['flush']:
            self.stdout.write('Flushing existing data...')
            CancelLog.objects.all().delete()
            Reservation.objects.all().delete()
            ReservationDay.objects.all().delete()
            ClosedSlot.objects.all().delete()
            OperationLog.objects.all().delete()

        self.stdout.write('Seeding accounts...')
        created = 0
        for account in DEMO_USERS:
            defaults = {k: v for k, v in account.items() if k != 'username'}
            defaults['is_staff'] = defaults['is_superuser'] = account['role'] == Role.ADMIN
            user, was_created = User.objects.get_or_create(username=account['username'], defaults=defaults)
            if was_created:
                user.set_password(options['password'])
                user.save(update_fields=['password'])
                created += 1

        self.stdout.write(self.style.SUCCESS(f'  ✔ {created} accounts created'))
