import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ReservationDay',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(unique=True)),
                ('last_sequence', models.PositiveIntegerField(default=0)),
            ],
            options={
                'verbose_name': 'Reservation Day',
                'verbose_name_plural': 'Reservation Days',
                'ordering': ['-date'],
            },
        ),
        migrations.CreateModel(
            name='Reservation',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('reservation_no', models.CharField(max_length=20, unique=True)),
                ('date', models.DateField(db_index=True)),
                ('start_time', models.TimeField()),
                ('end_time', models.TimeField()),
                ('status', models.CharField(choices=[('booked', 'Booked'), ('cancelled', 'Cancelled')], db_index=True, default='booked', max_length=10)),
                ('container_no', models.CharField(max_length=64)),
                ('packing_list_path', models.CharField(max_length=255)),
                ('cancel_reason', models.TextField(blank=True, null=True)),
                ('cancelled_at', models.DateTimeField(blank=True, null=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='reservations', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Reservation',
                'verbose_name_plural': 'Reservations',
                'ordering': ['date', 'start_time'],
                'indexes': [models.Index(fields=['user', 'date'], name='idx_reservation_user_date')],
                'constraints': [models.UniqueConstraint(condition=models.Q(('status', 'booked')), fields=('date', 'start_time', 'end_time'), name='uq_booked_reservation_window')],
            },
        ),
        migrations.CreateModel(
            name='CancelLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('reason', models.TextField(blank=True, null=True)),
                ('cancelled_date', models.DateField(help_text='Delivery date of the cancelled reservation')),
                ('cancelled_at', models.DateTimeField(auto_now_add=True)),
                ('reservation', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='cancel_logs', to='reservations.reservation')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='cancel_logs', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Cancel Log',
                'verbose_name_plural': 'Cancel Logs',
                'ordering': ['cancelled_at'],
            },
        ),
    ]
