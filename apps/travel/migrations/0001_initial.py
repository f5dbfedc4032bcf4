# Generated manually for travel settings, attendance and requests

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='RiderSettings',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('daily_petrol_cost', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.00')), MaxValueValidator(Decimal('10000.00'))])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('rider', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='travel_settings', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'settings',
                'verbose_name_plural': 'rider settings',
                'constraints': [models.CheckConstraint(check=models.Q(('daily_petrol_cost__gte', Decimal('0.00')), ('daily_petrol_cost__lte', Decimal('10000.00'))), name='check_daily_petrol_cost_range')],
            },
        ),
        migrations.CreateModel(
            name='Attendance',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField()),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.00')), MaxValueValidator(Decimal('10000.00'))])),
                ('status', models.CharField(choices=[('present', 'Present'), ('requested', 'Requested'), ('missed', 'Missed')], default='present', max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('partner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='attendance_as_partner', to=settings.AUTH_USER_MODEL)),
                ('rider', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='attendance_as_rider', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'attendance',
                'ordering': ['-date'],
                'indexes': [models.Index(fields=['rider', 'date'], name='attendance_rider_date_idx')],
                'constraints': [
                    models.UniqueConstraint(fields=('partner', 'rider', 'date'), name='unique_attendance_per_day'),
                    models.CheckConstraint(check=models.Q(('amount__gte', Decimal('0.00')), ('amount__lte', Decimal('10000.00'))), name='check_attendance_amount_range'),
                    models.CheckConstraint(check=models.Q(('status__in', ['present', 'requested', 'missed'])), name='check_attendance_status'),
                ],
            },
        ),
        migrations.CreateModel(
            name='AttendanceRequest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField()),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('completed', 'Completed'), ('ignored', 'Ignored')], default='pending', max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('partner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='requests_received', to=settings.AUTH_USER_MODEL)),
                ('rider', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='requests_sent', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'requests',
                'ordering': ['-date', '-created_at'],
                'indexes': [models.Index(fields=['partner', 'status'], name='requests_partner_status_idx')],
                'constraints': [
                    models.UniqueConstraint(fields=('rider', 'partner', 'date'), name='unique_request_per_day'),
                    models.CheckConstraint(check=models.Q(('status__in', ['pending', 'completed', 'ignored'])), name='check_request_status'),
                ],
            },
        ),
    ]
