"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data

This creates:
- 1 superuser (admin)
- 1 rider (alice) with a daily petrol cost
- 2 partners (bob, paired with alice; charlie, unpaired)
- A month of attendance recorded by bob
- A pending attendance request for today
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone
from decimal import Decimal
from datetime import timedelta
import random

from apps.accounts.models import User, Role
from apps.accounts.services import register_user
from apps.travel.models import (
    RiderSettings,
    Attendance,
    AttendanceRequest,
    AttendanceStatus,
    RequestStatus,
)


SAMPLE_EMAILS = ['alice@example.com', 'bob@example.com', 'charlie@example.com']
DAILY_COST = Decimal('120.00')


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing sample accounts before creating new ones',
        )
        parser.add_argument(
            '--days',
            type=int,
            default=30,
            help='Number of past days to fill with attendance (default 30)',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        self.create_settings(users['alice'])
        self.create_attendance(users['bob'], users['alice'], options['days'])
        self.create_request(users['alice'], users['bob'])

        alice_code = users['alice'].profile.pairing_code
        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (superuser)')
        self.stdout.write(f'  alice@example.com / password123 (rider, code {alice_code})')
        self.stdout.write('  bob@example.com / password123 (partner, paired with alice)')
        self.stdout.write('  charlie@example.com / password123 (partner, unpaired)')

    def clear_data(self):
        """Remove sample accounts; their rows cascade."""
        User.objects.filter(email__in=SAMPLE_EMAILS).delete()
        User.objects.filter(email='admin@example.com').delete()

    def create_users(self):
        self.stdout.write('  Creating users...')

        admin, _ = User.objects.get_or_create(
            email='admin@example.com',
            defaults={
                'display_name': 'Admin User',
                'is_staff': True,
                'is_superuser': True,
            }
        )
        admin.set_password('admin123')
        admin.save()

        def get_or_register(email, role, display_name):
            user = User.objects.filter(email=email).first()
            if user is None:
                user = register_user(
                    email=email,
                    password='password123',
                    role=role,
                    display_name=display_name,
                )
            return user

        alice = get_or_register('alice@example.com', Role.RIDER, 'Alice Rider')
        bob = get_or_register('bob@example.com', Role.PARTNER, 'Bob Driver')
        charlie = get_or_register('charlie@example.com', Role.PARTNER, 'Charlie Driver')

        profile = bob.profile
        profile.paired_rider = alice
        profile.save(update_fields=['paired_rider', 'updated_at'])

        return {
            'admin': admin,
            'alice': alice,
            'bob': bob,
            'charlie': charlie,
        }

    def create_settings(self, rider):
        self.stdout.write('  Setting daily petrol cost...')
        RiderSettings.objects.update_or_create(
            rider=rider,
            defaults={'daily_petrol_cost': DAILY_COST},
        )

    def create_attendance(self, partner, rider, days):
        """Mark most past days, skipping roughly one in four."""
        self.stdout.write('  Creating attendance...')
        today = timezone.localdate()
        created = 0

        for offset in range(1, days + 1):
            day = today - timedelta(days=offset)
            if random.random() < 0.25:
                continue
            _, was_created = Attendance.objects.get_or_create(
                partner=partner,
                rider=rider,
                date=day,
                defaults={'amount': DAILY_COST, 'status': AttendanceStatus.PRESENT},
            )
            created += was_created

        self.stdout.write(f'    {created} days recorded')

    def create_request(self, rider, partner):
        self.stdout.write('  Creating a pending request...')
        AttendanceRequest.objects.update_or_create(
            rider=rider,
            partner=partner,
            date=timezone.localdate(),
            defaults={'status': RequestStatus.PENDING},
        )
