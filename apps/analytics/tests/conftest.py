import pytest
from decimal import Decimal
from datetime import date
from django.utils import timezone
from apps.travel.models import Attendance, AttendanceRequest, RiderSettings


@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def last_year(today):
    """A day in the same month one year back; counts toward totals only."""
    return date(today.year - 1, today.month, 1)


@pytest.fixture
def analytics_settings(rider):
    return RiderSettings.objects.create(rider=rider, daily_petrol_cost=Decimal('100.00'))


@pytest.fixture
def analytics_attendance(paired_partner, rider, today, last_year):
    """Two rows recorded by the paired partner: today and last year."""
    return [
        Attendance.objects.create(
            partner=paired_partner, rider=rider, date=today, amount=Decimal('100.00'),
        ),
        Attendance.objects.create(
            partner=paired_partner, rider=rider, date=last_year, amount=Decimal('50.00'),
        ),
    ]


@pytest.fixture
def foreign_attendance(other_partner, other_rider, today):
    """A row between two unrelated accounts."""
    return Attendance.objects.create(
        partner=other_partner, rider=other_rider, date=today, amount=Decimal('999.00'),
    )


@pytest.fixture
def pending_request(rider, paired_partner, today):
    return AttendanceRequest.objects.create(rider=rider, partner=paired_partner, date=today)
