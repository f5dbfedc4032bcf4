from decimal import Decimal
import uuid

from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models


MIN_DAILY_COST = Decimal('0.00')
MAX_DAILY_COST = Decimal('10000.00')

_amount_validators = [
    MinValueValidator(MIN_DAILY_COST),
    MaxValueValidator(MAX_DAILY_COST),
]


class RiderSettings(models.Model):
    """Daily travel cost configured by a rider."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    rider = models.OneToOneField(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='travel_settings',
    )
    daily_petrol_cost = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=_amount_validators,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'settings'
        verbose_name_plural = 'rider settings'
        constraints = [
            models.CheckConstraint(
                check=models.Q(daily_petrol_cost__gte=MIN_DAILY_COST) & models.Q(daily_petrol_cost__lte=MAX_DAILY_COST),
                name='check_daily_petrol_cost_range',
            ),
        ]

    def __str__(self):
        return f"{self.rider} - {self.daily_petrol_cost}"


class AttendanceStatus(models.TextChoices):
    PRESENT = 'present', 'Present'
    REQUESTED = 'requested', 'Requested'
    MISSED = 'missed', 'Missed'


class Attendance(models.Model):
    """
    One day of travel recorded by a partner against a rider.

    ``amount`` is the rider's daily cost copied at the time of marking, so
    later cost changes never rewrite history.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    partner = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='attendance_as_partner',
    )
    rider = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='attendance_as_rider',
    )
    date = models.DateField()
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=_amount_validators,
    )
    status = models.CharField(
        max_length=10,
        choices=AttendanceStatus.choices,
        default=AttendanceStatus.PRESENT,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'attendance'
        ordering = ['-date']
        indexes = [
            models.Index(fields=['rider', 'date'], name='attendance_rider_date_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['partner', 'rider', 'date'],
                name='unique_attendance_per_day',
            ),
            models.CheckConstraint(
                check=models.Q(amount__gte=MIN_DAILY_COST) & models.Q(amount__lte=MAX_DAILY_COST),
                name='check_attendance_amount_range',
            ),
            models.CheckConstraint(
                check=models.Q(status__in=AttendanceStatus.values),
                name='check_attendance_status',
            ),
        ]

    def __str__(self):
        return f"{self.partner} for {self.rider} on {self.date}"


class RequestStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    COMPLETED = 'completed', 'Completed'
    IGNORED = 'ignored', 'Ignored'


class AttendanceRequest(models.Model):
    """Reminder from a rider asking the partner to mark a day."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    rider = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='requests_sent',
    )
    partner = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='requests_received',
    )
    date = models.DateField()
    status = models.CharField(
        max_length=10,
        choices=RequestStatus.choices,
        default=RequestStatus.PENDING,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'requests'
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['partner', 'status'], name='requests_partner_status_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['rider', 'partner', 'date'],
                name='unique_request_per_day',
            ),
            models.CheckConstraint(
                check=models.Q(status__in=RequestStatus.values),
                name='check_request_status',
            ),
        ]

    def __str__(self):
        return f"{self.rider} -> {self.partner} on {self.date} ({self.status})"

    @property
    def is_pending(self):
        return self.status == RequestStatus.PENDING
