"""
Service layer unit tests for travel app.

Tests cover:
- Daily cost validation
- Idempotent attendance marking
- Request lifecycle and completion on marking
- Row scoping by role
- Request change notification
"""

import pytest
from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

from django.utils import timezone

from apps.accounts.authorization import WrongRoleError
from apps.accounts.context import SessionContext
from apps.common.exceptions import AuthorizationError, NotFoundError
from apps.pairing.services import NotPairedError, pair_with_rider
from apps.travel.models import (
    Attendance,
    AttendanceRequest,
    AttendanceStatus,
    RequestStatus,
    RiderSettings,
)
from apps.travel.notifications import subscribe_to_requests
from apps.travel.services import (
    get_settings,
    set_daily_cost,
    mark_attendance,
    get_attendance_records,
    send_request,
    ignore_request,
    get_requests,
    get_request,
    InvalidAmountError,
    NoSettingsError,
    RequestNotFoundError,
    InvalidStateTransitionError,
    PartnerNotPairedError,
)


# =============================================================================
# Settings Service Tests
# =============================================================================

@pytest.mark.django_db
class TestSettings:
    """Tests for settings_management.py service functions."""

    def test_set_daily_cost_creates(self, rider_ctx, rider):
        obj = set_daily_cost(actor=rider_ctx, daily_petrol_cost='120')

        assert obj.rider_id == rider.id
        assert obj.daily_petrol_cost == Decimal('120.00')

    def test_set_daily_cost_replaces(self, rider_ctx, rider, rider_settings):
        set_daily_cost(actor=rider_ctx, daily_petrol_cost=Decimal('150.50'))

        assert RiderSettings.objects.filter(rider=rider).count() == 1
        assert RiderSettings.objects.get(rider=rider).daily_petrol_cost == Decimal('150.50')

    @pytest.mark.parametrize('value', ['0', '10000', '0.01', '9999.99'])
    def test_bounds_accepted(self, rider_ctx, value):
        obj = set_daily_cost(actor=rider_ctx, daily_petrol_cost=value)
        assert obj.daily_petrol_cost == Decimal(value)

    @pytest.mark.parametrize('value', ['-1', '10000.01', 'abc', 'NaN', 'Infinity'])
    def test_invalid_amounts(self, rider_ctx, rider, value):
        with pytest.raises(InvalidAmountError):
            set_daily_cost(actor=rider_ctx, daily_petrol_cost=value)

        assert not RiderSettings.objects.filter(rider=rider).exists()

    def test_partner_cannot_set_cost(self, paired_ctx):
        with pytest.raises(WrongRoleError):
            set_daily_cost(actor=paired_ctx, daily_petrol_cost='10')

    def test_paired_partner_reads_settings(self, paired_ctx, rider_settings):
        assert get_settings(actor=paired_ctx).daily_petrol_cost == Decimal('120.00')

    def test_partner_cannot_read_other_rider(self, paired_ctx, other_rider):
        RiderSettings.objects.create(rider=other_rider, daily_petrol_cost='50')

        with pytest.raises(AuthorizationError):
            get_settings(actor=paired_ctx, rider_id=other_rider.id)

    def test_missing_settings(self, rider_ctx):
        with pytest.raises(NoSettingsError):
            get_settings(actor=rider_ctx)


# =============================================================================
# Attendance Service Tests
# =============================================================================

@pytest.mark.django_db
class TestMarkAttendance:
    """Tests for attendance_recording.py service functions."""

    def test_scenario_mark_with_cost_120(self, rider_ctx, partner_ctx, partner, rider):
        """Rider sets 120, partner pairs, partner marks today."""
        set_daily_cost(actor=rider_ctx, daily_petrol_cost='120')
        pair_with_rider(actor=partner_ctx, code=rider.profile.pairing_code)
        today = timezone.localdate()
        send_request(actor=rider_ctx, partner_id=partner.id)

        attendance = mark_attendance(actor=SessionContext.for_user(partner))

        assert attendance.partner_id == partner.id
        assert attendance.rider_id == rider.id
        assert attendance.date == today
        assert attendance.amount == Decimal('120.00')
        assert attendance.status == AttendanceStatus.PRESENT
        assert AttendanceRequest.objects.get(rider=rider, partner=partner, date=today).status == RequestStatus.COMPLETED

    def test_marking_twice_is_idempotent(self, paired_ctx, rider_ctx, rider_settings):
        """Second mark overwrites with the current cost; still one row."""
        mark_attendance(actor=paired_ctx)
        set_daily_cost(actor=rider_ctx, daily_petrol_cost='95.50')
        attendance = mark_attendance(actor=paired_ctx)

        assert Attendance.objects.count() == 1
        assert attendance.amount == Decimal('95.50')

    def test_earlier_days_keep_their_amount(self, paired_ctx, rider_ctx, rider_settings):
        yesterday = timezone.localdate() - timedelta(days=1)
        mark_attendance(actor=paired_ctx, on_date=yesterday)
        set_daily_cost(actor=rider_ctx, daily_petrol_cost='200')
        mark_attendance(actor=paired_ctx)

        assert Attendance.objects.get(date=yesterday).amount == Decimal('120.00')
        assert Attendance.objects.get(date=timezone.localdate()).amount == Decimal('200.00')

    def test_no_settings_writes_nothing(self, paired_ctx):
        with pytest.raises(NoSettingsError):
            mark_attendance(actor=paired_ctx)

        assert not Attendance.objects.exists()

    def test_no_settings_is_not_found(self, paired_ctx):
        with pytest.raises(NotFoundError):
            mark_attendance(actor=paired_ctx)

    def test_unpaired_partner(self, partner_ctx, rider_settings):
        with pytest.raises(NotPairedError):
            mark_attendance(actor=partner_ctx)

        assert not Attendance.objects.exists()

    def test_rider_cannot_mark(self, rider_ctx, rider_settings):
        with pytest.raises(WrongRoleError):
            mark_attendance(actor=rider_ctx)

    def test_only_pending_requests_complete(self, rider_ctx, paired_ctx, paired_partner, rider_settings):
        req = send_request(actor=rider_ctx, partner_id=paired_partner.id)
        ignore_request(actor=paired_ctx, request_id=req.id)

        mark_attendance(actor=paired_ctx)

        req.refresh_from_db()
        assert req.status == RequestStatus.IGNORED

    def test_requests_on_other_days_untouched(self, rider_ctx, paired_ctx, paired_partner, rider_settings):
        yesterday = timezone.localdate() - timedelta(days=1)
        req = send_request(actor=rider_ctx, partner_id=paired_partner.id, on_date=yesterday)

        mark_attendance(actor=paired_ctx)

        req.refresh_from_db()
        assert req.status == RequestStatus.PENDING


@pytest.mark.django_db
class TestAttendanceRecords:
    """Tests for get_attendance_records scoping."""

    def test_both_parties_see_the_row(self, paired_ctx, rider_ctx, rider_settings):
        mark_attendance(actor=paired_ctx)

        assert get_attendance_records(actor=rider_ctx).count() == 1
        assert get_attendance_records(actor=paired_ctx).count() == 1

    def test_strangers_see_nothing(self, paired_ctx, rider_settings, other_rider):
        mark_attendance(actor=paired_ctx)

        assert get_attendance_records(actor=SessionContext.for_user(other_rider)).count() == 0

    def test_date_range(self, paired_ctx, rider_ctx, rider_settings):
        today = timezone.localdate()
        for offset in range(5):
            mark_attendance(actor=paired_ctx, on_date=today - timedelta(days=offset))

        records = get_attendance_records(
            actor=rider_ctx,
            start_date=today - timedelta(days=2),
            end_date=today,
        )
        assert [r.date for r in records] == [today - timedelta(days=2), today - timedelta(days=1), today]


# =============================================================================
# Request Service Tests
# =============================================================================

@pytest.mark.django_db
class TestRequests:
    """Tests for request_management.py service functions."""

    def test_send_request(self, rider_ctx, rider, paired_partner):
        req = send_request(actor=rider_ctx, partner_id=paired_partner.id)

        assert req.rider_id == rider.id
        assert req.partner_id == paired_partner.id
        assert req.date == timezone.localdate()
        assert req.status == RequestStatus.PENDING

    def test_resend_same_day_overwrites(self, rider_ctx, paired_ctx, paired_partner):
        first = send_request(actor=rider_ctx, partner_id=paired_partner.id)
        ignore_request(actor=paired_ctx, request_id=first.id)

        second = send_request(actor=rider_ctx, partner_id=paired_partner.id)

        assert AttendanceRequest.objects.count() == 1
        assert second.id == first.id
        assert second.status == RequestStatus.PENDING

    def test_send_to_unpaired_partner(self, rider_ctx, partner):
        with pytest.raises(PartnerNotPairedError):
            send_request(actor=rider_ctx, partner_id=partner.id)

        assert not AttendanceRequest.objects.exists()

    def test_partner_cannot_send(self, paired_ctx, rider):
        with pytest.raises(WrongRoleError):
            send_request(actor=paired_ctx, partner_id=rider.id)

    def test_send_to_partner_of_other_rider(self, other_rider, paired_partner):
        """A rider cannot reach a partner paired with someone else."""
        other_ctx = SessionContext.for_user(other_rider)

        with pytest.raises(PartnerNotPairedError):
            send_request(actor=other_ctx, partner_id=paired_partner.id)

        assert not AttendanceRequest.objects.exists()

    def test_mark_writes_only_own_pairing(self, paired_ctx, paired_partner, rider, other_rider, rider_settings):
        RiderSettings.objects.create(rider=other_rider, daily_petrol_cost=Decimal('1.00'))

        attendance = mark_attendance(actor=paired_ctx)

        assert attendance.partner_id == paired_partner.id
        assert attendance.rider_id == rider.id
        assert not Attendance.objects.filter(rider=other_rider).exists()

    def test_ignore_pending(self, rider_ctx, paired_partner):
        req = send_request(actor=rider_ctx, partner_id=paired_partner.id)

        ignored = ignore_request(actor=rider_ctx, request_id=req.id)

        assert ignored.status == RequestStatus.IGNORED

    def test_ignore_completed_fails(self, rider_ctx, paired_ctx, paired_partner, rider_settings):
        req = send_request(actor=rider_ctx, partner_id=paired_partner.id)
        mark_attendance(actor=paired_ctx)

        with pytest.raises(InvalidStateTransitionError):
            ignore_request(actor=paired_ctx, request_id=req.id)

    def test_ignore_by_stranger(self, rider_ctx, paired_partner, other_rider):
        req = send_request(actor=rider_ctx, partner_id=paired_partner.id)

        with pytest.raises(AuthorizationError):
            ignore_request(actor=SessionContext.for_user(other_rider), request_id=req.id)

    def test_ignore_unknown(self, rider_ctx):
        with pytest.raises(RequestNotFoundError):
            ignore_request(actor=rider_ctx, request_id=uuid4())

    def test_get_requests_filters_by_status(self, rider_ctx, paired_ctx, paired_partner):
        today = timezone.localdate()
        send_request(actor=rider_ctx, partner_id=paired_partner.id, on_date=today)
        old = send_request(actor=rider_ctx, partner_id=paired_partner.id, on_date=today - timedelta(days=1))
        ignore_request(actor=rider_ctx, request_id=old.id)

        assert get_requests(actor=rider_ctx).count() == 2
        assert get_requests(actor=paired_ctx, status=RequestStatus.PENDING).count() == 1
        assert get_requests(actor=paired_ctx, status=RequestStatus.IGNORED).get().id == old.id

    def test_get_request_by_either_party(self, rider_ctx, paired_ctx, paired_partner):
        req = send_request(actor=rider_ctx, partner_id=paired_partner.id)

        assert get_request(actor=rider_ctx, request_id=req.id) == req
        assert get_request(actor=paired_ctx, request_id=req.id) == req

    def test_get_request_by_stranger(self, rider_ctx, paired_partner, other_partner):
        req = send_request(actor=rider_ctx, partner_id=paired_partner.id)

        with pytest.raises(AuthorizationError):
            get_request(actor=SessionContext.for_user(other_partner), request_id=req.id)

    def test_get_request_unknown(self, rider_ctx):
        with pytest.raises(RequestNotFoundError):
            get_request(actor=rider_ctx, request_id=uuid4())


# =============================================================================
# Notification Tests
# =============================================================================

@pytest.mark.django_db
class TestRequestNotifications:
    """Tests for request_created and subscribe_to_requests."""

    def test_subscriber_receives_own_requests(
        self, rider_ctx, paired_partner, django_capture_on_commit_callbacks
    ):
        received = []
        unsubscribe = subscribe_to_requests(paired_partner.id, received.append)
        try:
            with django_capture_on_commit_callbacks(execute=True):
                req = send_request(actor=rider_ctx, partner_id=paired_partner.id)
        finally:
            unsubscribe()

        assert [r.id for r in received] == [req.id]

    def test_subscriber_ignores_other_partners(
        self, rider_ctx, paired_partner, other_partner, django_capture_on_commit_callbacks
    ):
        received = []
        unsubscribe = subscribe_to_requests(other_partner.id, received.append)
        try:
            with django_capture_on_commit_callbacks(execute=True):
                send_request(actor=rider_ctx, partner_id=paired_partner.id)
        finally:
            unsubscribe()

        assert received == []

    def test_unsubscribe_stops_delivery(
        self, rider_ctx, paired_partner, django_capture_on_commit_callbacks
    ):
        received = []
        unsubscribe = subscribe_to_requests(paired_partner.id, received.append)
        unsubscribe()

        with django_capture_on_commit_callbacks(execute=True):
            send_request(actor=rider_ctx, partner_id=paired_partner.id)

        assert received == []

    def test_nothing_sent_before_commit(self, rider_ctx, paired_partner):
        received = []
        unsubscribe = subscribe_to_requests(paired_partner.id, received.append)
        try:
            send_request(actor=rider_ctx, partner_id=paired_partner.id)
        finally:
            unsubscribe()

        assert received == []
