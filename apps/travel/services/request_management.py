"""
Attendance request service.

A rider reminds a paired partner to mark a day. Requests are keyed by
(rider, partner, date); sending again on the same day resets the request
to pending.
"""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.authorization import (
    require_rider,
    check_request_read,
    check_request_update,
)
from apps.accounts.context import SessionContext
from apps.accounts.models import Profile, Role
from apps.common.db import upsert
from apps.travel.models import AttendanceRequest, RequestStatus
from apps.travel.notifications import publish_request_created

from .exceptions import (
    PartnerNotPairedError,
    RequestNotFoundError,
    InvalidStateTransitionError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def send_request(
    *,
    actor: SessionContext,
    partner_id: UUID,
    on_date: Optional[date] = None
) -> AttendanceRequest:
    """
    Ask a paired partner to mark attendance for a day.

    Args:
        actor: Rider session
        partner_id: User id of the partner
        on_date: Day to request, defaults to today

    Returns:
        The stored request, status pending

    Raises:
        WrongRoleError: If the actor is not a rider
        PartnerNotPairedError: If the partner is not paired with the rider
    """
    require_rider(actor)

    is_paired = Profile.objects.filter(
        user_id=partner_id,
        role=Role.PARTNER,
        paired_rider_id=actor.user_id,
    ).exists()
    if not is_paired:
        raise PartnerNotPairedError("This partner is not paired with you")

    on_date = on_date or timezone.localdate()

    attendance_request = upsert(
        AttendanceRequest,
        lookup={'rider_id': actor.user_id, 'partner_id': partner_id, 'date': on_date},
        values={'status': RequestStatus.PENDING},
    )
    publish_request_created(attendance_request)

    logger.info("Rider %s requested attendance from %s for %s", actor.user_id, partner_id, on_date)
    return attendance_request


@transaction.atomic
def ignore_request(*, actor: SessionContext, request_id: UUID) -> AttendanceRequest:
    """
    Move a pending request to ignored.

    Either party of the request may ignore it.

    Raises:
        RequestNotFoundError: If the request does not exist
        AuthorizationError: If the actor is not a party of the request
        InvalidStateTransitionError: If the request is not pending
    """
    try:
        attendance_request = (
            AttendanceRequest.objects
            .select_for_update()
            .get(id=request_id)
        )
    except AttendanceRequest.DoesNotExist:
        raise RequestNotFoundError(f"Request {request_id} not found")

    check_request_update(actor, attendance_request)

    if not attendance_request.is_pending:
        raise InvalidStateTransitionError(
            f"Cannot ignore a request that is {attendance_request.status}"
        )

    attendance_request.status = RequestStatus.IGNORED
    attendance_request.save(update_fields=['status', 'updated_at'])

    logger.info("Request %s ignored by %s", request_id, actor.user_id)
    return attendance_request


def complete_pending_requests(*, partner_id: UUID, on_date: date) -> int:
    """
    Mark every pending request for the partner on ``on_date`` completed.

    Returns:
        Number of requests updated
    """
    return (
        AttendanceRequest.objects
        .filter(partner_id=partner_id, date=on_date, status=RequestStatus.PENDING)
        .update(status=RequestStatus.COMPLETED, updated_at=timezone.now())
    )


def scoped_requests(actor: SessionContext) -> QuerySet[AttendanceRequest]:
    """Requests the caller is a party of, restricted to the current pairing for partners."""
    if actor.is_rider:
        return AttendanceRequest.objects.filter(rider_id=actor.user_id)
    if actor.paired_rider_id is None:
        return AttendanceRequest.objects.none()
    return AttendanceRequest.objects.filter(
        partner_id=actor.user_id,
        rider_id=actor.paired_rider_id,
    )


def get_requests(
    *,
    actor: SessionContext,
    status: Optional[str] = None
) -> QuerySet[AttendanceRequest]:
    """
    List requests visible to the caller, newest first.

    Args:
        actor: Rider or partner session
        status: Optional status filter
    """
    queryset = scoped_requests(actor)
    if status:
        queryset = queryset.filter(status=status)
    return queryset.order_by('-date', '-created_at')


def get_request(*, actor: SessionContext, request_id: UUID) -> AttendanceRequest:
    """
    Get a single request the caller is a party of.

    Raises:
        RequestNotFoundError: If it does not exist
        AuthorizationError: If the caller is not a party
    """
    try:
        attendance_request = AttendanceRequest.objects.get(id=request_id)
    except AttendanceRequest.DoesNotExist:
        raise RequestNotFoundError(f"Request {request_id} not found")

    check_request_read(actor, attendance_request)
    return attendance_request
