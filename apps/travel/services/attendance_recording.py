"""
Attendance recording service.

Partners mark a day of travel for the rider they are paired with. The
recorded amount is the rider's daily cost at the moment of marking.
"""

import logging
from datetime import date
from typing import Optional

from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.authorization import require_partner
from apps.accounts.context import SessionContext
from apps.common.db import upsert
from apps.pairing.services import require_paired_rider
from apps.travel.models import Attendance, AttendanceStatus, RiderSettings

from .exceptions import NoSettingsError
from .request_management import complete_pending_requests

logger = logging.getLogger(__name__)


def mark_attendance(*, actor: SessionContext, on_date: Optional[date] = None) -> Attendance:
    """
    Record the partner as present for a day.

    Marking the same day again replaces the stored row with the current
    cost; it never adds a second charge. Pending requests for the partner
    on that day are completed afterwards. The two writes are separate
    statements: if completing requests fails, the attendance row stays.

    Args:
        actor: Partner session
        on_date: Day to mark, defaults to today

    Returns:
        The stored attendance row

    Raises:
        WrongRoleError: If the actor is not a partner
        NotPairedError: If the partner is not paired
        NoSettingsError: If the rider has no daily cost configured
    """
    require_partner(actor)
    rider_id = require_paired_rider(actor)

    on_date = on_date or timezone.localdate()

    try:
        rider_settings = RiderSettings.objects.get(rider_id=rider_id)
    except RiderSettings.DoesNotExist:
        raise NoSettingsError("Rider has not set a daily petrol cost yet")

    attendance = upsert(
        Attendance,
        lookup={'partner_id': actor.user_id, 'rider_id': rider_id, 'date': on_date},
        values={'amount': rider_settings.daily_petrol_cost, 'status': AttendanceStatus.PRESENT},
    )

    completed = complete_pending_requests(partner_id=actor.user_id, on_date=on_date)

    logger.info(
        "Partner %s marked %s for rider %s (%s, %d request(s) completed)",
        actor.user_id, on_date, rider_id, attendance.amount, completed,
    )
    return attendance


def scoped_attendance(actor: SessionContext) -> QuerySet[Attendance]:
    """Attendance the caller is a party of, restricted to the current pairing for partners."""
    if actor.is_rider:
        return Attendance.objects.filter(rider_id=actor.user_id)
    if actor.paired_rider_id is None:
        return Attendance.objects.none()
    return Attendance.objects.filter(
        partner_id=actor.user_id,
        rider_id=actor.paired_rider_id,
    )


def get_attendance_records(
    *,
    actor: SessionContext,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> QuerySet[Attendance]:
    """
    List attendance visible to the caller, oldest first.

    Args:
        actor: Rider or partner session
        start_date: Inclusive lower bound
        end_date: Inclusive upper bound
    """
    queryset = scoped_attendance(actor)
    if start_date:
        queryset = queryset.filter(date__gte=start_date)
    if end_date:
        queryset = queryset.filter(date__lte=end_date)
    return queryset.order_by('date')
