"""Rider settings service."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional
from uuid import UUID

from django.conf import settings

from apps.accounts.authorization import check_settings_read, require_rider
from apps.accounts.context import SessionContext
from apps.common.db import upsert
from apps.travel.models import RiderSettings, MIN_DAILY_COST

from .exceptions import InvalidAmountError, NoSettingsError

logger = logging.getLogger(__name__)


def _settings_owner(actor: SessionContext, rider_id: Optional[UUID]) -> Optional[UUID]:
    if rider_id is not None:
        return rider_id
    return actor.user_id if actor.is_rider else actor.paired_rider_id


def get_settings(*, actor: SessionContext, rider_id: Optional[UUID] = None) -> RiderSettings:
    """
    Get a rider's settings.

    Defaults to the caller's own settings for riders and to the paired
    rider's settings for partners.

    Raises:
        AuthorizationError: If the caller may not read these settings
        NoSettingsError: If no daily cost has been configured
    """
    owner_id = _settings_owner(actor, rider_id)
    if owner_id is None:
        raise NoSettingsError("No rider to read settings for")

    check_settings_read(actor, owner_id)

    try:
        return RiderSettings.objects.get(rider_id=owner_id)
    except RiderSettings.DoesNotExist:
        raise NoSettingsError("Rider has not set a daily petrol cost")


def set_daily_cost(*, actor: SessionContext, daily_petrol_cost) -> RiderSettings:
    """
    Create or replace the rider's daily petrol cost.

    Attendance already recorded keeps the amount it was marked with.

    Args:
        actor: Rider session
        daily_petrol_cost: New cost, 0 to ``DAILY_COST_MAX`` inclusive

    Raises:
        WrongRoleError: If the actor is not a rider
        InvalidAmountError: If the cost is not a number in range
    """
    require_rider(actor)

    try:
        cost = Decimal(str(daily_petrol_cost)).quantize(Decimal('0.01'))
    except (InvalidOperation, ValueError):
        raise InvalidAmountError("Daily petrol cost must be a number")

    if not cost.is_finite():
        raise InvalidAmountError("Daily petrol cost must be a number")

    if not (MIN_DAILY_COST <= cost <= settings.DAILY_COST_MAX):
        raise InvalidAmountError(
            f"Daily petrol cost must be between {MIN_DAILY_COST} and {settings.DAILY_COST_MAX}"
        )

    rider_settings = upsert(
        RiderSettings,
        lookup={'rider_id': actor.user_id},
        values={'daily_petrol_cost': cost},
    )
    logger.info("Rider %s set daily petrol cost to %s", actor.user_id, cost)
    return rider_settings
