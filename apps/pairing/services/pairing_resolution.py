"""
Pairing resolution service.

A partner pairs by entering a rider's code. Only the partner's own
profile is written; the rider's row is never touched.
"""

import logging
import re
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.authorization import require_partner, require_rider
from apps.accounts.context import SessionContext
from apps.accounts.models import Profile, Role, PAIRING_CODE_PATTERN

from .exceptions import InvalidPairingCodeError, RiderNotFoundError, NotPairedError

logger = logging.getLogger(__name__)

_CODE_RE = re.compile(PAIRING_CODE_PATTERN)


def normalize_code(code: str) -> str:
    """
    Strip surrounding whitespace and uppercase a user-entered code.

    Non-ASCII input is returned unchanged so that it fails the format check;
    some letters (the dotless i) would otherwise uppercase to ASCII.
    """
    code = (code or '').strip()
    if not code.isascii():
        return code
    return code.upper()


def find_rider_by_code(*, code: str) -> Profile:
    """
    Resolve a pairing code to the rider profile holding it.

    The code is validated before any query runs. Riders whose account is
    older than ``PAIRING_CODE_MAX_AGE_DAYS`` cannot be found by code;
    a value of 0 disables the age limit.

    Raises:
        InvalidPairingCodeError: If the code is malformed
        RiderNotFoundError: If no eligible rider holds the code
    """
    normalized = normalize_code(code)
    if not _CODE_RE.fullmatch(normalized):
        raise InvalidPairingCodeError("Pairing code must be 6 letters or digits")

    queryset = Profile.objects.filter(pairing_code=normalized, role=Role.RIDER)

    max_age_days = settings.PAIRING_CODE_MAX_AGE_DAYS
    if max_age_days:
        cutoff = timezone.now() - timedelta(days=max_age_days)
        queryset = queryset.filter(created_at__gte=cutoff)

    profile = queryset.select_related('user').first()
    if profile is None:
        raise RiderNotFoundError("Invalid pairing code")

    return profile


@transaction.atomic
def pair_with_rider(*, actor: SessionContext, code: str) -> Profile:
    """
    Pair the calling partner with the rider holding ``code``.

    Pairing again with another code replaces the previous pairing. A
    malformed or unknown code leaves the profile unchanged.

    Returns:
        The rider's profile

    Raises:
        WrongRoleError: If the actor is not a partner
        InvalidPairingCodeError: If the code is malformed
        RiderNotFoundError: If no eligible rider holds the code
    """
    require_partner(actor)

    rider_profile = find_rider_by_code(code=code)

    updated = (
        Profile.objects
        .filter(user_id=actor.user_id)
        .update(paired_rider_id=rider_profile.user_id, updated_at=timezone.now())
    )
    if not updated:
        raise RiderNotFoundError("Partner profile not found")

    logger.info("Partner %s paired with rider %s", actor.user_id, rider_profile.user_id)
    return rider_profile


@transaction.atomic
def unpair(*, actor: SessionContext) -> None:
    """
    Clear the calling partner's pairing.

    Raises:
        WrongRoleError: If the actor is not a partner
        NotPairedError: If the partner is not paired
    """
    require_partner(actor)

    profile = (
        Profile.objects
        .select_for_update()
        .get(user_id=actor.user_id)
    )
    if profile.paired_rider_id is None:
        raise NotPairedError("You are not paired with a rider")

    rider_id = profile.paired_rider_id
    profile.paired_rider = None
    profile.save(update_fields=['paired_rider', 'updated_at'])

    logger.info("Partner %s unpaired from rider %s", actor.user_id, rider_id)


def get_paired_partners(*, actor: SessionContext) -> QuerySet[Profile]:
    """
    Get partner profiles paired with the calling rider.

    Raises:
        WrongRoleError: If the actor is not a rider
    """
    require_rider(actor)

    return (
        Profile.objects
        .filter(paired_rider_id=actor.user_id, role=Role.PARTNER)
        .select_related('user')
        .order_by('created_at')
    )


def require_paired_rider(actor: SessionContext):
    """
    Return the rider id the partner is paired with.

    Raises:
        NotPairedError: If the partner has no pairing
    """
    if actor.paired_rider_id is None:
        raise NotPairedError("You are not paired with a rider")
    return actor.paired_rider_id
