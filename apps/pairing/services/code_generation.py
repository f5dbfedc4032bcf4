"""
Pairing code generation service.

Riders publish a six character code that partners enter to pair with
them. Codes are drawn from uppercase letters and digits and are unique
across all profiles.
"""

import logging
import secrets
import string

from django.db import transaction, IntegrityError

from apps.accounts.authorization import require_rider
from apps.accounts.context import SessionContext
from apps.accounts.models import Profile
from apps.common.exceptions import ConflictError

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 6


def _draw_code() -> str:
    return ''.join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


def generate_pairing_code() -> str:
    """
    Return a code no profile currently holds.

    Redraws until a free code is found. With 36^6 combinations a
    collision is rare, so the loop is left unbounded.
    """
    while True:
        code = _draw_code()
        if not Profile.objects.filter(pairing_code=code).exists():
            return code
        logger.warning("Pairing code collision, drawing again")


@transaction.atomic
def assign_pairing_code(*, profile: Profile, max_retries: int = 5) -> str:
    """
    Store a fresh pairing code on a rider profile.

    A concurrent writer can claim the same code between the existence
    check and the save; the unique constraint catches that and the
    assignment is retried with a new code.

    Args:
        profile: Rider profile to update
        max_retries: Maximum attempts before giving up

    Returns:
        The stored code

    Raises:
        ConflictError: If every attempt hit the unique constraint
    """
    for attempt in range(max_retries):
        code = generate_pairing_code()
        try:
            with transaction.atomic():
                profile.pairing_code = code
                profile.save(update_fields=['pairing_code', 'updated_at'])
        except IntegrityError:
            logger.warning(
                "Pairing code %s taken concurrently (attempt %d/%d)",
                code, attempt + 1, max_retries,
            )
            continue

        logger.info("Assigned pairing code to rider %s", profile.user_id)
        return code

    raise ConflictError(
        f"Failed to generate unique pairing code after {max_retries} attempts"
    )


@transaction.atomic
def regenerate_pairing_code(*, actor: SessionContext) -> str:
    """
    Replace the rider's pairing code with a new one.

    Partners already paired keep their pairing, since it points at the
    rider's account and not at the code.

    Raises:
        WrongRoleError: If the actor is not a rider
    """
    require_rider(actor)

    profile = (
        Profile.objects
        .select_for_update()
        .get(user_id=actor.user_id)
    )
    return assign_pairing_code(profile=profile)
