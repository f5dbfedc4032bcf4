"""Account management service."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model

from apps.accounts.authorization import check_profile_access
from apps.accounts.context import SessionContext
from apps.accounts.models import Profile

from .exceptions import PasswordConfirmationError, ProfileNotFoundError

User = get_user_model()

logger = logging.getLogger(__name__)


def get_profile(*, actor: SessionContext) -> Profile:
    """
    Get the caller's own profile.

    Raises:
        ProfileNotFoundError: If the profile is missing
    """
    try:
        profile = Profile.objects.select_related('paired_rider').get(user_id=actor.user_id)
    except Profile.DoesNotExist:
        raise ProfileNotFoundError("Profile not found")

    check_profile_access(actor, profile.user_id)
    return profile


@transaction.atomic
def delete_user_account(*, actor: SessionContext, password: str) -> None:
    """
    Delete the caller's account.

    The profile, settings, attendance and requests referencing the user
    are removed by cascade. Partners paired with a deleted rider keep
    their profile with the pairing cleared.

    Args:
        actor: Session of the account owner
        password: User's password for confirmation

    Raises:
        PasswordConfirmationError: If password is incorrect
    """
    user = (
        User.objects
        .select_for_update()
        .get(id=actor.user_id)
    )

    if not user.check_password(password):
        raise PasswordConfirmationError("Invalid password")

    user.delete()
    logger.info("Deleted account %s", actor.user_id)
