"""Login for riders and partners."""

import logging

from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

logger = logging.getLogger(__name__)

User = get_user_model()


def authenticate_user(*, email: str, password: str) -> User:
    """
    Check email and password and stamp ``last_login``.

    The profile is fetched in the same query, since every login response
    carries the account's role.

    Raises:
        InvalidCredentialsError: If the email is unknown or the password is wrong
        InactiveAccountError: If the account was deactivated by an admin
    """
    user = (
        User.objects
        .select_related('profile')
        .filter(email__iexact=email.strip())
        .first()
    )
    if user is None or not user.check_password(password):
        logger.info("Failed login for %s", email)
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    User.objects.filter(pk=user.pk).update(last_login=user.last_login)

    return user
