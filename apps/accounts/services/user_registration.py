"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.accounts.models import Profile, Role
from apps.pairing.services.code_generation import assign_pairing_code

from .exceptions import UserRegistrationError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    role: str = Role.RIDER,
    display_name: str = ""
) -> User:
    """
    Register a new user together with their profile.

    Riders receive a unique pairing code at signup; partners never do.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        role: 'rider' or 'partner' (defaults to rider)
        display_name: Optional display name

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the role is unknown or the email is taken
    """
    if role not in Role.values:
        raise UserRegistrationError(f"Unknown role: {role}")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                display_name=display_name
            )
    except IntegrityError:
        raise UserRegistrationError("An account with this email already exists")

    profile = Profile.objects.create(user=user, email=user.email, role=role)

    if profile.is_rider:
        assign_pairing_code(profile=profile)

    logger.info("Registered %s account %s", role, user.id)
    return user
