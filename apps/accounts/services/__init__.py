"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    ProfileNotFoundError,
    PasswordConfirmationError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .account_management import get_profile, delete_user_account

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'ProfileNotFoundError',
    'PasswordConfirmationError',
    # Services
    'register_user',
    'authenticate_user',
    'get_profile',
    'delete_user_account',
]
