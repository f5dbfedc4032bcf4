"""
Session context passed explicitly to every service call.

Views build one ``SessionContext`` per HTTP request from the authenticated
user. Services never read the request or any global auth state; they
authorize against the identity and role carried here.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from apps.accounts.models import Profile, Role
from apps.common.exceptions import AuthorizationError


@dataclass(frozen=True)
class SessionContext:
    """Authenticated identity, role and pairing pointer of the caller."""

    user_id: UUID
    role: str
    paired_rider_id: Optional[UUID] = None

    @property
    def is_rider(self) -> bool:
        return self.role == Role.RIDER

    @property
    def is_partner(self) -> bool:
        return self.role == Role.PARTNER

    @classmethod
    def for_user(cls, user) -> 'SessionContext':
        """
        Build the context for an authenticated user.

        Reads the profile fresh so a pairing made earlier in the same
        session is visible.

        Raises:
            AuthorizationError: If the user has no profile
        """
        try:
            profile = Profile.objects.only('role', 'paired_rider_id').get(user_id=user.pk)
        except Profile.DoesNotExist:
            raise AuthorizationError("Account has no profile")

        return cls(
            user_id=user.pk,
            role=profile.role,
            paired_rider_id=profile.paired_rider_id,
        )
