"""
Row ownership rules checked in front of every service operation.

Each function mirrors one access policy of the persisted schema and
raises ``AuthorizationError`` when the caller may not perform the action:

    profiles   - read/update own row only
    settings   - readable by the owning rider and a paired partner
    requests   - readable and updatable by either party

Writes of settings, attendance and new requests need no row check beyond
the role and the pairing: the services key those rows on the caller's
own session.
"""

from uuid import UUID

from apps.common.exceptions import AuthorizationError

from .context import SessionContext


class WrongRoleError(AuthorizationError):
    """Raised when an operation is reserved for the other role."""
    pass


def require_rider(actor: SessionContext) -> None:
    if not actor.is_rider:
        raise WrongRoleError("Only riders can perform this action")


def require_partner(actor: SessionContext) -> None:
    if not actor.is_partner:
        raise WrongRoleError("Only partners can perform this action")


def check_profile_access(actor: SessionContext, profile_user_id: UUID) -> None:
    if actor.user_id != profile_user_id:
        raise AuthorizationError("You can only access your own profile")


def check_settings_read(actor: SessionContext, rider_id: UUID) -> None:
    if actor.user_id == rider_id:
        return
    if actor.is_partner and actor.paired_rider_id == rider_id:
        return
    raise AuthorizationError("You can only view settings of your paired rider")


def check_request_read(actor: SessionContext, request) -> None:
    if actor.user_id not in (request.rider_id, request.partner_id):
        raise AuthorizationError("You are not a party of this request")


def check_request_update(actor: SessionContext, request) -> None:
    check_request_read(actor, request)
