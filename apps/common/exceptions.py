"""
Domain exceptions shared by all service layers.

These exceptions represent business rule violations and are raised by
services independently of HTTP. Views catch them at the call site and
convert them to error responses.

Exception Hierarchy:
    TrackerServiceError (base)
    ├── ValidationError       - malformed input, unmet precondition (400)
    ├── NotFoundError         - missing rider, settings or request (404)
    ├── ConflictError         - constraint violation not absorbed by upsert (409)
    └── AuthorizationError    - cross-account or wrong-role access (403)

Usage:
    from apps.common.exceptions import NotFoundError

    try:
        mark_attendance(actor=ctx)
    except NotFoundError as e:
        return Response({'error': str(e)}, status=404)
"""


class TrackerServiceError(Exception):
    """Base exception for all service errors."""
    pass


class ValidationError(TrackerServiceError):
    """Raised when input is malformed or a precondition does not hold."""
    pass


class NotFoundError(TrackerServiceError):
    """Raised when a looked-up row does not exist or is not visible."""
    pass


class ConflictError(TrackerServiceError):
    """Raised when a concurrent write violates a unique constraint."""
    pass


class AuthorizationError(TrackerServiceError):
    """Raised when the acting user may not touch the target row."""
    pass
