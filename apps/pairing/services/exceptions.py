"""
Domain-specific exceptions for pairing services.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""

from apps.common.exceptions import (
    TrackerServiceError,
    ValidationError,
    NotFoundError,
)


class PairingServiceError(TrackerServiceError):
    """Base exception for all pairing service errors."""
    pass


class InvalidPairingCodeError(PairingServiceError, ValidationError):
    """Raised when a code is not six uppercase letters or digits."""
    pass


class RiderNotFoundError(PairingServiceError, NotFoundError):
    """Raised when no eligible rider holds the given code."""
    pass


class NotPairedError(PairingServiceError, ValidationError):
    """Raised when a partner acts before pairing with a rider."""
    pass
