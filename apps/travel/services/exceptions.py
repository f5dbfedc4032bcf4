"""Domain-specific exceptions for travel services."""

from apps.common.exceptions import (
    TrackerServiceError,
    ValidationError,
    NotFoundError,
)


class TravelServiceError(TrackerServiceError):
    """Base exception for travel services."""
    pass


class InvalidAmountError(TravelServiceError, ValidationError):
    """Raised when a daily cost falls outside the allowed range."""
    pass


class NoSettingsError(TravelServiceError, NotFoundError):
    """Raised when the rider has not configured a daily cost."""
    pass


class RequestNotFoundError(TravelServiceError, NotFoundError):
    """Raised when a request does not exist or is not visible to the caller."""
    pass


class InvalidStateTransitionError(TravelServiceError, ValidationError):
    """Raised when a request is moved out of a non-pending state."""
    pass


class PartnerNotPairedError(TravelServiceError, ValidationError):
    """Raised when a rider addresses a partner who is not paired with them."""
    pass
