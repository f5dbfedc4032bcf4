"""Services for travel settings, attendance and requests."""

from .exceptions import (
    TravelServiceError,
    InvalidAmountError,
    NoSettingsError,
    RequestNotFoundError,
    InvalidStateTransitionError,
    PartnerNotPairedError,
)
from .settings_management import get_settings, set_daily_cost
from .attendance_recording import (
    mark_attendance,
    get_attendance_records,
    scoped_attendance,
)
from .request_management import (
    send_request,
    ignore_request,
    get_requests,
    get_request,
    complete_pending_requests,
    scoped_requests,
)

__all__ = [
    # Exceptions
    'TravelServiceError',
    'InvalidAmountError',
    'NoSettingsError',
    'RequestNotFoundError',
    'InvalidStateTransitionError',
    'PartnerNotPairedError',
    # Settings
    'get_settings',
    'set_daily_cost',
    # Attendance
    'mark_attendance',
    'get_attendance_records',
    'scoped_attendance',
    # Requests
    'send_request',
    'ignore_request',
    'get_requests',
    'get_request',
    'complete_pending_requests',
    'scoped_requests',
]
