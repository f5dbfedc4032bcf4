"""
Domain exceptions for analytics app.

Exception Hierarchy:
    AnalyticsServiceError (base)
    └── InvalidViewError

Usage:
    from apps.analytics.exceptions import InvalidViewError

    if view not in VIEW_WINDOWS:
        raise InvalidViewError(f"Invalid view: {view}")
"""

from apps.common.exceptions import TrackerServiceError, ValidationError


class AnalyticsServiceError(TrackerServiceError):
    """
    Base exception for all analytics service errors.

    Views can catch this to handle every analytics error at once:

        try:
            data = AnalyticsQueries.timeseries(actor, view='decade')
        except AnalyticsServiceError as e:
            return Response({'error': str(e)}, status=400)
    """

    pass


class InvalidViewError(AnalyticsServiceError, ValidationError):
    """
    Raised when an unknown chart view is requested.

    Valid views are: day, month, year, all.
    """

    pass
