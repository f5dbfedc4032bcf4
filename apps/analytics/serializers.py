"""
Serializers for analytics app.

This module contains:
1. Input serializers - Query parameter validation
2. Response serializers - API documentation and output formatting
"""

from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from .analytics import VIEW_WINDOWS


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class TimeseriesQuerySerializer(serializers.Serializer):
    """
    Validate timeseries query parameters.

    Query Parameters:
        view (str): day (7 days), month (30), year (365) or all (730)
    """

    view = serializers.ChoiceField(
        choices=list(VIEW_WINDOWS),
        default='month',
        help_text='Chart window: day, month, year or all'
    )


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class SummarySerializer(serializers.Serializer):
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    monthly = serializers.DecimalField(max_digits=12, decimal_places=2)
    days_this_month = serializers.IntegerField()
    average_per_day = serializers.DecimalField(max_digits=12, decimal_places=2)
    today_status = serializers.ChoiceField(choices=['completed', 'pending'])


class TimeseriesPointSerializer(serializers.Serializer):
    date = serializers.DateField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    status = serializers.ChoiceField(choices=['completed', 'requested', 'none'])


class TimeseriesResponseSerializer(serializers.Serializer):
    view = serializers.CharField()
    data = TimeseriesPointSerializer(many=True)


class PartnerBriefSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    email = serializers.EmailField()


class DashboardResponseSerializer(serializers.Serializer):
    """
    Dashboard for the current session.

    Riders get their pairing code and partners; partners get the rider
    they are paired with and their open reminders.
    """

    role = serializers.CharField()
    stats = SummarySerializer()
    daily_petrol_cost = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    pending_requests = serializers.IntegerField()
    pairing_code = serializers.CharField(required=False, allow_null=True)
    partners = PartnerBriefSerializer(many=True, required=False)
    rider = UserMinimalSerializer(required=False, allow_null=True)


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
