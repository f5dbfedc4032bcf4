from django.conf import settings
from rest_framework import serializers

from .models import RiderSettings, Attendance, AttendanceRequest, RequestStatus, MIN_DAILY_COST


class RiderSettingsSerializer(serializers.ModelSerializer):
    rider_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = RiderSettings
        fields = ['rider_id', 'daily_petrol_cost', 'updated_at']
        read_only_fields = fields


class DailyCostSerializer(serializers.Serializer):
    """Input for updating the daily petrol cost."""

    daily_petrol_cost = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=MIN_DAILY_COST,
    )

    def validate_daily_petrol_cost(self, value):
        if value > settings.DAILY_COST_MAX:
            raise serializers.ValidationError(
                f"Ensure this value is less than or equal to {settings.DAILY_COST_MAX}."
            )
        return value


class AttendanceSerializer(serializers.ModelSerializer):
    partner_id = serializers.UUIDField(read_only=True)
    rider_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Attendance
        fields = [
            'id',
            'partner_id',
            'rider_id',
            'date',
            'amount',
            'status',
            'created_at',
        ]
        read_only_fields = fields


class AttendanceRangeSerializer(serializers.Serializer):
    """Query params for listing attendance."""

    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        start = attrs.get('start_date')
        end = attrs.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError('start_date must be before end_date')
        return attrs


class AttendanceRequestSerializer(serializers.ModelSerializer):
    rider_id = serializers.UUIDField(read_only=True)
    partner_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = AttendanceRequest
        fields = [
            'id',
            'rider_id',
            'partner_id',
            'date',
            'status',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class SendRequestSerializer(serializers.Serializer):
    partner_id = serializers.UUIDField()


class RequestFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=RequestStatus.choices, required=False)
