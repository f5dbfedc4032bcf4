from rest_framework import serializers

from apps.accounts.models import Profile
from apps.accounts.serializers import UserMinimalSerializer


class PairingCodeSerializer(serializers.Serializer):
    pairing_code = serializers.CharField(allow_null=True)


class PairRequestSerializer(serializers.Serializer):
    """Code entered by a partner."""

    code = serializers.CharField(max_length=32, trim_whitespace=True)


class RiderSerializer(serializers.ModelSerializer):
    """Rider as seen by a partner after pairing."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = Profile
        fields = ['user', 'email']
        read_only_fields = fields


class PartnerSerializer(serializers.ModelSerializer):
    """Partner as listed for the rider."""

    user_id = serializers.UUIDField(read_only=True)
    display_name = serializers.CharField(source='user.get_display_name', read_only=True)

    class Meta:
        model = Profile
        fields = ['user_id', 'email', 'display_name', 'updated_at']
        read_only_fields = fields
