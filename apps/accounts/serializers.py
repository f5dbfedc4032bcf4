from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User, Profile, Role


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    role = serializers.CharField(source='profile.role', read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'role',
            'created_at',
            'last_login',
        ]
        read_only_fields = ['id', 'email', 'role', 'created_at', 'last_login']


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'email', 'display_name']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class ProfileSerializer(serializers.ModelSerializer):
    """Own profile including pairing state."""

    user_id = serializers.UUIDField(read_only=True)
    paired_rider = UserMinimalSerializer(read_only=True)

    class Meta:
        model = Profile
        fields = [
            'id',
            'user_id',
            'email',
            'role',
            'pairing_code',
            'paired_rider',
            'created_at',
        ]
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    role = serializers.ChoiceField(choices=Role.choices, default=Role.RIDER)
    display_name = serializers.CharField(max_length=100, required=False, allow_blank=True)

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class DeleteAccountSerializer(serializers.Serializer):
    """Confirmation payload for account deletion."""

    password = serializers.CharField(help_text="Current password for confirmation")
    confirm = serializers.BooleanField(help_text="Must be true to confirm deletion")
