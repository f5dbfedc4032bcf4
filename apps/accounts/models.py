from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.validators import RegexValidator
from django.db import models
import uuid


PAIRING_CODE_PATTERN = r'^[A-Z0-9]{6}$'


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Custom user model with email authentication."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    display_name = models.CharField(max_length=100, blank=True)

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['created_at'], name='users_created_at_idx'),
        ]

    def __str__(self):
        return self.email

    def get_display_name(self):
        """Return display name or email prefix."""
        return self.display_name or self.email.split('@')[0]


class Role(models.TextChoices):
    RIDER = 'rider', 'Rider'
    PARTNER = 'partner', 'Partner'


class Profile(models.Model):
    """
    Role and pairing state of an account.

    Riders carry a pairing code; partners carry a pointer to the rider they
    are paired with. Pairing never touches the rider's row.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField('accounts.User', on_delete=models.CASCADE, related_name='profile')
    email = models.EmailField(max_length=255)
    role = models.CharField(max_length=10, choices=Role.choices)
    pairing_code = models.CharField(
        max_length=6,
        unique=True,
        null=True,
        blank=True,
        validators=[RegexValidator(PAIRING_CODE_PATTERN, 'Pairing code must be 6 uppercase letters or digits')],
    )
    paired_rider = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='paired_partner_profiles',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'profiles'
        indexes = [
            models.Index(fields=['role', 'created_at'], name='profiles_role_created_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                check=models.Q(pairing_code__isnull=True) | models.Q(pairing_code__regex=PAIRING_CODE_PATTERN),
                name='check_pairing_code_format',
            ),
        ]

    def __str__(self):
        return f"{self.email} ({self.role})"

    @property
    def is_rider(self):
        return self.role == Role.RIDER

    @property
    def is_partner(self):
        return self.role == Role.PARTNER
