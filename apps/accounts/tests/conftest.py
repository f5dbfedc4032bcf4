import pytest
from apps.accounts.models import Role
from apps.accounts.services import register_user


@pytest.fixture
def inactive_rider(db):
    """Create and return an inactive rider."""
    user = register_user(
        email='inactive@example.com',
        password='TestPass123!',
        role=Role.RIDER,
    )
    user.is_active = False
    user.save(update_fields=['is_active'])
    return user
