import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.context import SessionContext
from apps.accounts.models import Role
from apps.accounts.services import register_user


PASSWORD = 'TestPass123!'


def client_for(user):
    """Return an API client authenticated as ``user`` using JWT."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def rider(db):
    """Create a rider account; it receives a pairing code."""
    return register_user(
        email='rider@example.com',
        password=PASSWORD,
        role=Role.RIDER,
        display_name='Rider',
    )


@pytest.fixture
def other_rider(db):
    return register_user(
        email='otherrider@example.com',
        password=PASSWORD,
        role=Role.RIDER,
        display_name='Other Rider',
    )


@pytest.fixture
def partner(db):
    """Create an unpaired partner account."""
    return register_user(
        email='partner@example.com',
        password=PASSWORD,
        role=Role.PARTNER,
        display_name='Partner',
    )


@pytest.fixture
def other_partner(db):
    return register_user(
        email='otherpartner@example.com',
        password=PASSWORD,
        role=Role.PARTNER,
        display_name='Other Partner',
    )


@pytest.fixture
def paired_partner(partner, rider):
    """Partner paired with ``rider``."""
    profile = partner.profile
    profile.paired_rider = rider
    profile.save(update_fields=['paired_rider', 'updated_at'])
    partner.refresh_from_db()
    return partner


@pytest.fixture
def rider_ctx(rider):
    return SessionContext.for_user(rider)


@pytest.fixture
def partner_ctx(partner):
    """Session of the partner as it is at fixture time (unpaired unless paired first)."""
    return SessionContext.for_user(partner)


@pytest.fixture
def paired_ctx(paired_partner):
    """Session of the partner after pairing with ``rider``."""
    return SessionContext.for_user(paired_partner)


@pytest.fixture
def rider_client(rider):
    return client_for(rider)


@pytest.fixture
def partner_client(partner):
    return client_for(partner)
