import pytest
from decimal import Decimal
from apps.travel.models import RiderSettings


@pytest.fixture
def rider_settings(rider):
    """Rider with a daily petrol cost of 120.00."""
    return RiderSettings.objects.create(
        rider=rider,
        daily_petrol_cost=Decimal('120.00'),
    )
