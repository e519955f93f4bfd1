import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.houses.models import House, HouseMembership
from apps.rent.services import set_monthly_rent, create_draft


def authenticate(user):
    """Return a new API client carrying a JWT for user."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def landlord(db):
    return User.objects.create_user(
        email='landlord@example.com',
        password='TestPass123!',
        first_name='Lana',
    )


@pytest.fixture
def tenant(db):
    return User.objects.create_user(
        email='tenant@example.com',
        password='TestPass123!',
        first_name='Tom',
        last_name='Tenant',
    )


@pytest.fixture
def newcomer(db):
    """Create and return a user about to move in."""
    return User.objects.create_user(
        email='newcomer@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def house(db, landlord, tenant):
    """House with a single tenant."""
    house = House.objects.create(
        name='Oak Lane',
        address='3 Oak Lane',
        landlord=landlord,
    )
    HouseMembership.objects.create(user=tenant, house=house)
    return house


@pytest.fixture
def draft(house, landlord, tenant):
    """A draft rent proposal, which locks membership."""
    set_monthly_rent(
        house_id=house.id,
        monthly_rent_amount=Decimal('900.00'),
        rent_due_day=1,
        set_by=landlord,
    )
    return create_draft(
        house_id=house.id,
        user=tenant,
        allocations=[{'user_id': tenant.id, 'amount': Decimal('900.00')}],
    )


@pytest.fixture
def landlord_client(landlord):
    return authenticate(landlord)


@pytest.fixture
def tenant_client(tenant):
    return authenticate(tenant)


@pytest.fixture
def newcomer_client(newcomer):
    return authenticate(newcomer)
