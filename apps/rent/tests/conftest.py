import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.houses.models import House, HouseMembership
from apps.rent.services import set_monthly_rent, create_draft, submit_proposal


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
    """Create and return the landlord of the test house."""
    return User.objects.create_user(
        email='landlord@example.com',
        password='TestPass123!',
        first_name='Lana',
        last_name='Lord',
    )


@pytest.fixture
def tenant1(db):
    """Create and return the first tenant."""
    return User.objects.create_user(
        email='tenant1@example.com',
        password='TestPass123!',
        first_name='Alice',
    )


@pytest.fixture
def tenant2(db):
    """Create and return the second tenant."""
    return User.objects.create_user(
        email='tenant2@example.com',
        password='TestPass123!',
        first_name='Bob',
    )


@pytest.fixture
def tenant3(db):
    """Create and return the third tenant."""
    return User.objects.create_user(
        email='tenant3@example.com',
        password='TestPass123!',
        first_name='Carol',
    )


@pytest.fixture
def outsider(db):
    """Create and return a user who lives elsewhere."""
    return User.objects.create_user(
        email='outsider@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def house(db, landlord, tenant1, tenant2, tenant3):
    """House with three tenants."""
    house = House.objects.create(
        name='Maple Street',
        address='12 Maple Street',
        landlord=landlord,
    )
    for tenant in (tenant1, tenant2, tenant3):
        HouseMembership.objects.create(user=tenant, house=house)
    return house


@pytest.fixture
def rent_request(house, landlord):
    """Pending request for a $1500.00 monthly rent."""
    _, request = set_monthly_rent(
        house_id=house.id,
        monthly_rent_amount=Decimal('1500.00'),
        rent_due_day=1,
        set_by=landlord,
    )
    return request


@pytest.fixture
def even_allocations(tenant1, tenant2, tenant3):
    """$500.00 for each tenant."""
    return [
        {'user_id': tenant1.id, 'amount': Decimal('500.00')},
        {'user_id': tenant2.id, 'amount': Decimal('500.00')},
        {'user_id': tenant3.id, 'amount': Decimal('500.00')},
    ]


@pytest.fixture
def short_allocations(tenant1, tenant2, tenant3):
    """Allocations one dollar short of the rent."""
    return [
        {'user_id': tenant1.id, 'amount': Decimal('500.00')},
        {'user_id': tenant2.id, 'amount': Decimal('500.00')},
        {'user_id': tenant3.id, 'amount': Decimal('499.00')},
    ]


@pytest.fixture
def draft(house, rent_request, tenant1, even_allocations):
    """Draft created by tenant1 with an even split."""
    return create_draft(
        house_id=house.id,
        user=tenant1,
        allocations=even_allocations,
    )


@pytest.fixture
def submitted_proposal(draft, tenant1):
    """The even-split draft, submitted for approval."""
    return submit_proposal(proposal_id=draft.id, user=tenant1)


@pytest.fixture
def tenant1_client(tenant1):
    return authenticate(tenant1)


@pytest.fixture
def tenant2_client(tenant2):
    return authenticate(tenant2)


@pytest.fixture
def tenant3_client(tenant3):
    return authenticate(tenant3)


@pytest.fixture
def landlord_client(landlord):
    return authenticate(landlord)


@pytest.fixture
def outsider_client(outsider):
    return authenticate(outsider)
