import pytest
from io import StringIO
from django.core.management import call_command
from django.urls import reverse
from rest_framework import status

from apps.accounts.models import User
from apps.houses.models import House
from apps.rent.models import RentAllocationRequest, RentProposal, RequestStatus, ProposalStatus


@pytest.mark.django_db
class TestUserModel:
    """Tests for the email-based user model."""

    def test_create_user_normalizes_email(self):
        user = User.objects.create_user(email='Someone@EXAMPLE.com', password='TestPass123!')

        assert user.email == 'Someone@example.com'
        assert user.check_password('TestPass123!')
        assert not user.is_staff

    def test_create_user_requires_email(self):
        with pytest.raises(ValueError):
            User.objects.create_user(email='', password='TestPass123!')

    def test_create_superuser(self):
        admin = User.objects.create_superuser(email='admin@example.com', password='TestPass123!')

        assert admin.is_staff
        assert admin.is_superuser

    def test_display_name_prefers_full_name(self, user):
        assert user.get_display_name() == 'Test User'

    def test_display_name_falls_back_to_email(self):
        user = User.objects.create_user(email='nameless@example.com', password='TestPass123!')

        assert user.get_display_name() == 'nameless'


@pytest.mark.django_db
class TestTokenAuth:
    """Tests for POST /api/auth/token/"""

    def test_obtain_token(self, api_client, user):
        url = reverse('token_obtain_pair')
        response = api_client.post(url, {'email': user.email, 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data
        assert 'refresh' in response.data

    def test_wrong_password(self, api_client, user):
        url = reverse('token_obtain_pair')
        response = api_client.post(url, {'email': user.email, 'password': 'wrong'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_authenticates_api(self, api_client, user):
        token = api_client.post(
            reverse('token_obtain_pair'),
            {'email': user.email, 'password': 'TestPass123!'},
        ).data['access']
        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')

        response = api_client.get(reverse('rent:my-pending-rent-approvals'))

        assert response.status_code == status.HTTP_200_OK


@pytest.mark.django_db
class TestHealthCheck:
    """Tests for GET /api/health/"""

    def test_plain_http_is_not_redirected(self, api_client, settings):
        # Production defaults (DEBUG off) must not bounce test requests to https
        settings.DEBUG = False

        response = api_client.get(reverse('health-check'))

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {'status': 'ok'}


@pytest.mark.django_db
class TestCreateSampleData:
    """Tests for manage.py create_sample_data."""

    def test_creates_house_with_pending_request(self):
        call_command('create_sample_data', stdout=StringIO())

        house = House.objects.get(name='Maple Street')
        assert house.memberships.count() == 3
        assert house.landlord.email == 'landlord@example.com'
        assert RentAllocationRequest.objects.get(house=house).status == RequestStatus.PENDING

    def test_with_draft(self):
        call_command('create_sample_data', '--with-draft', stdout=StringIO())

        proposal = RentProposal.objects.get()
        assert proposal.status == ProposalStatus.DRAFT
        assert proposal.created_by.email == 'alice@example.com'
        assert proposal.allocations.count() == 3

    def test_clear_and_recreate(self):
        call_command('create_sample_data', '--with-draft', stdout=StringIO())
        call_command('create_sample_data', '--clear', stdout=StringIO())

        assert House.objects.count() == 1
        assert not RentProposal.objects.exists()
        assert RentAllocationRequest.objects.count() == 1
