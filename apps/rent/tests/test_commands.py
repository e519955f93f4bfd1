import pytest
from io import StringIO
from django.core.management import call_command
from django.core.management.base import CommandError

from apps.rent.models import RentConfiguration, RentAllocationRequest, RequestStatus


@pytest.mark.django_db
class TestOpenRentRequestCommand:
    """Tests for manage.py open_rent_request."""

    def test_opens_request(self, house):
        out = StringIO()
        call_command('open_rent_request', str(house.id), '1500.00', '--due-day', '5', stdout=out)

        configuration = RentConfiguration.objects.get(house=house)
        assert configuration.rent_due_day == 5
        assert RentAllocationRequest.objects.get(house=house).status == RequestStatus.PENDING
        assert 'is pending' in out.getvalue()

    def test_currency_option(self, house):
        call_command('open_rent_request', str(house.id), '1200', '--currency', 'gbp', stdout=StringIO())

        assert RentConfiguration.objects.get(house=house).currency == 'GBP'

    def test_invalid_amount(self, house):
        with pytest.raises(CommandError):
            call_command('open_rent_request', str(house.id), '0', stdout=StringIO())

    def test_malformed_house_id(self, db):
        with pytest.raises(CommandError):
            call_command('open_rent_request', 'not-a-uuid', '1500.00', stdout=StringIO())
