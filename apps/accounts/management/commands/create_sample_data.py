"""
Management command to create sample data for trying out the rent API.

Usage:
    python manage.py create_sample_data
    python manage.py create_sample_data --clear --with-draft

This creates:
- 5 users (admin, landlord, alice, bob, charlie)
- 1 house (Maple Street) with alice, bob and charlie as tenants
- A $1500.00 monthly rent with a pending rent allocation request
- Optionally, an even-split draft proposal by alice
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from decimal import Decimal

from apps.accounts.models import User
from apps.houses.models import House, HouseMembership
from apps.rent.models import RentConfiguration, RentAllocationRequest, RentProposal
from apps.rent.services import set_monthly_rent, create_draft


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )
        parser.add_argument(
            '--with-draft',
            action='store_true',
            help='Also create an even-split draft proposal',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        house = self.create_house(users)
        self.create_rent(house, users, with_draft=options['with_draft'])

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (superuser)')
        self.stdout.write('  landlord@example.com / password123')
        self.stdout.write('  alice@example.com / password123')
        self.stdout.write('  bob@example.com / password123')
        self.stdout.write('  charlie@example.com / password123')
        self.stdout.write('')
        self.stdout.write(f'House ID: {house.id}')

    def clear_data(self):
        """Clear all data from the database."""
        RentProposal.objects.all().delete()
        RentAllocationRequest.objects.all().delete()
        RentConfiguration.objects.all().delete()
        HouseMembership.objects.all().delete()
        House.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()
        User.objects.filter(email='admin@example.com').delete()

    def _get_or_create_user(self, email, password, **defaults):
        user, _ = User.objects.get_or_create(email=email, defaults=defaults)
        user.set_password(password)
        user.save()
        return user

    def create_users(self):
        """Create test users."""
        self.stdout.write('  Creating users...')

        return {
            'admin': self._get_or_create_user(
                'admin@example.com', 'admin123',
                first_name='Admin', is_staff=True, is_superuser=True,
            ),
            'landlord': self._get_or_create_user(
                'landlord@example.com', 'password123',
                first_name='Lana', last_name='Lord',
            ),
            'alice': self._get_or_create_user(
                'alice@example.com', 'password123', first_name='Alice',
            ),
            'bob': self._get_or_create_user(
                'bob@example.com', 'password123', first_name='Bob',
            ),
            'charlie': self._get_or_create_user(
                'charlie@example.com', 'password123', first_name='Charlie',
            ),
        }

    def create_house(self, users):
        """Create a house with three tenants."""
        self.stdout.write('  Creating house...')

        house, _ = House.objects.get_or_create(
            name='Maple Street',
            defaults={
                'address': '12 Maple Street',
                'landlord': users['landlord'],
            }
        )
        for key in ('alice', 'bob', 'charlie'):
            HouseMembership.objects.get_or_create(user=users[key], house=house)
        return house

    def create_rent(self, house, users, with_draft=False):
        """Set the rent and optionally start a proposal."""
        if RentProposal.objects.active().filter(house=house).exists():
            self.stdout.write(self.style.WARNING('  House already has an active proposal, skipping rent'))
            return

        self.stdout.write('  Setting monthly rent...')
        configuration, _ = set_monthly_rent(
            house_id=house.id,
            monthly_rent_amount=Decimal('1500.00'),
            rent_due_day=1,
            set_by=users['landlord'],
        )

        if with_draft:
            self.stdout.write('  Creating draft proposal...')
            share = (configuration.monthly_rent_amount / 3).quantize(Decimal('0.01'))
            create_draft(
                house_id=house.id,
                user=users['alice'],
                allocations=[
                    {'user_id': users[key].id, 'amount': share}
                    for key in ('alice', 'bob', 'charlie')
                ],
            )
