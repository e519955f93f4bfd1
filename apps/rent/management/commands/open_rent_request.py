"""
Management command to set a house's rent and open a rent allocation request.

Stands in for the landlord-side flow: creates a new rent configuration,
expires any open request for the house, and opens a pending one.

Usage:
    python manage.py open_rent_request <house_id> 1500.00 --due-day 1
"""

import uuid

from django.core.management.base import BaseCommand, CommandError

from apps.rent.services import set_monthly_rent, RentServiceError


class Command(BaseCommand):
    help = 'Set monthly rent for a house and ask its members to split it'

    def add_arguments(self, parser):
        parser.add_argument('house_id', type=uuid.UUID, help='UUID of the house')
        parser.add_argument('amount', help='Monthly rent amount, e.g. 1500.00')
        parser.add_argument(
            '--due-day',
            type=int,
            default=1,
            help='Day of month rent is due (1-31)',
        )
        parser.add_argument(
            '--currency',
            default=None,
            help='ISO currency code (defaults to RENT_DEFAULT_CURRENCY)',
        )

    def handle(self, *args, **options):
        try:
            configuration, request = set_monthly_rent(
                house_id=options['house_id'],
                monthly_rent_amount=options['amount'],
                rent_due_day=options['due_day'],
                currency=options['currency'],
            )
        except RentServiceError as e:
            raise CommandError(str(e))

        self.stdout.write(
            self.style.SUCCESS(
                f'Rent set to {configuration.monthly_rent_amount} {configuration.currency} '
                f'(due day {configuration.rent_due_day}) for {configuration.house.name}'
            )
        )
        self.stdout.write(f'Rent allocation request {request.id} is pending.')
