"""
Landlord-side rent setup.

Setting or changing the rent creates a new RentConfiguration and opens a
fresh RentAllocationRequest. Configurations are never edited in place;
the previous open request (and any draft answering it) is retired.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional, Tuple
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.houses.models import House
from apps.rent.models import (
    RentConfiguration,
    RentAllocationRequest,
    RentProposal,
    RequestStatus,
    ProposalStatus,
)

from .exceptions import (
    ConflictError,
    ValidationError,
    NotFoundError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


def _clean_amount(monthly_rent_amount) -> Decimal:
    try:
        amount = Decimal(str(monthly_rent_amount)).quantize(Decimal('0.01'))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid rent amount: {monthly_rent_amount}")
    if amount <= 0:
        raise ValidationError("Monthly rent must be greater than zero")
    return amount


@transaction.atomic
def set_monthly_rent(
    *,
    house_id: UUID,
    monthly_rent_amount,
    rent_due_day: int,
    set_by: Optional[User] = None,
    currency: Optional[str] = None
) -> Tuple[RentConfiguration, RentAllocationRequest]:
    """
    Declare the monthly rent for a house and ask its members to split it.

    Args:
        house_id: UUID of the house
        monthly_rent_amount: Rent total (> 0)
        rent_due_day: Day of month rent is due (1-31)
        set_by: Landlord making the change; None for administrative use
        currency: ISO currency code; defaults to RENT_DEFAULT_CURRENCY

    Returns:
        tuple: The new RentConfiguration and its pending request

    Raises:
        NotFoundError: If house doesn't exist
        InsufficientPermissionsError: If set_by is not the landlord
        ValidationError: If amount or due day is out of range
        ConflictError: If a submitted proposal is awaiting approval
    """
    try:
        house = House.objects.select_for_update().get(id=house_id)
    except House.DoesNotExist:
        raise NotFoundError(f"House with ID {house_id} not found")

    if set_by is not None and not house.is_landlord(set_by):
        raise InsufficientPermissionsError("Only the landlord can set the rent")

    amount = _clean_amount(monthly_rent_amount)
    if not 1 <= int(rent_due_day) <= 31:
        raise ValidationError("Rent due day must be between 1 and 31")

    if RentProposal.objects.filter(house=house, status=ProposalStatus.SUBMITTED).exists():
        raise ConflictError("Rent cannot change while a proposal is awaiting approval")

    currency = (currency or settings.RENT_DEFAULT_CURRENCY).upper()

    now = timezone.now()
    open_requests = list(RentAllocationRequest.objects.open().filter(house=house))
    if open_requests:
        RentProposal.objects.filter(
            allocation_request__in=open_requests,
            status=ProposalStatus.DRAFT,
        ).delete()
        RentAllocationRequest.objects.filter(
            id__in=[request.id for request in open_requests]
        ).update(status=RequestStatus.EXPIRED, resolved_at=now, updated_at=now)
        logger.info("Expired %s open request(s) for house %s", len(open_requests), house.id)

    configuration = RentConfiguration.objects.create(
        house=house,
        monthly_rent_amount=amount,
        rent_due_day=int(rent_due_day),
        currency=currency,
        created_by=set_by,
    )
    request = RentAllocationRequest.objects.create(
        house=house,
        rent_configuration=configuration,
        status=RequestStatus.PENDING,
    )

    logger.info(
        "Rent for house %s set to %s %s; request %s opened",
        house.id, amount, currency, request.id,
    )
    return configuration, request
