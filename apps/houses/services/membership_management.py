"""
Membership management service.

Membership feeds the rent allocation workflow: a proposal must cover
exactly the current members, so changes are refused while a house has
a draft or submitted proposal.
"""

import logging
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.houses.models import House, HouseMembership
from apps.rent.models import RentProposal

from .exceptions import (
    HouseNotFoundError,
    AlreadyMemberError,
    NotMemberError,
    MembershipLockedError,
)

logger = logging.getLogger(__name__)


def _lock_house(house_id: UUID) -> House:
    try:
        return House.objects.select_for_update().get(id=house_id)
    except House.DoesNotExist:
        raise HouseNotFoundError(f"House with ID {house_id} not found")


def _ensure_no_active_proposal(house: House) -> None:
    if RentProposal.objects.active().filter(house=house).exists():
        raise MembershipLockedError(
            "Membership cannot change while a rent proposal is in progress"
        )


def get_house_by_id(*, house_id: UUID) -> House:
    """
    Get a house by ID.

    Raises:
        HouseNotFoundError: If house doesn't exist
    """
    try:
        return House.objects.select_related('landlord').get(id=house_id)
    except House.DoesNotExist:
        raise HouseNotFoundError(f"House with ID {house_id} not found")


@transaction.atomic
def add_member(*, house_id: UUID, user: User) -> HouseMembership:
    """
    Add a tenant to a house.

    The house row is locked so the active-proposal check and the insert
    are not interleaved with a concurrent draft creation.

    Raises:
        HouseNotFoundError: If house doesn't exist
        MembershipLockedError: If a draft or submitted proposal exists
        AlreadyMemberError: If user is already a member
    """
    house = _lock_house(house_id)
    _ensure_no_active_proposal(house)

    if house.has_member(user):
        raise AlreadyMemberError(f"User is already a member of {house.name}")

    try:
        membership = HouseMembership.objects.create(user=user, house=house)
    except IntegrityError:
        raise AlreadyMemberError(f"User is already a member of {house.name}")

    logger.info("User %s joined house %s", user.id, house.id)
    return membership


@transaction.atomic
def remove_member(*, house_id: UUID, user_id: UUID) -> None:
    """
    Remove a tenant from a house.

    Raises:
        HouseNotFoundError: If house doesn't exist
        MembershipLockedError: If a draft or submitted proposal exists
        NotMemberError: If target user is not a member
    """
    house = _lock_house(house_id)
    _ensure_no_active_proposal(house)

    deleted, _ = HouseMembership.objects.filter(house=house, user_id=user_id).delete()
    if not deleted:
        raise NotMemberError("User is not a member of this house")

    logger.info("User %s left house %s", user_id, house.id)


def get_house_members(*, house_id: UUID) -> QuerySet[HouseMembership]:
    """
    Get all members of a house ordered by join date.

    Raises:
        HouseNotFoundError: If house doesn't exist
    """
    if not House.objects.filter(id=house_id).exists():
        raise HouseNotFoundError(f"House with ID {house_id} not found")

    return (
        HouseMembership.objects
        .filter(house_id=house_id)
        .select_related('user')
        .order_by('joined_at')
    )
