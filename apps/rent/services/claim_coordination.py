"""
Claim coordination for rent allocation requests.

Only one member may draft a proposal for a request. The drafting right is
taken with a single conditional UPDATE guarded by ``status='pending'``:
the database decides the winner, so concurrent callers never both succeed
and no read-then-write window exists.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.houses.models import House
from apps.rent.models import RentAllocationRequest, RequestStatus

from .exceptions import (
    ConflictError,
    InvalidStateError,
    NotFoundError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


def get_house_for_member(*, house_id: UUID, user: User) -> House:
    """
    Load a house the user lives in (or manages).

    Raises:
        NotFoundError: If house doesn't exist
        InsufficientPermissionsError: If user is neither member nor landlord
    """
    try:
        house = House.objects.select_related('landlord').get(id=house_id)
    except House.DoesNotExist:
        raise NotFoundError(f"House with ID {house_id} not found")

    if not (house.has_member(user) or house.is_landlord(user)):
        raise InsufficientPermissionsError("You must be a member of this house")

    return house


def get_open_request(*, house_id: UUID) -> RentAllocationRequest:
    """
    Get the house's pending or claimed request.

    Raises:
        NotFoundError: If the house has no open request
    """
    request = (
        RentAllocationRequest.objects
        .open()
        .select_related('rent_configuration', 'claimed_by', 'house')
        .filter(house_id=house_id)
        .first()
    )
    if request is None:
        raise NotFoundError("No rent allocation request is pending for this house")
    return request


def claim_request(*, request_id: UUID, user: User) -> RentAllocationRequest:
    """
    Take the drafting right for a request.

    Args:
        request_id: UUID of the rent allocation request
        user: Member claiming the request

    Returns:
        The request, now ``claimed`` by ``user``

    Raises:
        NotFoundError: If request doesn't exist
        InsufficientPermissionsError: If user is not a house member
        ConflictError: If another member already holds the claim
        InvalidStateError: If the caller already holds it, or the request
            is fulfilled/expired
    """
    try:
        request = RentAllocationRequest.objects.select_related('house').get(id=request_id)
    except RentAllocationRequest.DoesNotExist:
        raise NotFoundError(f"Rent allocation request {request_id} not found")

    if not request.house.has_member(user):
        raise InsufficientPermissionsError("Only house members can claim rent allocation")

    now = timezone.now()
    granted = (
        RentAllocationRequest.objects
        .filter(id=request_id, status=RequestStatus.PENDING)
        .update(
            status=RequestStatus.CLAIMED,
            claimed_by=user,
            claimed_at=now,
            updated_at=now,
        )
    )

    request.refresh_from_db()

    if not granted:
        if request.status == RequestStatus.CLAIMED and request.claimed_by_id != user.id:
            logger.warning(
                "Claim on request %s by user %s lost to user %s",
                request_id, user.id, request.claimed_by_id,
            )
            raise ConflictError(
                "Someone else has already started creating a proposal for this rent allocation"
            )
        if request.status == RequestStatus.CLAIMED:
            raise InvalidStateError("You have already claimed this rent allocation request")
        raise InvalidStateError(f"Rent allocation request is {request.status}")

    logger.info("Request %s claimed by user %s", request_id, user.id)
    return request


def ensure_claim(*, request: RentAllocationRequest, user: User) -> RentAllocationRequest:
    """
    Make sure ``user`` holds the claim, claiming a pending request if needed.

    Raises:
        ConflictError: If another member holds the claim
    """
    if request.status == RequestStatus.CLAIMED and request.claimed_by_id == user.id:
        return request
    if request.status == RequestStatus.CLAIMED:
        raise ConflictError(
            "Someone else has already started creating a proposal for this rent allocation"
        )
    return claim_request(request_id=request.id, user=user)


def release_claim(*, request_id: UUID, user: User = None) -> bool:
    """
    Return a claimed request to ``pending`` so another member may claim it.

    When ``user`` is given, only that member's claim is released.

    Returns:
        True if the request was reopened
    """
    queryset = RentAllocationRequest.objects.filter(
        id=request_id,
        status=RequestStatus.CLAIMED,
    )
    if user is not None:
        queryset = queryset.filter(claimed_by=user)

    released = queryset.update(
        status=RequestStatus.PENDING,
        claimed_by=None,
        claimed_at=None,
        updated_at=timezone.now(),
    )
    if released:
        logger.info("Request %s released back to pending", request_id)
    return bool(released)


def fulfill_request(*, request_id: UUID) -> bool:
    """Mark a claimed request as fulfilled once its proposal is approved."""
    now = timezone.now()
    fulfilled = (
        RentAllocationRequest.objects
        .filter(id=request_id, status=RequestStatus.CLAIMED)
        .update(status=RequestStatus.FULFILLED, resolved_at=now, updated_at=now)
    )
    if fulfilled:
        logger.info("Request %s fulfilled", request_id)
    return bool(fulfilled)


@transaction.atomic
def claim_house_request(*, house_id: UUID, user: User) -> RentAllocationRequest:
    """Claim whichever request is currently open for the house."""
    get_house_for_member(house_id=house_id, user=user)
    request = get_open_request(house_id=house_id)
    return claim_request(request_id=request.id, user=user)
