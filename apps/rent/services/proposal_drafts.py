"""
Draft proposal management.

A draft belongs to the member who created it. Sum mismatches and missing
members are allowed while drafting (the validator reports them as hints);
amounts that are negative, duplicated, or assigned to non-members are
rejected immediately.
"""

import logging
from typing import List, Optional
from uuid import UUID

from django.db import transaction, IntegrityError

from apps.accounts.models import User
from apps.houses.models import House
from apps.rent.models import (
    RentProposal,
    RentAllocation,
    ProposalStatus,
    ApprovalStatus,
)

from .allocation_validation import validate_allocations
from .claim_coordination import get_open_request, ensure_claim, release_claim
from .exceptions import (
    ConflictError,
    ValidationError,
    InvalidStateError,
    NotFoundError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


def _check_draft_allocations(allocations: List[dict], member_ids) -> None:
    result = validate_allocations(allocations, 0)
    members = {str(member_id) for member_id in member_ids}
    outsiders = sorted(
        {str(allocation['user_id']) for allocation in allocations} - members
    )

    if result['negative_user_ids'] or result['duplicate_user_ids']:
        raise ValidationError(result['message'])
    if outsiders:
        raise ValidationError(
            'Allocations can only be assigned to house members',
            unexpected_user_ids=outsiders,
        )


def _build_allocations(proposal: RentProposal, allocations: List[dict]) -> None:
    RentAllocation.objects.bulk_create([
        RentAllocation(
            proposal=proposal,
            user_id=allocation['user_id'],
            amount=allocation['amount'],
            approval_status=ApprovalStatus.PENDING,
        )
        for allocation in allocations
    ])


def _lock_proposal(proposal_id: UUID) -> RentProposal:
    try:
        return (
            RentProposal.objects
            .select_for_update()
            .get(id=proposal_id)
        )
    except RentProposal.DoesNotExist:
        raise NotFoundError(f"Rent proposal {proposal_id} not found")


def _reload(proposal_id: UUID) -> RentProposal:
    return RentProposal.objects.with_allocations().get(id=proposal_id)


@transaction.atomic
def create_draft(
    *,
    house_id: UUID,
    user: User,
    allocations: List[dict],
    rent_configuration_id: Optional[UUID] = None
) -> RentProposal:
    """
    Start a draft proposal for the house's open rent allocation request.

    The caller takes (or must already hold) the request's claim. The house
    row is locked so membership cannot change underneath the new draft.

    Args:
        house_id: UUID of the house
        user: Member creating the draft
        allocations: List of ``{'user_id', 'amount'}`` dicts
        rent_configuration_id: Configuration the client drafted against;
            must be the one the open request points at

    Returns:
        Created RentProposal in ``draft`` status

    Raises:
        NotFoundError: If house or open request doesn't exist
        InsufficientPermissionsError: If user is not a house member
        InvalidStateError: If the rent configuration is no longer current
        ConflictError: If the house already has an active proposal or
            another member holds the claim
        ValidationError: If allocations are malformed
    """
    try:
        house = House.objects.select_for_update().get(id=house_id)
    except House.DoesNotExist:
        raise NotFoundError(f"House with ID {house_id} not found")

    if not house.has_member(user):
        raise InsufficientPermissionsError("Only house members can propose a rent split")

    request = get_open_request(house_id=house.id)

    if rent_configuration_id and str(rent_configuration_id) != str(request.rent_configuration_id):
        raise InvalidStateError("Rent configuration has changed; reload and try again")

    if RentProposal.objects.active().filter(house=house).exists():
        raise ConflictError("This house already has an active rent proposal")

    _check_draft_allocations(allocations, house.member_ids())

    ensure_claim(request=request, user=user)

    try:
        with transaction.atomic():
            proposal = RentProposal.objects.create(
                house=house,
                rent_configuration=request.rent_configuration,
                allocation_request=request,
                created_by=user,
                status=ProposalStatus.DRAFT,
            )
    except IntegrityError:
        raise ConflictError("This house already has an active rent proposal")

    _build_allocations(proposal, allocations)

    logger.info("Draft proposal %s created for house %s by user %s", proposal.id, house.id, user.id)
    return _reload(proposal.id)


@transaction.atomic
def update_draft(
    *,
    proposal_id: UUID,
    user: User,
    allocations: List[dict],
    expected_version: Optional[int] = None
) -> RentProposal:
    """
    Replace the allocations of a draft.

    Args:
        proposal_id: UUID of the proposal
        user: Must be the draft's creator
        allocations: Full new allocation set
        expected_version: Version the client last saw; a mismatch means
            another device saved in between

    Raises:
        NotFoundError: If proposal doesn't exist
        InvalidStateError: If proposal is not a draft
        InsufficientPermissionsError: If user is not the creator
        ConflictError: If ``expected_version`` is stale
        ValidationError: If allocations are malformed
    """
    proposal = _lock_proposal(proposal_id)

    if proposal.status != ProposalStatus.DRAFT:
        raise InvalidStateError(f"Only draft proposals can be edited (proposal is {proposal.status})")

    if proposal.created_by_id != user.id:
        raise InsufficientPermissionsError("Only the creator can edit this draft")

    if expected_version is not None and expected_version != proposal.version:
        raise ConflictError("This draft was changed on another device; reload and try again")

    _check_draft_allocations(allocations, proposal.house.member_ids())

    proposal.allocations.all().delete()
    _build_allocations(proposal, allocations)

    proposal.version += 1
    proposal.save(update_fields=['version', 'updated_at'])

    logger.info("Draft proposal %s updated to version %s", proposal.id, proposal.version)
    return _reload(proposal.id)


@transaction.atomic
def delete_draft(*, proposal_id: UUID, user: User) -> None:
    """
    Delete a draft and, if it held the request's claim, reopen the request.

    Raises:
        NotFoundError: If proposal doesn't exist
        InvalidStateError: If proposal is not a draft
        InsufficientPermissionsError: If user is not the creator
    """
    proposal = _lock_proposal(proposal_id)

    if proposal.status != ProposalStatus.DRAFT:
        raise InvalidStateError(f"Only draft proposals can be deleted (proposal is {proposal.status})")

    if proposal.created_by_id != user.id:
        raise InsufficientPermissionsError("Only the creator can delete this draft")

    request_id = proposal.allocation_request_id
    proposal.delete()

    other_drafts = RentProposal.objects.filter(
        allocation_request_id=request_id,
        status=ProposalStatus.DRAFT,
    ).exists()
    if request_id and not other_drafts:
        release_claim(request_id=request_id, user=user)

    logger.info("Draft proposal %s deleted by user %s", proposal_id, user.id)
