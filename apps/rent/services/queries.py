"""
Read paths for the rent allocation workflow.

Reads never write, so repeated calls with no intervening change return the
same state.
"""

from uuid import UUID

from django.db.models import QuerySet

from apps.accounts.models import User
from apps.rent.models import (
    RentProposal,
    RentAllocation,
    RequestStatus,
    ProposalStatus,
    ApprovalStatus,
)

from .allocation_validation import validate_allocations
from .claim_coordination import get_house_for_member, get_open_request
from .exceptions import NotFoundError, InsufficientPermissionsError


def get_allocation_request(*, house_id: UUID, user: User) -> dict:
    """
    Get the house's open request and whether the caller may claim it.

    Returns:
        dict: ``request`` and ``can_claim``

    Raises:
        NotFoundError: If house or open request doesn't exist
        InsufficientPermissionsError: If user is not a member or landlord
    """
    house = get_house_for_member(house_id=house_id, user=user)
    request = get_open_request(house_id=house.id)
    return {
        'request': request,
        'can_claim': request.status == RequestStatus.PENDING and house.has_member(user),
    }


def get_active_proposal(*, house_id: UUID, user: User) -> RentProposal:
    """
    Get the house's draft or submitted proposal.

    Raises:
        NotFoundError: If there is none
    """
    get_house_for_member(house_id=house_id, user=user)
    proposal = (
        RentProposal.objects
        .active()
        .with_allocations()
        .filter(house_id=house_id)
        .first()
    )
    if proposal is None:
        raise NotFoundError("No active rent proposal for this house")
    return proposal


def get_proposal_history(*, house_id: UUID, user: User) -> QuerySet[RentProposal]:
    """All proposals of a house, newest first."""
    get_house_for_member(house_id=house_id, user=user)
    return (
        RentProposal.objects
        .with_allocations()
        .filter(house_id=house_id)
        .order_by('-created_at')
    )


def get_proposal(*, proposal_id: UUID, user: User) -> RentProposal:
    """
    Get a proposal visible to the caller.

    Raises:
        NotFoundError: If proposal doesn't exist
        InsufficientPermissionsError: If user is not in the proposal's house
    """
    try:
        proposal = (
            RentProposal.objects
            .with_allocations()
            .select_related('house', 'house__landlord')
            .get(id=proposal_id)
        )
    except RentProposal.DoesNotExist:
        raise NotFoundError(f"Rent proposal {proposal_id} not found")

    house = proposal.house
    if not (house.has_member(user) or house.is_landlord(user)):
        raise InsufficientPermissionsError("You must be a member of this house")
    return proposal


def get_proposal_for_approval(*, proposal_id: UUID, user: User) -> dict:
    """
    Proposal detail scoped to one approving member.

    Returns:
        dict: ``proposal``, ``user_allocation``, ``can_respond``,
        ``total_rent_amount``, ``total_allocated``

    Raises:
        NotFoundError: If proposal doesn't exist
        InsufficientPermissionsError: If user has no allocation in it
    """
    proposal = get_proposal(proposal_id=proposal_id, user=user)
    allocation = proposal.get_allocation_for(user)
    if allocation is None:
        raise InsufficientPermissionsError("You have no allocation in this proposal")

    result = validate_allocations(proposal.allocations.all(), proposal.total_rent_amount)
    return {
        'proposal': proposal,
        'user_allocation': allocation,
        'can_respond': (
            proposal.status == ProposalStatus.SUBMITTED
            and allocation.approval_status == ApprovalStatus.PENDING
        ),
        'total_rent_amount': proposal.total_rent_amount,
        'total_allocated': result['total_allocated'],
    }


def get_pending_approvals(*, user: User) -> QuerySet[RentAllocation]:
    """Allocations still waiting for the user's decision."""
    return (
        RentAllocation.objects
        .filter(
            user=user,
            approval_status=ApprovalStatus.PENDING,
            proposal__status=ProposalStatus.SUBMITTED,
        )
        .select_related(
            'proposal',
            'proposal__house',
            'proposal__created_by',
            'proposal__rent_configuration',
        )
        .order_by('proposal__submitted_at')
    )
