"""
Approval aggregation.

Each member approves or declines their own allocation once. After every
vote the proposal status is recomputed from a fresh read of all
allocation statuses under the proposal's row lock:

    any declined      -> declined (terminal, request reopens)
    all approved      -> approved (terminal, request fulfilled)
    otherwise         -> submitted
"""

import logging
from typing import Iterable
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.rent.models import (
    RentProposal,
    RentAllocation,
    ProposalStatus,
    ApprovalStatus,
)

from .claim_coordination import fulfill_request, release_claim
from .exceptions import (
    ValidationError,
    InvalidStateError,
    NotFoundError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


DECISIONS = (ApprovalStatus.APPROVED, ApprovalStatus.DECLINED)


def derive_proposal_status(approval_statuses: Iterable[str]) -> str:
    """
    Derive a submitted proposal's status from its allocations' statuses.

    A single decline decides the outcome even while others are pending.
    """
    statuses = list(approval_statuses)
    if any(status == ApprovalStatus.DECLINED for status in statuses):
        return ProposalStatus.DECLINED
    if statuses and all(status == ApprovalStatus.APPROVED for status in statuses):
        return ProposalStatus.APPROVED
    return ProposalStatus.SUBMITTED


def resolve_proposal(proposal: RentProposal, status: str, decline_reason: str = '') -> None:
    """Apply a terminal status and move the allocation request along with it."""
    proposal.status = status
    proposal.resolved_at = timezone.now()
    update_fields = ['status', 'resolved_at', 'updated_at']
    if status == ProposalStatus.DECLINED:
        proposal.decline_reason = decline_reason
        update_fields.append('decline_reason')
    proposal.save(update_fields=update_fields)

    if proposal.allocation_request_id:
        if status == ProposalStatus.APPROVED:
            fulfill_request(request_id=proposal.allocation_request_id)
        else:
            release_claim(request_id=proposal.allocation_request_id)

    logger.info("Proposal %s resolved as %s", proposal.id, status)


@transaction.atomic
def record_response(
    *,
    proposal_id: UUID,
    user: User,
    decision: str,
    reason: str = ''
) -> RentProposal:
    """
    Record a member's decision on their own allocation.

    Args:
        proposal_id: UUID of the submitted proposal
        user: Member responding
        decision: ``approved`` or ``declined``
        reason: Optional decline reason

    Returns:
        The proposal with its recomputed status

    Raises:
        ValidationError: If decision is not approved/declined
        NotFoundError: If proposal doesn't exist
        InvalidStateError: If proposal is not submitted or user already voted
        InsufficientPermissionsError: If user has no allocation in the proposal
    """
    if decision not in DECISIONS:
        raise ValidationError(f"Invalid decision: {decision}")

    try:
        proposal = RentProposal.objects.select_for_update().get(id=proposal_id)
    except RentProposal.DoesNotExist:
        raise NotFoundError(f"Rent proposal {proposal_id} not found")

    if proposal.status != ProposalStatus.SUBMITTED:
        logger.warning(
            "Response from user %s on %s proposal %s rejected",
            user.id, proposal.status, proposal.id,
        )
        raise InvalidStateError(f"This proposal is no longer open for responses (proposal is {proposal.status})")

    allocation = RentAllocation.objects.filter(proposal=proposal, user=user).first()
    if allocation is None:
        raise InsufficientPermissionsError("You have no allocation in this proposal")

    now = timezone.now()
    recorded = (
        RentAllocation.objects
        .filter(id=allocation.id, approval_status=ApprovalStatus.PENDING)
        .update(
            approval_status=decision,
            responded_at=now,
            decline_reason=reason if decision == ApprovalStatus.DECLINED else '',
            updated_at=now,
        )
    )
    if not recorded:
        raise InvalidStateError("You have already responded to this proposal")

    logger.info("User %s %s proposal %s", user.id, decision, proposal.id)

    statuses = proposal.allocations.values_list('approval_status', flat=True)
    new_status = derive_proposal_status(statuses)
    if new_status != ProposalStatus.SUBMITTED:
        resolve_proposal(proposal, new_status, decline_reason=reason)

    return RentProposal.objects.with_allocations().get(id=proposal.id)
