"""
Submission gate.

``draft -> submitted`` is one-way. The allocation set is validated
against the configured rent and the house's membership at the moment of
submission; after that the allocations are frozen and every member owes
a decision.
"""

import logging
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.rent.models import (
    RentProposal,
    RequestStatus,
    ProposalStatus,
    ApprovalStatus,
)

from .allocation_validation import validate_allocations
from .approvals import derive_proposal_status, resolve_proposal
from .exceptions import (
    ValidationError,
    InvalidStateError,
    NotFoundError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def submit_proposal(*, proposal_id: UUID, user: User) -> RentProposal:
    """
    Freeze a draft and open it for approval by every member.

    When ``RENT_AUTO_APPROVE_CREATOR`` is enabled the creator's own
    allocation is approved on submission; a single-member house then
    resolves immediately.

    Args:
        proposal_id: UUID of the draft
        user: Must be the draft's creator

    Returns:
        The submitted (or already resolved) proposal

    Raises:
        NotFoundError: If proposal doesn't exist
        InvalidStateError: If proposal is not a draft or its request is no
            longer open
        InsufficientPermissionsError: If user is not the creator
        ValidationError: If amounts don't sum to the rent or the member set
            doesn't match the house
    """
    try:
        proposal = (
            RentProposal.objects
            .select_for_update()
            .select_related('rent_configuration', 'allocation_request')
            .get(id=proposal_id)
        )
    except RentProposal.DoesNotExist:
        raise NotFoundError(f"Rent proposal {proposal_id} not found")

    if proposal.status != ProposalStatus.DRAFT:
        raise InvalidStateError(f"Only draft proposals can be submitted (proposal is {proposal.status})")

    if proposal.created_by_id != user.id:
        raise InsufficientPermissionsError("Only the creator can submit this draft")

    request = proposal.allocation_request
    if request is None or request.status != RequestStatus.CLAIMED:
        raise InvalidStateError("The rent allocation request for this draft is no longer open")

    allocations = list(proposal.allocations.all())
    result = validate_allocations(
        allocations,
        proposal.rent_configuration.monthly_rent_amount,
        member_ids=proposal.house.member_ids(),
        tolerance=settings.RENT_ALLOCATION_TOLERANCE,
    )
    if not result['is_valid']:
        logger.warning("Submission of proposal %s rejected: %s", proposal.id, result['message'])
        raise ValidationError(
            result['message'],
            difference=result['difference'],
            total_allocated=result['total_allocated'],
            missing_user_ids=result['missing_user_ids'],
            unexpected_user_ids=result['unexpected_user_ids'],
        )

    now = timezone.now()
    proposal.allocations.update(
        approval_status=ApprovalStatus.PENDING,
        responded_at=None,
        updated_at=now,
    )
    if settings.RENT_AUTO_APPROVE_CREATOR:
        proposal.allocations.filter(user=user).update(
            approval_status=ApprovalStatus.APPROVED,
            responded_at=now,
        )

    proposal.status = ProposalStatus.SUBMITTED
    proposal.submitted_at = now
    proposal.save(update_fields=['status', 'submitted_at', 'updated_at'])

    logger.info("Proposal %s submitted for approval by user %s", proposal.id, user.id)

    new_status = derive_proposal_status(
        proposal.allocations.values_list('approval_status', flat=True)
    )
    if new_status != ProposalStatus.SUBMITTED:
        resolve_proposal(proposal, new_status)

    return RentProposal.objects.with_allocations().get(id=proposal.id)
