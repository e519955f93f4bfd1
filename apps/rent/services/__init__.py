"""
Rent app services layer.

Services own every state change of the rent allocation workflow:
claiming a request, drafting, submitting and voting on proposals.
All state-changing operations run in transactions and guard their writes
with conditional updates or row locks.
"""

from .exceptions import (
    RentServiceError,
    ConflictError,
    ValidationError,
    InvalidStateError,
    NotFoundError,
    InsufficientPermissionsError,
)

from .allocation_validation import (
    validate_allocations,
    format_rent_amount,
)

from .claim_coordination import (
    get_open_request,
    claim_request,
    claim_house_request,
    release_claim,
)

from .proposal_drafts import (
    create_draft,
    update_draft,
    delete_draft,
)

from .submission import (
    submit_proposal,
)

from .approvals import (
    record_response,
    derive_proposal_status,
)

from .rent_configuration import (
    set_monthly_rent,
)

from .queries import (
    get_allocation_request,
    get_active_proposal,
    get_proposal_history,
    get_proposal,
    get_proposal_for_approval,
    get_pending_approvals,
)


__all__ = [
    # Exceptions
    'RentServiceError',
    'ConflictError',
    'ValidationError',
    'InvalidStateError',
    'NotFoundError',
    'InsufficientPermissionsError',

    # Allocation Validation
    'validate_allocations',
    'format_rent_amount',

    # Claim Coordination
    'get_open_request',
    'claim_request',
    'claim_house_request',
    'release_claim',

    # Draft Store
    'create_draft',
    'update_draft',
    'delete_draft',

    # Submission Gate
    'submit_proposal',

    # Approval Aggregation
    'record_response',
    'derive_proposal_status',

    # Rent Configuration
    'set_monthly_rent',

    # Queries
    'get_allocation_request',
    'get_active_proposal',
    'get_proposal_history',
    'get_proposal',
    'get_proposal_for_approval',
    'get_pending_approvals',
]
