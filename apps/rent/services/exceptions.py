"""
Domain exceptions for the rent allocation workflow.

Exception Hierarchy:
    RentServiceError (base)
    ├── ConflictError
    ├── ValidationError
    ├── InvalidStateError
    ├── NotFoundError
    └── InsufficientPermissionsError

None of these are retried by the services. Every check runs before the
first write, so a raised exception means nothing was changed.

Usage:
    from apps.rent.services.exceptions import ConflictError

    try:
        claim_request(request_id=request_id, user=user)
    except ConflictError:
        ...  # someone else already started; refetch
"""


class RentServiceError(Exception):
    """Base exception for all rent service errors."""

    code = 'rent_error'

    def to_dict(self):
        """Error body for API responses."""
        return {'error': str(self), 'code': self.code}


class ConflictError(RentServiceError):
    """
    Raised when a claim race is lost or a house already has an active proposal.

    Callers should refresh and decide again; retrying the same call
    without a state change fails the same way.
    """

    code = 'conflict'


class ValidationError(RentServiceError):
    """
    Raised when an allocation set cannot be accepted.

    Carries the numbers the caller needs to fix the allocations:
    ``difference`` is ``total_rent_amount - total_allocated``.
    """

    code = 'validation_error'

    def __init__(self, message, *, difference=None, total_allocated=None,
                 missing_user_ids=None, unexpected_user_ids=None):
        super().__init__(message)
        self.difference = difference
        self.total_allocated = total_allocated
        self.missing_user_ids = list(missing_user_ids or [])
        self.unexpected_user_ids = list(unexpected_user_ids or [])

    def to_dict(self):
        data = super().to_dict()
        if self.difference is not None:
            data['difference'] = str(self.difference)
        if self.total_allocated is not None:
            data['total_allocated'] = str(self.total_allocated)
        if self.missing_user_ids:
            data['missing_user_ids'] = [str(user_id) for user_id in self.missing_user_ids]
        if self.unexpected_user_ids:
            data['unexpected_user_ids'] = [str(user_id) for user_id in self.unexpected_user_ids]
        return data


class InvalidStateError(RentServiceError):
    """Raised when a request or proposal is not in the state an operation needs."""

    code = 'invalid_state'


class NotFoundError(RentServiceError):
    """Raised when there is no request or proposal to act on."""

    code = 'not_found'


class InsufficientPermissionsError(RentServiceError):
    """Raised when the caller is not a house member, creator, or allocation holder."""

    code = 'insufficient_permissions'
