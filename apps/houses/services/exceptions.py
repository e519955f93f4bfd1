"""
Domain-specific exceptions for houses app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class HousesServiceError(Exception):
    """Base exception for all houses service errors."""
    pass


class HouseNotFoundError(HousesServiceError):
    """Raised when a house does not exist or is inaccessible."""
    pass


class AlreadyMemberError(HousesServiceError):
    """Raised when a user is added to a house they already live in."""
    pass


class NotMemberError(HousesServiceError):
    """Raised when a user tries to perform an action requiring membership."""
    pass


class MembershipLockedError(HousesServiceError):
    """Raised when membership changes while a rent proposal is in flight."""
    pass
