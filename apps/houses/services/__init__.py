"""
Houses app services layer.

Houses and their members are supplied to the rent allocation workflow;
state-changing operations lock the house row.
"""

from .exceptions import (
    HousesServiceError,
    HouseNotFoundError,
    AlreadyMemberError,
    NotMemberError,
    MembershipLockedError,
)

from .membership_management import (
    get_house_by_id,
    add_member,
    remove_member,
    get_house_members,
)


__all__ = [
    # Exceptions
    'HousesServiceError',
    'HouseNotFoundError',
    'AlreadyMemberError',
    'NotMemberError',
    'MembershipLockedError',

    # Membership Management
    'get_house_by_id',
    'add_member',
    'remove_member',
    'get_house_members',
]
