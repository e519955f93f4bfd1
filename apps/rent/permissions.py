"""
Custom permission classes for the rent app.

Object-level checks for rent proposals. Services repeat the checks that
protect state transitions; these classes gate read access and give
early 403s.
"""
from rest_framework.permissions import BasePermission


class IsHouseMemberForProposal(BasePermission):
    """
    Permission to view a rent proposal.

    Allows access if the user lives in the proposal's house or is its
    landlord.
    """

    message = 'You must be a member of this house to view this proposal.'

    def has_object_permission(self, request, view, obj):
        house = obj.house
        return house.has_member(request.user) or house.is_landlord(request.user)


class HasAllocationInProposal(BasePermission):
    """
    Permission to approve or decline a proposal.

    Allows if the user has an allocation in the proposal.
    """

    message = 'You have no allocation in this proposal.'

    def has_object_permission(self, request, view, obj):
        return obj.allocations.filter(user=request.user).exists()
