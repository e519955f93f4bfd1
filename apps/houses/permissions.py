from rest_framework import permissions


class IsHouseMember(permissions.BasePermission):
    """
    Permission: User must live in the house (or be its landlord).
    """

    message = 'You must be a member of this house.'

    def has_object_permission(self, request, view, obj):
        # obj is a House instance
        return obj.has_member(request.user) or obj.is_landlord(request.user)


class IsHouseLandlord(permissions.BasePermission):
    """
    Permission: User must be the house's landlord.
    """

    message = 'Only the landlord can manage this house.'

    def has_object_permission(self, request, view, obj):
        # obj is a House instance
        return obj.is_landlord(request.user)
