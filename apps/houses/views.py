from django.db.models import Q
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.models import User
from .models import House
from .serializers import (
    HouseSerializer,
    HouseListSerializer,
    HouseMemberSerializer,
    MemberInputSerializer,
)
from .permissions import IsHouseMember, IsHouseLandlord

from apps.houses.services import (
    add_member,
    remove_member,
    get_house_members,
    # Exceptions
    AlreadyMemberError,
    NotMemberError,
    MembershipLockedError,
)


class HouseViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Houses the current user lives in or manages.

    list: Get all houses of the user
    retrieve: Get a house with its members
    """

    serializer_class = HouseSerializer
    permission_classes = [IsAuthenticated, IsHouseMember]

    def get_queryset(self):
        """Return houses where user is a member or the landlord."""
        user = self.request.user
        return House.objects.filter(
            Q(memberships__user=user) | Q(landlord=user)
        ).select_related('landlord').prefetch_related('memberships__user').distinct()

    def get_serializer_class(self):
        if self.action == 'list':
            return HouseListSerializer
        return HouseSerializer

    def get_permissions(self):
        if self.action in ['add_member', 'remove_member']:
            return [IsAuthenticated(), IsHouseLandlord()]
        return super().get_permissions()

    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        """Get all members of the house."""
        house = self.get_object()
        memberships = get_house_members(house_id=house.id)
        serializer = HouseMemberSerializer(memberships, many=True)
        return Response(serializer.data)

    @action(detail=True, methods=['post'])
    def add_member(self, request, pk=None):
        """Add a tenant to the house (landlord only)."""
        house = self.get_object()
        serializer = MemberInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = User.objects.get(id=serializer.validated_data['user_id'])
        except User.DoesNotExist:
            return Response({'error': 'User not found'}, status=status.HTTP_404_NOT_FOUND)

        try:
            membership = add_member(house_id=house.id, user=user)
        except MembershipLockedError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        except AlreadyMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(HouseMemberSerializer(membership).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def remove_member(self, request, pk=None):
        """Remove a tenant from the house (landlord only)."""
        house = self.get_object()
        serializer = MemberInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            remove_member(house_id=house.id, user_id=serializer.validated_data['user_id'])
        except MembershipLockedError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(status=status.HTTP_204_NO_CONTENT)
