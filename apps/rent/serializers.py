from decimal import Decimal

from rest_framework import serializers

from apps.houses.serializers import UserMinimalSerializer
from .models import (
    RentConfiguration,
    RentAllocationRequest,
    RentProposal,
    RentAllocation,
)
from .services.allocation_validation import validate_allocations


# =============================================================================
# Input Serializers
# =============================================================================

class AllocationInputSerializer(serializers.Serializer):
    """One member's share as sent by the client."""

    user_id = serializers.UUIDField()
    amount = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.00'),
    )


class ProposalCreateSerializer(serializers.Serializer):
    """
    Validate input for creating a draft.

    Fields:
        rent_configuration_id (UUID): Configuration the split was drafted for
        allocations (list): ``{user_id, amount}`` entries
    """

    rent_configuration_id = serializers.UUIDField(required=False)
    allocations = AllocationInputSerializer(many=True, allow_empty=True)


class ProposalUpdateSerializer(serializers.Serializer):
    """
    Validate input for replacing a draft's allocations.

    Fields:
        allocations (list): Full allocation set
        version (int): Optional version last seen by the client
    """

    allocations = AllocationInputSerializer(many=True, allow_empty=True)
    version = serializers.IntegerField(required=False, min_value=1)


class DeclineInputSerializer(serializers.Serializer):
    """Optional reason attached to a decline."""

    reason = serializers.CharField(max_length=1000, required=False, allow_blank=True)


# =============================================================================
# Output Serializers
# =============================================================================

class RentConfigurationSerializer(serializers.ModelSerializer):

    class Meta:
        model = RentConfiguration
        fields = [
            'id',
            'house',
            'monthly_rent_amount',
            'rent_due_day',
            'currency',
            'created_at',
        ]
        read_only_fields = fields


class RentAllocationRequestSerializer(serializers.ModelSerializer):
    """Open request with the rent it asks members to split."""

    rent_configuration = RentConfigurationSerializer(read_only=True)
    claimed_by = UserMinimalSerializer(read_only=True)

    class Meta:
        model = RentAllocationRequest
        fields = [
            'id',
            'house',
            'rent_configuration',
            'status',
            'claimed_by',
            'claimed_at',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class RentAllocationSerializer(serializers.ModelSerializer):

    user = UserMinimalSerializer(read_only=True)
    user_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = RentAllocation
        fields = [
            'id',
            'user',
            'user_id',
            'amount',
            'approval_status',
            'responded_at',
            'decline_reason',
        ]
        read_only_fields = fields


class RentProposalSerializer(serializers.ModelSerializer):
    """Full proposal detail including the live allocation check."""

    created_by = UserMinimalSerializer(read_only=True)
    allocations = RentAllocationSerializer(many=True, read_only=True)
    total_rent_amount = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    allocation_check = serializers.SerializerMethodField()

    class Meta:
        model = RentProposal
        fields = [
            'id',
            'house',
            'rent_configuration',
            'allocation_request',
            'created_by',
            'status',
            'version',
            'total_rent_amount',
            'allocations',
            'allocation_check',
            'decline_reason',
            'created_at',
            'updated_at',
            'submitted_at',
            'resolved_at',
        ]
        read_only_fields = fields

    def get_allocation_check(self, obj):
        result = validate_allocations(obj.allocations.all(), obj.total_rent_amount)
        return {
            'is_valid': result['is_valid'],
            'total_allocated': str(result['total_allocated']),
            'difference': str(result['difference']),
            'message': result['message'],
        }


class RentProposalListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for proposal history."""

    created_by = UserMinimalSerializer(read_only=True)
    total_rent_amount = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)

    class Meta:
        model = RentProposal
        fields = [
            'id',
            'created_by',
            'status',
            'total_rent_amount',
            'created_at',
            'submitted_at',
            'resolved_at',
        ]
        read_only_fields = fields


class ProposalApprovalSerializer(serializers.Serializer):
    """Proposal as seen by a member deciding on their share."""

    proposal = RentProposalSerializer()
    user_allocation = RentAllocationSerializer()
    can_respond = serializers.BooleanField()
    total_rent_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    total_allocated = serializers.DecimalField(max_digits=10, decimal_places=2)


class PendingApprovalSerializer(serializers.ModelSerializer):
    """An allocation awaiting the caller's decision."""

    proposal_id = serializers.UUIDField(source='proposal.id', read_only=True)
    house_id = serializers.UUIDField(source='proposal.house_id', read_only=True)
    house_name = serializers.CharField(source='proposal.house.name', read_only=True)
    proposed_by = UserMinimalSerializer(source='proposal.created_by', read_only=True)
    total_rent_amount = serializers.DecimalField(
        source='proposal.total_rent_amount',
        max_digits=10,
        decimal_places=2,
        read_only=True,
    )
    submitted_at = serializers.DateTimeField(source='proposal.submitted_at', read_only=True)

    class Meta:
        model = RentAllocation
        fields = [
            'id',
            'proposal_id',
            'house_id',
            'house_name',
            'proposed_by',
            'amount',
            'total_rent_amount',
            'approval_status',
            'submitted_at',
        ]
        read_only_fields = fields
