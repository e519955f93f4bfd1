from django.http import Http404
from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .models import RentProposal, ApprovalStatus
from .serializers import (
    ProposalCreateSerializer,
    ProposalUpdateSerializer,
    DeclineInputSerializer,
    RentAllocationRequestSerializer,
    RentProposalSerializer,
    RentProposalListSerializer,
    ProposalApprovalSerializer,
    PendingApprovalSerializer,
)
from .permissions import IsHouseMemberForProposal, HasAllocationInProposal

from apps.rent.services import (
    claim_house_request,
    create_draft,
    update_draft,
    delete_draft,
    submit_proposal,
    record_response,
    get_allocation_request,
    get_active_proposal,
    get_proposal_history,
    get_proposal_for_approval,
    get_pending_approvals,
    # Exceptions
    RentServiceError,
    ConflictError,
    ValidationError,
    InvalidStateError,
    NotFoundError,
    InsufficientPermissionsError,
)


ERROR_STATUS_CODES = [
    (ConflictError, status.HTTP_409_CONFLICT),
    (InvalidStateError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InsufficientPermissionsError, status.HTTP_403_FORBIDDEN),
]


def error_response(exc):
    """Convert a rent service error into an HTTP response."""
    for exc_class, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, exc_class):
            return Response(exc.to_dict(), status=status_code)
    return Response(exc.to_dict(), status=status.HTTP_400_BAD_REQUEST)


# =============================================================================
# House-scoped endpoints
# =============================================================================

@extend_schema(
    responses={200: RentAllocationRequestSerializer},
    description="Get the house's open rent allocation request (404 if none).",
    tags=['rent'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def rent_allocation_request(request, house_id):
    """GET /api/houses/{house_id}/rent-allocation-request"""
    try:
        result = get_allocation_request(house_id=house_id, user=request.user)
    except RentServiceError as e:
        return error_response(e)

    data = RentAllocationRequestSerializer(result['request']).data
    data['can_claim'] = result['can_claim']
    return Response(data)


@extend_schema(
    request=None,
    responses={200: RentAllocationRequestSerializer},
    description="Claim the drafting right for the house's pending request (409 if taken).",
    tags=['rent'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def claim_rent_allocation_request(request, house_id):
    """POST /api/houses/{house_id}/rent-allocation-request/claim"""
    try:
        allocation_request = claim_house_request(house_id=house_id, user=request.user)
    except RentServiceError as e:
        return error_response(e)

    return Response(RentAllocationRequestSerializer(allocation_request).data)


@extend_schema(
    responses={200: RentProposalSerializer},
    description="Get the house's draft or submitted proposal (404 if none).",
    tags=['rent'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def active_rent_proposal(request, house_id):
    """GET /api/houses/{house_id}/rent-proposals/active"""
    try:
        proposal = get_active_proposal(house_id=house_id, user=request.user)
    except RentServiceError as e:
        return error_response(e)

    return Response(RentProposalSerializer(proposal).data)


@extend_schema(
    methods=['GET'],
    responses={200: RentProposalListSerializer(many=True)},
    description="Proposal history for the house, newest first.",
    tags=['rent'],
)
@extend_schema(
    methods=['POST'],
    request=ProposalCreateSerializer,
    responses={201: RentProposalSerializer},
    description="Create a draft proposal; claims the pending request for the caller.",
    tags=['rent'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def house_rent_proposals(request, house_id):
    """
    GET  /api/houses/{house_id}/rent-proposals - history
    POST /api/houses/{house_id}/rent-proposals - create draft
    """
    if request.method == 'GET':
        try:
            proposals = get_proposal_history(house_id=house_id, user=request.user)
        except RentServiceError as e:
            return error_response(e)
        return Response(RentProposalListSerializer(proposals, many=True).data)

    input_serializer = ProposalCreateSerializer(data=request.data)
    input_serializer.is_valid(raise_exception=True)

    try:
        proposal = create_draft(
            house_id=house_id,
            user=request.user,
            allocations=input_serializer.validated_data['allocations'],
            rent_configuration_id=input_serializer.validated_data.get('rent_configuration_id'),
        )
    except RentServiceError as e:
        return error_response(e)

    return Response(RentProposalSerializer(proposal).data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: PendingApprovalSerializer(many=True)},
    description="Allocations waiting for the current user's decision.",
    tags=['rent'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_pending_rent_approvals(request):
    """GET /api/users/me/pending-rent-approvals"""
    allocations = get_pending_approvals(user=request.user)
    serializer = PendingApprovalSerializer(allocations, many=True)
    return Response(serializer.data)


# =============================================================================
# Proposal endpoints
# =============================================================================

class RentProposalViewSet(viewsets.GenericViewSet):
    """
    Single rent proposal operations.

    All business logic is handled by services; views translate service
    errors into HTTP responses.

    retrieve: Full proposal detail
    update: Replace a draft's allocations (creator only)
    destroy: Delete a draft (creator only)
    submit: Freeze a draft for approval (creator only)
    approval: Proposal scoped to the approving member
    approve / decline: Record the caller's decision
    """

    queryset = RentProposal.objects.with_allocations().select_related('house', 'house__landlord')
    serializer_class = RentProposalSerializer
    permission_classes = [IsAuthenticated, IsHouseMemberForProposal]

    def get_permissions(self):
        if self.action in ['approval', 'approve', 'decline']:
            return [IsAuthenticated(), IsHouseMemberForProposal(), HasAllocationInProposal()]
        return super().get_permissions()

    def get_object(self):
        try:
            return super().get_object()
        except Http404:
            raise NotFoundError("Rent proposal not found")

    def handle_exception(self, exc):
        # Service errors raised outside an action's try block (e.g. get_object)
        if isinstance(exc, RentServiceError):
            return error_response(exc)
        return super().handle_exception(exc)

    def retrieve(self, request, pk=None):
        proposal = self.get_object()
        return Response(RentProposalSerializer(proposal).data)

    @extend_schema(request=ProposalUpdateSerializer, responses={200: RentProposalSerializer})
    def update(self, request, pk=None):
        proposal = self.get_object()
        input_serializer = ProposalUpdateSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            proposal = update_draft(
                proposal_id=proposal.id,
                user=request.user,
                allocations=input_serializer.validated_data['allocations'],
                expected_version=input_serializer.validated_data.get('version'),
            )
        except RentServiceError as e:
            return error_response(e)

        return Response(RentProposalSerializer(proposal).data)

    def destroy(self, request, pk=None):
        proposal = self.get_object()
        try:
            delete_draft(proposal_id=proposal.id, user=request.user)
        except RentServiceError as e:
            return error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={200: RentProposalSerializer})
    @action(detail=True, methods=['post'])
    def submit(self, request, pk=None):
        """POST /api/rent-proposals/{id}/submit"""
        proposal = self.get_object()
        try:
            proposal = submit_proposal(proposal_id=proposal.id, user=request.user)
        except RentServiceError as e:
            return error_response(e)
        return Response(RentProposalSerializer(proposal).data)

    @extend_schema(responses={200: ProposalApprovalSerializer})
    @action(detail=True, methods=['get'])
    def approval(self, request, pk=None):
        """GET /api/rent-proposals/{id}/approval"""
        proposal = self.get_object()
        try:
            result = get_proposal_for_approval(proposal_id=proposal.id, user=request.user)
        except RentServiceError as e:
            return error_response(e)
        return Response(ProposalApprovalSerializer(result).data)

    @extend_schema(request=None, responses={200: RentProposalSerializer})
    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        """POST /api/rent-proposals/{id}/approve"""
        proposal = self.get_object()
        try:
            proposal = record_response(
                proposal_id=proposal.id,
                user=request.user,
                decision=ApprovalStatus.APPROVED,
            )
        except RentServiceError as e:
            return error_response(e)
        return Response(RentProposalSerializer(proposal).data)

    @extend_schema(request=DeclineInputSerializer, responses={200: RentProposalSerializer})
    @action(detail=True, methods=['post'])
    def decline(self, request, pk=None):
        """POST /api/rent-proposals/{id}/decline"""
        proposal = self.get_object()
        input_serializer = DeclineInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            proposal = record_response(
                proposal_id=proposal.id,
                user=request.user,
                decision=ApprovalStatus.DECLINED,
                reason=input_serializer.validated_data.get('reason', ''),
            )
        except RentServiceError as e:
            return error_response(e)
        return Response(RentProposalSerializer(proposal).data)
