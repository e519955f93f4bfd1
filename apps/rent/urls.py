from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'rent'

# Paths follow the mobile client's API surface (no trailing slashes)
router = DefaultRouter(trailing_slash=False)
router.register(r'rent-proposals', views.RentProposalViewSet, basename='rent-proposal')

urlpatterns = [
    # House-scoped endpoints
    # GET    /api/houses/{house_id}/rent-allocation-request        - Current open request
    # POST   /api/houses/{house_id}/rent-allocation-request/claim  - Claim drafting right
    # GET    /api/houses/{house_id}/rent-proposals/active          - Draft/submitted proposal
    # GET    /api/houses/{house_id}/rent-proposals                 - Proposal history
    # POST   /api/houses/{house_id}/rent-proposals                 - Create draft
    path(
        'houses/<uuid:house_id>/rent-allocation-request',
        views.rent_allocation_request,
        name='rent-allocation-request',
    ),
    path(
        'houses/<uuid:house_id>/rent-allocation-request/claim',
        views.claim_rent_allocation_request,
        name='rent-allocation-request-claim',
    ),
    path(
        'houses/<uuid:house_id>/rent-proposals/active',
        views.active_rent_proposal,
        name='active-rent-proposal',
    ),
    path(
        'houses/<uuid:house_id>/rent-proposals',
        views.house_rent_proposals,
        name='house-rent-proposals',
    ),

    # GET    /api/users/me/pending-rent-approvals                  - Caller's pending decisions
    path(
        'users/me/pending-rent-approvals',
        views.my_pending_rent_approvals,
        name='my-pending-rent-approvals',
    ),

    # Proposal ViewSet routes
    # GET    /api/rent-proposals/{id}            - Full detail
    # PUT    /api/rent-proposals/{id}            - Update draft
    # DELETE /api/rent-proposals/{id}            - Delete draft
    # POST   /api/rent-proposals/{id}/submit     - Submit for approval
    # GET    /api/rent-proposals/{id}/approval   - Detail for approving member
    # POST   /api/rent-proposals/{id}/approve    - Approve own allocation
    # POST   /api/rent-proposals/{id}/decline    - Decline own allocation
    path('', include(router.urls)),
]
