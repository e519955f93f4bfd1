# ==========================================
# apps/rent/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from .models import (
    RentConfiguration,
    RentAllocationRequest,
    RentProposal,
    RentAllocation,
    ProposalStatus,
    ApprovalStatus,
)


STATUS_COLORS = {
    'pending': ('#fffbeb', '#f59e0b'),
    'claimed': ('#eff6ff', '#3b82f6'),
    'fulfilled': ('#ecfdf5', '#10b981'),
    'expired': ('#f9fafb', '#6b7280'),
    ProposalStatus.DRAFT: ('#f9fafb', '#6b7280'),
    ProposalStatus.SUBMITTED: ('#eff6ff', '#3b82f6'),
    ProposalStatus.APPROVED: ('#ecfdf5', '#10b981'),
    ProposalStatus.DECLINED: ('#fef2f2', '#ef4444'),
}


def status_badge(value, label):
    """Render a workflow status as a colored badge."""
    bg, fg = STATUS_COLORS.get(value, ('#ccc', '#666'))
    return format_html(
        '<span style="background: {}; color: {}; padding: 3px 8px; '
        'border-radius: 10px; font-size: 11px;">{}</span>',
        bg, fg, label
    )


class RentAllocationInline(admin.TabularInline):
    """Inline admin for allocations within a proposal."""
    model = RentAllocation
    extra = 0
    fields = ['user', 'amount', 'approval_badge', 'responded_at', 'decline_reason']
    readonly_fields = ['approval_badge', 'responded_at']

    def approval_badge(self, obj):
        return status_badge(obj.approval_status, obj.get_approval_status_display())
    approval_badge.short_description = 'Decision'

    def has_add_permission(self, request, obj=None):
        """Allocations are created by the draft service."""
        return False

    def get_readonly_fields(self, request, obj=None):
        # Submitted allocations are frozen
        if obj is not None and obj.status != ProposalStatus.DRAFT:
            return ['user', 'amount', 'approval_badge', 'responded_at', 'decline_reason']
        return super().get_readonly_fields(request, obj)


@admin.register(RentConfiguration)
class RentConfigurationAdmin(admin.ModelAdmin):
    list_display = ['house', 'monthly_rent_amount', 'currency', 'rent_due_day', 'created_by', 'created_at']
    list_filter = ['currency', 'created_at']
    search_fields = ['house__name']
    readonly_fields = ['house', 'monthly_rent_amount', 'rent_due_day', 'currency', 'created_by', 'created_at']
    ordering = ['-created_at']

    def has_add_permission(self, request):
        """Rent is set through the open_rent_request command or service."""
        return False


@admin.register(RentAllocationRequest)
class RentAllocationRequestAdmin(admin.ModelAdmin):
    list_display = ['house', 'get_rent', 'status_display', 'claimed_by', 'claimed_at', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['house__name', 'claimed_by__email']
    readonly_fields = [
        'house',
        'rent_configuration',
        'status',
        'claimed_by',
        'claimed_at',
        'resolved_at',
        'created_at',
        'updated_at',
    ]
    ordering = ['-created_at']

    def get_rent(self, obj):
        return obj.rent_configuration.monthly_rent_amount
    get_rent.short_description = 'Rent'

    def status_display(self, obj):
        return status_badge(obj.status, obj.get_status_display())
    status_display.short_description = 'Status'
    status_display.admin_order_field = 'status'

    def has_add_permission(self, request):
        return False


@admin.register(RentProposal)
class RentProposalAdmin(admin.ModelAdmin):
    """
    Admin interface for rent proposals.

    State transitions go through the services; the admin is for
    inspection only.
    """

    list_display = [
        'house',
        'created_by',
        'status_display',
        'approval_progress',
        'created_at',
        'submitted_at',
        'resolved_at',
    ]
    list_filter = ['status', 'created_at']
    search_fields = ['house__name', 'created_by__email']
    readonly_fields = [
        'house',
        'rent_configuration',
        'allocation_request',
        'created_by',
        'status',
        'version',
        'decline_reason',
        'created_at',
        'updated_at',
        'submitted_at',
        'resolved_at',
    ]
    inlines = [RentAllocationInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def status_display(self, obj):
        return status_badge(obj.status, obj.get_status_display())
    status_display.short_description = 'Status'
    status_display.admin_order_field = 'status'

    def approval_progress(self, obj):
        """Approved allocations out of total."""
        allocations = obj.allocations.all()
        approved = sum(1 for a in allocations if a.approval_status == ApprovalStatus.APPROVED)
        return f"{approved}/{len(allocations)}"
    approval_progress.short_description = 'Approved'

    def has_add_permission(self, request):
        return False

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('house', 'created_by').prefetch_related('allocations')
