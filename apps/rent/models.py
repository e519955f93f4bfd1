from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from decimal import Decimal
import uuid


class RequestStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    CLAIMED = 'claimed', 'Claimed'
    FULFILLED = 'fulfilled', 'Fulfilled'
    EXPIRED = 'expired', 'Expired'


class ProposalStatus(models.TextChoices):
    DRAFT = 'draft', 'Draft'
    SUBMITTED = 'submitted', 'Submitted'
    APPROVED = 'approved', 'Approved'
    DECLINED = 'declined', 'Declined'


class ApprovalStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    DECLINED = 'declined', 'Declined'


OPEN_REQUEST_STATUSES = [RequestStatus.PENDING, RequestStatus.CLAIMED]
ACTIVE_PROPOSAL_STATUSES = [ProposalStatus.DRAFT, ProposalStatus.SUBMITTED]


class RentConfiguration(models.Model):
    """Landlord-declared monthly rent for a house. Never edited in place."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    house = models.ForeignKey(
        'houses.House',
        on_delete=models.CASCADE,
        related_name='rent_configurations'
    )
    monthly_rent_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    rent_due_day = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(31)]
    )
    currency = models.CharField(max_length=3, default='USD')
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='rent_configurations_set'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'rent_configurations'
        indexes = [
            models.Index(fields=['house', 'created_at'], name='rent_config_house_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.house.name} - {self.monthly_rent_amount} {self.currency} (due day {self.rent_due_day})"


class RentAllocationRequestQuerySet(models.QuerySet):

    def open(self):
        return self.filter(status__in=OPEN_REQUEST_STATUSES)


class RentAllocationRequest(models.Model):
    """Task asking the house's members to agree on how rent is split."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    house = models.ForeignKey(
        'houses.House',
        on_delete=models.CASCADE,
        related_name='rent_allocation_requests'
    )
    rent_configuration = models.ForeignKey(
        RentConfiguration,
        on_delete=models.PROTECT,
        related_name='allocation_requests'
    )
    status = models.CharField(
        max_length=20,
        choices=RequestStatus.choices,
        default=RequestStatus.PENDING
    )
    claimed_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='claimed_rent_requests'
    )
    claimed_at = models.DateTimeField(null=True, blank=True)
    resolved_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = RentAllocationRequestQuerySet.as_manager()

    class Meta:
        db_table = 'rent_allocation_requests'
        constraints = [
            models.UniqueConstraint(
                fields=['house'],
                condition=models.Q(status__in=['pending', 'claimed']),
                name='unique_open_rent_request_per_house',
            ),
        ]
        indexes = [
            models.Index(fields=['house', 'status'], name='rent_req_house_status_idx'),
            models.Index(fields=['claimed_by', 'status'], name='rent_req_claimed_status_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"Rent allocation for {self.house.name} ({self.status})"

    @property
    def is_open(self):
        return self.status in OPEN_REQUEST_STATUSES


class RentProposalQuerySet(models.QuerySet):

    def active(self):
        return self.filter(status__in=ACTIVE_PROPOSAL_STATUSES)

    def with_allocations(self):
        return self.select_related(
            'created_by',
            'rent_configuration',
        ).prefetch_related('allocations__user')


class RentProposal(models.Model):
    """A member's proposed split of the monthly rent."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    house = models.ForeignKey(
        'houses.House',
        on_delete=models.CASCADE,
        related_name='rent_proposals'
    )
    rent_configuration = models.ForeignKey(
        RentConfiguration,
        on_delete=models.PROTECT,
        related_name='proposals'
    )
    allocation_request = models.ForeignKey(
        RentAllocationRequest,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='proposals'
    )
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='rent_proposals_created'
    )
    status = models.CharField(
        max_length=20,
        choices=ProposalStatus.choices,
        default=ProposalStatus.DRAFT
    )

    # Bumped on every draft edit; clients may send it back to detect lost updates
    version = models.PositiveIntegerField(default=1)

    decline_reason = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    submitted_at = models.DateTimeField(null=True, blank=True)
    resolved_at = models.DateTimeField(null=True, blank=True)

    objects = RentProposalQuerySet.as_manager()

    class Meta:
        db_table = 'rent_proposals'
        constraints = [
            models.UniqueConstraint(
                fields=['house'],
                condition=models.Q(status__in=['draft', 'submitted']),
                name='unique_active_rent_proposal_per_house',
            ),
        ]
        indexes = [
            models.Index(fields=['house', 'status'], name='rent_prop_house_status_idx'),
            models.Index(fields=['created_by', 'created_at'], name='rent_prop_creator_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"Rent proposal for {self.house.name} by {self.created_by.get_display_name()} ({self.status})"

    @property
    def is_active(self):
        return self.status in ACTIVE_PROPOSAL_STATUSES

    @property
    def total_rent_amount(self):
        return self.rent_configuration.monthly_rent_amount

    def get_total_allocated(self):
        """Sum of all allocation amounts."""
        return sum(
            (allocation.amount for allocation in self.allocations.all()),
            Decimal('0.00')
        )

    def get_allocation_for(self, user):
        for allocation in self.allocations.all():
            if allocation.user_id == user.id:
                return allocation
        return None


class RentAllocation(models.Model):
    """One member's share of a proposal and their decision on it."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    proposal = models.ForeignKey(
        RentProposal,
        on_delete=models.CASCADE,
        related_name='allocations'
    )
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='rent_allocations'
    )
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    approval_status = models.CharField(
        max_length=20,
        choices=ApprovalStatus.choices,
        default=ApprovalStatus.PENDING
    )
    responded_at = models.DateTimeField(null=True, blank=True)
    decline_reason = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'rent_allocations'
        unique_together = [['proposal', 'user']]
        indexes = [
            models.Index(fields=['user', 'approval_status'], name='rent_alloc_user_status_idx'),
            models.Index(fields=['proposal', 'approval_status'], name='rent_alloc_prop_status_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.user.get_display_name()} pays {self.amount} ({self.approval_status})"
