# ==========================================
# apps/houses/models.py
# ==========================================

from django.db import models
import uuid


class House(models.Model):
    """Shared household whose members split rent."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    address = models.CharField(max_length=300, blank=True)
    landlord = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='managed_houses'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'houses'
        indexes = [
            models.Index(fields=['landlord', 'created_at'], name='houses_landlord_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def has_member(self, user):
        return self.memberships.filter(user=user).exists()

    def member_ids(self):
        """Return the set of current member user IDs."""
        return set(self.memberships.values_list('user_id', flat=True))

    def is_landlord(self, user):
        return self.landlord_id is not None and self.landlord_id == user.id


class HouseMembership(models.Model):
    """Tenant membership in a house."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='house_memberships')
    house = models.ForeignKey(House, on_delete=models.CASCADE, related_name='memberships')
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'house_memberships'
        unique_together = [['user', 'house']]
        indexes = [
            models.Index(fields=['user', 'joined_at'], name='house_mem_user_joined_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user.get_display_name()} in {self.house.name}"
