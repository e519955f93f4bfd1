# ==========================================
# apps/houses/admin.py
# ==========================================

from django.contrib import admin
from apps.houses.models import House, HouseMembership


class HouseMembershipInline(admin.TabularInline):
    """Inline admin for house memberships."""
    model = HouseMembership
    extra = 0
    fields = ['user', 'joined_at']
    readonly_fields = ['joined_at']


@admin.register(House)
class HouseAdmin(admin.ModelAdmin):
    """Admin interface for Houses."""

    list_display = [
        'name',
        'landlord',
        'member_count',
        'created_at'
    ]
    list_filter = ['created_at']
    search_fields = ['name', 'address', 'landlord__email']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [HouseMembershipInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'address', 'landlord')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def member_count(self, obj):
        """Show number of members."""
        return obj.memberships.count()
    member_count.short_description = 'Members'


@admin.register(HouseMembership)
class HouseMembershipAdmin(admin.ModelAdmin):
    """Admin interface for House Memberships."""

    list_display = ['user', 'house', 'joined_at']
    search_fields = ['user__email', 'house__name']
    readonly_fields = ['joined_at']
    ordering = ['-joined_at']
