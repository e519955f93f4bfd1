from rest_framework import serializers
from .models import House, HouseMembership
from apps.accounts.models import User


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'email', 'first_name', 'last_name', 'display_name']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class HouseMemberSerializer(serializers.ModelSerializer):
    """Member information used to seed allocation forms."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = HouseMembership
        fields = ['id', 'user', 'joined_at']
        read_only_fields = fields


class HouseSerializer(serializers.ModelSerializer):
    """House detail with its members."""

    landlord = UserMinimalSerializer(read_only=True)
    members = HouseMemberSerializer(source='memberships', many=True, read_only=True)
    member_count = serializers.SerializerMethodField()

    class Meta:
        model = House
        fields = [
            'id',
            'name',
            'address',
            'landlord',
            'members',
            'member_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        return obj.memberships.count()


class HouseListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    member_count = serializers.SerializerMethodField()

    class Meta:
        model = House
        fields = ['id', 'name', 'address', 'member_count', 'created_at']
        read_only_fields = fields

    def get_member_count(self, obj):
        return obj.memberships.count()


class MemberInputSerializer(serializers.Serializer):
    """Validate the target user of a membership change."""

    user_id = serializers.UUIDField(required=True)
