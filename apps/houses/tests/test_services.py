"""
Service layer tests for houses app.

Membership feeds rent allocation, so changes are refused while a rent
proposal is in progress.
"""

import pytest
from uuid import uuid4

from apps.houses.services import (
    get_house_by_id,
    add_member,
    remove_member,
    get_house_members,
    HouseNotFoundError,
    AlreadyMemberError,
    NotMemberError,
    MembershipLockedError,
)
from apps.rent.models import ApprovalStatus
from apps.rent.services import submit_proposal, record_response, delete_draft


@pytest.mark.django_db
class TestMembershipManagement:
    """Tests for membership_management.py service functions."""

    def test_get_house_by_id(self, house):
        assert get_house_by_id(house_id=house.id) == house

    def test_get_missing_house(self, db):
        with pytest.raises(HouseNotFoundError):
            get_house_by_id(house_id=uuid4())

    def test_add_member(self, house, newcomer):
        membership = add_member(house_id=house.id, user=newcomer)

        assert membership.house == house
        assert house.has_member(newcomer)
        assert newcomer.id in house.member_ids()

    def test_add_existing_member(self, house, tenant):
        with pytest.raises(AlreadyMemberError):
            add_member(house_id=house.id, user=tenant)

    def test_add_member_missing_house(self, newcomer):
        with pytest.raises(HouseNotFoundError):
            add_member(house_id=uuid4(), user=newcomer)

    def test_remove_member(self, house, tenant):
        remove_member(house_id=house.id, user_id=tenant.id)

        assert not house.has_member(tenant)

    def test_remove_non_member(self, house, newcomer):
        with pytest.raises(NotMemberError):
            remove_member(house_id=house.id, user_id=newcomer.id)

    def test_get_house_members(self, house, tenant, newcomer):
        add_member(house_id=house.id, user=newcomer)

        members = list(get_house_members(house_id=house.id))

        assert [m.user for m in members] == [tenant, newcomer]

    def test_get_members_missing_house(self, db):
        with pytest.raises(HouseNotFoundError):
            get_house_members(house_id=uuid4())


@pytest.mark.django_db
class TestMembershipLock:
    """Membership is frozen while a draft or submitted proposal exists."""

    def test_add_blocked_by_draft(self, house, draft, newcomer):
        with pytest.raises(MembershipLockedError):
            add_member(house_id=house.id, user=newcomer)

        assert not house.has_member(newcomer)

    def test_remove_blocked_by_draft(self, house, draft, tenant):
        with pytest.raises(MembershipLockedError):
            remove_member(house_id=house.id, user_id=tenant.id)

        assert house.has_member(tenant)

    def test_remove_blocked_by_submitted_proposal(self, house, draft, tenant):
        submit_proposal(proposal_id=draft.id, user=tenant)

        with pytest.raises(MembershipLockedError):
            remove_member(house_id=house.id, user_id=tenant.id)

    def test_unlocked_after_draft_deleted(self, house, draft, tenant, newcomer):
        delete_draft(proposal_id=draft.id, user=tenant)

        add_member(house_id=house.id, user=newcomer)

        assert house.has_member(newcomer)

    def test_unlocked_after_resolution(self, house, draft, tenant, newcomer):
        submit_proposal(proposal_id=draft.id, user=tenant)
        record_response(proposal_id=draft.id, user=tenant, decision=ApprovalStatus.APPROVED)

        add_member(house_id=house.id, user=newcomer)

        assert house.has_member(newcomer)
