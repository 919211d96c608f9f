"""Tests for the pure helpers the services are built on (no database needed)."""

from datetime import datetime
from types import SimpleNamespace

from src.models import UserBadge
from src.services.auth_service import AuthService
from src.services.badge_service import select_user_badges
from src.services.comment_service import collect_descendant_ids
from src.services.post_service import toggle_like_in_place
from src.services.registration_service import clean_custom_field_responses
from src.services.user_service import can_change_role


class TestCustomFieldResponses:

    def test_blank_answers_are_dropped(self):
        cleaned = clean_custom_field_responses({"company": "  Acme ", "note": "   ", "role": ""})
        assert cleaned == {"company": "Acme"}

    def test_none_becomes_empty(self):
        assert clean_custom_field_responses(None) == {}


class TestToggleLike:

    def test_like_then_unlike(self):
        post = SimpleNamespace(likes=[], likeCount=0)
        assert toggle_like_in_place(post, "u1") is True
        assert post.likes == ["u1"] and post.likeCount == 1

        assert toggle_like_in_place(post, "u1") is False
        assert post.likes == [] and post.likeCount == 0

    def test_count_never_negative(self):
        post = SimpleNamespace(likes=["u1"], likeCount=0)
        toggle_like_in_place(post, "u1")
        assert post.likeCount == 0


class TestDescendants:

    def test_collects_nested_replies_only(self):
        comments = [
            {"id": "A", "parentId": None},
            {"id": "B", "parentId": "A"},
            {"id": "C", "parentId": "B"},
            {"id": "D", "parentId": None},
            {"id": "E", "parentId": "D"},
        ]
        assert collect_descendant_ids(comments, "A") == {"B", "C"}
        assert collect_descendant_ids(comments, "C") == set()


class TestSelectUserBadges:

    def setup_method(self):
        self.badges_by_id = {
            "b1": SimpleNamespace(name="Speaker", icon="🎤", category="activity", isActive=True),
            "b2": SimpleNamespace(name="Host", icon="🏠", category="activity", isActive=True),
            "b3": SimpleNamespace(name="Retired", icon="💤", category="legacy", isActive=False),
        }
        self.user_badges = [
            UserBadge(badgeId="b1", status="approved"),
            UserBadge(badgeId="b2", status="pending"),
            UserBadge(badgeId="b3", status="approved"),
            UserBadge(badgeId="b1-hidden", status="approved"),
        ]

    def test_public_view_shows_approved_active_visible(self):
        badges = select_user_badges(self.user_badges, self.badges_by_id)
        assert [b.badgeId for b in badges] == ["b1"]

    def test_owner_view_includes_pending_and_inactive(self):
        badges = select_user_badges(self.user_badges, self.badges_by_id, include_hidden=True)
        assert [b.badgeId for b in badges] == ["b1", "b2", "b3"]

    def test_hidden_badge_is_not_public(self):
        user_badges = [UserBadge(badgeId="b1", status="approved", isVisible=False)]
        assert select_user_badges(user_badges, self.badges_by_id) == []


class TestRoleChanges:

    def test_admin_can_promote_member(self, monkeypatch):
        monkeypatch.delenv("MASTER_ADMIN_EMAILS", raising=False)
        actor = SimpleNamespace(role="admin", email="a@example.com")
        assert can_change_role(actor, "member", "admin") is True

    def test_admin_cannot_touch_master(self, monkeypatch):
        monkeypatch.delenv("MASTER_ADMIN_EMAILS", raising=False)
        actor = SimpleNamespace(role="admin", email="a@example.com")
        assert can_change_role(actor, "member", "master") is False
        assert can_change_role(actor, "master", "member") is False

    def test_master_can_grant_master(self):
        actor = SimpleNamespace(role="master", email="m@example.com")
        assert can_change_role(actor, "admin", "master") is True

    def test_member_cannot_change_roles(self):
        actor = SimpleNamespace(role="member", email="x@example.com")
        assert can_change_role(actor, "member", "admin") is False


class TestDailyLoginBonus:

    def test_first_login_is_due(self):
        assert AuthService.is_bonus_due(None, datetime(2024, 12, 19, 9)) is True

    def test_same_day_is_not_due(self):
        assert AuthService.is_bonus_due(datetime(2024, 12, 19, 1), datetime(2024, 12, 19, 23)) is False

    def test_next_day_is_due(self):
        assert AuthService.is_bonus_due(datetime(2024, 12, 19, 23), datetime(2024, 12, 20, 0, 5)) is True
