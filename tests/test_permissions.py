from types import SimpleNamespace

import pytest

from src.utils.permissions import is_admin, is_master_admin, user_is_admin


class TestRoles:

    @pytest.mark.parametrize("role,expected", [("member", False), ("admin", True), ("master", True), (None, False)])
    def test_is_admin_by_role(self, role, expected, monkeypatch):
        monkeypatch.delenv("MASTER_ADMIN_EMAILS", raising=False)
        assert is_admin(role) is expected

    def test_only_master_role_is_master(self, monkeypatch):
        monkeypatch.delenv("MASTER_ADMIN_EMAILS", raising=False)
        assert is_master_admin("master") is True
        assert is_master_admin("admin", "boss@example.com") is False

    def test_master_by_configured_email(self, monkeypatch):
        monkeypatch.setenv("MASTER_ADMIN_EMAILS", "boss@example.com, ceo@example.com")
        assert is_master_admin("member", "ceo@example.com") is True
        assert is_admin("member", "boss@example.com") is True
        assert is_admin("member", "someone@example.com") is False

    def test_user_is_admin(self, monkeypatch):
        monkeypatch.delenv("MASTER_ADMIN_EMAILS", raising=False)
        assert user_is_admin(None) is False
        assert user_is_admin(SimpleNamespace(role="admin", email="a@example.com")) is True
        assert user_is_admin(SimpleNamespace(role="member", email="m@example.com")) is False
