"""
HTTP-level tests. Service calls are patched so no MongoDB is needed.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

from src.models import Comment
from src.schemas import EventPublic
from src.services import CommentService, EventService, RegistrationService, UserService


def _event_public(short_code="121901"):
    return EventPublic(
        id="64e000000000000000000001",
        title="Founders Night",
        description="Networking",
        eventDate="2024-12-19T19:00:00",
        createdBy="64b000000000000000000001",
        shortCode=short_code,
        shortUrl=f"/e/{short_code}",
        createdAt="2024-12-01T09:00:00",
    )


class TestShortUrl:

    def test_known_code_resolves_event(self, client):
        event = SimpleNamespace(id="64e000000000000000000001")
        with patch.object(EventService, "get_event_by_short_code", new=AsyncMock(return_value=event)) as lookup, \
                patch.object(EventService, "to_public", new=AsyncMock(return_value=_event_public())):
            response = client.get("/e/121901")

        assert response.status_code == 200
        assert response.json()["shortCode"] == "121901"
        lookup.assert_awaited_once_with("121901")

    def test_unknown_code_is_404(self, client):
        with patch.object(EventService, "get_event_by_short_code", new=AsyncMock(return_value=None)):
            response = client.get("/e/abc")
        assert response.status_code == 404


class TestComments:

    def test_tree_endpoint_nests_replies(self, client, comment_factory):
        stored = [comment_factory(comment_id="A"), comment_factory(comment_id="B", parent_id="A", content="답변")]
        query = SimpleNamespace(to_list=AsyncMock(return_value=stored))
        with patch.object(Comment, "find", return_value=query):
            response = client.get("/api/posts/p1/comments")

        assert response.status_code == 200
        body = response.json()
        assert [c["id"] for c in body] == ["A"]
        assert body[0]["children"][0]["id"] == "B"
        assert body[0]["children"][0]["parentId"] == "A"

    def test_reply_passes_parent_id(self, client, login_as, member, comment_factory):
        login_as(member)
        reply = comment_factory(comment_id="B", parent_id="A", content="답변")
        with patch.object(CommentService, "create_comment", new=AsyncMock(return_value=reply)) as create:
            response = client.post("/api/posts/p1/comments", json={"content": " 답변 ", "parentId": "A"})

        assert response.status_code == 201
        assert response.json()["parentId"] == "A"
        create.assert_awaited_once_with(post_id="p1", author_id=member.id, content="답변", parent_id="A")

    def test_blank_comment_is_400(self, client, login_as, member):
        login_as(member)
        response = client.post("/api/posts/p1/comments", json={"content": "   "})
        assert response.status_code == 400
        assert "content" in response.json()["detail"]

    def test_comment_requires_login(self, client):
        response = client.post("/api/posts/p1/comments", json={"content": "hello"})
        assert response.status_code == 401

    def test_deleting_someone_elses_comment_is_403(self, client, login_as, member):
        login_as(member)
        with patch.object(CommentService, "delete_comment", new=AsyncMock(side_effect=PermissionError("nope"))):
            response = client.delete("/api/comments/c1")
        assert response.status_code == 403


class TestRegistration:

    def test_guest_without_contact_is_400(self, client):
        response = client.post("/api/events/e1/register", json={"guestName": "Lee"})
        assert response.status_code == 400

    def test_guest_registration(self, client):
        registration = SimpleNamespace(id="r1")
        with patch.object(RegistrationService, "register_guest_for_event", new=AsyncMock(return_value=registration)) as register:
            response = client.post("/api/events/e1/register", json={"guestName": "Lee", "guestContact": "010-1234-5678"})

        assert response.status_code == 201
        assert response.json() == {"success": True, "registrationId": "r1"}
        assert register.await_args.args[:3] == ("e1", "Lee", "010-1234-5678")

    def test_full_event_is_400(self, client, login_as, member):
        login_as(member)
        with patch.object(RegistrationService, "register_user_for_event", new=AsyncMock(side_effect=ValueError("Event is full"))):
            response = client.post("/api/events/e1/register", json={})
        assert response.status_code == 400
        assert response.json()["detail"] == "Event is full"


class TestAdmin:

    def test_member_is_forbidden(self, client, login_as, member):
        login_as(member)
        response = client.put("/api/admin/users/u1/role", json={"role": "admin"})
        assert response.status_code == 403

    def test_admin_changes_role(self, client, login_as, admin):
        login_as(admin)
        with patch.object(UserService, "update_user_role", new=AsyncMock(return_value=SimpleNamespace(role="admin"))):
            response = client.put("/api/admin/users/u1/role", json={"role": "admin"})
        assert response.status_code == 200
        assert response.json() == {"success": True, "role": "admin"}


def test_root(client):
    assert client.get("/").json() == {"message": "Máy chủ đang chạy"}


class TestAuth:

    def test_access_token_cannot_refresh(self, client):
        from src.services.jwt_service import create_access_token

        token = create_access_token({"sub": "64b000000000000000000001"})
        response = client.post("/api/auth/refresh", json={"refresh_token": token})
        assert response.status_code == 401

    def test_bad_bearer_token_is_401(self, client):
        response = client.get("/api/users/me", headers={"Authorization": "Bearer nonsense"})
        assert response.status_code == 401
