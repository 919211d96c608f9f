"""
Shared pytest fixtures.

Router tests run against the real FastAPI app without a database: the startup
hook (init_db) only runs inside a TestClient context manager, so clients here
are created without one and service calls are patched per test.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ALGORITHM", "HS256")

from datetime import datetime
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from src.main import app
from src.security import get_current_user, get_current_user_id, get_optional_user


def make_user(user_id="64b000000000000000000001", role="member", **overrides):
    """Build a lightweight stand-in for a User document."""
    fields = {
        "id": user_id,
        "username": f"user{user_id[-2:]}",
        "email": f"user{user_id[-2:]}@example.com",
        "displayName": "Kim Founder",
        "avatarUrl": None,
        "bio": None,
        "role": role,
        "status": None,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


def make_event(event_id="64e000000000000000000001", created_at="2024-12-19T09:00:00", event_date="2024-12-19T19:00:00"):
    """Snapshot entry in the shape the short-code generator consumes."""
    return {"id": event_id, "created_at": created_at, "event_date": event_date}


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def member():
    return make_user()


@pytest.fixture
def admin():
    return make_user(user_id="64b000000000000000000099", role="admin")


@pytest.fixture
def login_as():
    """Override the auth dependencies so requests run as the given user."""
    def _login(user):
        app.dependency_overrides[get_current_user] = lambda: user
        app.dependency_overrides[get_optional_user] = lambda: user
        app.dependency_overrides[get_current_user_id] = lambda: str(user.id)
        return user

    yield _login
    app.dependency_overrides.clear()


@pytest.fixture
def comment_factory():
    from src.models import AuthorInfo

    def _make(comment_id="c1", post_id="p1", parent_id=None, content="안녕하세요"):
        return SimpleNamespace(
            id=comment_id,
            postId=post_id,
            authorId="64b000000000000000000001",
            authorInfo=AuthorInfo(displayName="Kim Founder", avatarUrl=""),
            content=content,
            parentId=parent_id,
            depth=1 if parent_id else 0,
            createdAt=datetime(2024, 12, 19, 9, 0),
            updatedAt=None,
        )

    return _make
