import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

from src.models import Comment
from src.services import CommentService


class TestGetComments:

    def test_stored_replies_are_nested(self, comment_factory):
        stored = [
            comment_factory(comment_id="A"),
            comment_factory(comment_id="B", parent_id="A"),
            comment_factory(comment_id="C"),
            comment_factory(comment_id="D", parent_id="A"),
        ]
        query = SimpleNamespace(to_list=AsyncMock(return_value=stored))
        with patch.object(Comment, "find", return_value=query) as find:
            tree = asyncio.run(CommentService.get_comments("p1"))

        assert find.call_args.args[0] == {"postId": "p1"}
        assert [node["id"] for node in tree] == ["A", "C"]
        assert [node["id"] for node in tree[0]["children"]] == ["B", "D"]
        assert tree[0]["children"][0]["parentId"] == "A"

    def test_reply_to_deleted_comment_stays_visible(self, comment_factory):
        stored = [comment_factory(comment_id="B", parent_id="gone")]
        query = SimpleNamespace(to_list=AsyncMock(return_value=stored))
        with patch.object(Comment, "find", return_value=query):
            tree = asyncio.run(CommentService.get_comments("p1"))

        assert [node["id"] for node in tree] == ["B"]
