"""Tests for assembling flat comment lists into reply trees."""

import logging

from src.utils.comments_tree import build_comment_tree


def _ids(nodes):
    return [node["id"] for node in nodes]


class TestBuildCommentTree:

    def test_empty_list(self):
        assert build_comment_tree([]) == []

    def test_dangling_parent_keeps_every_comment(self):
        flat = [{"id": "a"}, {"id": "b", "parent_id": "a"}, {"id": "c", "parent_id": "z"}]
        tree = build_comment_tree(flat)

        assert _ids(tree) == ["a", "c"]
        assert _ids(tree[0]["children"]) == ["b"]
        assert tree[1]["children"] == []

    def test_siblings_keep_input_order(self):
        flat = [{"id": "a"}, {"id": "b", "parent_id": "a"}, {"id": "c", "parent_id": "a"}]
        tree = build_comment_tree(flat)

        assert _ids(tree) == ["a"]
        assert _ids(tree[0]["children"]) == ["b", "c"]

    def test_camel_case_parent_key_is_not_read(self):
        tree = build_comment_tree([{"id": "a"}, {"id": "b", "parentId": "a"}])
        assert _ids(tree) == ["a", "b"]

    def test_roots_and_replies(self):
        flat = [
            {"id": "A", "parent_id": None},
            {"id": "B", "parent_id": "A"},
            {"id": "C", "parent_id": None},
            {"id": "D", "parent_id": "A"},
        ]
        tree = build_comment_tree(flat)

        assert _ids(tree) == ["A", "C"]
        assert _ids(tree[0]["children"]) == ["B", "D"]
        assert tree[1]["children"] == []

    def test_every_comment_appears_once(self):
        flat = [
            {"id": "A", "parent_id": None},
            {"id": "B", "parent_id": "A"},
            {"id": "C", "parent_id": "B"},
            {"id": "D", "parent_id": None},
        ]
        seen = []

        def walk(nodes):
            for node in nodes:
                seen.append(node["id"])
                walk(node["children"])

        walk(build_comment_tree(flat))
        assert sorted(seen) == ["A", "B", "C", "D"]

    def test_child_listed_before_parent_is_still_attached(self):
        flat = [
            {"id": "B", "parent_id": "A"},
            {"id": "A", "parent_id": None},
        ]
        tree = build_comment_tree(flat)
        assert _ids(tree) == ["A"]
        assert _ids(tree[0]["children"]) == ["B"]

    def test_missing_parent_id_key_is_root(self):
        tree = build_comment_tree([{"id": "A"}, {"id": "B", "parent_id": ""}])
        assert _ids(tree) == ["A", "B"]

    def test_orphan_becomes_root_and_is_logged(self, caplog):
        flat = [
            {"id": "A", "parent_id": None},
            {"id": "X", "parent_id": "deleted-parent"},
        ]
        with caplog.at_level(logging.WARNING, logger="src.utils.comments_tree"):
            tree = build_comment_tree(flat)

        assert _ids(tree) == ["A", "X"]
        assert "Orphaned comment X" in caplog.text

    def test_extra_fields_are_preserved_and_input_untouched(self):
        flat = [
            {"id": "A", "parent_id": None, "content": "첫 댓글"},
            {"id": "B", "parent_id": "A", "content": "답글"},
        ]
        tree = build_comment_tree(flat)

        assert tree[0]["content"] == "첫 댓글"
        assert tree[0]["children"][0]["content"] == "답글"
        assert "children" not in flat[0]
