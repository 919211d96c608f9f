import asyncio
import logging
from typing import Iterable, List, Mapping, Set
from bson import ObjectId
from ..models import Comment, AuthorInfo, User, Post
from ..schemas import CommentPublic
from ..utils import build_comment_tree, user_is_admin, local_now

logger = logging.getLogger(__name__)


def to_comment_public(comment: Comment) -> CommentPublic:
    return CommentPublic(
        id=str(comment.id),
        postId=str(comment.postId),
        authorId=str(comment.authorId),
        authorInfo=comment.authorInfo,
        content=comment.content,
        parentId=comment.parentId,
        depth=comment.depth,
        createdAt=comment.createdAt.isoformat(),
        updatedAt=comment.updatedAt.isoformat() if comment.updatedAt else None
    )


def collect_descendant_ids(comments: Iterable[Mapping], root_id: str) -> Set[str]:
    """
    Lấy ID của tất cả bình luận con cháu (trả lời, trả lời của trả lời...) của root_id.
    Không bao gồm chính root_id.
    """
    children_by_parent = {}
    for comment in comments:
        children_by_parent.setdefault(comment.get("parentId"), []).append(comment["id"])

    descendants: Set[str] = set()
    pending = list(children_by_parent.get(root_id, []))
    while pending:
        comment_id = pending.pop()
        if comment_id in descendants:
            continue
        descendants.add(comment_id)
        pending.extend(children_by_parent.get(comment_id, []))
    return descendants


class CommentService:

    @staticmethod
    def _notify(user_id: str, notification_type: str, title: str, message: str, metadata: dict):
        """Tạo thông báo và đẩy qua WebSocket (chạy nền)."""
        async def create_comment_notification():
            from ..services.notification_service import NotificationService
            from ..websocket import manager
            try:
                await NotificationService.create_notification(
                    user_id=user_id,
                    notification_type=notification_type,
                    title=title,
                    message=message,
                    metadata=metadata
                )
                await manager.broadcast_to_user(user_id, {
                    "type": notification_type,
                    "payload": metadata
                })
            except Exception as e:
                logger.warning("Failed to send %s notification to %s: %s", notification_type, user_id, e)

        # Start notification task in background
        asyncio.create_task(create_comment_notification())

    @staticmethod
    async def create_comment(post_id: str, author_id: str, content: str, parent_id: str = None):
        """
        Tạo một bình luận mới cho bài đăng, hoặc trả lời một bình luận khác.
        """
        if not ObjectId.is_valid(post_id):
            raise ValueError("Không tìm thấy bài đăng.")
        post = await Post.get(post_id)
        if not post:
            raise ValueError("Không tìm thấy bài đăng.")

        author = await User.get(author_id)
        if not author:
            raise ValueError("Không tìm thấy người dùng.")
        if author.status == 'deleted':
            raise ValueError("Tài khoản đã bị xóa.")

        parent = None
        if parent_id:
            parent = await Comment.get(parent_id) if ObjectId.is_valid(parent_id) else None
            if not parent or parent.postId != post_id:
                raise ValueError("Không tìm thấy bình luận cần trả lời.")

        new_comment = Comment(
            postId=post_id,
            authorId=author_id,
            authorInfo=AuthorInfo(
                displayName=author.displayName,
                avatarUrl=author.avatarUrl
            ),
            content=content.strip(),
            parentId=parent_id if parent else None,
            depth=1 if parent else 0
        )
        await new_comment.save()

        post.commentCount += 1
        await post.save()

        metadata = {
            "userId": str(author.id),
            "userDisplayName": author.displayName,
            "userAvatarUrl": author.avatarUrl,
            "postId": post_id,
            "commentId": str(new_comment.id)
        }
        if post.authorId != author_id:
            CommentService._notify(
                post.authorId,
                "post_comment",
                "Có người bình luận bài viết của bạn",
                f"{author.displayName} đã bình luận: {content[:50]}",
                metadata
            )
        if parent and parent.authorId not in (author_id, post.authorId):
            CommentService._notify(
                parent.authorId,
                "comment_reply",
                "Có người trả lời bình luận của bạn",
                f"{author.displayName} đã trả lời: {content[:50]}",
                metadata
            )

        return new_comment

    @staticmethod
    async def get_comments(post_id: str) -> List[dict]:
        """
        Lấy toàn bộ bình luận của một bài đăng dưới dạng cây (cũ nhất trước).
        """
        comments = await Comment.find({"postId": post_id}, sort="+createdAt").to_list()
        flat = []
        for comment in comments:
            record = to_comment_public(comment).model_dump()
            # build_comment_tree đọc khóa parent_id
            record["parent_id"] = record["parentId"]
            flat.append(record)
        return build_comment_tree(flat)

    @staticmethod
    async def get_comment_count(post_id: str) -> int:
        """
        Lấy tổng số bình luận của một bài đăng.
        """
        return await Comment.find({"postId": post_id}).count()

    @staticmethod
    async def delete_comment(comment_id: str, user: User):
        """
        Xóa một bình luận cùng toàn bộ trả lời của nó.
        Tác giả bình luận, tác giả bài đăng hoặc quản trị viên mới có quyền xóa.
        """
        comment = await Comment.get(comment_id) if ObjectId.is_valid(comment_id) else None
        if not comment:
            raise ValueError("Không tìm thấy bình luận.")

        post = await Post.get(comment.postId)
        if not post:
            raise ValueError("Không tìm thấy bài đăng.")

        user_id = str(user.id)
        if comment.authorId != user_id and post.authorId != user_id and not user_is_admin(user):
            raise PermissionError("Bạn không được phép xóa bình luận này.")

        siblings = await Comment.find({"postId": comment.postId}).to_list()
        descendant_ids = collect_descendant_ids(
            [{"id": str(c.id), "parentId": c.parentId} for c in siblings],
            str(comment.id)
        )
        if descendant_ids:
            await Comment.find({"_id": {"$in": [ObjectId(cid) for cid in descendant_ids]}}).delete()
        await comment.delete()

        post.commentCount = max(post.commentCount - 1 - len(descendant_ids), 0)
        await post.save()
        return {"message": "Bình luận đã được xóa thành công", "deletedCount": 1 + len(descendant_ids)}

    @staticmethod
    async def update_comment(comment_id: str, user_id: str, content: str):
        """
        Cập nhật bình luận. Chỉ tác giả bình luận mới có quyền chỉnh sửa.
        """
        comment = await Comment.get(comment_id) if ObjectId.is_valid(comment_id) else None
        if not comment:
            raise ValueError("Không tìm thấy bình luận.")

        if comment.authorId != user_id:
            raise PermissionError("Bạn không được phép chỉnh sửa bình luận này.")

        comment.content = content.strip()
        comment.updatedAt = local_now()
        await comment.save()
        return comment
