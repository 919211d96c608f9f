import logging
from typing import List, Optional
from bson import ObjectId
from ..models import Post, AuthorInfo, User, Comment
from ..schemas import PostPublic
from ..utils import user_is_admin, local_now

logger = logging.getLogger(__name__)

# Các bảng tin chỉ quản trị viên được đăng
ADMIN_ONLY_BOARDS = ("announcements",)


def to_post_public(post: Post, viewer_id: Optional[str] = None) -> PostPublic:
    return PostPublic(
        id=str(post.id),
        boardSlug=post.boardSlug,
        title=post.title,
        authorId=str(post.authorId),
        authorInfo=post.authorInfo,
        content=post.content,
        likeCount=post.likeCount,
        likedByMe=viewer_id is not None and viewer_id in post.likes,
        commentCount=post.commentCount,
        isPinned=post.isPinned,
        createdAt=post.createdAt.isoformat(),
        updatedAt=post.updatedAt.isoformat() if post.updatedAt else None
    )


def toggle_like_in_place(post: Post, user_id: str) -> bool:
    """
    Thích hoặc bỏ thích bài đăng. Trả về True nếu sau thao tác người dùng đang thích bài.
    """
    if user_id in post.likes:
        post.likes.remove(user_id)
        post.likeCount = max(post.likeCount - 1, 0)
        return False
    post.likes.append(user_id)
    post.likeCount += 1
    return True


class PostService:

    @staticmethod
    async def create_post(author: User, board_slug: str, title: str, content: str) -> Post:
        """
        Tạo một bài đăng mới trên bảng tin.
        """
        if board_slug in ADMIN_ONLY_BOARDS and not user_is_admin(author):
            raise PermissionError("Chỉ quản trị viên mới được đăng thông báo.")

        new_post = Post(
            boardSlug=board_slug,
            title=title.strip(),
            authorId=str(author.id),
            authorInfo=AuthorInfo(
                displayName=author.displayName,
                avatarUrl=author.avatarUrl
            ),
            content=content.strip(),
        )
        await new_post.save()
        return new_post

    @staticmethod
    async def list_posts(board_slug: Optional[str] = None, skip: int = 0, limit: int = 20, sort: str = "latest") -> List[Post]:
        """
        Lấy danh sách bài đăng (bài ghim luôn ở đầu).
        sort: 'latest' (mới nhất) hoặc 'popular' (nhiều lượt thích nhất).
        """
        query = {"boardSlug": board_slug} if board_slug else {}
        sort_keys = ["-isPinned", "-likeCount", "-createdAt"] if sort == "popular" else ["-isPinned", "-createdAt"]
        return await Post.find(query, skip=skip, limit=limit).sort(*sort_keys).to_list()

    @staticmethod
    async def get_post(post_id: str) -> Post:
        if not ObjectId.is_valid(post_id):
            raise ValueError("Không tìm thấy bài đăng.")
        post = await Post.get(post_id)
        if not post:
            raise ValueError("Không tìm thấy bài đăng.")
        return post

    @staticmethod
    async def toggle_like(post_id: str, user_id: str) -> Post:
        """
        Thêm hoặc bỏ lượt thích của người dùng đối với một bài đăng.
        """
        post = await PostService.get_post(post_id)
        toggle_like_in_place(post, user_id)
        await post.save()
        return post

    @staticmethod
    async def update_post(post_id: str, user_id: str, title: str, content: str) -> Post:
        """
        Cập nhật tiêu đề và nội dung bài đăng. Chỉ tác giả.
        """
        post = await PostService.get_post(post_id)
        if post.authorId != user_id:
            raise PermissionError("Bạn không được phép chỉnh sửa bài đăng này.")

        post.title = title.strip()
        post.content = content.strip()
        post.updatedAt = local_now()
        await post.save()
        return post

    @staticmethod
    async def set_pinned(post_id: str, user: User, is_pinned: bool) -> Post:
        """Ghim hoặc bỏ ghim bài đăng. Chỉ quản trị viên."""
        if not user_is_admin(user):
            raise PermissionError("Chỉ quản trị viên mới được ghim bài đăng.")
        post = await PostService.get_post(post_id)
        post.isPinned = is_pinned
        await post.save()
        return post

    @staticmethod
    async def delete_post(post_id: str, user: User):
        """
        Xóa một bài đăng cùng các bình luận. Tác giả hoặc quản trị viên.
        """
        post = await PostService.get_post(post_id)
        if post.authorId != str(user.id) and not user_is_admin(user):
            raise PermissionError("Bạn không được phép xóa bài đăng này.")

        await Comment.find({"postId": str(post.id)}).delete()
        await post.delete()
        logger.info("Post %s deleted by %s", post.id, user.id)
        return {"message": "Bài đăng đã được xóa thành công"}
