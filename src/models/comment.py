from beanie import Document
from pydantic import Field
from typing import Optional
from datetime import datetime
from .post import AuthorInfo
from ..utils.local_time import local_now

class Comment(Document):
    """
    Đại diện cho một bình luận trong collection 'comments'.
    Bình luận trả lời (reply) trỏ tới bình luận cha qua parentId.
    """
    postId: str = Field(..., description="ID của bài đăng mà bình luận thuộc về.")
    authorId: str = Field(..., description="ID của tác giả bình luận.")
    authorInfo: AuthorInfo = Field(..., description="Thông tin phi chuẩn hóa của tác giả.")
    content: str = Field(..., description="Nội dung văn bản của bình luận.")
    parentId: Optional[str] = Field(default=None, description="ID của bình luận cha (None nếu là bình luận gốc).")
    depth: int = Field(default=0, description="Độ sâu: 0 cho bình luận gốc, 1 cho trả lời.")
    createdAt: datetime = Field(default_factory=local_now, description="Thời điểm bình luận được tạo.")
    updatedAt: Optional[datetime] = Field(default=None, description="Thời điểm bình luận được chỉnh sửa.")

    class Settings:
        name = "comments"
        indexes = [
            "postId",
            "authorId",
            "parentId",
            "createdAt",
        ]
