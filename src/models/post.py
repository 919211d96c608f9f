from beanie import Document
from pydantic import Field, BaseModel
from typing import Optional, List
from datetime import datetime
from ..utils.local_time import local_now

class AuthorInfo(BaseModel):
    """Thông tin tác giả được phi chuẩn hóa để hiển thị nhanh."""
    displayName: str
    avatarUrl: Optional[str] = ""

class Post(Document):
    """
    Đại diện cho một bài đăng trên bảng tin cộng đồng trong collection 'posts'.
    """
    boardSlug: str = Field(..., description="Slug của bảng tin (free, announcements, event-requests...).")
    title: str = Field(..., description="Tiêu đề bài đăng.")
    authorId: str = Field(..., description="ID của tác giả bài đăng.")
    authorInfo: AuthorInfo = Field(..., description="Thông tin phi chuẩn hóa của tác giả.")
    content: str = Field(..., description="Nội dung bài đăng.")
    likes: List[str] = Field(default_factory=list, description="Danh sách ID người dùng đã thích.")
    likeCount: int = Field(default=0, description="Số lượt thích.")
    commentCount: int = Field(default=0, description="Số bình luận.")
    isPinned: bool = Field(default=False, description="Bài đăng được ghim lên đầu bảng tin.")
    createdAt: datetime = Field(default_factory=local_now, description="Thời điểm bài đăng được tạo.")
    updatedAt: Optional[datetime] = Field(default=None, description="Thời điểm bài đăng được cập nhật.")

    class Settings:
        name = "posts"
        indexes = [
            "boardSlug",
            "authorId",
            "createdAt",
        ]
