from pydantic import BaseModel, Field, field_validator
from typing import Optional
from ..models import AuthorInfo

BOARD_SLUGS = ("free", "announcements", "event-requests", "reviews", "insights")

class PostCreate(BaseModel):
    boardSlug: str = Field(default="free", description="Slug của bảng tin")
    title: str = Field(..., min_length=1, description="Tiêu đề bài đăng")
    content: str = Field(..., min_length=1, description="Nội dung bài đăng")

    @field_validator('boardSlug')
    @classmethod
    def validate_board(cls, v: str) -> str:
        if v not in BOARD_SLUGS:
            raise ValueError(f"Bảng tin không hợp lệ: {v}")
        return v

    @field_validator('title', 'content')
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('Vui lòng nhập tiêu đề và nội dung')
        return v.strip()

class PostUpdate(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)

    @field_validator('title', 'content')
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('Vui lòng nhập tiêu đề và nội dung')
        return v.strip()

class PinUpdate(BaseModel):
    isPinned: bool

class PostPublic(BaseModel):
    id: str
    boardSlug: str
    title: str
    authorId: str
    authorInfo: AuthorInfo
    content: str
    likeCount: int
    likedByMe: bool = False
    commentCount: int
    isPinned: bool
    createdAt: str
    updatedAt: Optional[str] = None

    class Config:
        from_attributes = True
