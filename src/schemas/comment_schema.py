from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from ..models import AuthorInfo

class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, description="Nội dung bình luận")
    parentId: Optional[str] = Field(default=None, description="ID bình luận cha khi trả lời")
    
    @field_validator('content')
    @classmethod
    def content_validation(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('Nội dung bình luận không được để trống')
        return v.strip()

class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1, description="Nội dung bình luận")

    @field_validator('content')
    @classmethod
    def content_validation(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('Nội dung bình luận không được để trống')
        return v.strip()

class CommentPublic(BaseModel):
    id: str
    postId: str
    authorId: str
    authorInfo: AuthorInfo
    content: str
    parentId: Optional[str] = None
    depth: int = 0
    createdAt: str
    updatedAt: Optional[str] = None

    class Config:
        from_attributes = True

class CommentNodePublic(CommentPublic):
    """Bình luận kèm danh sách trả lời lồng nhau."""
    children: List["CommentNodePublic"] = []

CommentNodePublic.model_rebuild()
