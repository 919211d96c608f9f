from beanie import Document
from pydantic import Field
from typing import Optional
from datetime import datetime
from ..utils.local_time import local_now

class Badge(Document):
    """
    Đại diện cho một loại huy hiệu trong collection 'badges'.
    """
    name: str = Field(..., description="Tên huy hiệu.")
    icon: str = Field(..., description="Biểu tượng (emoji hoặc URL).")
    category: str = Field(..., description="Nhóm huy hiệu.")
    description: Optional[str] = Field(default=None, description="Mô tả huy hiệu.")
    isActive: bool = Field(default=True, description="Huy hiệu có đang được sử dụng hay không.")
    createdAt: datetime = Field(default_factory=local_now, description="Thời điểm tạo.")

    class Settings:
        name = "badges"
        indexes = [
            "category",
        ]
