from beanie import Document
from pydantic import Field
from typing import Optional, Literal
from datetime import datetime
from ..utils.local_time import local_now

class Event(Document):
    """
    Đại diện cho một sự kiện của câu lạc bộ trong collection 'events'.
    """
    title: str = Field(..., description="Tiêu đề sự kiện.")
    description: str = Field(..., description="Mô tả sự kiện.")
    eventDate: datetime = Field(..., description="Thời điểm bắt đầu (giờ địa phương).")
    endDate: Optional[datetime] = Field(default=None, description="Thời điểm kết thúc.")
    location: Optional[str] = Field(default=None, description="Địa điểm.")
    price: Optional[int] = Field(default=None, description="Phí tham gia (KRW). None nếu miễn phí.")
    maxParticipants: Optional[int] = Field(default=None, description="Số người tham gia tối đa.")
    thumbnailUrl: Optional[str] = Field(default=None, description="URL ảnh đại diện sự kiện.")
    eventType: Optional[Literal["networking", "class", "activity"]] = Field(default=None, description="Loại sự kiện.")
    createdBy: str = Field(..., description="ID của người tạo sự kiện.")
    shortCode: Optional[str] = Field(default=None, description="Mã rút gọn MMDDNN dùng cho URL /e/<mã>.")
    createdAt: datetime = Field(default_factory=local_now, description="Thời điểm sự kiện được tạo.")
    updatedAt: datetime = Field(default_factory=local_now, description="Thời điểm cập nhật cuối.")

    class Settings:
        name = "events"
        indexes = [
            "eventDate",
            "createdAt",
            "createdBy",
            "shortCode",
        ]
