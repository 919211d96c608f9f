from beanie import Document
from pydantic import Field
from typing import Optional, Dict, Literal
from datetime import datetime
from ..utils.local_time import local_now

class EventRegistration(Document):
    """
    Đăng ký tham gia sự kiện trong collection 'event_registrations'.
    Khách (guest) không có tài khoản nên userId là None.
    """
    eventId: str = Field(..., description="ID của sự kiện.")
    userId: Optional[str] = Field(default=None, description="ID của thành viên (None với khách).")
    guestName: Optional[str] = Field(default=None, description="Tên khách.")
    guestContact: Optional[str] = Field(default=None, description="Liên hệ của khách.")
    paymentStatus: Optional[Literal["pending", "paid"]] = Field(default=None, description="Trạng thái thanh toán.")
    customFieldResponses: Dict[str, str] = Field(default_factory=dict, description="Câu trả lời cho các trường tùy chỉnh.")
    registeredAt: datetime = Field(default_factory=local_now, description="Thời điểm đăng ký.")

    class Settings:
        name = "event_registrations"
        indexes = [
            "eventId",
            [("eventId", 1), ("userId", 1)],
        ]
