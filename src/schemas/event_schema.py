from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Dict, List, Literal, Optional
from datetime import datetime

class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, description="Tiêu đề sự kiện")
    description: str = Field(..., min_length=1, description="Mô tả sự kiện")
    eventDate: datetime
    endDate: Optional[datetime] = None
    location: Optional[str] = None
    price: Optional[int] = None
    maxParticipants: Optional[int] = Field(default=None, ge=1)
    thumbnailUrl: Optional[str] = None
    eventType: Optional[Literal["networking", "class", "activity"]] = None

    @field_validator('title', 'description')
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('Trường này không được để trống')
        return v.strip()

    @model_validator(mode='after')
    def check_dates(self):
        if self.endDate and self.endDate < self.eventDate:
            raise ValueError('Thời điểm kết thúc phải sau thời điểm bắt đầu')
        return self

class EventUpdate(EventCreate):
    pass

class EventPublic(BaseModel):
    id: str
    title: str
    description: str
    eventDate: str
    endDate: Optional[str] = None
    location: Optional[str] = None
    price: Optional[int] = None
    maxParticipants: Optional[int] = None
    thumbnailUrl: Optional[str] = None
    eventType: Optional[str] = None
    createdBy: str
    shortCode: Optional[str] = None
    shortUrl: Optional[str] = None
    participantCount: int = 0
    createdAt: str

class RegistrationCreate(BaseModel):
    guestName: Optional[str] = None
    guestContact: Optional[str] = None
    paymentStatus: Optional[Literal["pending"]] = None
    customFieldResponses: Dict[str, str] = Field(default_factory=dict)

class GuestRegistrationCreate(RegistrationCreate):
    guestName: str = Field(..., min_length=1)
    guestContact: str = Field(..., min_length=1)

class GuestParticipantCreate(BaseModel):
    guestName: str
    guestContact: Optional[str] = None

class RegistrationPublic(BaseModel):
    id: str
    eventId: str
    userId: Optional[str] = None
    guestName: Optional[str] = None
    guestContact: Optional[str] = None
    paymentStatus: Optional[str] = None
    customFieldResponses: Dict[str, str] = {}
    registeredAt: str

class RegistrationResult(BaseModel):
    success: bool = True
    registrationId: str

