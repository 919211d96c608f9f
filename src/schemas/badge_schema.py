from pydantic import BaseModel, Field
from typing import Optional

class BadgeCreate(BaseModel):
    name: str = Field(..., min_length=1)
    icon: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    description: Optional[str] = None

class BadgePublic(BaseModel):
    id: str
    name: str
    icon: str
    category: str
    description: Optional[str] = None
    isActive: bool

class BadgeActiveUpdate(BaseModel):
    isActive: bool

class BadgeRequest(BaseModel):
    evidence: Optional[str] = None

class BadgeReview(BaseModel):
    approve: bool

class BadgeVisibilityUpdate(BaseModel):
    isVisible: bool
