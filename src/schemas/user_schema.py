from pydantic import BaseModel, Field
from typing import List, Literal, Optional

class UserBadgePublic(BaseModel):
    badgeId: str
    name: str
    icon: str
    category: str
    isVisible: bool
    status: str

class UserProfile(BaseModel):
    id: str
    username: str
    displayName: str
    avatarUrl: Optional[str] = None
    bio: Optional[str] = None
    company: Optional[str] = None
    position: Optional[str] = None
    role: str
    membershipTier: Optional[str] = None
    isPublic: bool
    points: int
    badges: List[UserBadgePublic] = []
    createdAt: str

class UserUpdate(BaseModel):
    displayName: Optional[str] = None
    avatarUrl: Optional[str] = None
    bio: Optional[str] = None
    company: Optional[str] = None
    position: Optional[str] = None

class VisibilityUpdate(BaseModel):
    isPublic: bool

class RoleUpdate(BaseModel):
    role: Literal["member", "admin", "master"]

class MembershipTierUpdate(BaseModel):
    membershipTier: str = Field(..., min_length=1)

class UserSummary(BaseModel):
    id: str
    username: str
    email: str
    displayName: str
    role: str
    membershipTier: Optional[str] = None
    points: int
    createdAt: str
