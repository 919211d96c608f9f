from pydantic import BaseModel, EmailStr, Field
from typing import Optional

class UserCreate(BaseModel):
    username: str = Field(..., min_length=3)
    email: EmailStr
    password: str = Field(..., min_length=8)
    displayName: str

class UserLogin(BaseModel):
    username: str
    password: str

class UserPublic(BaseModel):
    id: str
    username: str
    email: EmailStr
    displayName: str
    avatarUrl: Optional[str] = None
    bio: Optional[str] = None
    role: str = "member"

    class Config:
        from_attributes = True

class RefreshTokenRequest(BaseModel):
    refresh_token: str
