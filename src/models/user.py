from beanie import Document
from pydantic import Field, EmailStr, BaseModel
from typing import Optional, List, Literal
from datetime import datetime
from ..utils.local_time import local_now

class UserBadge(BaseModel):
    """Huy hiệu mà người dùng sở hữu hoặc đang chờ duyệt."""
    badgeId: str
    isVisible: bool = True
    status: Literal["pending", "approved", "rejected"] = "approved"
    evidence: Optional[str] = None
    createdAt: datetime = Field(default_factory=local_now)
    updatedAt: datetime = Field(default_factory=local_now)

class User(Document):
    """
    Đại diện cho một thành viên trong collection 'users'.
    """
    username: str = Field(..., description="Tên đăng nhập duy nhất của người dùng.")
    email: EmailStr = Field(..., description="Địa chỉ email duy nhất của người dùng.")
    hashedPassword: str = Field(..., description="Mật khẩu đã được băm của người dùng.")
    displayName: str = Field(..., description="Tên hiển thị của người dùng.")

    avatarUrl: Optional[str] = Field(default=None, description="URL ảnh đại diện của người dùng.")
    bio: Optional[str] = Field(default=None, description="Tiểu sử ngắn của người dùng.")
    company: Optional[str] = Field(default=None, description="Công ty / dự án hiện tại.")
    position: Optional[str] = Field(default=None, description="Chức danh.")

    role: Literal["member", "admin", "master"] = Field(default="member", description="Vai trò trong hệ thống.")
    membershipTier: Optional[str] = Field(default=None, description="Hạng thành viên.")
    isPublic: bool = Field(default=True, description="Hồ sơ công khai hay không.")
    points: int = Field(default=0, description="Điểm hoạt động.")
    lastLoginBonusAt: Optional[datetime] = Field(default=None, description="Lần cuối nhận điểm đăng nhập hằng ngày.")
    badges: List[UserBadge] = Field(default_factory=list, description="Danh sách huy hiệu.")

    status: Optional[str] = Field(default=None, description="Trạng thái tài khoản: None (mặc định), 'available', 'deleted'.")
    createdAt: datetime = Field(default_factory=local_now, description="Thời điểm người dùng được tạo.")
    updatedAt: datetime = Field(default_factory=local_now, description="Thời điểm thông tin người dùng được cập nhật lần cuối.")

    class Settings:
        name = "users"
        # Thêm các chỉ mục để tối ưu hóa truy vấn
        indexes = [
            "username",
            "email",
            "role",
        ]
