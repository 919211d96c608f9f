import logging
from typing import List, Optional
from bson import ObjectId
from ..models import User
from ..schemas import UserProfile, UserSummary
from ..utils import is_master_admin, user_is_admin, local_now
from .badge_service import BadgeService, select_user_badges

logger = logging.getLogger(__name__)


def can_change_role(actor: User, current_role: str, new_role: str) -> bool:
    """
    Quản trị viên có thể đổi vai trò member <-> admin.
    Chỉ master mới được cấp hoặc thu hồi vai trò master.
    """
    if not user_is_admin(actor):
        return False
    if "master" in (current_role, new_role):
        return is_master_admin(getattr(actor, "role", None), getattr(actor, "email", None))
    return True


class UserService:

    @staticmethod
    async def get_user(user_id: str) -> User:
        user = await User.get(user_id) if ObjectId.is_valid(user_id) else None
        if not user or user.status == 'deleted':
            raise ValueError("Không tìm thấy người dùng.")
        return user

    @staticmethod
    async def get_profile(user_id: str, viewer: Optional[User] = None) -> UserProfile:
        """
        Lấy hồ sơ thành viên.
        Hồ sơ riêng tư chỉ chủ sở hữu và quản trị viên xem được.
        """
        user = await UserService.get_user(user_id)
        is_self = viewer is not None and str(viewer.id) == str(user.id)
        if not user.isPublic and not is_self and not user_is_admin(viewer):
            raise PermissionError("Hồ sơ này ở chế độ riêng tư.")

        badges_by_id = await BadgeService.get_badges_by_id([ub.badgeId for ub in user.badges])
        return UserProfile(
            id=str(user.id),
            username=user.username,
            displayName=user.displayName,
            avatarUrl=user.avatarUrl,
            bio=user.bio,
            company=user.company,
            position=user.position,
            role=user.role,
            membershipTier=user.membershipTier,
            isPublic=user.isPublic,
            points=user.points,
            badges=select_user_badges(user.badges, badges_by_id, include_hidden=is_self),
            createdAt=user.createdAt.isoformat()
        )

    @staticmethod
    async def update_profile_info(user: User, data: dict) -> User:
        """
        Cập nhật thông tin hồ sơ. Chỉ các trường được gửi lên mới thay đổi.
        """
        for field in ("displayName", "avatarUrl", "bio", "company", "position"):
            if field in data and data[field] is not None:
                value = data[field].strip()
                if field == "displayName" and not value:
                    raise ValueError("Tên hiển thị không được để trống.")
                setattr(user, field, value or None)
        user.updatedAt = local_now()
        await user.save()
        return user

    @staticmethod
    async def update_profile_visibility(user: User, is_public: bool) -> User:
        user.isPublic = is_public
        user.updatedAt = local_now()
        await user.save()
        return user

    @staticmethod
    async def list_users(actor: User, skip: int = 0, limit: int = 50) -> List[UserSummary]:
        """Danh sách thành viên cho trang quản trị."""
        if not user_is_admin(actor):
            raise PermissionError("Unauthorized")
        users = await User.find({"status": {"$ne": "deleted"}}, sort="-createdAt", skip=skip, limit=limit).to_list()
        return [
            UserSummary(
                id=str(u.id),
                username=u.username,
                email=u.email,
                displayName=u.displayName,
                role=u.role,
                membershipTier=u.membershipTier,
                points=u.points,
                createdAt=u.createdAt.isoformat()
            )
            for u in users
        ]

    @staticmethod
    async def update_user_role(actor: User, user_id: str, role: str) -> User:
        """Đổi vai trò của thành viên (quản trị viên)."""
        user = await UserService.get_user(user_id)
        if not can_change_role(actor, user.role, role):
            raise PermissionError("Unauthorized")

        user.role = role
        user.updatedAt = local_now()
        await user.save()
        logger.info("User %s role changed to %s by %s", user.id, role, actor.id)
        return user

    @staticmethod
    async def update_membership_tier(actor: User, user_id: str, membership_tier: str) -> User:
        """Đổi hạng thành viên (quản trị viên)."""
        if not user_is_admin(actor):
            raise PermissionError("Unauthorized")
        user = await UserService.get_user(user_id)
        user.membershipTier = membership_tier.strip()
        user.updatedAt = local_now()
        await user.save()
        return user
