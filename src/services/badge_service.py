import logging
from typing import Dict, List
from bson import ObjectId
from ..models import Badge, User, UserBadge
from ..schemas import BadgePublic, UserBadgePublic
from ..utils import user_is_admin, local_now

logger = logging.getLogger(__name__)


def to_badge_public(badge: Badge) -> BadgePublic:
    return BadgePublic(
        id=str(badge.id),
        name=badge.name,
        icon=badge.icon,
        category=badge.category,
        description=badge.description,
        isActive=badge.isActive
    )


def select_user_badges(user_badges: List[UserBadge], badges_by_id: Dict[str, Badge], include_hidden: bool = False) -> List[UserBadgePublic]:
    """
    Ghép huy hiệu của người dùng với thông tin huy hiệu.
    Người xem khác chỉ thấy huy hiệu đã duyệt, đang hiển thị và còn hoạt động.
    """
    result = []
    for user_badge in user_badges:
        badge = badges_by_id.get(user_badge.badgeId)
        if badge is None:
            continue
        if not include_hidden and (
            user_badge.status != "approved" or not user_badge.isVisible or not badge.isActive
        ):
            continue
        result.append(UserBadgePublic(
            badgeId=user_badge.badgeId,
            name=badge.name,
            icon=badge.icon,
            category=badge.category,
            isVisible=user_badge.isVisible,
            status=user_badge.status
        ))
    return result


def _find_user_badge(user: User, badge_id: str):
    for user_badge in user.badges:
        if user_badge.badgeId == badge_id:
            return user_badge
    return None


class BadgeService:

    @staticmethod
    def _require_admin(actor: User):
        if not user_is_admin(actor):
            raise PermissionError("Unauthorized")

    @staticmethod
    async def get_badge(badge_id: str) -> Badge:
        badge = await Badge.get(badge_id) if ObjectId.is_valid(badge_id) else None
        if not badge:
            raise ValueError("Không tìm thấy huy hiệu.")
        return badge

    @staticmethod
    async def get_badges_by_id(badge_ids: List[str]) -> Dict[str, Badge]:
        object_ids = [ObjectId(bid) for bid in badge_ids if ObjectId.is_valid(bid)]
        if not object_ids:
            return {}
        badges = await Badge.find({"_id": {"$in": object_ids}}).to_list()
        return {str(badge.id): badge for badge in badges}

    @staticmethod
    async def create_badge(actor: User, name: str, icon: str, category: str, description: str = None) -> Badge:
        BadgeService._require_admin(actor)
        badge = Badge(name=name.strip(), icon=icon.strip(), category=category.strip(), description=description)
        await badge.insert()
        return badge

    @staticmethod
    async def list_badges(active_only: bool = True) -> List[Badge]:
        query = {"isActive": True} if active_only else {}
        return await Badge.find(query, sort="+category").to_list()

    @staticmethod
    async def set_badge_active(actor: User, badge_id: str, is_active: bool) -> Badge:
        """Bật/tắt một huy hiệu (quản trị viên)."""
        BadgeService._require_admin(actor)
        badge = await BadgeService.get_badge(badge_id)
        badge.isActive = is_active
        await badge.save()
        return badge

    @staticmethod
    async def _get_user(user_id: str) -> User:
        user = await User.get(user_id) if ObjectId.is_valid(user_id) else None
        if not user:
            raise ValueError("Không tìm thấy người dùng.")
        return user

    @staticmethod
    async def award_badge(actor: User, user_id: str, badge_id: str) -> User:
        """
        Quản trị viên trao huy hiệu cho thành viên (được duyệt ngay).
        """
        BadgeService._require_admin(actor)
        badge = await BadgeService.get_badge(badge_id)
        user = await BadgeService._get_user(user_id)

        user_badge = _find_user_badge(user, badge_id)
        if user_badge is None:
            user.badges.append(UserBadge(badgeId=badge_id, status="approved"))
        else:
            user_badge.status = "approved"
            user_badge.updatedAt = local_now()
        await user.save()

        from ..services.notification_service import NotificationService
        await NotificationService.create_notification(
            user_id=str(user.id),
            notification_type="badge_awarded",
            title="Bạn đã nhận được huy hiệu mới",
            message=f"{badge.icon} {badge.name}",
            metadata={"badgeId": badge_id}
        )
        logger.info("Badge %s awarded to user %s by %s", badge_id, user.id, actor.id)
        return user

    @staticmethod
    async def request_badge(user: User, badge_id: str, evidence: str = None) -> User:
        """
        Thành viên tự đăng ký huy hiệu kèm minh chứng, chờ quản trị viên duyệt.
        """
        badge = await BadgeService.get_badge(badge_id)
        if not badge.isActive:
            raise ValueError("Huy hiệu không còn được sử dụng.")
        if _find_user_badge(user, badge_id) is not None:
            raise ValueError("Bạn đã có hoặc đang chờ duyệt huy hiệu này.")

        user.badges.append(UserBadge(badgeId=badge_id, status="pending", evidence=evidence))
        await user.save()
        return user

    @staticmethod
    async def review_badge(actor: User, user_id: str, badge_id: str, approve: bool) -> User:
        """Quản trị viên duyệt hoặc từ chối yêu cầu huy hiệu."""
        BadgeService._require_admin(actor)
        user = await BadgeService._get_user(user_id)
        user_badge = _find_user_badge(user, badge_id)
        if user_badge is None:
            raise ValueError("Không tìm thấy yêu cầu huy hiệu.")

        user_badge.status = "approved" if approve else "rejected"
        user_badge.updatedAt = local_now()
        await user.save()
        return user

    @staticmethod
    async def toggle_badge_visibility(user: User, badge_id: str, is_visible: bool) -> User:
        """Thành viên ẩn/hiện huy hiệu của mình trên hồ sơ."""
        user_badge = _find_user_badge(user, badge_id)
        if user_badge is None:
            raise ValueError("Không tìm thấy huy hiệu.")

        user_badge.isVisible = is_visible
        user_badge.updatedAt = local_now()
        await user.save()
        return user

    @staticmethod
    async def get_visible_badges(user_id: str) -> List[UserBadgePublic]:
        user = await BadgeService._get_user(user_id)
        badges_by_id = await BadgeService.get_badges_by_id([ub.badgeId for ub in user.badges])
        return select_user_badges(user.badges, badges_by_id)
