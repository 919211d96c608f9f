from fastapi import APIRouter, Depends, HTTPException
from typing import List
from ..services import UserService, BadgeService
from ..services.badge_service import to_badge_public
from ..schemas import (
    UserSummary,
    RoleUpdate,
    MembershipTierUpdate,
    BadgeCreate,
    BadgePublic,
    BadgeActiveUpdate,
    BadgeReview
)
from ..models import User
from ..security import require_admin

router = APIRouter(tags=["Admin"])

@router.get("/users", response_model=List[UserSummary])
async def list_users(
    skip: int = 0,
    limit: int = 50,
    admin: User = Depends(require_admin)
):
    return await UserService.list_users(admin, skip=skip, limit=limit)

@router.put("/users/{user_id}/role")
async def update_user_role(
    user_id: str,
    role_data: RoleUpdate,
    admin: User = Depends(require_admin)
):
    """Đổi vai trò thành viên. Chỉ master được cấp/thu hồi vai trò master."""
    try:
        user = await UserService.update_user_role(admin, user_id, role_data.role)
        return {"success": True, "role": user.role}
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

@router.put("/users/{user_id}/membership-tier")
async def update_membership_tier(
    user_id: str,
    tier_data: MembershipTierUpdate,
    admin: User = Depends(require_admin)
):
    try:
        user = await UserService.update_membership_tier(admin, user_id, tier_data.membershipTier)
        return {"success": True, "membershipTier": user.membershipTier}
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

@router.get("/badges", response_model=List[BadgePublic])
async def list_all_badges(admin: User = Depends(require_admin)):
    """Tất cả huy hiệu, kể cả huy hiệu đã tắt."""
    badges = await BadgeService.list_badges(active_only=False)
    return [to_badge_public(badge) for badge in badges]

@router.post("/badges", response_model=BadgePublic, status_code=201)
async def create_badge(
    badge_data: BadgeCreate,
    admin: User = Depends(require_admin)
):
    badge = await BadgeService.create_badge(
        admin,
        name=badge_data.name,
        icon=badge_data.icon,
        category=badge_data.category,
        description=badge_data.description
    )
    return to_badge_public(badge)

@router.put("/badges/{badge_id}/active", response_model=BadgePublic)
async def set_badge_active(
    badge_id: str,
    active_data: BadgeActiveUpdate,
    admin: User = Depends(require_admin)
):
    try:
        return to_badge_public(await BadgeService.set_badge_active(admin, badge_id, active_data.isActive))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.post("/users/{user_id}/badges/{badge_id}", status_code=201)
async def award_badge(
    user_id: str,
    badge_id: str,
    admin: User = Depends(require_admin)
):
    """Trao huy hiệu cho thành viên."""
    try:
        await BadgeService.award_badge(admin, user_id, badge_id)
        return {"success": True}
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.put("/users/{user_id}/badges/{badge_id}/review")
async def review_badge(
    user_id: str,
    badge_id: str,
    review: BadgeReview,
    admin: User = Depends(require_admin)
):
    """Duyệt hoặc từ chối yêu cầu huy hiệu."""
    try:
        await BadgeService.review_badge(admin, user_id, badge_id, review.approve)
        return {"success": True, "status": "approved" if review.approve else "rejected"}
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
