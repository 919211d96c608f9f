from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional
from ..services import UserService, BadgeService
from ..schemas import (
    UserPublic,
    UserProfile,
    UserUpdate,
    VisibilityUpdate,
    UserBadgePublic,
    BadgeRequest,
    BadgeVisibilityUpdate
)
from ..models import User
from ..security import get_current_user, get_optional_user

router = APIRouter(tags=["User"])

# Lấy thông tin tài khoản của người dùng hiện tại
@router.get("/me", response_model=UserPublic)
async def read_users_me(current_user: User = Depends(get_current_user)):
    return UserPublic(
        id=str(current_user.id),
        username=current_user.username,
        email=current_user.email,
        displayName=current_user.displayName,
        avatarUrl=current_user.avatarUrl,
        bio=current_user.bio,
        role=current_user.role
    )

# Cập nhật hồ sơ của người dùng hiện tại
@router.put("/me", response_model=UserProfile)
async def update_user_me(
    user_update: UserUpdate,
    current_user: User = Depends(get_current_user)
):
    try:
        user = await UserService.update_profile_info(current_user, user_update.model_dump(exclude_unset=True))
        return await UserService.get_profile(str(user.id), user)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.put("/me/visibility", response_model=UserProfile)
async def update_visibility(
    visibility: VisibilityUpdate,
    current_user: User = Depends(get_current_user)
):
    """Bật/tắt chế độ công khai của hồ sơ."""
    user = await UserService.update_profile_visibility(current_user, visibility.isPublic)
    return await UserService.get_profile(str(user.id), user)

@router.post("/me/badges/{badge_id}", status_code=201)
async def request_badge(
    badge_id: str,
    badge_request: BadgeRequest,
    current_user: User = Depends(get_current_user)
):
    """Gửi yêu cầu nhận huy hiệu (chờ quản trị viên duyệt)."""
    try:
        await BadgeService.request_badge(current_user, badge_id, badge_request.evidence)
        return {"success": True, "status": "pending"}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.put("/me/badges/{badge_id}/visibility")
async def toggle_badge_visibility(
    badge_id: str,
    visibility: BadgeVisibilityUpdate,
    current_user: User = Depends(get_current_user)
):
    """Ẩn/hiện một huy hiệu trên hồ sơ."""
    try:
        await BadgeService.toggle_badge_visibility(current_user, badge_id, visibility.isVisible)
        return {"success": True}
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.get("/{user_id}", response_model=UserProfile)
async def get_user_profile(
    user_id: str,
    current_user: Optional[User] = Depends(get_optional_user)
):
    """Lấy hồ sơ thành viên (kèm huy hiệu đang hiển thị)."""
    try:
        return await UserService.get_profile(user_id, current_user)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

@router.get("/{user_id}/badges", response_model=List[UserBadgePublic])
async def get_user_badges(user_id: str):
    try:
        return await BadgeService.get_visible_badges(user_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
