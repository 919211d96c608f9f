from fastapi import APIRouter, HTTPException
from typing import List
from ..services import BadgeService
from ..services.badge_service import to_badge_public
from ..schemas import BadgePublic

router = APIRouter(tags=["Badge"])

@router.get("", response_model=List[BadgePublic])
async def list_badges():
    """Danh sách huy hiệu đang hoạt động."""
    badges = await BadgeService.list_badges(active_only=True)
    return [to_badge_public(badge) for badge in badges]

@router.get("/{badge_id}", response_model=BadgePublic)
async def get_badge(badge_id: str):
    try:
        return to_badge_public(await BadgeService.get_badge(badge_id))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
