from fastapi import APIRouter, HTTPException
from ..services import EventService
from ..schemas import EventPublic

router = APIRouter(tags=["Short URL"])

@router.get("/{code}", response_model=EventPublic)
async def resolve_short_code(code: str):
    """
    Tìm sự kiện theo URL rút gọn /e/<code> (ví dụ /e/121901).
    Cũng chấp nhận ID sự kiện đầy đủ.
    """
    event = await EventService.get_event_by_short_code(code)
    if not event:
        raise HTTPException(status_code=404, detail="Không tìm thấy sự kiện.")
    return await EventService.to_public(event)
