import asyncio
import logging
from collections import defaultdict
from typing import Dict, List, Optional
from bson import ObjectId
from ..models import Event, EventRegistration, User
from ..schemas import EventCreate, EventUpdate, EventPublic
from ..utils import (
    generate_short_code,
    format_short_code,
    get_event_short_url,
    build_event_query_from_short_code,
    find_event_id_by_ordinal,
    user_is_admin,
    local_now,
    to_local,
)

logger = logging.getLogger(__name__)

# Khóa theo MMDD để hai sự kiện cùng ngày không nhận cùng một số thứ tự
# (chỉ có hiệu lực trong một tiến trình)
_short_code_locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)


def _month_day_key(event_date) -> str:
    event_date = to_local(event_date)
    return f"{event_date.month:02d}{event_date.day:02d}"


class EventService:

    @staticmethod
    async def load_snapshot() -> List[dict]:
        """
        Lấy ảnh chụp toàn bộ sự kiện (id, created_at, event_date) theo thứ tự tạo.
        """
        events = await Event.find({}, sort="+createdAt").to_list()
        return [
            {"id": str(event.id), "created_at": event.createdAt, "event_date": event.eventDate}
            for event in events
        ]

    @staticmethod
    async def assign_short_code(event: Event) -> str:
        """
        Tính mã rút gọn từ ảnh chụp mới nhất và lưu vào sự kiện.
        Mã được lưu lại nên không bị thay đổi khi có sự kiện mới.
        """
        async with _short_code_locks[_month_day_key(event.eventDate)]:
            snapshot = await EventService.load_snapshot()
            code = generate_short_code(str(event.id), event.eventDate, snapshot)

            # Sự kiện được dời ngày hoặc đã có sự kiện bị xóa: bỏ qua các mã đã có chủ
            ordinal = int(code[4:])
            while await Event.find_one({"shortCode": code, "_id": {"$ne": event.id}}):
                ordinal += 1
                code = format_short_code(int(code[:2]), int(code[2:4]), ordinal)

            event.shortCode = code
            await event.save()
        logger.info("Assigned short code %s to event %s", event.shortCode, event.id)
        return event.shortCode

    @staticmethod
    async def backfill_short_codes() -> int:
        """
        Cấp mã rút gọn cho các sự kiện cũ chưa có mã, theo thứ tự tạo.
        Chạy một lần khi khởi động để các request đọc không phải ghi dữ liệu.
        """
        events = await Event.find({"shortCode": None}, sort="+createdAt").to_list()
        for event in events:
            await EventService.assign_short_code(event)
        if events:
            logger.info("Backfilled short codes for %s events", len(events))
        return len(events)

    @staticmethod
    async def ensure_short_code(event: Event) -> str:
        """
        Trả về mã đã lưu; nếu sự kiện chưa có mã thì cấp và lưu ngay.

        Thường không xảy ra sau backfill_short_codes() lúc khởi động. Nếu xảy ra
        khi sự kiện được tìm bằng mã cũ (tính lại theo MMDD), mã được lưu có thể
        khác với mã trong URL vừa truy cập.
        """
        if event.shortCode:
            return event.shortCode
        return await EventService.assign_short_code(event)

    @staticmethod
    async def get_participant_count(event_id: str) -> int:
        return await EventRegistration.find({"eventId": event_id}).count()

    @staticmethod
    async def to_public(event: Event) -> EventPublic:
        short_code = await EventService.ensure_short_code(event)
        return EventPublic(
            id=str(event.id),
            title=event.title,
            description=event.description,
            eventDate=event.eventDate.isoformat(),
            endDate=event.endDate.isoformat() if event.endDate else None,
            location=event.location,
            price=event.price,
            maxParticipants=event.maxParticipants,
            thumbnailUrl=event.thumbnailUrl,
            eventType=event.eventType,
            createdBy=event.createdBy,
            shortCode=short_code,
            shortUrl=get_event_short_url(short_code),
            participantCount=await EventService.get_participant_count(str(event.id)),
            createdAt=event.createdAt.isoformat()
        )

    @staticmethod
    async def create_event(creator_id: str, data: EventCreate) -> Event:
        """
        Tạo sự kiện mới.
        Người tạo luôn là người dùng của phiên hiện tại, không lấy từ dữ liệu client.
        """
        new_event = Event(
            title=data.title.strip(),
            description=data.description.strip(),
            eventDate=to_local(data.eventDate),
            endDate=to_local(data.endDate) if data.endDate else None,
            location=data.location or None,
            price=data.price if data.price and data.price > 0 else None,
            maxParticipants=data.maxParticipants or None,
            thumbnailUrl=data.thumbnailUrl or None,
            eventType=data.eventType,
            createdBy=creator_id,
        )
        await new_event.insert()
        await EventService.assign_short_code(new_event)
        return new_event

    @staticmethod
    async def list_events(upcoming_only: bool = False, skip: int = 0, limit: int = 20) -> List[Event]:
        """
        Lấy danh sách sự kiện.
        upcoming_only: chỉ lấy sự kiện chưa diễn ra, sắp xếp gần nhất trước.
        """
        if upcoming_only:
            return await Event.find(
                {"eventDate": {"$gte": local_now()}},
                sort="+eventDate",
                skip=skip,
                limit=limit
            ).to_list()
        return await Event.find({}, sort="-eventDate", skip=skip, limit=limit).to_list()

    @staticmethod
    async def get_event(event_id: str) -> Event:
        if not ObjectId.is_valid(event_id):
            raise ValueError("Không tìm thấy sự kiện.")
        event = await Event.get(event_id)
        if not event:
            raise ValueError("Không tìm thấy sự kiện.")
        return event

    @staticmethod
    async def get_event_by_short_code(code: str) -> Optional[Event]:
        """
        Tìm sự kiện từ đoạn cuối của URL /e/<code>.

        1. Chuỗi có dạng ObjectId được coi là ID sự kiện.
        2. Tìm theo mã rút gọn đã lưu.
        3. Mã chưa được lưu (sự kiện cũ): tính lại theo MMDD và số thứ tự.
        """
        if ObjectId.is_valid(code):
            return await Event.get(code)

        event = await Event.find_one({"shortCode": code})
        if event:
            return event

        query = build_event_query_from_short_code(code)
        if not query:
            return None

        snapshot = await EventService.load_snapshot()
        event_id = find_event_id_by_ordinal(query.month, query.day, query.ordinal, snapshot)
        if not event_id:
            return None

        logger.info("Resolved legacy short code %s to event %s", code, event_id)
        return await Event.get(event_id)

    @staticmethod
    async def _get_managed_event(event_id: str, user: User) -> Event:
        event = await EventService.get_event(event_id)
        if event.createdBy != str(user.id) and not user_is_admin(user):
            raise PermissionError("Chỉ người tạo sự kiện hoặc quản trị viên mới có quyền thực hiện thao tác này.")
        return event

    @staticmethod
    async def update_event(event_id: str, user: User, data: EventUpdate) -> Event:
        """
        Cập nhật sự kiện. Chỉ người tạo hoặc quản trị viên.
        Nếu ngày/tháng diễn ra thay đổi thì mã rút gọn được cấp lại.
        """
        event = await EventService._get_managed_event(event_id, user)
        date_changed = _month_day_key(event.eventDate) != _month_day_key(data.eventDate)

        event.title = data.title.strip()
        event.description = data.description.strip()
        event.eventDate = to_local(data.eventDate)
        event.endDate = to_local(data.endDate) if data.endDate else None
        event.location = data.location or None
        event.price = data.price if data.price and data.price > 0 else None
        event.maxParticipants = data.maxParticipants or None
        event.thumbnailUrl = data.thumbnailUrl or None
        event.eventType = data.eventType
        event.updatedAt = local_now()
        await event.save()

        if date_changed:
            await EventService.assign_short_code(event)
        return event

    @staticmethod
    async def delete_event(event_id: str, user: User):
        """
        Xóa sự kiện cùng toàn bộ đăng ký. Chỉ người tạo hoặc quản trị viên.
        """
        event = await EventService._get_managed_event(event_id, user)
        await EventRegistration.find({"eventId": str(event.id)}).delete()
        await event.delete()
        return {"message": "Sự kiện đã được xóa thành công"}
