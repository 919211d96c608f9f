from datetime import date, datetime, timedelta, timezone
from typing import Union
from .. import configs

DateLike = Union[datetime, date, str]


def local_now() -> datetime:
    """Thời điểm hiện tại theo giờ địa phương (naive, UTC+9 mặc định)."""
    return datetime.utcnow() + timedelta(hours=configs.LOCAL_UTC_OFFSET_HOURS)


def to_local(value: DateLike) -> datetime:
    """
    Chuyển một giá trị ngày giờ về datetime naive theo giờ địa phương.

    - Chuỗi ISO-8601 được phân tích (hỗ trợ hậu tố 'Z').
    - date thuần túy được coi là nửa đêm cùng ngày.
    - datetime có múi giờ được đổi sang giờ địa phương; datetime naive giữ nguyên.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is not None:
        local_tz = timezone(timedelta(hours=configs.LOCAL_UTC_OFFSET_HOURS))
        value = value.astimezone(local_tz).replace(tzinfo=None)
    return value
