"""
Mã rút gọn cho URL sự kiện.

Định dạng: MMDD + số thứ tự (01, 02, 03...)
Ví dụ: 121901 -> sự kiện được tạo đầu tiên trong số các sự kiện diễn ra ngày 19/12.

Lưu ý: số thứ tự được tính trên TẤT CẢ các năm có cùng MMDD, vì vậy mã không
chứa năm. Hai sự kiện cùng ngày/tháng ở hai năm khác nhau dùng chung một dãy số.
"""
from typing import Iterable, List, Mapping, Optional
from pydantic import BaseModel
from .local_time import DateLike, to_local

SHORT_URL_PREFIX = "/e/"


class ShortCodeParts(BaseModel):
    """Kết quả phân tích một mã rút gọn."""
    monthDay: str
    ordinal: int


class ShortCodeQuery(BaseModel):
    """Điều kiện truy vấn sự kiện được suy ra từ mã rút gọn."""
    month: int
    day: int
    ordinal: int


def _same_month_day(events: Iterable[Mapping], month: int, day: int) -> List[Mapping]:
    # Lọc theo MMDD, bỏ qua năm; sắp xếp ổn định theo created_at
    matching = []
    for event in events:
        event_date = to_local(event["event_date"])
        if event_date.month == month and event_date.day == day:
            matching.append(event)
    return sorted(matching, key=lambda e: to_local(e["created_at"]))


def format_short_code(month: int, day: int, ordinal: int) -> str:
    return f"{month:02d}{day:02d}{ordinal:02d}"


def generate_short_code(event_id: str, event_date: DateLike, all_events: Iterable[Mapping]) -> str:
    """
    Tạo mã rút gọn cho một sự kiện từ ngày diễn ra và thứ tự tạo.

    Args:
        event_id: ID của sự kiện cần tạo mã.
        event_date: Ngày diễn ra sự kiện.
        all_events: Ảnh chụp toàn bộ sự kiện, mỗi phần tử có 'id', 'created_at', 'event_date'.

    Returns:
        str: Mã dạng MMDDNN. Nếu có từ 100 sự kiện cùng MMDD trở lên,
        phần số thứ tự sẽ dài hơn 2 chữ số (không bị cắt bớt).
    """
    date = to_local(event_date)
    matching = _same_month_day(all_events, date.month, date.day)

    ordinal = len(matching) + 1  # Sự kiện vừa tạo có thể chưa có trong ảnh chụp
    for index, event in enumerate(matching):
        if str(event["id"]) == str(event_id):
            ordinal = index + 1
            break

    return format_short_code(date.month, date.day, ordinal)


def get_event_short_url(short_code: str) -> str:
    """Đường dẫn ngắn của sự kiện, ví dụ: /e/121901"""
    return f"{SHORT_URL_PREFIX}{short_code}"


def parse_short_code(short_code: str) -> Optional[ShortCodeParts]:
    """
    Tách tiền tố ngày (MMDD) và số thứ tự từ mã rút gọn.
    Trả về None nếu mã ngắn hơn 6 ký tự hoặc số thứ tự không phải số nguyên dương.
    """
    if short_code is None or len(short_code) < 6:
        return None

    month_day = short_code[:4]
    ordinal_segment = short_code[4:]
    if not (ordinal_segment.isascii() and ordinal_segment.isdigit()):
        return None

    ordinal = int(ordinal_segment)
    if ordinal < 1:
        return None

    return ShortCodeParts(monthDay=month_day, ordinal=ordinal)


def build_event_query_from_short_code(short_code: str) -> Optional[ShortCodeQuery]:
    """Tạo điều kiện tìm sự kiện (tháng, ngày, số thứ tự) từ mã rút gọn."""
    parsed = parse_short_code(short_code)
    if not parsed or not (parsed.monthDay.isascii() and parsed.monthDay.isdigit()):
        return None

    month = int(parsed.monthDay[:2])
    day = int(parsed.monthDay[2:])
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return None

    return ShortCodeQuery(month=month, day=day, ordinal=parsed.ordinal)


def find_event_id_by_ordinal(month: int, day: int, ordinal: int, all_events: Iterable[Mapping]) -> Optional[str]:
    """
    Tìm ID sự kiện theo MMDD và số thứ tự (1-based) trong ảnh chụp sự kiện.
    Dùng cho các mã chưa được lưu vào cơ sở dữ liệu.
    """
    matching = _same_month_day(all_events, month, day)
    if ordinal < 1 or ordinal > len(matching):
        return None
    return str(matching[ordinal - 1]["id"])
