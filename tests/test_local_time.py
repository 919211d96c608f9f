from datetime import date, datetime, timedelta, timezone

from src.utils.local_time import local_now, to_local


class TestToLocal:

    def test_naive_datetime_unchanged(self):
        value = datetime(2024, 12, 19, 10, 30)
        assert to_local(value) == value

    def test_plain_date_is_midnight(self):
        assert to_local(date(2024, 12, 19)) == datetime(2024, 12, 19)

    def test_iso_string_with_z_suffix(self):
        assert to_local("2024-12-19T15:30:00Z") == datetime(2024, 12, 20, 0, 30)

    def test_aware_datetime_converted_to_seoul(self):
        value = datetime(2024, 12, 19, 10, 0, tzinfo=timezone(timedelta(hours=9)))
        assert to_local(value) == datetime(2024, 12, 19, 10, 0)

    def test_local_now_is_naive(self):
        assert local_now().tzinfo is None
