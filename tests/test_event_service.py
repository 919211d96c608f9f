"""
EventService short-code persistence and lookup, with Beanie queries patched.
"""

import asyncio
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

from src.models import Event
from src.services import EventService


def _stored_event(event_id, created_at, event_date, short_code=None):
    return SimpleNamespace(
        id=event_id,
        createdAt=created_at,
        eventDate=event_date,
        shortCode=short_code,
        save=AsyncMock(),
    )


def _query_result(items):
    return SimpleNamespace(to_list=AsyncMock(return_value=items))


class TestAssignShortCode:

    def test_first_event_of_the_day(self):
        event = _stored_event("E1", datetime(2024, 12, 1, 9), datetime(2024, 12, 19, 19))
        with patch.object(Event, "find", return_value=_query_result([event])), \
                patch.object(Event, "find_one", new=AsyncMock(return_value=None)):
            code = asyncio.run(EventService.assign_short_code(event))

        assert code == "121901"
        assert event.shortCode == "121901"
        event.save.assert_awaited_once()

    def test_taken_code_is_bumped(self):
        # Sự kiện cũ giữ 121901 đã dời sang ngày khác nên không có trong ảnh chụp 19/12
        event = _stored_event("E2", datetime(2024, 12, 2, 9), datetime(2024, 12, 19, 19))
        holder = _stored_event("E1", datetime(2024, 12, 1, 9), datetime(2024, 12, 20, 19), "121901")
        find_one = AsyncMock(side_effect=[holder, None])
        with patch.object(Event, "find", return_value=_query_result([holder, event])), \
                patch.object(Event, "find_one", new=find_one):
            code = asyncio.run(EventService.assign_short_code(event))

        assert code == "121902"
        assert find_one.await_args_list[0].args[0] == {"shortCode": "121901", "_id": {"$ne": "E2"}}
        assert find_one.await_args_list[1].args[0]["shortCode"] == "121902"
        event.save.assert_awaited_once()

    def test_backfill_assigns_each_event_without_code(self):
        legacy = [
            _stored_event("E1", datetime(2023, 1, 1, 9), datetime(2023, 3, 1, 10)),
            _stored_event("E2", datetime(2023, 1, 2, 9), datetime(2023, 3, 1, 10)),
        ]
        with patch.object(Event, "find", return_value=_query_result(legacy)) as find, \
                patch.object(EventService, "assign_short_code", new=AsyncMock()) as assign:
            count = asyncio.run(EventService.backfill_short_codes())

        assert count == 2
        assert find.call_args.args[0] == {"shortCode": None}
        assert [c.args[0].id for c in assign.await_args_list] == ["E1", "E2"]

    def test_ensure_short_code_keeps_stored_code(self):
        event = _stored_event("E1", datetime(2024, 12, 1, 9), datetime(2024, 12, 19, 19), "121903")
        with patch.object(EventService, "assign_short_code", new=AsyncMock()) as assign:
            assert asyncio.run(EventService.ensure_short_code(event)) == "121903"
        assign.assert_not_awaited()


class TestGetEventByShortCode:

    def setup_method(self):
        self.first = _stored_event("E1", datetime(2024, 12, 1, 9), datetime(2024, 12, 19, 19))
        self.second = _stored_event("E2", datetime(2024, 12, 2, 9), datetime(2024, 12, 19, 14))

    def test_object_id_is_treated_as_event_id(self):
        get = AsyncMock(return_value=self.first)
        with patch.object(Event, "get", new=get), \
                patch.object(Event, "find_one", new=AsyncMock()) as find_one:
            event = asyncio.run(EventService.get_event_by_short_code("64e000000000000000000001"))

        assert event is self.first
        get.assert_awaited_once_with("64e000000000000000000001")
        find_one.assert_not_awaited()

    def test_stored_code_wins_over_recomputed_lookup(self):
        with patch.object(Event, "find_one", new=AsyncMock(return_value=self.second)) as find_one, \
                patch.object(Event, "find") as find:
            event = asyncio.run(EventService.get_event_by_short_code("121901"))

        assert event is self.second
        find_one.assert_awaited_once_with({"shortCode": "121901"})
        find.assert_not_called()

    def test_legacy_code_resolves_by_ordinal(self):
        get = AsyncMock(return_value=self.second)
        with patch.object(Event, "find_one", new=AsyncMock(return_value=None)), \
                patch.object(Event, "find", return_value=_query_result([self.first, self.second])), \
                patch.object(Event, "get", new=get):
            event = asyncio.run(EventService.get_event_by_short_code("121902"))

        assert event is self.second
        get.assert_awaited_once_with("E2")

    def test_legacy_code_past_last_ordinal_is_none(self):
        with patch.object(Event, "find_one", new=AsyncMock(return_value=None)), \
                patch.object(Event, "find", return_value=_query_result([self.first, self.second])), \
                patch.object(Event, "get", new=AsyncMock()) as get:
            assert asyncio.run(EventService.get_event_by_short_code("121903")) is None
        get.assert_not_awaited()

    def test_malformed_code_is_none_without_snapshot(self):
        with patch.object(Event, "find_one", new=AsyncMock(return_value=None)), \
                patch.object(Event, "find") as find:
            assert asyncio.run(EventService.get_event_by_short_code("abc")) is None
            assert asyncio.run(EventService.get_event_by_short_code("1399xx")) is None
        find.assert_not_called()
