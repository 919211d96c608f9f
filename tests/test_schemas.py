from datetime import datetime

import pytest
from pydantic import ValidationError

from src.schemas import CommentCreate, EventCreate, GuestRegistrationCreate, PostCreate


class TestEventCreate:

    def test_strips_title(self):
        event = EventCreate(title="  Founders Night ", description="Networking", eventDate=datetime(2024, 12, 19, 19))
        assert event.title == "Founders Night"

    def test_end_before_start_is_rejected(self):
        with pytest.raises(ValidationError):
            EventCreate(
                title="Founders Night",
                description="Networking",
                eventDate=datetime(2024, 12, 19, 19),
                endDate=datetime(2024, 12, 19, 18),
            )

    def test_blank_description_is_rejected(self):
        with pytest.raises(ValidationError):
            EventCreate(title="Founders Night", description="   ", eventDate=datetime(2024, 12, 19, 19))


class TestOtherSchemas:

    def test_unknown_board_is_rejected(self):
        with pytest.raises(ValidationError):
            PostCreate(boardSlug="random", title="Hello", content="World")

    def test_comment_content_is_stripped(self):
        assert CommentCreate(content="  좋아요 ").content == "좋아요"

    def test_guest_registration_requires_contact(self):
        with pytest.raises(ValidationError):
            GuestRegistrationCreate(guestName="Lee")
