from datetime import timedelta

from src.services.jwt_service import create_access_token, create_refresh_token, decode_access_token


class TestJwtService:

    def test_access_token_round_trip(self):
        token = create_access_token({"sub": "64b000000000000000000001"})
        data = decode_access_token(token)
        assert data.username == "64b000000000000000000001"
        assert data.tokenType == "access"

    def test_refresh_token_has_refresh_type(self):
        data = decode_access_token(create_refresh_token({"sub": "u1"}))
        assert data.tokenType == "refresh"

    def test_expired_token_is_rejected(self):
        token = create_access_token({"sub": "u1"}, expires_delta=timedelta(seconds=-10))
        assert decode_access_token(token) is None

    def test_garbage_and_missing_subject(self):
        assert decode_access_token("not-a-token") is None
        assert decode_access_token(create_access_token({"foo": "bar"})) is None
