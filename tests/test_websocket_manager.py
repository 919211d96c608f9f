import asyncio
from datetime import datetime

from src.websocket import ConnectionManager


class FakeSocket:

    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    async def accept(self):
        pass

    async def send_json(self, data):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(data)


class TestConnectionManager:

    def test_broadcast_serializes_datetimes(self):
        manager = ConnectionManager()
        socket = FakeSocket()
        asyncio.run(manager.connect("u1", socket))

        asyncio.run(manager.broadcast_to_user("u1", {"at": datetime(2024, 12, 19, 9), "items": [datetime(2024, 1, 1)]}))

        assert socket.sent == [{"at": "2024-12-19T09:00:00", "items": ["2024-01-01T00:00:00"]}]

    def test_dead_socket_is_dropped(self):
        manager = ConnectionManager()
        alive, dead = FakeSocket(), FakeSocket(fail=True)
        asyncio.run(manager.connect("u1", alive))
        asyncio.run(manager.connect("u1", dead))

        asyncio.run(manager.broadcast_to_user("u1", {"type": "post_comment"}))

        assert manager.active_connections["u1"] == [alive]
        assert manager.is_user_online("u1")

    def test_disconnect_unknown_user_is_noop(self):
        manager = ConnectionManager()
        manager.disconnect("nobody", FakeSocket())
        assert not manager.is_user_online("nobody")
