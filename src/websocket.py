import logging
from typing import Dict, List, Any
from fastapi import APIRouter, WebSocket, Depends, WebSocketDisconnect
from datetime import datetime
from .models import User
from .security import get_current_user_ws

logger = logging.getLogger(__name__)

router = APIRouter()

class ConnectionManager:
    """Quản lý các kết nối WebSocket để đẩy thông báo thời gian thực."""

    def __init__(self):
        # Ánh xạ user_id tới danh sách các kết nối WebSocket đang hoạt động
        self.active_connections: Dict[str, List[WebSocket]] = {}

    async def connect(self, user_id: str, websocket: WebSocket):
        await websocket.accept()
        self.active_connections.setdefault(user_id, []).append(websocket)

    def disconnect(self, user_id: str, websocket: WebSocket):
        connections = self.active_connections.get(user_id)
        if not connections:
            return
        if websocket in connections:
            connections.remove(websocket)
        if not connections:
            del self.active_connections[user_id]

    def _serialize_for_json(self, obj: Any) -> Any:
        """Chuyển đổi datetime thành ISO string để gửi qua JSON."""
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, dict):
            return {k: self._serialize_for_json(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [self._serialize_for_json(v) for v in obj]
        return obj

    async def broadcast_to_user(self, user_id: str, data: dict):
        """
        Gửi JSON đến tất cả kết nối của một người dùng.
        Kết nối gửi lỗi (đã đóng phía client) sẽ bị loại bỏ.
        """
        json_ready_data = self._serialize_for_json(data)
        for connection in list(self.active_connections.get(user_id, [])):
            try:
                await connection.send_json(json_ready_data)
            except Exception as e:
                logger.warning("Dropping dead websocket for user %s: %s", user_id, e)
                self.disconnect(user_id, connection)

    def is_user_online(self, user_id: str) -> bool:
        return bool(self.active_connections.get(user_id))

# Tạo một instance duy nhất dùng toàn app
manager = ConnectionManager()

@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket, user: User = Depends(get_current_user_ws)):
    user_id = str(user.id)
    await manager.connect(user_id, websocket)
    try:
        while True:
            # Client chỉ giữ kết nối, không gửi dữ liệu
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(user_id, websocket)
