import logging
from motor.motor_asyncio import AsyncIOMotorClient # Thư viện bất đồng bộ cho MongoDB
from beanie import init_beanie # ODM (Object-Document Mapper) cho MongoDB
from typing import Type

from .. import configs
# Nhập các model từ các file khác
from .user import User
from .badge import Badge
from .event import Event
from .event_registration import EventRegistration
from .post import Post
from .comment import Comment
from .notification import Notification

logger = logging.getLogger(__name__)

# Danh sách các model Beanie sẽ được khởi tạo
DOCUMENT_MODELS: list[Type] = [User, Badge, Event, EventRegistration, Post, Comment, Notification]

client = None  # client global, dùng 1 lần suốt vòng đời app

async def init_db():
    """
    Khởi tạo kết nối cơ sở dữ liệu và Beanie ODM.
    Đảm bảo chỉ tạo một client duy nhất.
    """
    global client

    # Nếu đã có client, bỏ qua
    if client is not None:
        return client

    if not configs.MONGO_URI:
        raise ValueError("Không tìm thấy MONGO_URI trong các biến môi trường.")

    # Tạo client duy nhất
    client = AsyncIOMotorClient(configs.MONGO_URI)
    database = client.get_database(configs.MONGO_DB_NAME)

    await init_beanie(database=database, document_models=DOCUMENT_MODELS)
    logger.info("Connected to MongoDB database '%s'", configs.MONGO_DB_NAME)

    return client
