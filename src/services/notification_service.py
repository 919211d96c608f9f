from typing import List
from bson import ObjectId
from ..models import Notification


class NotificationService:
    """
    Service xử lý các thông báo của người dùng
    """

    @staticmethod
    async def create_notification(
        user_id: str,
        notification_type: str,
        title: str,
        message: str,
        metadata: dict = None
    ):
        """
        Tạo một thông báo mới cho người dùng

        Args:
            user_id: ID của người dùng nhận thông báo
            notification_type: Loại thông báo (post_comment, comment_reply, event_registration, badge_awarded)
            title: Tiêu đề thông báo
            message: Nội dung thông báo
            metadata: Thông tin bổ sung (userId của người gửi, postId, eventId, etc.)
        """
        notification = Notification(
            userId=user_id,
            type=notification_type,
            title=title,
            message=message,
            metadata=metadata or {},
            isRead=False
        )
        await notification.save()
        return notification

    @staticmethod
    async def get_user_notifications(
        user_id: str,
        limit: int = 50,
        skip: int = 0,
        unread_only: bool = False
    ) -> List[dict]:
        """
        Lấy danh sách thông báo của người dùng, mới nhất trước
        """
        query = {"userId": user_id}
        if unread_only:
            query["isRead"] = False

        notifications = await Notification.find(
            query,
            limit=limit,
            skip=skip
        ).sort(-Notification.createdAt).to_list()

        return [
            {
                "id": str(notif.id),
                "userId": notif.userId,
                "type": notif.type,
                "title": notif.title,
                "message": notif.message,
                "metadata": notif.metadata,
                "isRead": notif.isRead,
                "createdAt": notif.createdAt.isoformat()
            }
            for notif in notifications
        ]

    @staticmethod
    async def _get_own_notification(notification_id: str, user_id: str) -> Notification:
        notification = await Notification.get(notification_id) if ObjectId.is_valid(notification_id) else None
        if not notification:
            raise ValueError("Không tìm thấy thông báo")
        if notification.userId != user_id:
            raise PermissionError("Không có quyền thao tác trên thông báo này")
        return notification

    @staticmethod
    async def mark_as_read(notification_id: str, user_id: str):
        """
        Đánh dấu một thông báo là đã đọc
        """
        notification = await NotificationService._get_own_notification(notification_id, user_id)
        notification.isRead = True
        await notification.save()
        return notification

    @staticmethod
    async def mark_all_as_read(user_id: str):
        await Notification.find({"userId": user_id, "isRead": False}).update(
            {"$set": {"isRead": True}}
        )

    @staticmethod
    async def delete_notification(notification_id: str, user_id: str):
        notification = await NotificationService._get_own_notification(notification_id, user_id)
        await notification.delete()

    @staticmethod
    async def get_unread_count(user_id: str) -> int:
        """
        Lấy số lượng thông báo chưa đọc của người dùng
        """
        return await Notification.find({"userId": user_id, "isRead": False}).count()
