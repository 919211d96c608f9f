import asyncio
import logging
from typing import Dict, List, Optional
from ..models import Event, EventRegistration, User
from ..schemas import RegistrationPublic
from ..utils import user_is_admin, local_now
from .event_service import EventService

logger = logging.getLogger(__name__)


def clean_custom_field_responses(responses: Optional[Dict[str, str]]) -> Dict[str, str]:
    """Bỏ các câu trả lời rỗng và cắt khoảng trắng thừa."""
    if not responses:
        return {}
    return {
        field_id: value.strip()
        for field_id, value in responses.items()
        if value and value.strip()
    }


def to_registration_public(registration: EventRegistration) -> RegistrationPublic:
    return RegistrationPublic(
        id=str(registration.id),
        eventId=registration.eventId,
        userId=registration.userId,
        guestName=registration.guestName,
        guestContact=registration.guestContact,
        paymentStatus=registration.paymentStatus,
        customFieldResponses=registration.customFieldResponses,
        registeredAt=registration.registeredAt.isoformat()
    )


class RegistrationService:

    @staticmethod
    async def _ensure_capacity(event: Event):
        """Ném ValueError nếu sự kiện đã đủ người."""
        if not event.maxParticipants:
            return
        count = await EventService.get_participant_count(str(event.id))
        if count >= event.maxParticipants:
            logger.info("Registration rejected: event %s is full (%s)", event.id, count)
            raise ValueError("Event is full")

    @staticmethod
    def _notify_creator(event: Event, title: str, message: str, metadata: dict):
        """Thông báo cho người tạo sự kiện (chạy nền, không chặn request)."""
        async def create_registration_notification():
            from ..services.notification_service import NotificationService
            from ..websocket import manager
            try:
                await NotificationService.create_notification(
                    user_id=event.createdBy,
                    notification_type="event_registration",
                    title=title,
                    message=message,
                    metadata=metadata
                )
                await manager.broadcast_to_user(event.createdBy, {
                    "type": "event_registration",
                    "payload": metadata
                })
            except Exception as e:
                logger.warning("Failed to notify event creator %s: %s", event.createdBy, e)

        asyncio.create_task(create_registration_notification())

    @staticmethod
    async def register_guest_for_event(
        event_id: str,
        guest_name: str,
        guest_contact: str,
        payment_status: Optional[str] = None,
        custom_field_responses: Optional[Dict[str, str]] = None
    ) -> EventRegistration:
        """
        Đăng ký tham gia sự kiện cho khách (không có tài khoản).
        """
        event = await EventService.get_event(event_id)
        if not guest_name or not guest_name.strip():
            raise ValueError("Guest name is required")
        await RegistrationService._ensure_capacity(event)

        registration = EventRegistration(
            eventId=str(event.id),
            userId=None,
            guestName=guest_name.strip(),
            guestContact=guest_contact.strip() if guest_contact else None,
            paymentStatus=payment_status,
            customFieldResponses=clean_custom_field_responses(custom_field_responses)
        )
        await registration.insert()

        RegistrationService._notify_creator(
            event,
            title="Có người đăng ký sự kiện",
            message=f"{registration.guestName} (khách) đã đăng ký: {event.title}",
            metadata={"eventId": str(event.id), "registrationId": str(registration.id)}
        )
        return registration

    @staticmethod
    async def register_user_for_event(
        event_id: str,
        user: User,
        guest_name: Optional[str] = None,
        guest_contact: Optional[str] = None,
        payment_status: Optional[str] = None,
        custom_field_responses: Optional[Dict[str, str]] = None
    ) -> EventRegistration:
        """
        Đăng ký tham gia sự kiện cho thành viên.
        Mỗi thành viên chỉ có một đăng ký cho mỗi sự kiện (đăng ký lại sẽ cập nhật).
        """
        event = await EventService.get_event(event_id)
        user_id = str(user.id)

        registration = await EventRegistration.find_one(
            {"eventId": str(event.id), "userId": user_id}
        )
        is_new = registration is None
        if is_new:
            await RegistrationService._ensure_capacity(event)
            registration = EventRegistration(eventId=str(event.id), userId=user_id)

        registration.guestName = guest_name.strip() if guest_name and guest_name.strip() else None
        registration.guestContact = guest_contact.strip() if guest_contact and guest_contact.strip() else None
        registration.paymentStatus = payment_status
        registration.customFieldResponses = clean_custom_field_responses(custom_field_responses)
        await registration.save()

        if is_new and event.createdBy != user_id:
            RegistrationService._notify_creator(
                event,
                title="Có người đăng ký sự kiện",
                message=f"{user.displayName} đã đăng ký: {event.title}",
                metadata={
                    "eventId": str(event.id),
                    "registrationId": str(registration.id),
                    "userId": user_id,
                    "userDisplayName": user.displayName
                }
            )
        return registration

    @staticmethod
    async def add_guest_participant(
        event_id: str,
        user: User,
        guest_name: str,
        guest_contact: Optional[str] = None
    ) -> EventRegistration:
        """
        Người tạo sự kiện thêm khách vào danh sách tham gia.
        """
        event = await EventService.get_event(event_id)
        if event.createdBy != str(user.id):
            raise PermissionError("Unauthorized: Only event creators can add guest participants")

        if not guest_name or not guest_name.strip():
            raise ValueError("Guest name is required")

        await RegistrationService._ensure_capacity(event)

        registration = EventRegistration(
            eventId=str(event.id),
            userId=None,
            guestName=guest_name.strip(),
            guestContact=guest_contact.strip() if guest_contact and guest_contact.strip() else None,
        )
        await registration.insert()
        return registration

    @staticmethod
    async def list_registrations(event_id: str, user: User) -> List[EventRegistration]:
        """Danh sách đăng ký của sự kiện. Chỉ người tạo hoặc quản trị viên."""
        event = await EventService.get_event(event_id)
        if event.createdBy != str(user.id) and not user_is_admin(user):
            raise PermissionError("Bạn không được phép xem danh sách đăng ký của sự kiện này.")
        return await EventRegistration.find(
            {"eventId": str(event.id)},
            sort="+registeredAt"
        ).to_list()

    @staticmethod
    async def cancel_registration(event_id: str, user: User):
        """Thành viên hủy đăng ký của chính mình."""
        registration = await EventRegistration.find_one(
            {"eventId": event_id, "userId": str(user.id)}
        )
        if not registration:
            raise ValueError("Không tìm thấy đăng ký.")
        await registration.delete()
        return {"message": "Đã hủy đăng ký", "cancelledAt": local_now().isoformat()}
