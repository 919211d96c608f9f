from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional
from ..services import EventService, RegistrationService
from ..services.registration_service import to_registration_public
from ..schemas import (
    EventCreate,
    EventUpdate,
    EventPublic,
    RegistrationCreate,
    GuestRegistrationCreate,
    GuestParticipantCreate,
    RegistrationPublic,
    RegistrationResult
)
from ..models import User
from ..security import get_current_user, get_optional_user

router = APIRouter(tags=["Event"])

@router.post("", response_model=EventPublic, status_code=201)
async def create_event(
    event_data: EventCreate,
    current_user: User = Depends(get_current_user)
):
    """Tạo sự kiện mới. Mã rút gọn được cấp ngay khi tạo."""
    new_event = await EventService.create_event(str(current_user.id), event_data)
    return await EventService.to_public(new_event)

@router.get("", response_model=List[EventPublic])
async def list_events(upcoming: bool = False, skip: int = 0, limit: int = 20):
    """Danh sách sự kiện (công khai)."""
    events = await EventService.list_events(upcoming_only=upcoming, skip=skip, limit=limit)
    return [await EventService.to_public(event) for event in events]

@router.get("/{event_id}", response_model=EventPublic)
async def get_event(event_id: str):
    try:
        event = await EventService.get_event(event_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return await EventService.to_public(event)

@router.put("/{event_id}", response_model=EventPublic)
async def update_event(
    event_id: str,
    event_data: EventUpdate,
    current_user: User = Depends(get_current_user)
):
    """Cập nhật sự kiện. Chỉ người tạo hoặc quản trị viên."""
    try:
        event = await EventService.update_event(event_id, current_user, event_data)
        return await EventService.to_public(event)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

@router.delete("/{event_id}", status_code=200)
async def delete_event(
    event_id: str,
    current_user: User = Depends(get_current_user)
):
    """Xóa sự kiện cùng các đăng ký. Chỉ người tạo hoặc quản trị viên."""
    try:
        return await EventService.delete_event(event_id, current_user)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

@router.post("/{event_id}/register", response_model=RegistrationResult, status_code=201)
async def register_for_event(
    event_id: str,
    registration_data: RegistrationCreate,
    current_user: Optional[User] = Depends(get_optional_user)
):
    """
    Đăng ký tham gia sự kiện.
    Thành viên đã đăng nhập đăng ký bằng tài khoản; khách phải cung cấp tên và liên hệ.
    """
    try:
        if current_user is not None:
            registration = await RegistrationService.register_user_for_event(
                event_id,
                current_user,
                guest_name=registration_data.guestName,
                guest_contact=registration_data.guestContact,
                payment_status=registration_data.paymentStatus,
                custom_field_responses=registration_data.customFieldResponses
            )
        else:
            guest = GuestRegistrationCreate(**registration_data.model_dump())
            registration = await RegistrationService.register_guest_for_event(
                event_id,
                guest.guestName,
                guest.guestContact,
                payment_status=guest.paymentStatus,
                custom_field_responses=guest.customFieldResponses
            )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RegistrationResult(registrationId=str(registration.id))

@router.delete("/{event_id}/register", status_code=200)
async def cancel_registration(
    event_id: str,
    current_user: User = Depends(get_current_user)
):
    try:
        return await RegistrationService.cancel_registration(event_id, current_user)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.post("/{event_id}/guests", response_model=RegistrationPublic, status_code=201)
async def add_guest_participant(
    event_id: str,
    guest_data: GuestParticipantCreate,
    current_user: User = Depends(get_current_user)
):
    """Người tạo sự kiện thêm khách tham gia."""
    try:
        registration = await RegistrationService.add_guest_participant(
            event_id,
            current_user,
            guest_data.guestName,
            guest_data.guestContact
        )
        return to_registration_public(registration)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

@router.get("/{event_id}/registrations", response_model=List[RegistrationPublic])
async def list_registrations(
    event_id: str,
    current_user: User = Depends(get_current_user)
):
    """Danh sách người đăng ký. Chỉ người tạo hoặc quản trị viên."""
    try:
        registrations = await RegistrationService.list_registrations(event_id, current_user)
        return [to_registration_public(r) for r in registrations]
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
