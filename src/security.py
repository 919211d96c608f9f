import logging
from typing import Optional
from bson import ObjectId
from fastapi import Depends, HTTPException, status, WebSocket
from fastapi.security import OAuth2PasswordBearer
from .services import jwt_service
from .models import User
from .utils import user_is_admin

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)

async def get_user_from_token(token: str) -> User:
    try:
        token_data = jwt_service.decode_access_token(token)
        if not token_data or not token_data.username:
            logger.error(f"Token decode failed or missing subject: {token_data}")
            raise credentials_exception
        if token_data.tokenType == "refresh":
            logger.error("Refresh token used as access token")
            raise credentials_exception

        # Kiểm tra định dạng ObjectId
        if not ObjectId.is_valid(token_data.username):
            logger.error(f"Invalid ObjectId format: {token_data.username}")
            raise credentials_exception

        user = await User.find_one(User.id == ObjectId(token_data.username))

        if user is None or user.status == 'deleted':
            logger.error(f"User not found with ID: {token_data.username}")
            raise credentials_exception

        return user
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error in get_user_from_token: {e}")
        raise credentials_exception

async def get_current_user(token: str = Depends(oauth2_scheme)) -> User:
    return await get_user_from_token(token)

async def get_current_user_id(token: str = Depends(oauth2_scheme)) -> str:
    user = await get_user_from_token(token)
    return str(user.id)

async def get_optional_user(token: Optional[str] = Depends(optional_oauth2_scheme)) -> Optional[User]:
    """Cho phép khách chưa đăng nhập; trả về None nếu không có token."""
    if not token:
        return None
    return await get_user_from_token(token)

async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Chỉ cho phép quản trị viên (admin, master hoặc email master)."""
    if not user_is_admin(current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized")
    return current_user

async def get_current_user_ws(websocket: WebSocket) -> User:

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        # Đóng kết nối xong vẫn phải ném lỗi để dừng chuỗi dependency
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Token is missing")

    try:
        return await get_user_from_token(token)
    except HTTPException:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        raise
