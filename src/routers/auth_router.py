from fastapi import APIRouter, HTTPException
from datetime import timedelta
from bson import ObjectId
from ..services import AuthService, jwt_service
from ..schemas import UserCreate, UserPublic, UserLogin, RefreshTokenRequest
from ..services.jwt_service import ACCESS_TOKEN_EXPIRE_MINUTES
from ..models import User

router = APIRouter(tags=["Auth"])

def _issue_tokens(user_id: str) -> dict:
    access_token = jwt_service.create_access_token(
        data={"sub": user_id},
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    refresh_token = jwt_service.create_refresh_token(data={"sub": user_id})
    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "token_type": "bearer"
    }

@router.post("/register", response_model=UserPublic, status_code=201)
async def register_user(user_data: UserCreate):
    """
    Đăng ký thành viên mới.
    Trả về lỗi 400 nếu tên người dùng hoặc email đã tồn tại.
    """
    try:
        new_user = await AuthService.register_user(
            username=user_data.username,
            email=user_data.email,
            password=user_data.password,
            displayName=user_data.displayName
        )
        return UserPublic(
            id=str(new_user.id),
            username=new_user.username,
            email=new_user.email,
            displayName=new_user.displayName,
            role=new_user.role
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/login")
async def login_for_access_token(login_data: UserLogin):
    """
    Đăng nhập và nhận access token + refresh token.
    Lần đăng nhập đầu tiên trong ngày được cộng điểm.
    """
    try:
        user = await AuthService.login_user(
            username=login_data.username,
            password=login_data.password
        )
    except ValueError as e:
        # Tài khoản đã bị xóa
        raise HTTPException(
            status_code=403,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user:
        raise HTTPException(
            status_code=401,
            detail="Tên đăng nhập hoặc mật khẩu không chính xác",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return _issue_tokens(str(user.id))

@router.post("/refresh")
async def refresh_access_token(payload: RefreshTokenRequest):
    """
    Nhận một refresh token và trả về cặp token mới.
    """
    token_data = jwt_service.decode_access_token(payload.refresh_token)
    if not token_data or not token_data.username or token_data.tokenType != "refresh":
        raise HTTPException(
            status_code=401,
            detail="Refresh token không hợp lệ hoặc đã hết hạn",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Xác minh user vẫn tồn tại trong database
    user = None
    if ObjectId.is_valid(token_data.username):
        user = await User.find_one(User.id == ObjectId(token_data.username))
    if not user:
        raise HTTPException(
            status_code=401,
            detail="User không tồn tại",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if user.status == 'deleted':
        raise HTTPException(
            status_code=403,
            detail="Tài khoản đã bị xóa. Vui lòng liên hệ hỗ trợ nếu cần khôi phục.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return _issue_tokens(str(user.id))
