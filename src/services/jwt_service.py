from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from pydantic import BaseModel
from .. import configs

ACCESS_TOKEN_EXPIRE_MINUTES = configs.ACCESS_TOKEN_EXPIRE_MINUTES
REFRESH_TOKEN_EXPIRE_DAYS = configs.REFRESH_TOKEN_EXPIRE_DAYS

class TokenData(BaseModel):
    """Mô hình dữ liệu cho payload được giải mã từ token."""
    username: Optional[str] = None
    tokenType: Optional[str] = None

def _encode(data: dict, expire: datetime, token_type: str) -> str:
    to_encode = data.copy()
    to_encode.update({"exp": expire, "type": token_type})
    # Mã hóa token với khóa bí mật và thuật toán đã định cấu hình
    return jwt.encode(to_encode, configs.SECRET_KEY, algorithm=configs.ALGORITHM)

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Tạo một token truy cập JWT mới.

    Args:
        data (dict): Dữ liệu (payload) để mã hóa vào token.
        expires_delta (Optional[timedelta]): Thời gian tồn tại của token. Mặc định là 15 phút.

    Returns:
        str: Token JWT đã được mã hóa.
    """
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=15))
    return _encode(data, expire, "access")

def create_refresh_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Tạo một refresh token JWT mới.
    """
    expire = datetime.utcnow() + (expires_delta or timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS))
    return _encode(data, expire, "refresh")

def decode_access_token(token: str) -> Optional[TokenData]:
    """
    Giải mã một token JWT và trả về payload của nó.

    Returns:
        Optional[TokenData]: Dữ liệu payload của token nếu giải mã thành công, nếu không thì trả về None.
    """
    try:
        payload = jwt.decode(token, configs.SECRET_KEY, algorithms=[configs.ALGORITHM])
        username: str = payload.get("sub") # Trích xuất chủ thể (user id)
        if username is None:
            return None
        return TokenData(username=username, tokenType=payload.get("type"))
    except JWTError:
        # Token hết hạn hoặc không hợp lệ
        return None
