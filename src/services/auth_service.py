import logging
from passlib.context import CryptContext
from .. import configs
from ..models.user import User
from ..utils.local_time import local_now

logger = logging.getLogger(__name__)

# Thiết lập ngữ cảnh băm mật khẩu
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

class AuthService:

    @staticmethod
    def verify_password(plain_password, hashed_password):
        """Xác minh mật khẩu thuần túy với mật khẩu đã được băm."""
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def get_password_hash(password):
        """Băm một mật khẩu thuần túy."""
        return pwd_context.hash(password)

    @staticmethod
    async def register_user(username, email, password, displayName):
        """
        Xử lý đăng ký thành viên mới.
        Kiểm tra tên người dùng/email đã tồn tại, băm mật khẩu và tạo người dùng.
        """
        if await User.find_one(User.username == username):
            raise ValueError(f"Tên người dùng '{username}' đã tồn tại.")
        if await User.find_one(User.email == email):
            raise ValueError(f"Email '{email}' đã tồn tại.")

        new_user = User(
            username=username,
            email=email,
            hashedPassword=AuthService.get_password_hash(password),
            displayName=displayName.strip()
        )
        await new_user.save()
        logger.info("Registered user %s", new_user.id)
        return new_user

    @staticmethod
    async def login_user(username, password):
        """
        Xử lý đăng nhập của người dùng.
        Trả về None nếu sai thông tin; tài khoản đã xóa sẽ ném ValueError.
        """
        user = await User.find_one(User.username == username)
        if not user:
            return None

        # Kiểm tra nếu tài khoản đã bị xóa (soft delete)
        if user.status == 'deleted':
            raise ValueError("Tài khoản đã bị xóa. Vui lòng liên hệ hỗ trợ nếu cần khôi phục.")

        if not AuthService.verify_password(password, user.hashedPassword):
            logger.info("Failed login for username %s", username)
            return None

        await AuthService.award_daily_login_points(user)
        return user

    @staticmethod
    def is_bonus_due(last_bonus_at, now) -> bool:
        """Điểm đăng nhập chỉ được cộng một lần mỗi ngày (theo giờ địa phương)."""
        return last_bonus_at is None or last_bonus_at.date() < now.date()

    @staticmethod
    async def award_daily_login_points(user: User) -> int:
        """
        Cộng điểm cho lần đăng nhập đầu tiên trong ngày.
        Trả về số điểm đã cộng (0 nếu hôm nay đã nhận).
        """
        now = local_now()
        if not AuthService.is_bonus_due(user.lastLoginBonusAt, now):
            return 0

        user.points += configs.DAILY_LOGIN_POINTS
        user.lastLoginBonusAt = now
        await user.save()
        return configs.DAILY_LOGIN_POINTS
