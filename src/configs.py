import os
import logging
from dotenv import load_dotenv # Để tải các biến môi trường từ file .env

# Tải các biến môi trường từ tệp .env
load_dotenv()

# Cơ sở dữ liệu
MONGO_URI = os.getenv("MONGO_URI")
MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "seoul-founders-club")

# JWT
SECRET_KEY = os.getenv("SECRET_KEY")  # Khóa bí mật để ký và xác minh token
ALGORITHM = os.getenv("ALGORITHM", "HS256")    # Thuật toán mã hóa để sử dụng
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 120))
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", 30))

# Giờ địa phương của câu lạc bộ (Asia/Seoul = UTC+9)
LOCAL_UTC_OFFSET_HOURS = int(os.getenv("LOCAL_UTC_OFFSET_HOURS", 9))

# Điểm thưởng cho lần đăng nhập đầu tiên trong ngày
DAILY_LOGIN_POINTS = int(os.getenv("DAILY_LOGIN_POINTS", 10))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def get_master_admin_emails() -> list[str]:
    """
    Danh sách email của quản trị viên cấp cao (master).
    Cấu hình qua MASTER_ADMIN_EMAILS=email1@example.com,email2@example.com
    """
    emails = os.getenv("MASTER_ADMIN_EMAILS", "")
    return [email.strip() for email in emails.split(",") if email.strip()]


def setup_logging(level: str = None):
    """Cấu hình logging cho toàn bộ ứng dụng (gọi một lần khi khởi động)."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
