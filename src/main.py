import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from src.routers import (
    auth_router,
    user_router,
    admin_router,
    badge_router,
    event_router,
    short_url_router,
    post_router,
    comment_router,
    notification_router,
)
from src import websocket
from src.models import init_db
from src.services import EventService
from src.configs import setup_logging

# Cấu hình logging trước khi khởi tạo app
setup_logging()
logger = logging.getLogger(__name__)

# Khởi tạo app FastAPI với thông tin Swagger UI
app = FastAPI(
    title="Seoul Founders Club",
    description="Backend cộng đồng thành viên **Seoul Founders Club**.\n\n"
                "Hệ thống hỗ trợ sự kiện và đăng ký tham gia (kèm URL rút gọn /e/MMDDNN), "
                "bảng tin, bình luận dạng cây, hồ sơ thành viên với huy hiệu và quản trị.",
    version="1.0.0"
)

# Exception handler cho RequestValidationError (Pydantic validation)
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Format lỗi validation cho user-friendly
    error_messages = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        message = error.get("msg", "Validation error")
        error_messages.append(f"{field}: {message}")

    detail = "; ".join(error_messages) if error_messages else "Lỗi validation dữ liệu"

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": detail}
    )

# Kết nối với cơ sở dữ liệu khi khởi động
@app.on_event("startup")
async def startup_db_client():
    await init_db()
    await EventService.backfill_short_codes()
    logger.info("Application startup complete")

# Gắn các router
app.include_router(auth_router.router, prefix="/api/auth", tags=["Xác thực"])
app.include_router(user_router.router, prefix="/api/users", tags=["Thành viên"])
app.include_router(admin_router.router, prefix="/api/admin", tags=["Quản trị"])
app.include_router(badge_router.router, prefix="/api/badges", tags=["Huy hiệu"])
app.include_router(event_router.router, prefix="/api/events", tags=["Sự kiện"])
app.include_router(short_url_router.router, prefix="/e", tags=["URL rút gọn"])
app.include_router(post_router.router, prefix="/api/posts", tags=["Bài viết"])
app.include_router(comment_router.router, prefix="/api", tags=["Bình luận"])
app.include_router(notification_router.router, prefix="/api", tags=["Thông báo"])
app.include_router(websocket.router, prefix="/websocket", tags=["Connect real-time"])

@app.get("/")
def read_root():
    return {"message": "Máy chủ đang chạy"}
