from typing import Optional
from .. import configs

ROLES = ("member", "admin", "master")


def is_master_admin(role: Optional[str], email: Optional[str] = None) -> bool:
    """Kiểm tra người dùng có phải quản trị viên cấp cao (master) hay không."""
    if role == "master":
        return True
    # Kiểm tra theo email cấu hình trong MASTER_ADMIN_EMAILS
    return bool(email) and email in configs.get_master_admin_emails()


def is_admin(role: Optional[str], email: Optional[str] = None) -> bool:
    """Kiểm tra người dùng có quyền quản trị (admin hoặc master) hay không."""
    if role in ("admin", "master"):
        return True
    return is_master_admin(role, email)


def user_is_admin(user) -> bool:
    return user is not None and is_admin(getattr(user, "role", None), getattr(user, "email", None))
