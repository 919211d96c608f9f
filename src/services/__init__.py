from .auth_service import AuthService
from .jwt_service import create_access_token, decode_access_token
from .event_service import EventService
from .registration_service import RegistrationService
from .post_service import PostService
from .comment_service import CommentService
from .user_service import UserService
from .badge_service import BadgeService
from .notification_service import NotificationService

__all__ = [
    "AuthService",
    "create_access_token",
    "decode_access_token",
    "EventService",
    "RegistrationService",
    "PostService",
    "CommentService",
    "UserService",
    "BadgeService",
    "NotificationService"
]
