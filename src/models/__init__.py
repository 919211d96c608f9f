from .user import User, UserBadge
from .badge import Badge
from .event import Event
from .event_registration import EventRegistration
from .post import Post, AuthorInfo
from .comment import Comment
from .notification import Notification
from .database import init_db
