from .auth_schema import UserCreate, UserLogin, UserPublic, RefreshTokenRequest
from .user_schema import (
    UserBadgePublic,
    UserProfile,
    UserUpdate,
    VisibilityUpdate,
    RoleUpdate,
    MembershipTierUpdate,
    UserSummary
)
from .badge_schema import (
    BadgeCreate,
    BadgePublic,
    BadgeActiveUpdate,
    BadgeRequest,
    BadgeReview,
    BadgeVisibilityUpdate
)
from .event_schema import (
    EventCreate,
    EventUpdate,
    EventPublic,
    RegistrationCreate,
    GuestRegistrationCreate,
    GuestParticipantCreate,
    RegistrationPublic,
    RegistrationResult
)
from .post_schema import PostCreate, PostUpdate, PostPublic, PinUpdate, BOARD_SLUGS
from .comment_schema import CommentCreate, CommentUpdate, CommentPublic, CommentNodePublic
