from .comments_tree import build_comment_tree
from .event_url import (
    ShortCodeParts,
    ShortCodeQuery,
    format_short_code,
    generate_short_code,
    get_event_short_url,
    parse_short_code,
    build_event_query_from_short_code,
    find_event_id_by_ordinal,
)
from .local_time import local_now, to_local
from .permissions import is_admin, is_master_admin, user_is_admin
