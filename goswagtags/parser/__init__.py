"""Go parsing front end."""

from goswagtags.errors import GoParseError

from .comment_utils import CommentIndex, group_comments
from .parse import GO_LANGUAGE, GoParser, get_go_parser, parse_source

__all__ = [
    "GO_LANGUAGE",
    "GoParser",
    "GoParseError",
    "CommentIndex",
    "get_go_parser",
    "group_comments",
    "parse_source",
]
