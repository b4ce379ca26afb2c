"""Widget classes for modular UI composition."""

from reddit_browser.widgets.chrome import ContextFooter, StatusLine, format_status
from reddit_browser.widgets.details import DetailScroll, PostDetails, render_detail
from reddit_browser.widgets.listing import PostList, render_post_option

__all__ = [
    "ContextFooter",
    "DetailScroll",
    "PostDetails",
    "PostList",
    "StatusLine",
    "format_status",
    "render_detail",
    "render_post_option",
]
