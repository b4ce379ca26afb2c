"""Internal service layer for feed access."""

from reddit_browser.services.reddit_service import (
    detail_url,
    fetch_detail,
    fetch_top,
    top_listing_url,
)

__all__ = [
    "detail_url",
    "fetch_detail",
    "fetch_top",
    "top_listing_url",
]
