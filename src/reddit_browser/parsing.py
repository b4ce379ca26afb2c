"""Parsing helpers for Reddit listing JSON payloads."""

from __future__ import annotations

import logging
import re
from typing import Any

from reddit_browser.errors import FetchError
from reddit_browser.models import Detail, Item

logger = logging.getLogger(__name__)

# Reddit community names: 2-21 chars of letters, digits, underscore
SUBREDDIT_PATTERN = re.compile(r"^[A-Za-z0-9_]{2,21}$")


def normalize_subreddit(name: str) -> str:
    """Strip an optional ``r/`` or ``/r/`` prefix and validate the name.

    Raises:
        ValueError: If the remaining name is not a valid subreddit name.
    """
    cleaned = name.strip()
    for prefix in ("/r/", "r/"):
        if cleaned.lower().startswith(prefix):
            cleaned = cleaned[len(prefix) :]
            break
    cleaned = cleaned.rstrip("/")
    if not SUBREDDIT_PATTERN.match(cleaned):
        raise ValueError(f"invalid subreddit name: {name!r}")
    return cleaned


def _listing_children(payload: Any) -> list[Any]:
    """Return ``data.children`` of a Listing object or raise FetchError."""
    if not isinstance(payload, dict):
        raise FetchError("listing payload is not an object")
    data = payload.get("data")
    if not isinstance(data, dict):
        raise FetchError("listing payload has no data object")
    children = data.get("children")
    if not isinstance(children, list):
        raise FetchError("listing payload has no children list")
    return children


def _coerce_score(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return float(value)


def parse_item(child: Any) -> Item | None:
    """Convert one listing child into an Item; None when it is unusable."""
    if not isinstance(child, dict):
        return None
    data = child.get("data")
    if not isinstance(data, dict):
        return None
    post_id = data.get("id")
    title = data.get("title")
    score = _coerce_score(data.get("score"))
    if not isinstance(post_id, str) or not post_id or not isinstance(title, str) or score is None:
        return None
    author = data.get("author")
    num_comments = data.get("num_comments")
    return Item(
        title=title,
        score=score,
        id=post_id,
        author=author if isinstance(author, str) else "",
        num_comments=num_comments if isinstance(num_comments, int) else 0,
    )


def parse_listing(payload: Any, limit: int | None = None) -> list[Item]:
    """Parse a ``/top.json`` listing into Items in rank order.

    A malformed envelope raises FetchError; individual malformed children are
    skipped.
    """
    items: list[Item] = []
    for child in _listing_children(payload):
        item = parse_item(child)
        if item is None:
            logger.debug("Skipping malformed listing child: %r", child)
            continue
        items.append(item)
        if limit is not None and len(items) >= limit:
            break
    return items


def parse_detail(payload: Any, item_id: str) -> Detail:
    """Parse a ``/comments/{id}.json`` response into a Detail.

    The response is a two-element array: the post listing, then the comment
    listing. Only the post is read.
    """
    if not isinstance(payload, list) or not payload:
        raise FetchError(f"detail payload for {item_id} is not a non-empty array")
    children = _listing_children(payload[0])
    if not children or not isinstance(children[0], dict):
        raise FetchError(f"detail payload for {item_id} has no post")
    data = children[0].get("data")
    if not isinstance(data, dict):
        raise FetchError(f"detail payload for {item_id} has no post data")

    post_id = data.get("id")
    if isinstance(post_id, str) and post_id and post_id != item_id:
        raise FetchError(f"detail payload id {post_id!r} does not match {item_id!r}")

    def _text(key: str) -> str:
        value = data.get(key)
        return value if isinstance(value, str) else ""

    return Detail(
        id=item_id,
        body=_text("selftext"),
        title=_text("title"),
        url=_text("url"),
        author=_text("author"),
    )


__all__ = [
    "SUBREDDIT_PATTERN",
    "normalize_subreddit",
    "parse_detail",
    "parse_item",
    "parse_listing",
]
