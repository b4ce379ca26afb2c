"""Internal Reddit service helpers for top listings and post details."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from reddit_browser.errors import FetchError
from reddit_browser.models import Detail, Item
from reddit_browser.parsing import parse_detail, parse_listing

logger = logging.getLogger(__name__)

REDDIT_BASE_URL = "https://www.reddit.com"


def top_listing_url(subreddit: str) -> str:
    return f"{REDDIT_BASE_URL}/r/{subreddit}/top.json"


def detail_url(item_id: str) -> str:
    return f"{REDDIT_BASE_URL}/comments/{item_id}.json"


async def _get_json(
    *,
    client: httpx.AsyncClient | None,
    url: str,
    params: dict[str, Any],
    timeout_seconds: float,
    user_agent: str,
) -> Any:
    """GET a JSON document, translating transport and decode failures to FetchError."""
    headers = {"User-Agent": user_agent}
    try:
        if client is not None:
            response = await client.get(
                url, params=params, headers=headers, timeout=timeout_seconds
            )
        else:
            async with httpx.AsyncClient() as tmp_client:
                response = await tmp_client.get(
                    url, params=params, headers=headers, timeout=timeout_seconds
                )
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as exc:
        status_code = exc.response.status_code
        raise FetchError(f"GET {url} returned HTTP {status_code}", status_code=status_code) from exc
    except httpx.HTTPError as exc:
        raise FetchError(f"GET {url} failed: {exc}") from exc
    except ValueError as exc:
        # JSONDecodeError and UnicodeDecodeError
        raise FetchError(f"GET {url} returned invalid JSON: {exc}") from exc


async def fetch_top(
    *,
    client: httpx.AsyncClient | None,
    subreddit: str,
    count: int,
    time_filter: str,
    timeout_seconds: float,
    user_agent: str,
) -> list[Item]:
    """Fetch the top ``count`` posts of a subreddit in rank order."""
    payload = await _get_json(
        client=client,
        url=top_listing_url(subreddit),
        params={"limit": count, "t": time_filter, "raw_json": 1},
        timeout_seconds=timeout_seconds,
        user_agent=user_agent,
    )
    items = parse_listing(payload, limit=count)
    logger.debug("Fetched %d items from r/%s (t=%s)", len(items), subreddit, time_filter)
    return items


async def fetch_detail(
    *,
    client: httpx.AsyncClient | None,
    item_id: str,
    timeout_seconds: float,
    user_agent: str,
) -> Detail:
    """Fetch the full text of one post."""
    payload = await _get_json(
        client=client,
        url=detail_url(item_id),
        params={"limit": 1, "raw_json": 1},
        timeout_seconds=timeout_seconds,
        user_agent=user_agent,
    )
    return parse_detail(payload, item_id)


__all__ = [
    "REDDIT_BASE_URL",
    "detail_url",
    "fetch_detail",
    "fetch_top",
    "top_listing_url",
]
