"""Collaborator interfaces + default adapters for app-level dependency injection."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx

from reddit_browser.models import (
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_TIME_FILTER,
    DEFAULT_USER_AGENT,
    Detail,
    Item,
    StateSnapshot,
    UserConfig,
)
from reddit_browser.services import reddit_service as _reddit


@runtime_checkable
class FeedClient(Protocol):
    """Interface for fetching the ranked feed and single-post details.

    Implementations raise ``FetchError`` on any network or payload failure.
    """

    async def fetch_top(self, count: int) -> list[Item]:
        """Fetch the top ``count`` items in rank order."""
        ...

    async def fetch_detail(self, item_id: str) -> Detail:
        """Fetch the expanded body of one item."""
        ...


@runtime_checkable
class Renderer(Protocol):
    """Interface for drawing a state snapshot. Must not mutate app state."""

    def render(self, snapshot: StateSnapshot) -> None:
        """Draw the snapshot at ``snapshot.size``."""
        ...


class RedditFeedClient:
    """Default adapter that delegates to function-based Reddit services."""

    def __init__(
        self,
        subreddit: str,
        *,
        time_filter: str = DEFAULT_TIME_FILTER,
        timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.subreddit = subreddit
        self.time_filter = time_filter
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent
        # Shared client for connection pooling; None means one client per request
        self.client = client

    @classmethod
    def from_config(
        cls, config: UserConfig, client: httpx.AsyncClient | None = None
    ) -> RedditFeedClient:
        return cls(
            config.subreddit,
            time_filter=config.time_filter,
            timeout_seconds=config.request_timeout_seconds,
            user_agent=config.user_agent,
            client=client,
        )

    async def fetch_top(self, count: int) -> list[Item]:
        return await _reddit.fetch_top(
            client=self.client,
            subreddit=self.subreddit,
            count=count,
            time_filter=self.time_filter,
            timeout_seconds=self.timeout_seconds,
            user_agent=self.user_agent,
        )

    async def fetch_detail(self, item_id: str) -> Detail:
        return await _reddit.fetch_detail(
            client=self.client,
            item_id=item_id,
            timeout_seconds=self.timeout_seconds,
            user_agent=self.user_agent,
        )


__all__ = [
    "FeedClient",
    "RedditFeedClient",
    "Renderer",
]
