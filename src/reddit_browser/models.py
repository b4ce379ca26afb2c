"""Data models and constants for the Reddit top-posts browser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Application name used for platformdirs config paths
CONFIG_APP_NAME = "reddit-browser"

DEFAULT_SUBREDDIT = "rust"

# Reddit "top" listing windows
TIME_FILTERS = ("hour", "day", "week", "month", "year", "all")
DEFAULT_TIME_FILTER = "day"

# Number of posts requested per feed fetch
DEFAULT_FETCH_WINDOW = 25
FETCH_WINDOW_LIMIT = 100

# Keep refreshing while the feed holds fewer items than this
DEFAULT_POPULATE_THRESHOLD = 10

DEFAULT_REFRESH_INTERVAL_SECONDS = 2.0
MIN_REFRESH_INTERVAL_SECONDS = 0.25
MAX_REFRESH_INTERVAL_SECONDS = 3600.0

DEFAULT_REQUEST_TIMEOUT_SECONDS = 10
DEFAULT_USER_AGENT = "reddit-top-viewer/1.0"


class ViewMode(Enum):
    """Which pane the dashboard is showing."""

    LIST = "list"
    DETAIL = "detail"


@dataclass(frozen=True, slots=True)
class Item:
    """A single post from the feed listing."""

    title: str
    score: float
    id: str
    author: str = ""
    num_comments: int = 0


@dataclass(frozen=True, slots=True)
class Detail:
    """Expanded body of one post."""

    id: str
    body: str = ""
    title: str = ""
    url: str = ""
    author: str = ""


@dataclass(frozen=True, slots=True)
class Size:
    """Terminal dimensions in cells."""

    width: int
    height: int


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    """Read-only view of the app state handed to a renderer."""

    mode: ViewMode
    items: tuple[Item, ...]
    cursor: int | None
    detail: Detail | None
    last_refresh: float | None
    size: Size

    @property
    def selected_item(self) -> Item | None:
        if self.cursor is None or not self.items:
            return None
        return self.items[self.cursor]


@dataclass(slots=True)
class UserConfig:
    """User preferences loaded from config.json and CLI flags."""

    subreddit: str = DEFAULT_SUBREDDIT
    time_filter: str = DEFAULT_TIME_FILTER
    fetch_window: int = DEFAULT_FETCH_WINDOW
    populate_threshold: int = DEFAULT_POPULATE_THRESHOLD
    refresh_interval_seconds: float = DEFAULT_REFRESH_INTERVAL_SECONDS
    request_timeout_seconds: int = DEFAULT_REQUEST_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT
    version: int = 1

    def __post_init__(self) -> None:
        """Cap the populate threshold at the fetch window."""
        if self.populate_threshold > self.fetch_window:
            self.populate_threshold = self.fetch_window


__all__ = [
    "CONFIG_APP_NAME",
    "DEFAULT_FETCH_WINDOW",
    "DEFAULT_POPULATE_THRESHOLD",
    "DEFAULT_REFRESH_INTERVAL_SECONDS",
    "DEFAULT_REQUEST_TIMEOUT_SECONDS",
    "DEFAULT_SUBREDDIT",
    "DEFAULT_TIME_FILTER",
    "DEFAULT_USER_AGENT",
    "FETCH_WINDOW_LIMIT",
    "MAX_REFRESH_INTERVAL_SECONDS",
    "MIN_REFRESH_INTERVAL_SECONDS",
    "TIME_FILTERS",
    "Detail",
    "Item",
    "Size",
    "StateSnapshot",
    "UserConfig",
    "ViewMode",
]
