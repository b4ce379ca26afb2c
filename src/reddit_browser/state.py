"""View-state machine for the dashboard.

``AppState`` is a plain value owned by the event loop. Every change goes
through one of the transition functions below, which take the state
explicitly and report what happened as a ``TransitionResult``:

    LIST   --move/clear-->     LIST
    LIST   --confirm (ok)-->   DETAIL
    DETAIL --back-->           LIST
    LIST   --refresh (due)-->  LIST (feed replaced)

Refresh is suppressed in DETAIL mode so the feed is never replaced under an
open post. Fetch failures leave the state untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from reddit_browser.errors import FetchError
from reddit_browser.events import Action
from reddit_browser.models import (
    DEFAULT_FETCH_WINDOW,
    DEFAULT_POPULATE_THRESHOLD,
    DEFAULT_REFRESH_INTERVAL_SECONDS,
    Detail,
    Item,
    Size,
    StateSnapshot,
    UserConfig,
    ViewMode,
)
from reddit_browser.selection import SelectableList
from reddit_browser.services.interfaces import FeedClient

logger = logging.getLogger(__name__)


class TransitionResult(Enum):
    """Outcome of applying one transition."""

    CHANGED = "changed"
    UNCHANGED = "unchanged"
    FAILED = "failed"
    QUIT = "quit"


@dataclass(slots=True)
class AppState:
    """Everything the dashboard knows between two renders."""

    mode: ViewMode = ViewMode.LIST
    feed: SelectableList[Item] = field(default_factory=SelectableList)
    selected_detail: Detail | None = None
    last_refresh: float | None = None  # None until the first successful fetch
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL_SECONDS
    populate_threshold: int = DEFAULT_POPULATE_THRESHOLD
    fetch_window: int = DEFAULT_FETCH_WINDOW

    @classmethod
    def from_config(cls, config: UserConfig) -> AppState:
        return cls(
            refresh_interval=config.refresh_interval_seconds,
            populate_threshold=config.populate_threshold,
            fetch_window=config.fetch_window,
        )


def move_down(state: AppState) -> TransitionResult:
    if state.mode is not ViewMode.LIST:
        return TransitionResult.UNCHANGED
    before = state.feed.cursor
    state.feed.next()
    return _cursor_result(before, state)


def move_up(state: AppState) -> TransitionResult:
    if state.mode is not ViewMode.LIST:
        return TransitionResult.UNCHANGED
    before = state.feed.cursor
    state.feed.previous()
    return _cursor_result(before, state)


def clear_selection(state: AppState) -> TransitionResult:
    if state.mode is not ViewMode.LIST:
        return TransitionResult.UNCHANGED
    before = state.feed.cursor
    state.feed.unselect()
    return _cursor_result(before, state)


def _cursor_result(before: int | None, state: AppState) -> TransitionResult:
    if state.feed.cursor == before:
        return TransitionResult.UNCHANGED
    return TransitionResult.CHANGED


async def confirm(state: AppState, client: FeedClient) -> TransitionResult:
    """Open the selected item.

    Only valid in LIST mode with a selection; anything else is a no-op. The
    mode switches to DETAIL only once the detail has been fetched.
    """
    if state.mode is not ViewMode.LIST:
        return TransitionResult.UNCHANGED
    item = state.feed.selected()
    if item is None:
        return TransitionResult.UNCHANGED
    try:
        detail = await client.fetch_detail(item.id)
    except FetchError as exc:
        logger.warning("Could not fetch detail for %s: %s", item.id, exc)
        return TransitionResult.FAILED
    state.selected_detail = detail
    state.mode = ViewMode.DETAIL
    logger.debug("Opened detail for %s (%d chars)", item.id, len(detail.body))
    return TransitionResult.CHANGED


def back(state: AppState) -> TransitionResult:
    """Leave DETAIL mode and drop the detail."""
    if state.mode is not ViewMode.DETAIL:
        return TransitionResult.UNCHANGED
    state.selected_detail = None
    state.mode = ViewMode.LIST
    return TransitionResult.CHANGED


def refresh_due(state: AppState, now: float) -> bool:
    """Return True when the periodic refresh should fetch the feed."""
    if state.mode is not ViewMode.LIST:
        return False
    if len(state.feed) >= state.populate_threshold:
        return False
    if state.last_refresh is None:
        return True
    return now - state.last_refresh >= state.refresh_interval


async def refresh(state: AppState, client: FeedClient, now: float) -> TransitionResult:
    """Populate the feed when it is short and the interval has elapsed.

    On success the items are replaced wholesale and the first one is
    selected. On failure nothing changes and the next eligible tick retries.
    """
    if not refresh_due(state, now):
        return TransitionResult.UNCHANGED
    try:
        items = await client.fetch_top(state.fetch_window)
    except FetchError as exc:
        logger.warning("Feed refresh failed, will retry: %s", exc)
        return TransitionResult.FAILED
    state.feed.replace(items)
    if items:
        state.feed.select(0)
    state.last_refresh = now
    logger.debug("Feed refreshed with %d items", len(items))
    return TransitionResult.CHANGED


async def apply_action(state: AppState, action: Action, client: FeedClient) -> TransitionResult:
    """Apply one decoded input action to ``state``."""
    if action is Action.QUIT:
        return TransitionResult.QUIT
    if action is Action.MOVE_DOWN:
        return move_down(state)
    if action is Action.MOVE_UP:
        return move_up(state)
    if action is Action.CLEAR_SELECTION:
        return clear_selection(state)
    if action is Action.CONFIRM:
        return await confirm(state, client)
    if action is Action.BACK:
        return back(state)
    # RESIZE and IGNORED never touch the state
    return TransitionResult.UNCHANGED


def snapshot(state: AppState, size: Size) -> StateSnapshot:
    """Build the read-only view handed to the renderer."""
    return StateSnapshot(
        mode=state.mode,
        items=state.feed.items,
        cursor=state.feed.cursor,
        detail=state.selected_detail,
        last_refresh=state.last_refresh,
        size=size,
    )


__all__ = [
    "AppState",
    "TransitionResult",
    "apply_action",
    "back",
    "clear_selection",
    "confirm",
    "move_down",
    "move_up",
    "refresh",
    "refresh_due",
    "snapshot",
]
