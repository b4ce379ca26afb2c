"""Reddit Top Posts TUI - browse a subreddit's top posts in the terminal.

Usage:
    python -m reddit_browser                   # r/rust, top of the day
    python -m reddit_browser -s python -t week # another subreddit and window
    python -m reddit_browser --debug           # log to the config dir

Key bindings:
    Up/k    - Move selection up (wraps)
    Down/j  - Move selection down (wraps)
    Left    - Clear selection
    Enter   - Open the selected post
    Esc/Backspace - Back to the list
    q       - Quit
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Any

import httpx
from textual import events as textual_events
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.css.query import NoMatches

from reddit_browser.cli import main
from reddit_browser.event_loop import EventLoop, QueueInputSource
from reddit_browser.events import (
    DETAIL_KEY_HINTS,
    KEY_ACTIONS,
    LIST_KEY_HINTS,
    KeyPress,
    Resize,
)
from reddit_browser.models import Size, StateSnapshot, UserConfig, ViewMode
from reddit_browser.services.interfaces import FeedClient, RedditFeedClient
from reddit_browser.state import AppState
from reddit_browser.ui_constants import APP_CSS
from reddit_browser.widgets import (
    ContextFooter,
    DetailScroll,
    PostDetails,
    PostList,
    StatusLine,
    format_status,
)
from reddit_browser.widgets.listing import set_ascii_icons

logger = logging.getLogger(__name__)


class TextualRenderer:
    """Renderer that draws snapshots into a running RedditBrowser app."""

    def __init__(self, app: RedditBrowser) -> None:
        self._app = app

    def render(self, snapshot: StateSnapshot) -> None:
        self._app.show_snapshot(snapshot)


class RedditBrowser(App):
    """A TUI application to browse a subreddit's top posts.

    Textual owns the terminal and decodes keys; every key and resize is
    forwarded to an ``EventLoop`` task, which owns the ``AppState`` and calls
    back into ``show_snapshot()`` once per cycle.
    """

    TITLE = "Reddit Top Posts"

    CSS = APP_CSS

    def __init__(
        self,
        config: UserConfig | None = None,
        *,
        client: FeedClient | None = None,
        ascii_icons: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__()
        self._config = config or UserConfig()
        self._feed_client = client
        self._monotonic = clock
        self._input_source = QueueInputSource()
        self._dashboard_loop: EventLoop | None = None
        self._last_snapshot: StateSnapshot | None = None

        # Shared HTTP client for connection pooling (created in on_mount)
        self._http_client: httpx.AsyncClient | None = None

        # Background task tracking (prevent GC of fire-and-forget tasks)
        self._background_tasks: set[asyncio.Task[None]] = set()

        # Accessibility: allow ASCII-only indicators for terminals/fonts
        # that do not render the pointer glyph well.
        set_ascii_icons(ascii_icons)

    @property
    def dashboard_loop(self) -> EventLoop | None:
        return self._dashboard_loop

    @property
    def last_snapshot(self) -> StateSnapshot | None:
        return self._last_snapshot

    def compose(self) -> ComposeResult:
        yield StatusLine(id="status-line")
        with Vertical(id="main-container"):
            yield PostList(id="post-list")
            with DetailScroll(id="detail-scroll"):
                yield PostDetails(id="post-details")
        yield ContextFooter(id="footer")

    def on_mount(self) -> None:
        """Build the feed client and start the event loop task."""
        client = self._feed_client
        if client is None:
            self._http_client = httpx.AsyncClient()
            client = RedditFeedClient.from_config(self._config, self._http_client)

        self.sub_title = f"r/{self._config.subreddit} · top/{self._config.time_filter}"
        self._dashboard_loop = EventLoop(
            AppState.from_config(self._config),
            client=client,
            renderer=TextualRenderer(self),
            input_source=self._input_source,
            size=Size(self.size.width, self.size.height),
            clock=self._monotonic,
        )
        self._track_task(self._run_event_loop(self._dashboard_loop))
        logger.debug(
            "App mounted: r/%s, window=%d, threshold=%d, interval=%.2fs",
            self._config.subreddit,
            self._config.fetch_window,
            self._config.populate_threshold,
            self._config.refresh_interval_seconds,
        )

    async def on_unmount(self) -> None:
        """Stop the event loop task and close the shared HTTP client."""
        for task in list(self._background_tasks):
            task.cancel()
        if self._background_tasks:
            await asyncio.gather(*self._background_tasks, return_exceptions=True)

        client = self._http_client
        self._http_client = None
        if client is not None:
            await client.aclose()

    async def _run_event_loop(self, event_loop: EventLoop) -> None:
        """Run the loop until quit, then shut the app down."""
        try:
            await event_loop.run()
        except Exception:
            logger.exception("Event loop stopped with an error")
            self.exit(
                return_code=1,
                message="The dashboard stopped unexpectedly. Rerun with --debug for a log.",
            )
            return
        self.exit()

    def _track_task(self, coro: Any) -> asyncio.Task[None]:
        """Create an asyncio task and track it to prevent garbage collection."""
        task = asyncio.create_task(coro)
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        task.add_done_callback(self._on_task_done)
        return task

    @staticmethod
    def _on_task_done(task: asyncio.Task[None]) -> None:
        """Log unhandled exceptions from background tasks."""
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Unhandled exception in background task: %s", exc, exc_info=exc)

    # ========================================================================
    # Input forwarding
    # ========================================================================

    def on_key(self, event: textual_events.Key) -> None:
        """Forward every key press to the event loop."""
        if event.key in KEY_ACTIONS:
            event.prevent_default()
            event.stop()
        self._input_source.push(KeyPress(event.key))

    def on_resize(self, event: textual_events.Resize) -> None:
        """Forward terminal size changes to the event loop."""
        self._input_source.push(Resize(Size(event.size.width, event.size.height)))

    # ========================================================================
    # Rendering
    # ========================================================================

    def show_snapshot(self, snapshot: StateSnapshot) -> None:
        """Draw one state snapshot. Layout is recomputed from ``snapshot.size``."""
        previous = self._last_snapshot
        self._last_snapshot = snapshot
        width = snapshot.size.width
        detail_mode = snapshot.mode is ViewMode.DETAIL
        try:
            container = self.query_one("#main-container", Vertical)
            post_list = self.query_one("#post-list", PostList)
            details = self.query_one("#post-details", PostDetails)
            status = self.query_one("#status-line", StatusLine)
            footer = self.query_one("#footer", ContextFooter)
        except NoMatches:
            # Screen is being torn down
            return

        container.set_class(detail_mode, "detail-mode")
        post_list.show_items(snapshot.items, snapshot.cursor, width)
        details.show_detail(snapshot.detail, width)
        if detail_mode and (previous is None or previous.detail != snapshot.detail):
            self.query_one("#detail-scroll", DetailScroll).scroll_home(animate=False)
        status.update(
            format_status(snapshot, self._config.subreddit, monotonic_now=self._monotonic())
        )
        footer.render_bindings(DETAIL_KEY_HINTS if detail_mode else LIST_KEY_HINTS)


__all__ = [
    "RedditBrowser",
    "TextualRenderer",
    "main",
]
