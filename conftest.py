"""Shared test fixtures for Reddit browser tests."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from typing import Any

import pytest

from reddit_browser.errors import FetchError
from reddit_browser.events import InputEvent
from reddit_browser.models import Detail, Item, StateSnapshot, UserConfig
from reddit_browser.widgets import listing as _listing

# ── Module-level state isolation ─────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _reset_icon_set():
    """Restore the Unicode icon set after each test.

    RedditBrowser.__init__ switches the module-level icon set. Without this
    fixture an ``--ascii`` test would leak ASCII markers into later tests.
    """
    yield
    _listing.set_ascii_icons(False)


@pytest.fixture(autouse=True)
def _isolated_config_dir(tmp_path, monkeypatch):
    """Point platformdirs config lookups at a per-test directory."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(
        "reddit_browser.config.user_config_dir", lambda *_args, **_kwargs: str(config_dir)
    )
    monkeypatch.setattr(
        "reddit_browser.cli.user_config_dir", lambda *_args, **_kwargs: str(config_dir)
    )
    return config_dir


# ── Factories ────────────────────────────────────────────────────────────────


@pytest.fixture
def make_item():
    """Factory fixture for creating Item instances with sensible defaults."""

    def _make(
        id: str = "abc123",
        title: str = "Test Post",
        score: float = 42.0,
        author: str = "ferris",
        num_comments: int = 3,
    ) -> Item:
        return Item(title=title, score=score, id=id, author=author, num_comments=num_comments)

    return _make


@pytest.fixture
def make_items(make_item):
    """Factory fixture for a ranked list of ``count`` distinct items."""

    def _make(count: int, prefix: str = "p") -> list[Item]:
        return [
            make_item(id=f"{prefix}{i}", title=f"Post {i}", score=float(100 - i))
            for i in range(count)
        ]

    return _make


@pytest.fixture
def make_detail():
    """Factory fixture for creating Detail instances."""

    def _make(
        id: str = "abc123",
        body: str = "Body text.",
        title: str = "Test Post",
        url: str = "",
        author: str = "ferris",
    ) -> Detail:
        return Detail(id=id, body=body, title=title, url=url, author=author)

    return _make


@pytest.fixture
def sample_config():
    """Factory fixture for creating UserConfig with optional overrides."""

    def _make(**kwargs: Any) -> UserConfig:
        return UserConfig(**kwargs)

    return _make


# ── Collaborator doubles ─────────────────────────────────────────────────────


class FakeFeedClient:
    """In-memory FeedClient recording every call.

    ``top_results`` is consumed one entry per ``fetch_top`` call; an entry
    that is an exception instance is raised instead of returned. Once the
    queue is empty the last successful result is repeated.
    """

    def __init__(
        self,
        top_results: Iterable[list[Item] | Exception] = (),
        details: dict[str, Detail | Exception] | None = None,
    ) -> None:
        self._top_results: deque[list[Item] | Exception] = deque(top_results)
        self._last_top: list[Item] = []
        self.details: dict[str, Detail | Exception] = details or {}
        self.top_calls: list[int] = []
        self.detail_calls: list[str] = []

    async def fetch_top(self, count: int) -> list[Item]:
        self.top_calls.append(count)
        if self._top_results:
            result = self._top_results.popleft()
            if isinstance(result, Exception):
                raise result
            self._last_top = result
        return list(self._last_top[:count])

    async def fetch_detail(self, item_id: str) -> Detail:
        self.detail_calls.append(item_id)
        result = self.details.get(item_id)
        if result is None:
            raise FetchError(f"no detail for {item_id}", status_code=404)
        if isinstance(result, Exception):
            raise result
        return result


class RecordingRenderer:
    """Renderer double that keeps every snapshot it is asked to draw."""

    def __init__(self) -> None:
        self.snapshots: list[StateSnapshot] = []

    def render(self, snapshot: StateSnapshot) -> None:
        self.snapshots.append(snapshot)


class ScriptedInputSource:
    """Input source replaying scripted events; ``None`` entries simulate timeouts.

    Each wait advances ``clock`` by the requested timeout when no event is
    scripted for that cycle, so refresh ticks happen without real sleeping.
    """

    def __init__(self, events: Iterable[InputEvent | None], clock: FakeClock | None = None) -> None:
        self._events: deque[InputEvent | None] = deque(events)
        self._clock = clock
        self.timeouts: list[float] = []

    async def next_event(self, timeout: float) -> InputEvent | None:
        self.timeouts.append(timeout)
        event = self._events.popleft() if self._events else None
        if event is None and self._clock is not None:
            self._clock.advance(timeout)
        return event


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recording_renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def make_feed_client():
    """Factory fixture for FakeFeedClient instances."""
    return FakeFeedClient


@pytest.fixture
def make_input_source(fake_clock):
    """Factory fixture for ScriptedInputSource bound to ``fake_clock``."""

    def _make(events: Iterable[InputEvent | None] = ()) -> ScriptedInputSource:
        return ScriptedInputSource(events, clock=fake_clock)

    return _make
