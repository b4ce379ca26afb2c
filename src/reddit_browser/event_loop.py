"""Cooperative render/input/refresh loop.

One cycle:

1. render the current state snapshot;
2. wait for input, at most until the next refresh tick is due;
3. apply the decoded input action, if any;
4. run the periodic refresh when the tick interval has elapsed.

The bounded input wait is the only timer, so the loop needs no threads.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from reddit_browser.events import Action, InputEvent, Resize, decode_event
from reddit_browser.models import Size
from reddit_browser.services.interfaces import FeedClient, Renderer
from reddit_browser.state import AppState, TransitionResult, apply_action, refresh, snapshot

logger = logging.getLogger(__name__)

DEFAULT_SIZE = Size(80, 24)


@runtime_checkable
class InputSource(Protocol):
    """Source of input events with a bounded wait."""

    async def next_event(self, timeout: float) -> InputEvent | None:
        """Return the next event, or None if none arrives within ``timeout`` seconds."""
        ...


class QueueInputSource:
    """Input source fed by the UI through ``push()``."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue[InputEvent] = asyncio.Queue()

    def push(self, event: InputEvent) -> None:
        self._queue.put_nowait(event)

    def pending(self) -> int:
        return self._queue.qsize()

    async def next_event(self, timeout: float) -> InputEvent | None:
        if timeout <= 0:
            try:
                return self._queue.get_nowait()
            except asyncio.QueueEmpty:
                return None
        try:
            return await asyncio.wait_for(self._queue.get(), timeout)
        except asyncio.TimeoutError:
            return None


class EventLoop:
    """Owns the AppState and threads it through every transition."""

    def __init__(
        self,
        state: AppState,
        *,
        client: FeedClient,
        renderer: Renderer,
        input_source: InputSource,
        size: Size = DEFAULT_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.state = state
        self.size = size
        self._client = client
        self._renderer = renderer
        self._input = input_source
        self._clock = clock
        # Backdate the tick so the first cycle refreshes without waiting
        self._last_tick = clock() - state.refresh_interval
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def remaining_wait(self) -> float:
        """Seconds until the next refresh tick, floored at zero."""
        elapsed = self._clock() - self._last_tick
        return max(0.0, self.state.refresh_interval - elapsed)

    async def step(self) -> bool:
        """Run one render/input/refresh cycle. Returns False once quit is requested."""
        self._renderer.render(snapshot(self.state, self.size))

        event = await self._input.next_event(self.remaining_wait())
        if event is not None:
            action = decode_event(event)
            if action is Action.RESIZE and isinstance(event, Resize):
                self.size = event.size
            result = await apply_action(self.state, action, self._client)
            if result is TransitionResult.QUIT:
                logger.debug("Quit requested")
                self._running = False
                return False
            if action is not Action.IGNORED:
                logger.debug("Applied %s: %s", action.name, result.value)

        now = self._clock()
        if now - self._last_tick >= self.state.refresh_interval:
            await refresh(self.state, self._client, now)
            self._last_tick = self._clock()
        return True

    async def run(self) -> AppState:
        """Cycle until quit and hand back the final state."""
        self._running = True
        logger.debug("Event loop started (refresh every %.2fs)", self.state.refresh_interval)
        while await self.step():
            pass
        return self.state


__all__ = [
    "DEFAULT_SIZE",
    "EventLoop",
    "InputSource",
    "QueueInputSource",
]
