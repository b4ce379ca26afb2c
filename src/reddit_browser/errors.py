"""Exception types shared across the browser."""

from __future__ import annotations


class RedditBrowserError(Exception):
    """Base class for application errors."""


class TerminalSetupError(RedditBrowserError):
    """The terminal could not be prepared for the full-screen UI."""


class FetchError(RedditBrowserError):
    """A feed request failed or returned an unusable payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InputDecodeError(RedditBrowserError):
    """An input event has no meaning for the dashboard."""


__all__ = [
    "FetchError",
    "InputDecodeError",
    "RedditBrowserError",
    "TerminalSetupError",
]
