"""Header/footer chrome widgets: status line and key hints."""

from __future__ import annotations

import time

from rich.markup import escape as escape_markup
from textual.widgets import Static

from reddit_browser.models import StateSnapshot, ViewMode
from reddit_browser.themes import THEME_COLORS


def format_status(
    snapshot: StateSnapshot,
    subreddit: str,
    *,
    monotonic_now: float | None = None,
) -> str:
    """Status line: subreddit, item count, and age of the last refresh."""
    accent = THEME_COLORS["accent"]
    muted = THEME_COLORS["muted"]
    parts = [f"[bold {accent}]r/{escape_markup(subreddit)}[/]"]
    if snapshot.last_refresh is None:
        parts.append(f"[italic {muted}]loading...[/]")
    else:
        now = time.monotonic() if monotonic_now is None else monotonic_now
        age = max(0, int(now - snapshot.last_refresh))
        parts.append(f"[{muted}]{len(snapshot.items)} posts · refreshed {age}s ago[/]")
    if snapshot.mode is ViewMode.DETAIL and snapshot.detail is not None:
        parts.append(f"[{THEME_COLORS['accent_alt']}]{escape_markup(snapshot.detail.id)}[/]")
    return "  ".join(parts)


class StatusLine(Static):
    """One-line status bar above the panes."""

    DEFAULT_CSS = """
    StatusLine {
        dock: top;
        height: 1;
        padding: 0 1;
        background: $panel;
    }
    """


class ContextFooter(Static):
    """Context-sensitive footer showing relevant keybindings."""

    DEFAULT_CSS = """
    ContextFooter {
        dock: bottom;
        height: 1;
        padding: 0 1;
        background: $background;
        color: $text-muted;
    }
    """

    def render_bindings(self, bindings: list[tuple[str, str]]) -> None:
        """Update the footer with a list of (key, label) binding hints."""
        accent = THEME_COLORS["accent"]
        muted = THEME_COLORS["muted"]
        parts = []
        for key, label in bindings:
            safe_key = escape_markup(key)
            parts.append(f"[bold {accent}]{safe_key}[/] [{muted}]{label}[/]")
        self.update("  ".join(parts))


__all__ = [
    "ContextFooter",
    "StatusLine",
    "format_status",
]
