"""Detail pane widget for the body of an opened post."""

from __future__ import annotations

from rich.markup import escape as escape_markup
from textual.containers import VerticalScroll
from textual.widgets import Static

from reddit_browser.models import Detail
from reddit_browser.themes import THEME_COLORS

EMPTY_BODY_TEXT = "(no text body)"


def render_detail(detail: Detail, width: int = 80) -> str:
    """Build Rich markup for a post: title, byline, link, then body."""
    lines: list[str] = []
    if detail.title:
        lines.append(f"[bold {THEME_COLORS['accent']}]{escape_markup(detail.title)}[/]")
    byline = f"u/{detail.author}" if detail.author else ""
    if byline:
        lines.append(f"[{THEME_COLORS['muted']}]{escape_markup(byline)}[/]")
    if detail.url:
        lines.append(f"[dim]{escape_markup(detail.url)}[/]")
    if lines:
        lines.append("[dim]" + "─" * max(1, min(width - 4, 80)) + "[/]")
    body = detail.body.strip()
    if body:
        lines.append(escape_markup(body))
    else:
        lines.append(f"[dim italic]{EMPTY_BODY_TEXT}[/]")
    return "\n".join(lines)


class DetailScroll(VerticalScroll, can_focus=False):
    """Scroll container for the detail pane; keys stay with the app."""


class PostDetails(Static):
    """Widget to display the opened post's body."""

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__(id=id)
        self._detail: Detail | None = None
        self._width: int = 0

    @property
    def detail(self) -> Detail | None:
        return self._detail

    def show_detail(self, detail: Detail | None, width: int) -> None:
        """Update the pane; ``None`` clears it."""
        if detail == self._detail and width == self._width:
            return
        self._detail = detail
        self._width = width
        self.update("" if detail is None else render_detail(detail, width))


__all__ = [
    "EMPTY_BODY_TEXT",
    "DetailScroll",
    "PostDetails",
    "render_detail",
]
