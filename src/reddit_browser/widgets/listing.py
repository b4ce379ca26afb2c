"""List rendering helpers and widgets for feed entries."""

from __future__ import annotations

from rich.markup import escape as escape_markup
from rich.text import Text
from textual.widgets import OptionList
from textual.widgets.option_list import Option

from reddit_browser.models import Item
from reddit_browser.themes import THEME_COLORS, score_color

# Space taken by list borders, scrollbar and padding
LIST_CHROME_WIDTH = 6

_ICON_SETS: dict[str, dict[str, str]] = {
    "unicode": {
        "pointer": "▶ ",
        "blank": "  ",
    },
    "ascii": {
        "pointer": "> ",
        "blank": "  ",
    },
}
_ACTIVE_ICON_SET = _ICON_SETS["unicode"]


def set_ascii_icons(enabled: bool) -> None:
    """Switch list indicators between Unicode and ASCII modes."""
    global _ACTIVE_ICON_SET
    _ACTIVE_ICON_SET = _ICON_SETS["ascii"] if enabled else _ICON_SETS["unicode"]


def format_score(score: float) -> str:
    """Compact score label: 987, 1.2k, 15k."""
    value = int(score)
    magnitude = abs(value)
    if magnitude >= 10_000:
        return f"{value // 1000}k"
    if magnitude >= 1000:
        return f"{value / 1000:.1f}k"
    return str(value)


def truncate_title(title: str, width: int) -> str:
    """Crop a title to ``width`` terminal cells with an ellipsis."""
    if width <= 0:
        return ""
    text = Text(title.replace("\n", " "))
    text.truncate(width, overflow="ellipsis")
    return text.plain


def render_post_option(item: Item, *, rank: int, selected: bool = False, width: int = 80) -> str:
    """Render a feed entry as Rich markup for OptionList display."""
    marker = _ACTIVE_ICON_SET["pointer"] if selected else _ACTIVE_ICON_SET["blank"]
    score = format_score(item.score).rjust(5)
    rank_label = f"{rank:>2}."
    # marker + rank + space + score + space
    used = len(marker) + len(rank_label) + 1 + len(score) + 1 + LIST_CHROME_WIDTH
    title = escape_markup(truncate_title(item.title, width - used))

    score_markup = f"[{score_color(item.score)}]{score}[/]"
    rank_markup = f"[{THEME_COLORS['muted']}]{rank_label}[/]"
    if selected:
        green = THEME_COLORS["green"]
        return f"[bold {green}]{marker}[/]{rank_markup} {score_markup} [bold {green}]{title}[/]"
    return f"{marker}{rank_markup} {score_markup} {title}"


class PostList(OptionList, can_focus=False):
    """Bordered list of feed entries. Selection is driven by the event loop."""

    DEFAULT_CSS = """
    PostList {
        height: 1fr;
        border: round $accent;
        background: $panel;
    }
    """

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__(id=id)
        self.border_title = "Posts"
        self._shown: tuple[tuple[Item, ...], int | None, int] | None = None

    def show_items(self, items: tuple[Item, ...], cursor: int | None, width: int) -> None:
        """Rebuild the options for ``items`` with ``cursor`` highlighted."""
        key = (items, cursor, width)
        if key == self._shown:
            return
        self._shown = key
        self.clear_options()
        self.add_options(
            [
                Option(
                    render_post_option(item, rank=index + 1, selected=index == cursor, width=width),
                    id=f"post-{index}",
                )
                for index, item in enumerate(items)
            ]
        )
        self.highlighted = cursor


__all__ = [
    "PostList",
    "format_score",
    "render_post_option",
    "set_ascii_icons",
    "truncate_title",
]
