"""Color palette used for Rich markup in the list and detail panes."""

from __future__ import annotations

# Monokai-inspired palette
DEFAULT_THEME = {
    "background": "#272822",
    "panel": "#1e1e1e",
    "text": "#f8f8f2",
    "muted": "#75715e",
    "accent": "#66d9ef",
    "accent_alt": "#e6db74",
    "green": "#a6e22e",
    "yellow": "#e6db74",
    "orange": "#fd971f",
    "pink": "#f92672",
}

THEME_COLORS = DEFAULT_THEME.copy()


def score_color(score: float) -> str:
    """Pick a badge color for a post score."""
    if score >= 1000:
        return THEME_COLORS["pink"]
    if score >= 100:
        return THEME_COLORS["orange"]
    if score > 0:
        return THEME_COLORS["yellow"]
    return THEME_COLORS["muted"]


__all__ = [
    "DEFAULT_THEME",
    "THEME_COLORS",
    "score_color",
]
