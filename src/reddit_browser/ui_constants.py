"""Internal UI constants for the RedditBrowser app."""

from __future__ import annotations

APP_CSS = """
Screen {
    background: $background;
}

#main-container {
    height: 1fr;
}

#detail-scroll {
    height: 1fr;
    border: round $accent;
    background: $panel;
    padding: 0 1;
    display: none;
}

#post-details {
    width: 100%;
}

.detail-mode #post-list {
    display: none;
}

.detail-mode #detail-scroll {
    display: block;
}
"""

__all__ = ["APP_CSS"]
