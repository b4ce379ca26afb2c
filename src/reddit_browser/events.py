"""Input events and their mapping onto dashboard actions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from reddit_browser.errors import InputDecodeError
from reddit_browser.models import Size

logger = logging.getLogger(__name__)


class Action(Enum):
    """Decoded intent of one input event."""

    MOVE_DOWN = "move_down"
    MOVE_UP = "move_up"
    CLEAR_SELECTION = "clear_selection"
    CONFIRM = "confirm"
    BACK = "back"
    QUIT = "quit"
    RESIZE = "resize"
    IGNORED = "ignored"


@dataclass(frozen=True, slots=True)
class KeyPress:
    """A key press, named the way Textual names keys ("down", "enter", "q")."""

    key: str


@dataclass(frozen=True, slots=True)
class Resize:
    """The terminal changed size."""

    size: Size


InputEvent = KeyPress | Resize

# Textual key name -> action
KEY_ACTIONS: dict[str, Action] = {
    "q": Action.QUIT,
    "left": Action.CLEAR_SELECTION,
    "down": Action.MOVE_DOWN,
    "j": Action.MOVE_DOWN,
    "up": Action.MOVE_UP,
    "k": Action.MOVE_UP,
    "enter": Action.CONFIRM,
    "escape": Action.BACK,
    "backspace": Action.BACK,
}

# (key, label) hints shown in the footer, per view
LIST_KEY_HINTS: list[tuple[str, str]] = [
    ("↑↓", "move"),
    ("enter", "open"),
    ("←", "clear"),
    ("q", "quit"),
]
DETAIL_KEY_HINTS: list[tuple[str, str]] = [
    ("esc", "back"),
    ("q", "quit"),
]


def decode_key(key: str) -> Action:
    """Map a key name to an action, raising InputDecodeError for unbound keys."""
    try:
        return KEY_ACTIONS[key]
    except KeyError:
        raise InputDecodeError(f"unbound key: {key!r}") from None


def decode_event(event: object) -> Action:
    """Decode any input event; anything unrecognised becomes IGNORED."""
    if isinstance(event, Resize):
        return Action.RESIZE
    if isinstance(event, KeyPress):
        try:
            return decode_key(event.key)
        except InputDecodeError as exc:
            logger.debug("Ignoring input: %s", exc)
            return Action.IGNORED
    logger.debug("Ignoring unsupported input event: %r", event)
    return Action.IGNORED


__all__ = [
    "DETAIL_KEY_HINTS",
    "KEY_ACTIONS",
    "LIST_KEY_HINTS",
    "Action",
    "InputEvent",
    "KeyPress",
    "Resize",
    "decode_event",
    "decode_key",
]
