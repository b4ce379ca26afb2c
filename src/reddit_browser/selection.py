"""Cursor-addressed list with wrap-around navigation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SelectableList(Generic[T]):
    """Ordered items plus an optional cursor.

    The cursor is either ``None`` (nothing selected) or a valid index into
    ``items``. Replacing the items always clears the cursor, so an index into
    a swapped-out sequence can never survive a refresh.
    """

    __slots__ = ("_cursor", "_items")

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: tuple[T, ...] = tuple(items)
        self._cursor: int | None = None

    @property
    def items(self) -> tuple[T, ...]:
        return self._items

    @property
    def cursor(self) -> int | None:
        self._check_cursor()
        return self._cursor

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"SelectableList(len={len(self._items)}, cursor={self._cursor})"

    def next(self) -> None:
        """Move the cursor down one row, wrapping past the last item."""
        if not self._items:
            return
        if self._cursor is None or self._cursor >= len(self._items) - 1:
            self._cursor = 0
        else:
            self._cursor += 1

    def previous(self) -> None:
        """Move the cursor up one row, wrapping before the first item.

        With no selection the first item is selected, matching ``next()``.
        """
        if not self._items:
            return
        if self._cursor is None:
            self._cursor = 0
        elif self._cursor == 0:
            self._cursor = len(self._items) - 1
        else:
            self._cursor -= 1

    def unselect(self) -> None:
        self._cursor = None

    def select(self, index: int | None) -> None:
        """Point the cursor at ``index`` (or clear it with ``None``)."""
        if index is not None and not 0 <= index < len(self._items):
            raise IndexError(f"cursor {index} out of range for {len(self._items)} items")
        self._cursor = index

    def replace(self, items: Iterable[T]) -> None:
        """Swap in a new sequence and clear the cursor."""
        self._items = tuple(items)
        self._cursor = None

    def selected(self) -> T | None:
        """Return the item under the cursor, if any."""
        cursor = self.cursor
        if cursor is None:
            return None
        return self._items[cursor]

    def _check_cursor(self) -> None:
        cursor = self._cursor
        if cursor is None or 0 <= cursor < len(self._items):
            return
        if __debug__:
            raise AssertionError(f"cursor {cursor} out of range for {len(self._items)} items")
        logger.error("Clamping out-of-range cursor %d (len=%d)", cursor, len(self._items))
        self._cursor = len(self._items) - 1 if self._items else None


__all__ = ["SelectableList"]
