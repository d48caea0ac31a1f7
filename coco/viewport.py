"""Cursor and scroll-offset arithmetic for the result list.

``cursor`` is a row inside the visible window and ``offset`` is the index
of the first visible result. Bounds are computed with a window of at least
one row, so tiny terminals degrade to single-row scrolling instead of
producing negative limits.
"""

from __future__ import annotations

from dataclasses import dataclass


def _window_rows(visible_height: int) -> int:
    return max(1, visible_height)


def max_offset(total: int, visible_height: int) -> int:
    """Largest offset that still fills the window from the bottom."""
    return max(0, total - _window_rows(visible_height))


@dataclass
class Viewport:
    cursor: int = 0
    offset: int = 0

    def selected_index(self) -> int:
        return self.offset + self.cursor

    def reset(self) -> None:
        self.cursor = 0
        self.offset = 0

    def move_up(self) -> None:
        """Move selection up one row, scrolling when already on the top row."""
        if self.cursor == 0:
            self.offset = max(0, self.offset - 1)
        else:
            self.cursor -= 1

    def move_down(self, total: int, visible_height: int) -> None:
        """Move selection down one row, scrolling when on the last window row."""
        if total <= 0:
            return
        window = _window_rows(visible_height)
        if self.cursor >= window - 1:
            self.offset = min(self.offset + 1, max_offset(total, visible_height))
        else:
            last_row = min(total - self.offset, window) - 1
            self.cursor = max(0, min(self.cursor + 1, last_row))

    def clamp(self, total: int, visible_height: int) -> None:
        """Restore bounds after the result count or window height changed.

        The selected result stays selected when it still exists; otherwise the
        selection falls back to the last result.
        """
        if total <= 0:
            self.reset()
            return
        window = _window_rows(visible_height)
        selected = max(0, min(self.offset + self.cursor, total - 1))
        offset = max(0, min(self.offset, max_offset(total, visible_height)))
        if selected < offset:
            offset = selected
        elif selected >= offset + window:
            offset = selected - window + 1
        self.offset = offset
        self.cursor = selected - offset
