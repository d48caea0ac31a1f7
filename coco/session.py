"""Interactive selection session: state, event dispatch, and the main loop.

A session owns the dataset, the query, the filtered view, and the viewport.
``handle_event`` applies one event and reports whether the session goes on,
``run_session`` drives it against a terminal until a line is chosen or the
user escapes.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from .errors import QueryPatternError
from .events import BACKSPACE, CHARACTER, DOWN, ENTER, ESCAPE, UNKNOWN, UP, Event
from .filtering import FilteredView, filter_lines
from .query import QueryBuffer
from .render import build_frame, visible_height
from .viewport import Viewport

logger = logging.getLogger(__name__)

CONTINUE = "continue"
SELECTED = "selected"
ESCAPED = "escaped"

DEFAULT_PROMPT = "QUERY> "


class SessionTerminal(Protocol):
    def raw_mode(self): ...

    def poll_event(self) -> Event: ...

    def get_visible_size(self) -> tuple[int, int]: ...

    def render(self, frame: str) -> None: ...


class SelectionSession:
    """Selection state threaded through the dispatch loop."""

    def __init__(self, dataset: Sequence[str], query: str = "", prompt: str = DEFAULT_PROMPT) -> None:
        self.dataset = tuple(dataset)
        self.prompt = prompt
        self.query = QueryBuffer(query)
        self.viewport = Viewport()
        self.status = CONTINUE
        self.pattern_error = ""
        self.filtered = FilteredView.identity(self.dataset)
        self._refilter()

    @property
    def finished(self) -> bool:
        return self.status != CONTINUE

    def _refilter(self) -> None:
        """Recompute results from the full dataset and snap to the top.

        An invalid pattern leaves the previous results in place and is only
        reported through ``pattern_error``.
        """
        query = self.query.text
        try:
            self.filtered = filter_lines(self.dataset, query)
        except QueryPatternError as exc:
            self.pattern_error = f"invalid pattern: {exc.reason}"
            logger.debug("keeping %d previous result(s): %s", len(self.filtered), exc)
        else:
            self.pattern_error = ""
            logger.debug("query %r matched %d of %d line(s)", query, len(self.filtered), len(self.dataset))
        self.viewport.reset()

    def handle_event(self, event: Event, height: int) -> str:
        """Apply one event and return the resulting session status.

        ``height`` is the number of result rows currently visible.
        """
        if self.finished:
            raise RuntimeError(f"session already {self.status}")

        kind = event.kind
        if kind == ENTER:
            self.status = SELECTED if len(self.filtered) > 0 else ESCAPED
        elif kind == ESCAPE:
            self.status = ESCAPED
        elif kind == UP:
            self.viewport.clamp(len(self.filtered), height)
            self.viewport.move_up()
        elif kind == DOWN:
            self.viewport.clamp(len(self.filtered), height)
            self.viewport.move_down(len(self.filtered), height)
        elif kind == BACKSPACE:
            if self.query.remove_last():
                self._refilter()
        elif kind == CHARACTER:
            self.query.append(event.char)
            self._refilter()
        elif kind == UNKNOWN:
            pass
        else:
            raise ValueError(f"unhandled event kind: {kind!r}")
        return self.status

    def selected_line(self) -> str | None:
        """Return the line under the cursor, or ``None`` when nothing matches."""
        index = self.viewport.selected_index()
        if 0 <= index < len(self.filtered):
            return self.filtered[index]
        return None

    def result(self) -> str | None:
        """Return the committed line, or ``None`` when the session escaped."""
        if self.status == SELECTED:
            return self.selected_line()
        return None

    def frame(self, columns: int, rows: int) -> str:
        """Clamp to the current terminal size and build the redraw frame."""
        self.viewport.clamp(len(self.filtered), visible_height(rows))
        return build_frame(
            self.prompt,
            self.query.text,
            self.filtered,
            self.viewport.cursor,
            self.viewport.offset,
            columns,
            rows,
            self.pattern_error,
        )


def run_session(session: SelectionSession, terminal: SessionTerminal) -> str | None:
    """Run the interactive loop until the session selects or escapes.

    The terminal leaves raw mode before this returns or raises, so callers
    can write the result or an error message straight away.
    """
    with terminal.raw_mode():
        terminal.render(session.frame(*terminal.get_visible_size()))
        while True:
            event = terminal.poll_event()
            _columns, rows = terminal.get_visible_size()
            status = session.handle_event(event, visible_height(rows))
            if status != CONTINUE:
                break
            terminal.render(session.frame(*terminal.get_visible_size()))

    result = session.result()
    logger.debug("session %s with %s", session.status, "a selection" if result is not None else "no selection")
    return result
