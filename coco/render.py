"""Frame construction for the selection screen.

Row 0 holds the prompt and query. The rows below show the visible slice of
the filtered results, with the cursor row drawn in reverse video. On a
one-row terminal the selected result is drawn after the query instead. The
whole frame is built as one string so the terminal receives a single write.
"""

from __future__ import annotations

from collections.abc import Sequence

from .ansi import clip_to_width, display_width, pad_to_width

PROMPT_ROWS = 1
HOME = "\033[H"
CLEAR_TO_EOL = "\033[K"
CLEAR_TO_END = "\033[J"
REVERSE = "\033[7m"
DIM = "\033[2m"
RESET = "\033[0m"
INLINE_SEPARATOR = " > "


def visible_height(rows: int) -> int:
    """Rows available for results once the prompt row is reserved."""
    return max(0, rows - PROMPT_ROWS)


def visible_rows(lines: Sequence[str], offset: int, height: int) -> list[str]:
    """Return the results drawn below the prompt for ``offset`` and ``height``."""
    count = max(0, min(len(lines) - offset, height))
    return [lines[offset + y] for y in range(count)]


def selected_row(text: str, width: int) -> str:
    """Reverse-video a row across the full terminal width."""
    return REVERSE + pad_to_width(text, width) + RESET


def build_prompt_line(prompt: str, query: str, width: int, pattern_error: str = "") -> str:
    """Render the prompt row, appending a dim marker for an invalid pattern.

    The marker is dropped first when the row is too narrow for both.
    """
    head = clip_to_width(prompt + query, width)
    if not pattern_error:
        return head
    marker = f"  [{pattern_error}]"
    room = width - display_width(head)
    if room <= 0:
        return head
    return head + DIM + clip_to_width(marker, room) + RESET


def build_inline_selection(head: str, line: str, width: int) -> str:
    """Append the selected result to a prompt row, for one-row terminals."""
    room = width - display_width(head) - len(INLINE_SEPARATOR)
    if room <= 0:
        return head
    return head + INLINE_SEPARATOR + REVERSE + clip_to_width(line, room) + RESET


def build_frame(
    prompt: str,
    query: str,
    lines: Sequence[str],
    cursor: int,
    offset: int,
    columns: int,
    rows: int,
    pattern_error: str = "",
) -> str:
    """Return the escape-coded frame for one full redraw."""
    width = max(0, columns)
    out: list[str] = [HOME]
    if rows <= 0:
        return "".join(out)

    height = visible_height(rows)
    head = build_prompt_line(prompt, query, width, pattern_error)
    selected = offset + cursor
    if height == 0 and 0 <= selected < len(lines):
        head = build_inline_selection(head, lines[selected], width)
    out.append(head)
    out.append(CLEAR_TO_EOL)
    for y, line in enumerate(visible_rows(lines, offset, height)):
        out.append("\r\n")
        text = clip_to_width(line, width)
        out.append(selected_row(text, width) if y == cursor else text)
        out.append(CLEAR_TO_EOL)
    out.append(CLEAR_TO_END)
    return "".join(out)
