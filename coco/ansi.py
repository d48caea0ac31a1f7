"""Escape-sequence stripping and display-width helpers.

Input lines lose their color/style sequences before they reach a session.
Rendering then clips each row to the terminal width, expanding tabs and
showing any leftover control characters in caret notation.
"""

from __future__ import annotations

import re
import unicodedata

# Color (SGR) and erase-in-line sequences, e.g. ``ESC[1;31m`` or ``ESC[K``.
STYLE_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*[mK]")
TAB_STOP = 8


def strip_style_escapes(text: str) -> str:
    """Remove color and erase-line escape sequences from ``text``."""
    if "\x1b" not in text:
        return text
    return STYLE_ESCAPE_RE.sub("", text)


def caret_notation(ch: str) -> str:
    """Return the ``^X`` spelling of a C0 control character or DEL."""
    code = ord(ch)
    if code == 0x7F:
        return "^?"
    return "^" + chr(code + 0x40)


def is_control(ch: str) -> bool:
    code = ord(ch)
    return code < 0x20 or code == 0x7F


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, control characters take the two
    columns of their caret form, combining marks consume no columns, and
    East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if is_control(ch):
        return 2
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    col = 0
    for ch in text:
        col += char_display_width(ch, col)
    return col


def clip_to_width(text: str, max_cols: int) -> str:
    """Return ``text`` made safe for one terminal row of ``max_cols`` cells.

    A character that would straddle the right edge is dropped rather than
    split, so wide glyphs never overflow into the next row.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        if ch == "\t":
            out.append(" " * w)
        elif is_control(ch):
            out.append(caret_notation(ch))
        else:
            out.append(ch)
        col += w
    return "".join(out)


def pad_to_width(text: str, width: int) -> str:
    """Right-pad an already clipped row with spaces up to ``width`` cells."""
    return text + " " * max(0, width - display_width(text))
