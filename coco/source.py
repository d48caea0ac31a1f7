"""Dataset loading from files or standard input.

Lines are decoded as strict UTF-8 and stripped of color/style escapes.
Loading stops once the configured line cap is reached across all inputs.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO

from .ansi import strip_style_escapes
from .errors import InputReadError, MalformedInputError

logger = logging.getLogger(__name__)

DEFAULT_MAX_LINES = 4096
STDIN_NAME = "<stdin>"


def _strip_line_ending(raw: bytes) -> bytes:
    if raw.endswith(b"\r\n"):
        return raw[:-2]
    if raw.endswith(b"\n"):
        return raw[:-1]
    return raw


def decode_line(raw: bytes, name: str, lineno: int) -> str:
    """Decode one raw line, reporting where a bad byte sequence was found."""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedInputError(
            f"{name}:{lineno}: invalid UTF-8 sequence at byte {exc.start}: {exc.reason}"
        ) from exc


def read_lines(stream: BinaryIO, max_lines: int, name: str = STDIN_NAME) -> list[str]:
    """Read at most ``max_lines`` cleaned lines from a binary stream."""
    lines: list[str] = []
    if max_lines <= 0:
        return lines
    try:
        for lineno, raw in enumerate(stream, start=1):
            text = decode_line(_strip_line_ending(raw), name, lineno)
            lines.append(strip_style_escapes(text))
            if len(lines) >= max_lines:
                break
    except OSError as exc:
        raise InputReadError(f"{name}: {exc.strerror or exc}") from exc
    return lines


def load_dataset(
    paths: Iterable[str | Path],
    max_lines: int = DEFAULT_MAX_LINES,
    stdin: BinaryIO | None = None,
) -> tuple[str, ...]:
    """Collect lines from ``paths`` in order, or from stdin when none are given.

    The cap is shared by all inputs: once it is reached, later files are not
    opened at all.
    """
    paths = list(paths)
    lines: list[str] = []
    if not paths:
        stream = stdin if stdin is not None else sys.stdin.buffer
        lines.extend(read_lines(stream, max_lines, STDIN_NAME))
    else:
        for raw_path in paths:
            remaining = max_lines - len(lines)
            if remaining <= 0:
                break
            path = Path(raw_path)
            try:
                handle = path.open("rb")
            except OSError as exc:
                raise InputReadError(f"cannot open {path}: {exc.strerror or exc}") from exc
            with handle:
                lines.extend(read_lines(handle, remaining, str(path)))
    logger.debug("loaded %d line(s) from %d input(s)", len(lines), max(1, len(paths)))
    return tuple(lines)
