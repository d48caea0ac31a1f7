"""Editable query text for the selection prompt.

The buffer only grows or shrinks by whole characters. Byte-level decoding
happens earlier, in ``coco.keys``, so a partial character never gets here.
"""

from __future__ import annotations


class QueryBuffer:
    def __init__(self, initial: str = "") -> None:
        self._chars: list[str] = list(initial)

    @property
    def text(self) -> str:
        return "".join(self._chars)

    def append(self, ch: str) -> None:
        """Append exactly one character to the query."""
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        self._chars.append(ch)

    def remove_last(self) -> bool:
        """Drop the last character; returns ``False`` when already empty."""
        if not self._chars:
            return False
        self._chars.pop()
        return True

    def __len__(self) -> int:
        return len(self._chars)

    def __bool__(self) -> bool:
        return bool(self._chars)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"QueryBuffer({self.text!r})"
