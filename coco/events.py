"""Input events consumed by the selection session.

An event is a kind tag plus, for ``CHARACTER`` events, the decoded
character. Kinds are plain string tokens in the style of terminal key names.
"""

from __future__ import annotations

from dataclasses import dataclass

ENTER = "ENTER"
ESCAPE = "ESC"
UP = "UP"
DOWN = "DOWN"
BACKSPACE = "BACKSPACE"
CHARACTER = "CHAR"
UNKNOWN = "UNKNOWN"

EVENT_KINDS = frozenset({ENTER, ESCAPE, UP, DOWN, BACKSPACE, CHARACTER, UNKNOWN})


@dataclass(frozen=True)
class Event:
    kind: str
    char: str = ""

    def __post_init__(self) -> None:
        if self.kind not in EVENT_KINDS:
            raise ValueError(f"unknown event kind: {self.kind!r}")
        if (self.kind == CHARACTER) != (len(self.char) == 1):
            raise ValueError(f"{self.kind} event cannot carry {self.char!r}")

    @classmethod
    def character(cls, ch: str) -> Event:
        return cls(CHARACTER, ch)

    def __str__(self) -> str:
        return self.char if self.kind == CHARACTER else self.kind


ENTER_EVENT = Event(ENTER)
ESCAPE_EVENT = Event(ESCAPE)
UP_EVENT = Event(UP)
DOWN_EVENT = Event(DOWN)
BACKSPACE_EVENT = Event(BACKSPACE)
UNKNOWN_EVENT = Event(UNKNOWN)
