"""Exception types shared by the input, decoding, and filtering layers."""

from __future__ import annotations


class CocoError(Exception):
    """Base class for errors reported to the user by the CLI."""


class MalformedInputError(CocoError):
    """Raised when bytes do not form a valid UTF-8 character sequence."""


class InputReadError(CocoError):
    """Raised when an input file or the terminal cannot be read."""


class QueryPatternError(CocoError):
    """Raised when the query does not compile as a regular expression.

    Sessions treat this as recoverable and keep their previous results.
    """

    def __init__(self, query: str, reason: str) -> None:
        super().__init__(f"invalid pattern {query!r}: {reason}")
        self.query = query
        self.reason = reason
