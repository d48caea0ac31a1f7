"""Low-level terminal input decoding.

Reads raw bytes from the tty and translates them into ``Event`` values.
Handles ESC-sequence timing, CSI/SS3 arrow keys, and strict UTF-8 decoding
of typed characters.
"""

from __future__ import annotations

import os
import select

from .errors import InputReadError, MalformedInputError
from .events import (
    BACKSPACE_EVENT,
    DOWN_EVENT,
    ENTER_EVENT,
    ESCAPE_EVENT,
    UNKNOWN_EVENT,
    UP_EVENT,
    Event,
)

ESC_SEQUENCE_TIMEOUT_MS = 25
UTF8_CONTINUATION_TIMEOUT_MS = 100
MAX_SEQUENCE_BYTES = 32


def utf8_sequence_length(lead: int) -> int:
    """Return the encoded length announced by a UTF-8 lead byte.

    Raises ``MalformedInputError`` for continuation bytes and for lead bytes
    that can never start a valid sequence.
    """
    if lead < 0x80:
        return 1
    if 0x80 <= lead <= 0xBF:
        raise MalformedInputError(f"unexpected UTF-8 continuation byte 0x{lead:02x}")
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    raise MalformedInputError(f"invalid UTF-8 lead byte 0x{lead:02x}")


def _is_csi_final(byte: bytes) -> bool:
    return 0x40 <= byte[0] <= 0x7E


class KeyReader:
    """Decode one key event at a time from a raw-mode file descriptor."""

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._pending: list[bytes] = []

    def _read_ready_byte(self, timeout_ms: int) -> bytes | None:
        ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None
        ch = os.read(self.fd, 1)
        if not ch:
            return None
        return ch

    def _next_byte(self) -> bytes:
        if self._pending:
            return self._pending.pop(0)
        try:
            ch = os.read(self.fd, 1)
        except OSError as exc:
            raise InputReadError(f"terminal read failed: {exc.strerror or exc}") from exc
        if not ch:
            raise InputReadError("terminal input closed")
        return ch

    def read_event(self) -> Event:
        """Block until one complete key event is available and return it."""
        ch = self._next_byte()

        if ch in {b"\r", b"\n"}:
            return ENTER_EVENT
        if ch in {b"\x7f", b"\x08"}:
            return BACKSPACE_EVENT
        if ch == b"\x03":
            return ESCAPE_EVENT
        if ch == b"\x1b":
            return self._read_escape_sequence()
        if ch[0] < 0x20:
            return UNKNOWN_EVENT
        return self._decode_character(ch)

    def _decode_character(self, lead: bytes) -> Event:
        length = utf8_sequence_length(lead[0])
        raw = bytearray(lead)
        while len(raw) < length:
            part = self._read_ready_byte(UTF8_CONTINUATION_TIMEOUT_MS)
            if part is None:
                raise MalformedInputError(
                    f"truncated UTF-8 sequence {bytes(raw)!r}: expected {length} bytes"
                )
            raw += part
        try:
            text = bytes(raw).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedInputError(f"invalid UTF-8 sequence {bytes(raw)!r}: {exc.reason}") from exc
        return Event.character(text)

    def _read_escape_sequence(self) -> Event:
        seq = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            return ESCAPE_EVENT
        if seq == b"O":
            # SS3 form, sent for arrows in application cursor mode.
            final = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if final is None:
                return ESCAPE_EVENT
            return self._arrow_event(final)
        if seq != b"[":
            self._pending.append(seq)
            return ESCAPE_EVENT

        # CSI: parameter/intermediate bytes, then one final byte.
        consumed = 0
        while True:
            part = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if part is None:
                return ESCAPE_EVENT
            if _is_csi_final(part):
                return self._arrow_event(part)
            consumed += 1
            if consumed > MAX_SEQUENCE_BYTES:
                return UNKNOWN_EVENT

    @staticmethod
    def _arrow_event(final: bytes) -> Event:
        if final == b"A":
            return UP_EVENT
        if final == b"B":
            return DOWN_EVENT
        return UNKNOWN_EVENT
