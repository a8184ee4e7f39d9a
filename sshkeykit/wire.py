"""Reading and writing the SSH binary wire format (RFC 4251 data types)."""

from __future__ import annotations

import struct
from typing import Callable, TypeVar

from .errors import CharacterEncodingError, LengthError, TrailingDataError

T = TypeVar("T")

_UINT32 = struct.Struct(">I")
_UINT64 = struct.Struct(">Q")


class Reader:
    """Sequential reader over a byte string in SSH wire format."""

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)
        self._pos = 0

    def read_bytes(self, n: int) -> bytes:
        """Read exactly ``n`` bytes."""
        if n < 0 or n > self.remaining_len():
            raise LengthError()
        chunk = self._data[self._pos : self._pos + n]
        self._pos += n
        return chunk

    def read_uint32(self) -> int:
        """Read a big-endian 32-bit unsigned integer."""
        return _UINT32.unpack(self.read_bytes(_UINT32.size))[0]

    def read_uint64(self) -> int:
        """Read a big-endian 64-bit unsigned integer."""
        return _UINT64.unpack(self.read_bytes(_UINT64.size))[0]

    def read_string(self) -> bytes:
        """Read a length-prefixed byte string."""
        return self.read_bytes(self.read_uint32())

    def read_utf8(self) -> str:
        """Read a length-prefixed string that must be valid UTF-8."""
        raw = self.read_string()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CharacterEncodingError() from exc

    def read_prefixed(self, func: Callable[[Reader], T]) -> T:
        """Decode a length-prefixed nested message with ``func``.

        The nested message must be consumed entirely.
        """
        nested = Reader(self.read_string())
        return nested.finish(func(nested))

    def remaining_len(self) -> int:
        """Number of bytes not yet read."""
        return len(self._data) - self._pos

    def is_finished(self) -> bool:
        """Whether all input has been consumed."""
        return self.remaining_len() == 0

    def finish(self, value: T) -> T:
        """Return ``value`` if all input was consumed, else raise."""
        remaining = self.remaining_len()
        if remaining:
            raise TrailingDataError(remaining)
        return value


class Writer:
    """Accumulates data in SSH wire format."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def write_bytes(self, data: bytes | bytearray | memoryview) -> None:
        """Append raw bytes."""
        self._buf += data

    def write_uint32(self, value: int) -> None:
        """Append a big-endian 32-bit unsigned integer."""
        if not 0 <= value <= 0xFFFFFFFF:
            raise LengthError()
        self._buf += _UINT32.pack(value)

    def write_uint64(self, value: int) -> None:
        """Append a big-endian 64-bit unsigned integer."""
        if not 0 <= value <= 0xFFFFFFFFFFFFFFFF:
            raise LengthError()
        self._buf += _UINT64.pack(value)

    def write_string(self, data: bytes | bytearray | memoryview) -> None:
        """Append a length-prefixed byte string."""
        data = bytes(data)
        self.write_uint32(len(data))
        self._buf += data

    def write_utf8(self, text: str) -> None:
        """Append a length-prefixed UTF-8 string."""
        self.write_string(text.encode("utf-8"))

    def to_bytes(self) -> bytes:
        """Everything written so far."""
        return bytes(self._buf)