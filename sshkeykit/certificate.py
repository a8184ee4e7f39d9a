"""Building blocks of OpenSSH certificates: types, fields, options and times."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .errors import CertificateFieldInvalidError, FormatEncodingError, LengthError, TimeError
from .wire import Reader, Writer

MAX_SECS = 2**63 - 1
"""Largest Unix timestamp accepted in a certificate."""

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class CertType(enum.IntEnum):
    """Kind of OpenSSH certificate. The default is a user certificate."""

    USER = 1
    HOST = 2

    def is_host(self) -> bool:
        """Whether this is a host certificate."""
        return self is CertType.HOST

    def is_user(self) -> bool:
        """Whether this is a user certificate."""
        return self is CertType.USER

    def encode(self, writer: Writer) -> None:
        """Write the type as a 32-bit integer."""
        writer.write_uint32(int(self))

    @classmethod
    def decode(cls, reader: Reader) -> CertType:
        """Read a type; values other than 1 and 2 are rejected."""
        value = reader.read_uint32()
        try:
            return cls(value)
        except ValueError as exc:
            raise FormatEncodingError() from exc


class Field(enum.Enum):
    """Certificate fields, used to report invalid certificate contents."""

    PUBLIC_KEY = "public key"
    NONCE = "nonce"
    SERIAL = "serial"
    TYPE = "type"
    KEY_ID = "key id"
    VALID_PRINCIPALS = "valid principals"
    VALID_AFTER = "valid after"
    VALID_BEFORE = "valid before"
    CRITICAL_OPTIONS = "critical options"
    EXTENSIONS = "extensions"
    SIGNATURE_KEY = "signature key"
    SIGNATURE = "signature"
    COMMENT = "comment"

    def invalid_error(self) -> CertificateFieldInvalidError:
        """An error stating that this field is invalid."""
        return CertificateFieldInvalidError(self)

    def __str__(self) -> str:
        return self.value


class OptionsMap(dict):
    """Name/value map for a certificate's critical options and extensions.

    Entries are always encoded in lexical order of their names.
    """

    def _sorted_items(self) -> list[tuple[str, str]]:
        return sorted(self.items())

    def encoded_len(self) -> int:
        """Length in bytes of the wire encoding, including its prefix."""
        total = 4
        for name, data in self.items():
            total += 4 + len(name.encode("utf-8"))
            total += 4 if not data else 8 + len(data.encode("utf-8"))
        return total

    def encode(self, writer: Writer) -> None:
        """Write the options as a length-prefixed sequence."""
        body = self.encoded_len() - 4
        if body < 0:
            raise LengthError()
        writer.write_uint32(body)
        for name, data in self._sorted_items():
            writer.write_utf8(name)
            if not data:
                writer.write_uint32(0)
            else:
                inner = Writer()
                inner.write_utf8(data)
                writer.write_string(inner.to_bytes())

    @classmethod
    def decode(cls, reader: Reader) -> OptionsMap:
        """Read options; names must be unique and in lexical order."""

        def read_data(nested: Reader) -> str:
            return nested.read_utf8() if nested.remaining_len() > 0 else ""

        def read_entries(nested: Reader) -> OptionsMap:
            entries: list[tuple[str, str]] = []
            while not nested.is_finished():
                name = nested.read_utf8()
                data = nested.read_prefixed(read_data)
                if entries and not entries[-1][0] < name:
                    raise FormatEncodingError()
                entries.append((name, data))
            return cls(entries)

        return reader.read_prefixed(read_entries)


@dataclass(frozen=True, order=True)
class UnixTime:
    """Seconds since the Unix epoch, at most ``MAX_SECS``."""

    secs: int

    def __post_init__(self) -> None:
        if not isinstance(self.secs, int) or not 0 <= self.secs <= MAX_SECS:
            raise TimeError()

    @classmethod
    def now(cls) -> UnixTime:
        """The current system time."""
        current = time.time()
        if current < 0:
            raise TimeError()
        return cls(int(current))

    def to_datetime(self) -> datetime:
        """The timestamp as an aware UTC datetime."""
        try:
            return _EPOCH + timedelta(seconds=self.secs)
        except OverflowError as exc:
            raise TimeError() from exc

    def __int__(self) -> int:
        return self.secs

    def encode(self, writer: Writer) -> None:
        """Write the timestamp as a 64-bit integer."""
        writer.write_uint64(self.secs)

    @classmethod
    def decode(cls, reader: Reader) -> UnixTime:
        """Read a 64-bit timestamp."""
        return cls(reader.read_uint64())