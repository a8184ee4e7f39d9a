"""Parser for ``known_hosts`` files."""

from __future__ import annotations

import base64
import binascii
import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from .errors import EncodingError, FormatEncodingError, LengthError
from .public import PublicKey

_COMMENT_DELIMITER = "#"
_MAGIC_HASH_PREFIX = "|1|"
_HASH_SIZE = 20


def _content_lines(text: str) -> Iterator[str]:
    """Lines with comments and trailing whitespace removed, skipping blanks."""
    for line in text.split("\n"):
        line = line.partition(_COMMENT_DELIMITER)[0].rstrip()
        if line:
            yield line


def _decode_base64(text: str) -> bytes:
    try:
        data = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise EncodingError("invalid Base64 encoding") from exc
    if base64.b64encode(data).decode("ascii") != text:
        raise EncodingError("invalid Base64 encoding")
    return data


def _encode_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


class Marker(enum.Enum):
    """Marker that may precede a host key entry."""

    CERT_AUTHORITY = "@cert-authority"
    REVOKED = "@revoked"

    @classmethod
    def from_str(cls, text: str) -> Marker:
        """Parse a marker such as ``@revoked``."""
        try:
            return cls(text)
        except ValueError as exc:
            raise FormatEncodingError() from exc

    def __str__(self) -> str:
        return self.value


class HostPatterns:
    """The host pattern field: a pattern list or a single hashed hostname."""

    @classmethod
    def from_str(cls, text: str) -> HostPatterns:
        """Parse ``|1|salt|hash`` or a comma-separated list of patterns."""
        if text.startswith(_MAGIC_HASH_PREFIX):
            salt_text, sep, hash_text = text[len(_MAGIC_HASH_PREFIX) :].partition("|")
            if not sep:
                raise FormatEncodingError()
            salt = _decode_base64(salt_text)
            digest = _decode_base64(hash_text)
            if len(digest) > _HASH_SIZE:
                raise LengthError()
            return HashedName(salt, digest.ljust(_HASH_SIZE, b"\0"))
        if not text:
            raise FormatEncodingError()
        patterns = text.split(",")
        if patterns[-1] == "":
            patterns.pop()
        return Patterns(tuple(patterns))


@dataclass(frozen=True)
class Patterns(HostPatterns):
    """Host patterns, possibly with wildcards, negations or ports."""

    patterns: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "patterns", tuple(self.patterns))

    def __str__(self) -> str:
        return ",".join(self.patterns)


@dataclass(frozen=True)
class HashedName(HostPatterns):
    """A single hostname hashed with SHA-1 and a salt."""

    salt: bytes
    hash: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "salt", bytes(self.salt))
        object.__setattr__(self, "hash", bytes(self.hash))
        if len(self.hash) != _HASH_SIZE:
            raise LengthError()

    def __str__(self) -> str:
        return f"{_MAGIC_HASH_PREFIX}{_encode_base64(self.salt)}|{_encode_base64(self.hash)}"


@dataclass(frozen=True)
class Entry:
    """One line of a ``known_hosts`` file."""

    host_patterns: HostPatterns
    public_key: PublicKey
    marker: Marker | None = None

    @classmethod
    def from_str(cls, line: str) -> Entry:
        """Parse ``[marker] hostnames keytype base64-key [comment]``."""
        marker = None
        if line.startswith("@"):
            marker_text, sep, line = line.partition(" ")
            if not sep:
                raise FormatEncodingError()
            marker = Marker.from_str(marker_text)
        hosts_text, sep, key_text = line.partition(" ")
        if not sep:
            raise FormatEncodingError()
        host_patterns = HostPatterns.from_str(hosts_text)
        public_key = PublicKey.from_openssh(key_text)
        return cls(host_patterns, public_key, marker)

    def __str__(self) -> str:
        prefix = f"{self.marker} " if self.marker is not None else ""
        return f"{prefix}{self.host_patterns} {self.public_key}"


class KnownHosts:
    """Iterates over the entries of ``known_hosts`` text.

    Blank lines and ``#`` comments are skipped; a malformed line raises.
    """

    def __init__(self, text: str) -> None:
        self._text = text

    def __iter__(self) -> Iterator[Entry]:
        for line in _content_lines(self._text):
            yield Entry.from_str(line)

    @classmethod
    def read_file(cls, path: str | Path) -> list[Entry]:
        """Read and parse every entry of a ``known_hosts`` file."""
        return list(cls(Path(path).read_text(encoding="utf-8")))