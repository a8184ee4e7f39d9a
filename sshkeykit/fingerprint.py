"""SSH public key fingerprints and their "randomart" visualisation."""

from __future__ import annotations

import base64
import binascii
import string
from dataclasses import dataclass
from typing import Any

from .algorithm import HashAlg
from .errors import AlgorithmUnknownError, EncodingError, LengthError
from .wire import Writer

_PREFIXES = {HashAlg.SHA256: "SHA256", HashAlg.SHA512: "SHA512"}
_BY_PREFIX = {prefix: alg for alg, prefix in _PREFIXES.items()}
_B64_ALPHABET = frozenset(string.ascii_letters + string.digits + "+/")

_WIDTH = 17
_HEIGHT = 9
_VALUES = " .o+=*BOX@%&#/^SE"
_NVALUES = len(_VALUES) - 1


def _b64_encode_unpadded(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii").rstrip("=")


def _b64_decode_unpadded(text: str) -> bytes:
    if any(ch not in _B64_ALPHABET for ch in text) or len(text) % 4 == 1:
        raise EncodingError("invalid Base64 encoding")
    try:
        decoded = base64.b64decode(text + "=" * (-len(text) % 4), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise EncodingError("invalid Base64 encoding") from exc
    if _b64_encode_unpadded(decoded) != text:
        raise EncodingError("invalid Base64 encoding")
    return decoded


def _encode_key_data(key_data: Any) -> bytes:
    if isinstance(key_data, (bytes, bytearray, memoryview)):
        return bytes(key_data)
    writer = Writer()
    key_data.encode(writer)
    return writer.to_bytes()


def _center(text: str) -> str:
    pad = max(_WIDTH - len(text), 0)
    left = pad // 2
    return "-" * left + text + "-" * (pad - left)


@dataclass(frozen=True)
class Fingerprint:
    """A digest of a public key's wire encoding under a given hash function.

    The text form looks like ``SHA256:<unpadded Base64 digest>``.
    """

    hash_alg: HashAlg
    digest: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.hash_alg, HashAlg):
            raise TypeError("hash_alg must be a HashAlg")
        digest = bytes(self.digest)
        if len(digest) != self.hash_alg.digest_size():
            raise LengthError()
        object.__setattr__(self, "digest", digest)

    @classmethod
    def new(cls, algorithm: HashAlg, key_data: Any) -> Fingerprint:
        """Fingerprint public key data.

        ``key_data`` is either the encoded key blob or an object with an
        ``encode(writer)`` method.
        """
        return cls(algorithm, algorithm.digest(_encode_key_data(key_data)))

    @classmethod
    def parse(cls, text: str) -> Fingerprint:
        """Parse a fingerprint such as ``SHA256:Nh0Me49Zh9fD...``."""
        prefix, sep, encoded = text.partition(":")
        if not sep:
            raise AlgorithmUnknownError()
        algorithm = _BY_PREFIX.get(prefix)
        if algorithm is None:
            raise AlgorithmUnknownError()
        decoded = _b64_decode_unpadded(encoded)
        if len(decoded) > HashAlg.SHA512.digest_size():
            raise EncodingError("invalid Base64 length")
        if len(decoded) != algorithm.digest_size():
            raise LengthError()
        return cls(algorithm, decoded)

    def algorithm(self) -> HashAlg:
        """The hash algorithm used for this fingerprint."""
        return self.hash_alg

    def prefix(self) -> str:
        """Upper-case name of the hash algorithm, e.g. ``SHA256``."""
        return _PREFIXES[self.hash_alg]

    def _footer(self) -> str:
        return f"[{self.prefix()}]"

    def as_bytes(self) -> bytes:
        """The raw digest."""
        return self.digest

    def sha256(self) -> bytes | None:
        """The digest if this is a SHA-256 fingerprint."""
        return self.digest if self.is_sha256() else None

    def sha512(self) -> bytes | None:
        """The digest if this is a SHA-512 fingerprint."""
        return self.digest if self.is_sha512() else None

    def is_sha256(self) -> bool:
        """Whether this is a SHA-256 fingerprint."""
        return self.hash_alg is HashAlg.SHA256

    def is_sha512(self) -> bool:
        """Whether this is a SHA-512 fingerprint."""
        return self.hash_alg is HashAlg.SHA512

    def to_randomart(self, header: str) -> str:
        """Render the "drunken bishop" visualisation of this fingerprint."""
        field = [[0] * _WIDTH for _ in range(_HEIGHT)]
        x, y = _WIDTH // 2, _HEIGHT // 2

        for byte in self.digest:
            for _ in range(4):
                x = min(x + 1, _WIDTH - 1) if byte & 0x1 else max(x - 1, 0)
                y = min(y + 1, _HEIGHT - 1) if byte & 0x2 else max(y - 1, 0)
                if field[y][x] < _NVALUES - 2:
                    field[y][x] += 1
                byte >>= 2

        field[_HEIGHT // 2][_WIDTH // 2] = _NVALUES - 1
        field[y][x] = _NVALUES

        lines = [f"+{_center(header)}+"]
        lines.extend("|" + "".join(_VALUES[c] for c in row) + "|" for row in field)
        lines.append(f"+{_center(self._footer())}+")
        return "\n".join(lines)

    def __bytes__(self) -> bytes:
        return self.digest

    def __str__(self) -> str:
        return f"{self.prefix()}:{_b64_encode_unpadded(self.digest)}"