"""OpenSSH public keys in their one-line text form."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field

from .algorithm import Algorithm, AlgorithmKind, EcdsaCurve, HashAlg
from .comment import Comment
from .errors import (
    AlgorithmUnknownError,
    EncodingError,
    FormatEncodingError,
    LengthError,
    PublicKeyError,
)
from .fingerprint import Fingerprint
from .wire import Reader

_ED25519_KEY_SIZE = 32


def _decode_base64(text: str) -> bytes:
    try:
        data = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise EncodingError("invalid Base64 encoding") from exc
    if base64.b64encode(data).decode("ascii") != text:
        raise EncodingError("invalid Base64 encoding")
    return data


def _read_ed25519_key(reader: Reader) -> None:
    if len(reader.read_string()) != _ED25519_KEY_SIZE:
        raise LengthError()


def _read_curve(reader: Reader, expected: EcdsaCurve) -> None:
    if reader.read_utf8() != str(expected):
        raise PublicKeyError()


def _check_key_blob(algorithm: Algorithm, blob: bytes) -> None:
    """Check that ``blob`` is well-formed key data for ``algorithm``."""
    reader = Reader(blob)
    if reader.read_utf8() != algorithm.as_str():
        raise AlgorithmUnknownError()

    kind = algorithm.kind
    if kind is AlgorithmKind.DSA:
        for _ in range(4):  # p, q, g, y
            reader.read_string()
    elif kind is AlgorithmKind.ECDSA:
        assert algorithm.curve is not None
        _read_curve(reader, algorithm.curve)
        reader.read_string()
    elif kind is AlgorithmKind.ED25519:
        _read_ed25519_key(reader)
    elif kind is AlgorithmKind.RSA:
        reader.read_string()  # e
        reader.read_string()  # n
    elif kind is AlgorithmKind.SK_ECDSA_SHA2_NISTP256:
        _read_curve(reader, EcdsaCurve.NIST_P256)
        reader.read_string()
        reader.read_string()  # application
    elif kind is AlgorithmKind.SK_ED25519:
        _read_ed25519_key(reader)
        reader.read_string()  # application
    else:
        reader.read_bytes(reader.remaining_len())

    reader.finish(None)


@dataclass(frozen=True)
class PublicKey:
    """A public key: its algorithm, encoded key blob and comment."""

    algorithm: Algorithm
    key_data: bytes
    comment: Comment = field(default_factory=Comment)

    def __post_init__(self) -> None:
        if not isinstance(self.algorithm, Algorithm):
            raise TypeError("algorithm must be an Algorithm")
        object.__setattr__(self, "key_data", bytes(self.key_data))
        object.__setattr__(self, "comment", Comment(self.comment))

    @classmethod
    def from_openssh(cls, text: str) -> PublicKey:
        """Parse ``<algorithm> <base64 key data> [comment]``."""
        text = text.rstrip()
        alg_id, sep, rest = text.partition(" ")
        if not sep or not alg_id:
            raise FormatEncodingError()
        encoded, _, comment = rest.partition(" ")
        if not encoded:
            raise FormatEncodingError()
        algorithm = Algorithm.new(alg_id)
        blob = _decode_base64(encoded)
        _check_key_blob(algorithm, blob)
        return cls(algorithm, blob, comment)

    def to_openssh(self) -> str:
        """Encode as a single OpenSSH public key line."""
        parts = [self.algorithm.as_str(), base64.b64encode(self.key_data).decode("ascii")]
        if not self.comment.is_empty():
            parts.append(str(self.comment))
        return " ".join(parts)

    def fingerprint(self, hash_alg: HashAlg = HashAlg.SHA256) -> Fingerprint:
        """Fingerprint of the key data under ``hash_alg``."""
        return Fingerprint.new(hash_alg, self.key_data)

    def __str__(self) -> str:
        return self.to_openssh()