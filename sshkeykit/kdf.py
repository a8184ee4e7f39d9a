"""Key derivation functions used to turn a password into an encryption key."""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Callable

import bcrypt

from .algorithm import KdfAlg
from .errors import AlgorithmUnknownError, CryptoError, DecryptedError
from .wire import Reader, Writer

DEFAULT_BCRYPT_ROUNDS = 16
"""Default number of bcrypt-pbkdf rounds."""

DEFAULT_SALT_SIZE = 16
"""Default salt size, matching OpenSSH."""


@dataclass(frozen=True)
class Kdf:
    """A KDF configuration: ``none`` when ``salt`` is None, else bcrypt-pbkdf."""

    salt: bytes | None = None
    rounds: int | None = None

    def __post_init__(self) -> None:
        if (self.salt is None) != (self.rounds is None):
            raise ValueError("salt and rounds are given together or not at all")
        if self.salt is not None:
            object.__setattr__(self, "salt", bytes(self.salt))
            if not 0 <= self.rounds <= 0xFFFFFFFF:  # type: ignore[operator]
                raise ValueError("rounds must fit in 32 bits")

    @classmethod
    def new(cls, algorithm: KdfAlg, rng: Callable[[int], bytes] | None = None) -> Kdf:
        """Create a fresh configuration with a random salt.

        ``rng`` takes a byte count and returns that many random bytes.
        """
        salt = (rng or secrets.token_bytes)(DEFAULT_SALT_SIZE)
        if len(salt) != DEFAULT_SALT_SIZE:
            raise CryptoError("random number generator failure")
        if algorithm is KdfAlg.NONE:
            raise AlgorithmUnknownError()
        return cls(salt=salt, rounds=DEFAULT_BCRYPT_ROUNDS)

    def algorithm(self) -> KdfAlg:
        """The KDF algorithm."""
        return KdfAlg.NONE if self.salt is None else KdfAlg.BCRYPT

    def derive(self, password: str | bytes, output_len: int) -> bytes:
        """Derive ``output_len`` bytes of key material from ``password``."""
        if self.salt is None:
            raise DecryptedError()
        material = password.encode() if isinstance(password, str) else bytes(password)
        try:
            return bcrypt.kdf(
                material,
                self.salt,
                output_len,
                self.rounds,
                ignore_few_rounds=True,
            )
        except ValueError as exc:
            raise CryptoError() from exc

    def is_none(self) -> bool:
        """Whether the KDF is ``none``."""
        return self.salt is None

    def is_some(self) -> bool:
        """Whether the KDF is anything other than ``none``."""
        return not self.is_none()

    def is_bcrypt(self) -> bool:
        """Whether the KDF is bcrypt-pbkdf."""
        return self.salt is not None

    def encoded_len(self) -> int:
        """Length in bytes of the wire encoding."""
        opts_len = 4 if self.salt is None else 12 + len(self.salt)
        return 4 + len(self.algorithm().value) + opts_len

    def encode(self, writer: Writer) -> None:
        """Write the KDF name followed by its options."""
        writer.write_utf8(self.algorithm().value)
        if self.salt is None:
            writer.write_uint32(0)
        else:
            writer.write_uint32(8 + len(self.salt))
            writer.write_string(self.salt)
            writer.write_uint32(self.rounds)  # type: ignore[arg-type]

    @classmethod
    def decode(cls, reader: Reader) -> Kdf:
        """Read a KDF name and its options."""
        algorithm = KdfAlg.new(reader.read_utf8())
        if algorithm is KdfAlg.NONE:
            if reader.read_uint32() != 0:
                raise AlgorithmUnknownError()
            return cls()
        return reader.read_prefixed(
            lambda r: cls(salt=r.read_string(), rounds=r.read_uint32())
        )