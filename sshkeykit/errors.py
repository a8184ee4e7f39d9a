"""Exception types raised by the package."""

from __future__ import annotations

from typing import Any


class SshKeyError(Exception):
    """Base class for every error raised by this package."""

    default_message = "SSH key error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(self.default_message if message is None else message)

    @property
    def message(self) -> str:
        """Human-readable description of the error."""
        return str(self.args[0]) if self.args else self.default_message

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        assert isinstance(other, SshKeyError)
        return self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class AlgorithmUnknownError(SshKeyError):
    """An algorithm is completely unknown."""

    default_message = "unknown algorithm"


class AlgorithmUnsupportedError(SshKeyError):
    """An algorithm is recognised but not supported in this context."""

    def __init__(self, algorithm: Any) -> None:
        self.algorithm = algorithm
        super().__init__(f"unsupported algorithm: {algorithm}")


class CertificateFieldInvalidError(SshKeyError):
    """A certificate field is invalid or already set."""

    def __init__(self, field: Any) -> None:
        self.field = field
        super().__init__(f"certificate field invalid: {field}")


class CertificateValidationError(SshKeyError):
    """Certificate validation failed."""

    default_message = "certificate validation failed"


class CryptoError(SshKeyError):
    """A cryptographic operation failed."""

    default_message = "cryptographic error"


class DecryptedError(SshKeyError):
    """The operation cannot be performed on a decrypted private key."""

    default_message = "private key is already decrypted"


class EncryptedError(SshKeyError):
    """The operation cannot be performed on an encrypted private key."""

    default_message = "private key is encrypted"


class EncodingError(SshKeyError):
    """Binary or text encoding error."""

    default_message = "encoding error"


class LabelError(EncodingError):
    """A string label (algorithm name, curve, ...) is not valid."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"invalid label: {label!r}")


class LengthError(EncodingError):
    """A length is invalid or the input is too short."""

    default_message = "length invalid"


class CharacterEncodingError(EncodingError):
    """Input holds characters that are not allowed."""

    default_message = "character encoding invalid"


class FormatEncodingError(SshKeyError):
    """Other format encoding errors."""

    default_message = "format encoding error"


class NamespaceError(SshKeyError):
    """Namespace is invalid."""

    default_message = "namespace invalid"


class PublicKeyError(SshKeyError):
    """Public key is incorrect."""

    default_message = "public key is incorrect"


class TimeError(SshKeyError):
    """Invalid timestamp."""

    default_message = "invalid time"


class TrailingDataError(SshKeyError):
    """Unexpected trailing data at the end of a message."""

    def __init__(self, remaining: int) -> None:
        self.remaining = remaining
        super().__init__(
            f"unexpected trailing data at end of message ({remaining} bytes)"
        )


class VersionError(SshKeyError):
    """Unsupported version."""

    def __init__(self, number: int) -> None:
        self.number = number
        super().__init__(f"version unsupported: {number}")