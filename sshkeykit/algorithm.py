"""Registry of SSH key, hash and key-derivation algorithms."""

from __future__ import annotations

import enum
import hashlib
from dataclasses import dataclass

from .algorithm_name import AlgorithmName
from .errors import LabelError

_OPENSSH = "openssh.com"
_CERT_SUFFIX = f"-cert-v01@{_OPENSSH}"

ECDSA_SHA2_P256 = "ecdsa-sha2-nistp256"
ECDSA_SHA2_P384 = "ecdsa-sha2-nistp384"
ECDSA_SHA2_P521 = "ecdsa-sha2-nistp521"
RSA_SHA2_256 = "rsa-sha2-256"
RSA_SHA2_512 = "rsa-sha2-512"
SSH_DSA = "ssh-dss"
SSH_ED25519 = "ssh-ed25519"
SSH_RSA = "ssh-rsa"
SK_ECDSA_SHA2_P256 = f"sk-ecdsa-sha2-nistp256@{_OPENSSH}"
SK_SSH_ED25519 = f"sk-ssh-ed25519@{_OPENSSH}"

CERT_DSA = f"ssh-dss{_CERT_SUFFIX}"
CERT_ECDSA_SHA2_P256 = f"ecdsa-sha2-nistp256{_CERT_SUFFIX}"
CERT_ECDSA_SHA2_P384 = f"ecdsa-sha2-nistp384{_CERT_SUFFIX}"
CERT_ECDSA_SHA2_P521 = f"ecdsa-sha2-nistp521{_CERT_SUFFIX}"
CERT_ED25519 = f"ssh-ed25519{_CERT_SUFFIX}"
CERT_RSA = f"ssh-rsa{_CERT_SUFFIX}"
CERT_RSA_SHA2_256 = f"rsa-sha2-256{_CERT_SUFFIX}"
CERT_RSA_SHA2_512 = f"rsa-sha2-512{_CERT_SUFFIX}"
CERT_SK_ECDSA_SHA2_P256 = f"sk-ecdsa-sha2-nistp256{_CERT_SUFFIX}"
CERT_SK_SSH_ED25519 = f"sk-ssh-ed25519{_CERT_SUFFIX}"


def _lookup(enum_cls: type[enum.Enum], id: str) -> enum.Enum:
    for member in enum_cls:
        if member.value == id:
            return member
    raise LabelError(id)


class EcdsaCurve(enum.Enum):
    """Elliptic curves supported for use with ECDSA."""

    NIST_P256 = "nistp256"
    NIST_P384 = "nistp384"
    NIST_P521 = "nistp521"

    @classmethod
    def new(cls, id: str) -> EcdsaCurve:
        """Parse a curve from its string identifier."""
        return _lookup(cls, id)  # type: ignore[return-value]

    def field_size(self) -> int:
        """Number of bytes needed to encode a field element of this curve."""
        return _FIELD_SIZES[self]

    def __str__(self) -> str:
        return self.value


_FIELD_SIZES = {
    EcdsaCurve.NIST_P256: 32,
    EcdsaCurve.NIST_P384: 48,
    EcdsaCurve.NIST_P521: 66,
}


class HashAlg(enum.Enum):
    """Hash functions. The default is SHA-256."""

    SHA256 = "sha256"
    SHA512 = "sha512"

    @classmethod
    def new(cls, id: str) -> HashAlg:
        """Parse a hash algorithm from its string identifier."""
        return _lookup(cls, id)  # type: ignore[return-value]

    def digest_size(self) -> int:
        """Size in bytes of a digest produced by this hash function."""
        return 32 if self is HashAlg.SHA256 else 64

    def digest(self, msg: bytes) -> bytes:
        """Hash ``msg`` with this function."""
        return hashlib.new(self.value, bytes(msg)).digest()

    def __str__(self) -> str:
        return self.value


class KdfAlg(enum.Enum):
    """Key derivation function algorithms. The default is bcrypt."""

    NONE = "none"
    BCRYPT = "bcrypt"

    @classmethod
    def new(cls, kdfname: str) -> KdfAlg:
        """Parse a KDF algorithm from its ``kdfname``."""
        return _lookup(cls, kdfname)  # type: ignore[return-value]

    def is_none(self) -> bool:
        """Whether this is the ``none`` KDF."""
        return self is KdfAlg.NONE

    def __str__(self) -> str:
        return self.value


class AlgorithmKind(enum.Enum):
    """Families of SSH key algorithms."""

    DSA = "dsa"
    ECDSA = "ecdsa"
    ED25519 = "ed25519"
    RSA = "rsa"
    SK_ECDSA_SHA2_NISTP256 = "sk-ecdsa"
    SK_ED25519 = "sk-ed25519"
    OTHER = "other"


@dataclass(frozen=True)
class Algorithm:
    """An SSH key algorithm. The default is Ed25519.

    ``curve`` is required for ECDSA, ``hash`` is optional for RSA
    (``None`` means ``ssh-rsa``), and ``name`` is required for other
    algorithms.
    """

    kind: AlgorithmKind = AlgorithmKind.ED25519
    curve: EcdsaCurve | None = None
    hash: HashAlg | None = None
    name: AlgorithmName | None = None

    def __post_init__(self) -> None:
        if (self.kind is AlgorithmKind.ECDSA) != (self.curve is not None):
            raise ValueError("a curve is given for ECDSA and only for ECDSA")
        if self.hash is not None and self.kind is not AlgorithmKind.RSA:
            raise ValueError("a hash is given only for RSA")
        if (self.kind is AlgorithmKind.OTHER) != (self.name is not None):
            raise ValueError("a name is given for other algorithms and only for them")

    @classmethod
    def new(cls, id: str) -> Algorithm:
        """Parse an algorithm from its string identifier.

        Unknown ``name@domain`` identifiers become ``AlgorithmKind.OTHER``.
        """
        known = _BY_NAME.get(id)
        if known is not None:
            return known
        return cls(AlgorithmKind.OTHER, name=AlgorithmName(id))

    @classmethod
    def new_certificate(cls, id: str) -> Algorithm:
        """Parse an algorithm from an OpenSSH certificate type identifier."""
        known = _BY_CERT_TYPE.get(id)
        if known is not None:
            return known
        return cls(AlgorithmKind.OTHER, name=AlgorithmName.from_certificate_type(id))

    def as_str(self) -> str:
        """The string identifier of this algorithm."""
        if self.name is not None:
            return self.name.id
        return _NAMES[self]

    def to_certificate_type(self) -> str:
        """The identifier of the matching OpenSSH certificate format."""
        if self.name is not None:
            return self.name.certificate_type()
        return _CERT_TYPES[self]

    def is_dsa(self) -> bool:
        """Whether this is DSA."""
        return self.kind is AlgorithmKind.DSA

    def is_ecdsa(self) -> bool:
        """Whether this is ECDSA."""
        return self.kind is AlgorithmKind.ECDSA

    def is_ed25519(self) -> bool:
        """Whether this is Ed25519."""
        return self.kind is AlgorithmKind.ED25519

    def is_rsa(self) -> bool:
        """Whether this is RSA."""
        return self.kind is AlgorithmKind.RSA

    def __str__(self) -> str:
        return self.as_str()


_KNOWN: list[tuple[Algorithm, str, str]] = [
    (Algorithm(AlgorithmKind.DSA), SSH_DSA, CERT_DSA),
    (Algorithm(AlgorithmKind.ECDSA, curve=EcdsaCurve.NIST_P256), ECDSA_SHA2_P256, CERT_ECDSA_SHA2_P256),
    (Algorithm(AlgorithmKind.ECDSA, curve=EcdsaCurve.NIST_P384), ECDSA_SHA2_P384, CERT_ECDSA_SHA2_P384),
    (Algorithm(AlgorithmKind.ECDSA, curve=EcdsaCurve.NIST_P521), ECDSA_SHA2_P521, CERT_ECDSA_SHA2_P521),
    (Algorithm(AlgorithmKind.ED25519), SSH_ED25519, CERT_ED25519),
    (Algorithm(AlgorithmKind.RSA), SSH_RSA, CERT_RSA),
    (Algorithm(AlgorithmKind.RSA, hash=HashAlg.SHA256), RSA_SHA2_256, CERT_RSA_SHA2_256),
    (Algorithm(AlgorithmKind.RSA, hash=HashAlg.SHA512), RSA_SHA2_512, CERT_RSA_SHA2_512),
    (Algorithm(AlgorithmKind.SK_ECDSA_SHA2_NISTP256), SK_ECDSA_SHA2_P256, CERT_SK_ECDSA_SHA2_P256),
    (Algorithm(AlgorithmKind.SK_ED25519), SK_SSH_ED25519, CERT_SK_SSH_ED25519),
]

_NAMES = {alg: name for alg, name, _ in _KNOWN}
_CERT_TYPES = {alg: cert for alg, _, cert in _KNOWN}
_BY_NAME = {name: alg for alg, name, _ in _KNOWN}
_BY_CERT_TYPE = {cert: alg for alg, _, cert in _KNOWN}