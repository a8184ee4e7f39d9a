"""Additional algorithm names in the ``name@domainname`` form."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import LabelError

CERT_STR_SUFFIX = "-cert-v01"
"""Suffix appended to ``name`` to form a certificate type identifier."""

MAX_ALGORITHM_NAME_LEN = 64
"""Longest algorithm name allowed by RFC 4251 section 6."""

MAX_CERT_STR_LEN = MAX_ALGORITHM_NAME_LEN + len(CERT_STR_SUFFIX)
"""Longest certificate type identifier derived from an algorithm name."""


def _validate(id: str, max_len: int) -> None:
    if len(id) > max_len or not id.isascii():
        raise LabelError(id)


def _split(id: str) -> tuple[str, str]:
    name, sep, domain = id.partition("@")
    if not sep or not name or not domain or "@" in domain:
        raise LabelError(id)
    return name, domain


@dataclass(frozen=True, order=True)
class AlgorithmName:
    """A non-standard algorithm identifier such as ``name@domainname``.

    It must be a non-empty ASCII string of at most 64 characters.
    """

    id: str

    def __post_init__(self) -> None:
        if not isinstance(self.id, str):
            raise TypeError("algorithm name must be a string")
        _validate(self.id, MAX_ALGORITHM_NAME_LEN)
        _split(self.id)

    def __str__(self) -> str:
        return self.id

    def certificate_type(self) -> str:
        """The identifier of the matching OpenSSH certificate format."""
        name, domain = _split(self.id)
        return f"{name}{CERT_STR_SUFFIX}@{domain}"

    @classmethod
    def from_certificate_type(cls, id: str) -> AlgorithmName:
        """Derive the algorithm name from a certificate type identifier."""
        _validate(id, MAX_CERT_STR_LEN)
        name, domain = _split(id)
        if not name.endswith(CERT_STR_SUFFIX):
            raise LabelError(id)
        try:
            return cls(f"{name[: -len(CERT_STR_SUFFIX)]}@{domain}")
        except LabelError as exc:
            raise LabelError(id) from exc