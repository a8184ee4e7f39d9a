"""SSH key comments, which may hold arbitrary binary data."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import CharacterEncodingError
from .wire import Reader, Writer


@dataclass(frozen=True, order=True)
class Comment:
    """SSH key comment (e.g. the owner's e-mail address).

    Stored as bytes so that comments which are not valid UTF-8 survive a
    round trip through the binary private key format.
    """

    data: bytes = b""

    def __post_init__(self) -> None:
        value = self.data
        if isinstance(value, Comment):
            value = value.data
        elif isinstance(value, str):
            value = value.encode("utf-8")
        elif isinstance(value, (bytearray, memoryview)):
            value = bytes(value)
        elif not isinstance(value, bytes):
            raise TypeError(f"comment must be str or bytes, not {type(value).__name__}")
        object.__setattr__(self, "data", value)

    def as_bytes(self) -> bytes:
        """The comment as raw bytes."""
        return self.data

    def as_str(self) -> str:
        """The comment as text; raises if it is not valid UTF-8."""
        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CharacterEncodingError() from exc

    def as_str_lossy(self) -> str:
        """The longest prefix of the comment that is valid UTF-8."""
        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError as exc:
            return self.data[: exc.start].decode("utf-8")

    def is_empty(self) -> bool:
        """Whether the comment is empty."""
        return not self.data

    def __len__(self) -> int:
        return len(self.data)

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return self.as_str_lossy()

    def encode(self, writer: Writer) -> None:
        """Write the comment as an SSH string."""
        writer.write_string(self.data)

    @classmethod
    def decode(cls, reader: Reader) -> Comment:
        """Read a comment encoded as an SSH string."""
        return cls(reader.read_string())