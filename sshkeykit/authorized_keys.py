"""Parser for ``authorized_keys`` files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from .errors import CharacterEncodingError, FormatEncodingError, SshKeyError
from .public import PublicKey

_COMMENT_DELIMITER = "#"


def _content_lines(text: str) -> Iterator[str]:
    """Lines with comments and trailing whitespace removed, skipping blanks."""
    for line in text.split("\n"):
        line = line.partition(_COMMENT_DELIMITER)[0].rstrip()
        if line:
            yield line


def _is_option_char(ch: str) -> bool:
    return ch.isascii() and (
        ch.isalnum()
        or "!" <= ch <= "/"
        or ":" <= ch <= "@"
        or "[" <= ch <= "_"
        or ch in "{}|~"
    )


class ConfigOptsIter:
    """Iterator over comma-separated options; commas inside quotes are kept."""

    def __init__(self, text: str) -> None:
        self._rest = text

    @classmethod
    def new(cls, text: str) -> ConfigOptsIter:
        """Create an iterator after checking that the options are well-formed."""
        options = cls(text)
        options.validate()
        return options

    def try_next(self) -> str | None:
        """The next option, or None when exhausted; raises on bad characters."""
        if not self._rest:
            return None
        quoted = False
        for index, ch in enumerate(self._rest):
            if ch == ",":
                if not quoted:
                    item, self._rest = self._rest[:index], self._rest[index + 1 :]
                    return item
            elif ch == '"':
                quoted = not quoted
            elif not _is_option_char(ch):
                raise CharacterEncodingError()
        item, self._rest = self._rest, ""
        return item

    def validate(self) -> None:
        """Check the remaining options without consuming them."""
        probe = ConfigOptsIter(self._rest)
        while probe.try_next() is not None:
            pass

    def __iter__(self) -> ConfigOptsIter:
        return self

    def __next__(self) -> str:
        item = self.try_next()
        if item is None:
            raise StopIteration
        return item


@dataclass(frozen=True)
class ConfigOpts:
    """The options field preceding a key in an ``authorized_keys`` line."""

    text: str = ""

    def __post_init__(self) -> None:
        ConfigOptsIter(self.text).validate()

    def is_empty(self) -> bool:
        """Whether there are no options."""
        return not self.text

    def __iter__(self) -> Iterator[str]:
        return ConfigOptsIter(self.text)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Entry:
    """One public key line of an ``authorized_keys`` file."""

    public_key: PublicKey
    config_opts: ConfigOpts = field(default_factory=ConfigOpts)

    @classmethod
    def from_str(cls, line: str) -> Entry:
        """Parse a line: ``[options] keytype base64-key [comment]``."""
        spaces = line.count(" ")
        if spaces == 0:
            raise FormatEncodingError()
        if spaces <= 2:
            return cls(PublicKey.from_openssh(line))
        # With three or more spaces the line is either a key whose comment
        # holds spaces, or options followed by a key.
        try:
            return cls(PublicKey.from_openssh(line))
        except SshKeyError:
            pass
        opts_text, _, key_text = line.partition(" ")
        config_opts = ConfigOpts(opts_text)
        return cls(PublicKey.from_openssh(key_text), config_opts)

    def __str__(self) -> str:
        key = str(self.public_key)
        if self.config_opts.is_empty():
            return key
        return f"{self.config_opts} {key}"


class AuthorizedKeys:
    """Iterates over the entries of ``authorized_keys`` text.

    Blank lines and ``#`` comments are skipped; a malformed line raises.
    """

    def __init__(self, text: str) -> None:
        self._text = text

    def __iter__(self) -> Iterator[Entry]:
        for line in _content_lines(self._text):
            yield Entry.from_str(line)

    @classmethod
    def read_file(cls, path: str | Path) -> list[Entry]:
        """Read and parse every entry of an ``authorized_keys`` file."""
        return list(cls(Path(path).read_text(encoding="utf-8")))