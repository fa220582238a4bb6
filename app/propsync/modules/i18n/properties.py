"""Line-oriented model of a .properties document.

Parsing keeps enough of every line to write it back unchanged: comments and
unrecognized lines are stored verbatim and key/value lines remember their raw
text, their separator and whether a space followed the separator. Blank lines
are dropped, so serializing a parsed document normalizes blank lines away and
always ends with a single newline.

Example:
    document = parse("# header\\nDPN.A = 1\\n\\nDPN.B:2\\n")
    document.to_mapping()   # {"DPN.A": "1", "DPN.B": "2"}
    document.serialize()    # "# header\\nDPN.A = 1\\nDPN.B:2\\n"
"""

import re
from dataclasses import dataclass, field
from typing import Collection, Dict, Iterator, List, Optional, Union

COMMENT_PREFIXES = ("#", "!")
SEPARATORS = ("=", ":")
LINE_TERMINATOR = "\n"

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class Comment:
    text: str


@dataclass(frozen=True)
class Passthrough:
    """A non-blank, non-comment line without a usable separator."""

    text: str


@dataclass(frozen=True)
class KeyValue:
    """A key/value line.

    Attributes:
        key: Trimmed key.
        value: Trimmed value.
        separator: The separator character found in the line ("=" or ":").
        space_after_separator: Whether a space immediately followed it.
        raw: The original line, written back untouched unless the value changes.
    """

    key: str
    value: str
    separator: str
    space_after_separator: bool
    raw: str

    @property
    def prefix(self) -> str:
        """Raw text up to and including the separator."""
        return self.raw[: _separator_index(self.raw) + 1]

    def with_value(self, value: str) -> "KeyValue":
        """Return a copy holding a new value, keeping the original formatting."""
        space = " " if self.space_after_separator else ""
        return KeyValue(
            key=self.key,
            value=value,
            separator=self.separator,
            space_after_separator=self.space_after_separator,
            raw=f"{self.prefix}{space}{value}",
        )


Line = Union[Comment, Passthrough, KeyValue]


def _separator_index(line: str) -> int:
    """Index of the first "=" or ":" in line, or -1."""
    for index, char in enumerate(line):
        if char in SEPARATORS:
            return index
    return -1


def split_lines(text: str) -> List[str]:
    """Split text on \\r\\n, \\r and \\n."""
    return _LINE_BREAK_RE.split(text)


def parse_line(line: str) -> Optional[Line]:
    """Parse one physical line, returning None for blank lines."""
    trimmed = line.strip()
    if not trimmed:
        return None

    if trimmed.startswith(COMMENT_PREFIXES):
        return Comment(text=line)

    index = _separator_index(line)
    key = line[:index].strip() if index > 0 else ""
    if not key:
        return Passthrough(text=line)

    return KeyValue(
        key=key,
        value=line[index + 1 :].strip(),
        separator=line[index],
        space_after_separator=line[index + 1 : index + 2] == " ",
        raw=line,
    )


def format_entry_line(key: str, value: str) -> str:
    """Render a new key/value line in the canonical "key = value" form."""
    return f"{key} = {value}"


@dataclass
class PropertiesDocument:
    """An ordered sequence of comment, passthrough and key/value lines."""

    lines: List[Line] = field(default_factory=list)

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def key_values(self) -> Iterator[KeyValue]:
        for line in self.lines:
            if isinstance(line, KeyValue):
                yield line

    def keys(self) -> List[str]:
        return [line.key for line in self.key_values()]

    def to_mapping(self) -> Dict[str, str]:
        """Flatten to key -> value; a repeated key keeps its last value."""
        return {line.key: line.value for line in self.key_values()}

    def without_keys(self, keys: Collection[str]) -> "PropertiesDocument":
        """Return a copy without the key/value lines for the given keys."""
        return PropertiesDocument(
            lines=[
                line
                for line in self.lines
                if not (isinstance(line, KeyValue) and line.key in keys)
            ]
        )

    def serialize(self) -> str:
        """Render the document, one line each, with a single trailing newline.

        A document without lines renders as an empty string.
        """
        rendered = [
            line.raw if isinstance(line, KeyValue) else line.text for line in self.lines
        ]
        if not rendered:
            return ""
        return LINE_TERMINATOR.join(rendered) + LINE_TERMINATOR


def parse(text: str) -> PropertiesDocument:
    """Parse properties text into a document, dropping blank lines."""
    lines = []
    for raw in split_lines(text):
        line = parse_line(raw)
        if line is not None:
            lines.append(line)
    return PropertiesDocument(lines=lines)


def parse_mapping(text: str) -> Dict[str, str]:
    """Shortcut for parse(text).to_mapping()."""
    return parse(text).to_mapping()


def remove_keys(text: str, keys: Collection[str]) -> str:
    """Drop exactly the lines holding the given keys and re-serialize."""
    return parse(text).without_keys(keys).serialize()
