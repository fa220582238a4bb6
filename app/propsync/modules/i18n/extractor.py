"""Localization entry extraction from free-form text.

Recognizes three idioms, tried in priority order:

1. Extended call form, which may span lines:
   ``CALENDAR_NOT_FOUND("DPN.DataProcess.CalendarNotFound", "找不到公共日历", ErrorLevel.LOGIC)``
2. Simple call form: ``SOME_KEY("DPN.Key.Name", "描述")``
3. JSON map form: ``{"DPN.Key.Name": "描述", ...}``

Keys must pass the namespace filter (see models.is_namespaced_key). No match is
a normal outcome: every function returns an empty list or None instead of
raising.
"""

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

from propsync.modules.i18n.models import NAMESPACED_KEY, Entry

# Lines after the primary line considered by extract_from_window
WINDOW_LOOKAHEAD = 2


@dataclass(frozen=True)
class Matcher:
    """A single extraction pattern.

    Attributes:
        name: Identifier used in logs and tests.
        pattern: Compiled regex with named groups ``key`` and ``value``.
    """

    name: str
    pattern: re.Pattern

    def search(self, text: str, origin: str) -> Optional[Entry]:
        """Return the first entry matched in text, or None."""
        match = self.pattern.search(text)
        if match is None:
            return None
        return Entry(key=match.group("key"), value=match.group("value"), origin=origin)

    def finditer(self, text: str, origin: str) -> Iterator[Entry]:
        """Yield every entry matched in text, in document order."""
        for match in self.pattern.finditer(text):
            yield Entry(key=match.group("key"), value=match.group("value"), origin=origin)


EXTENDED_CALL = Matcher(
    name="extended_call",
    pattern=re.compile(
        r'\w+\s*\(\s*"(?P<key>' + NAMESPACED_KEY + r')"\s*,\s*"(?P<value>[^"]+)"\s*,[^)]+\)',
        re.DOTALL,
    ),
)

SIMPLE_CALL = Matcher(
    name="simple_call",
    pattern=re.compile(
        r'\w+\s*\(\s*"(?P<key>' + NAMESPACED_KEY + r')"\s*,\s*"(?P<value>[^"]+)"\s*\)',
        re.DOTALL,
    ),
)

JSON_PAIR = Matcher(
    name="json_pair",
    pattern=re.compile(r'"(?P<key>' + NAMESPACED_KEY + r')"\s*:\s*"(?P<value>[^"]+)"'),
)

# Fallback order for single-match extraction
CALL_MATCHERS = (EXTENDED_CALL, SIMPLE_CALL)

_KEY_REFERENCE_RE = re.compile(r'"(' + NAMESPACED_KEY + r')"')


@dataclass(frozen=True)
class KeyReference:
    """A quoted namespaced key found in text.

    Attributes:
        key: The key without quotes.
        start: Offset of the opening quote.
        end: Offset just past the closing quote.
    """

    key: str
    start: int
    end: int


def extract_from_text(text: str) -> List[Entry]:
    """Extract every extended-call entry from a whole file or blob.

    Duplicate keys are returned as found; de-duplication belongs to the caller.
    """
    return list(EXTENDED_CALL.finditer(text, origin="file"))


def extract_from_json(text: str) -> List[Entry]:
    """Extract every namespaced ``"key": "value"`` pair from a JSON blob."""
    return list(JSON_PAIR.finditer(text, origin="json"))


def extract_one(text: str, origin: str = "selection") -> Optional[Entry]:
    """Extract the first entry, trying the extended form before the simple one."""
    for matcher in CALL_MATCHERS:
        entry = matcher.search(text, origin)
        if entry is not None:
            return entry
    return None


def extract_from_window(
    primary_line: str, following_lines: Sequence[str] = ()
) -> Optional[Entry]:
    """Extract an entry starting at a line, looking ahead at most two lines.

    Args:
        primary_line: The line the caller points at.
        following_lines: Lines after it; only the first two are used.

    Returns:
        The entry found on the primary line alone, otherwise the entry found
        in the primary line joined with the lookahead, otherwise None.
    """
    entry = extract_one(primary_line, origin="line")
    if entry is not None:
        return entry

    window = list(following_lines[:WINDOW_LOOKAHEAD])
    if not window:
        return None
    return extract_one("\n".join([primary_line, *window]), origin="line")


def looks_like_json(text: str) -> bool:
    trimmed = text.strip()
    return trimmed.startswith("{") and trimmed.endswith("}")


def contains_match(text: str) -> bool:
    """True if either call form matches anywhere in text."""
    return any(matcher.pattern.search(text) for matcher in CALL_MATCHERS)


def extract_batch(text: str) -> List[Entry]:
    """Extract all entries from a file, choosing JSON mode when it looks like JSON."""
    if looks_like_json(text):
        return extract_from_json(text)
    return extract_from_text(text)


def find_key_references(text: str) -> List[KeyReference]:
    """Find every quoted namespaced key in text with its span (quotes included)."""
    return [
        KeyReference(key=match.group(1), start=match.start(), end=match.end())
        for match in _KEY_REFERENCE_RE.finditer(text)
    ]
