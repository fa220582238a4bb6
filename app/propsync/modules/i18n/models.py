"""Core data structures for localization entries and merge results."""

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterable, List, Optional

# Six orderings of D, P and N followed by a dot and a non-empty namespace path
NAMESPACE_PREFIXES = ("DPN", "DNP", "PDN", "PND", "NDP", "NPD")
NAMESPACED_KEY = r"(?:" + "|".join(NAMESPACE_PREFIXES) + r")\.[^\"]+"
_NAMESPACED_KEY_RE = re.compile(NAMESPACED_KEY)


def is_namespaced_key(key: str) -> bool:
    """Check whether a key belongs to the localization namespace.

    Args:
        key: Candidate key (e.g. "DPN.DataProcess.CalendarNotFound").

    Returns:
        True if the first three characters are a permutation of D, P, N
        followed by "." and a non-empty path.
    """
    return bool(_NAMESPACED_KEY_RE.fullmatch(key))


class Locale(str, Enum):
    """Locales of the properties documents.

    Each locale owns a filename marker: messages_zh.properties,
    messages_en.properties, messages_zh_TW.properties.
    """

    ZH = "zh"
    EN = "en"
    ZH_TW = "zh_TW"

    @classmethod
    def from_string(cls, locale_str: str) -> "Locale":
        """Convert string to Locale enum.

        Raises:
            ValueError: If locale string is not supported.
        """
        try:
            return cls(locale_str)
        except ValueError as e:
            raise ValueError(f"Unsupported locale: {locale_str}") from e

    @property
    def marker(self) -> str:
        """Filename suffix identifying this locale's document."""
        return f"_{self.value}.properties"


def derive_locale_path(
    primary_path: str, primary_locale: Locale, target_locale: Locale
) -> Optional[str]:
    """Derive a sibling-locale document path from the primary path.

    Args:
        primary_path: Path of the primary-locale document.
        primary_locale: Locale of that document.
        target_locale: Locale to derive the path for.

    Returns:
        The derived path, or None when the primary path does not follow the
        marker convention (substitution leaves it unchanged).
    """
    derived = primary_path.replace(primary_locale.marker, target_locale.marker)
    if derived == primary_path:
        return None
    return derived


@dataclass(frozen=True)
class Entry:
    """A key/value localization record.

    Attributes:
        key: Namespaced key, e.g. "DPN.DataProcess.CalendarNotFound".
        value: Primary-locale text.
        secondary_value: Translation-locale text, empty when absent.
        origin: Provenance tag (selection, line, file, json, manual).
    """

    key: str
    value: str
    secondary_value: str = ""
    origin: str = "manual"

    @property
    def has_secondary_value(self) -> bool:
        return bool(self.secondary_value.strip())

    def to_properties_line(self) -> str:
        return f"{self.key} = {self.value}"

    def to_secondary_properties_line(self) -> str:
        return f"{self.key} = {self.secondary_value}"


def dedupe_entries(entries: Iterable[Entry]) -> List[Entry]:
    """Collapse entries sharing a key.

    The first occurrence keeps its position; later duplicates replace its
    content.
    """
    by_key: Dict[str, Entry] = {}
    for entry in entries:
        by_key[entry.key] = entry
    return list(by_key.values())


@dataclass(frozen=True)
class MergeResult:
    """Counts produced by merging submitted entries into a document.

    Attributes:
        added: keys absent from the existing document
        updated: keys present with a different value
        skipped: keys present with an identical value
        message: human-friendly summary
    """

    added: int = 0
    updated: int = 0
    skipped: int = 0
    message: str = ""

    @property
    def changed_count(self) -> int:
        return self.added + self.updated

    @property
    def total_count(self) -> int:
        return self.added + self.updated + self.skipped

    def describe(self) -> str:
        """Render the counts, e.g. "added 2, skipped 1"."""
        parts = []
        if self.added:
            parts.append(f"added {self.added}")
        if self.updated:
            parts.append(f"updated {self.updated}")
        if self.skipped:
            parts.append(f"skipped {self.skipped} (unchanged)")
        return ", ".join(parts) if parts else "no changes"

    def with_message(self, message: str) -> "MergeResult":
        return replace(self, message=message)

    def __add__(self, other: "MergeResult") -> "MergeResult":
        return MergeResult(
            added=self.added + other.added,
            updated=self.updated + other.updated,
            skipped=self.skipped + other.skipped,
        )
