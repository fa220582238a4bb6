"""Three-way merge of submitted entries into an existing properties document.

Each submitted key is classified against the existing document:

- absent -> added
- present with a different (trimmed) value -> updated
- present with the same value -> skipped

When nothing is added or updated the merge short-circuits without rebuilding,
which is what makes resubmitting unchanged data a no-op. Otherwise the document
is rebuilt line by line: submitted keys are rewritten in place keeping their
separator formatting, every other line is copied verbatim, blank lines are
dropped, and new keys are inserted in case-insensitive order relative to the
existing keys.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple

from propsync.modules.i18n.properties import (
    LINE_TERMINATOR,
    Comment,
    Passthrough,
    format_entry_line,
    parse,
)


@dataclass(frozen=True)
class MergeOutcome:
    """Result of merging submitted entries into a document.

    Attributes:
        added: Keys absent from the existing document.
        updated: Keys present with a different value.
        skipped: Keys present with an identical value.
        content: Rebuilt document text, None when nothing changed.
    """

    added: Tuple[str, ...] = ()
    updated: Tuple[str, ...] = ()
    skipped: Tuple[str, ...] = ()
    content: Optional[str] = None

    @property
    def changed_keys(self) -> FrozenSet[str]:
        return frozenset(self.added) | frozenset(self.updated)

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.updated)


def normalize_submission(submitted: Mapping[str, str]) -> Dict[str, str]:
    """Trim keys and values; a repeated key keeps its last value."""
    return {key.strip(): value.strip() for key, value in submitted.items()}


def classify(
    existing: Mapping[str, str], submitted: Mapping[str, str]
) -> Tuple[List[str], List[str], List[str]]:
    """Split submitted keys into (added, updated, skipped), in submission order."""
    added, updated, skipped = [], [], []
    for key, value in submitted.items():
        if key not in existing:
            added.append(key)
        elif existing[key] != value:
            updated.append(key)
        else:
            skipped.append(key)
    return added, updated, skipped


def _sort_key(key: str) -> Tuple[str, str]:
    return key.lower(), key


def rebuild(existing_text: str, submitted: Mapping[str, str]) -> str:
    """Rebuild a document with the submitted entries applied.

    Args:
        existing_text: Current document text (may be empty).
        submitted: key -> value to write.

    Returns:
        The rebuilt text, ending with exactly one newline, or an empty string
        when there is no line to keep.
    """
    document = parse(existing_text)
    result_lines: List[str] = []
    # (key, index in result_lines) for every existing key, in document order
    key_positions: List[Tuple[str, int]] = []
    seen_keys = set()

    for line in document:
        if isinstance(line, (Comment, Passthrough)):
            result_lines.append(line.text)
            continue

        seen_keys.add(line.key)
        key_positions.append((line.key, len(result_lines)))
        if line.key in submitted:
            result_lines.append(line.with_value(submitted[line.key]).raw)
        else:
            result_lines.append(line.raw)

    new_keys = sorted((key for key in submitted if key not in seen_keys), key=_sort_key)

    insert_offset = 0
    for new_key in new_keys:
        insert_index = len(result_lines)
        lowered = new_key.lower()
        for existing_key, position in key_positions:
            if existing_key.lower() > lowered:
                insert_index = position + insert_offset
                break
        result_lines.insert(insert_index, format_entry_line(new_key, submitted[new_key]))
        insert_offset += 1

    if not result_lines:
        return ""
    return LINE_TERMINATOR.join(result_lines) + LINE_TERMINATOR


def merge(existing_text: str, submitted: Mapping[str, str]) -> MergeOutcome:
    """Classify submitted entries and rebuild the document when anything changed.

    Args:
        existing_text: Current document text; empty when the file is new.
        submitted: key -> value pairs to apply.

    Returns:
        MergeOutcome whose ``content`` is None when no key was added or updated.
    """
    entries = normalize_submission(submitted)
    existing = parse(existing_text).to_mapping()
    added, updated, skipped = classify(existing, entries)

    if not added and not updated:
        return MergeOutcome(skipped=tuple(skipped))

    return MergeOutcome(
        added=tuple(added),
        updated=tuple(updated),
        skipped=tuple(skipped),
        content=rebuild(existing_text, entries),
    )


def merge_fragment(existing_text: str, fragment: str) -> MergeOutcome:
    """Merge a properties-formatted fragment (one "key = value" per line)."""
    return merge(existing_text, parse(fragment).to_mapping())


__all__ = [
    "MergeOutcome",
    "classify",
    "merge",
    "merge_fragment",
    "normalize_submission",
    "rebuild",
]
