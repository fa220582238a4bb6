"""Structlog processors used by propsync.

Each factory returns a processor with the structlog signature
``(logger, method_name, event_dict) -> event_dict``.
"""

from typing import Any, Callable, Dict, FrozenSet, Optional

from propsync import __version__

EventDict = Dict[str, Any]
Processor = Callable[[Any, str, EventDict], EventDict]

REDACTED = "***REDACTED***"

# Substrings of event keys whose values never reach the output
SENSITIVE_PATTERNS: FrozenSet[str] = frozenset(
    {"token", "secret", "password", "authorization", "credential", "api_key"}
)

# Document bodies and response payloads are cut to this many characters
DEFAULT_MAX_VALUE_LENGTH = 500


def add_app_info(app_name: str, app_version: str = __version__) -> Processor:
    """Stamp every event with ``app_name`` and ``app_version``."""

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict["app_name"] = app_name
        event_dict["app_version"] = app_version
        return event_dict

    return processor


def _is_sensitive(key: str, patterns: FrozenSet[str]) -> bool:
    lowered = key.lower()
    return any(pattern in lowered for pattern in patterns)


def mask_sensitive_data(
    mask_value: str = REDACTED,
    additional_patterns: Optional[FrozenSet[str]] = None,
) -> Processor:
    """Replace the value of any key matching a sensitive pattern.

    Matching is a case-insensitive substring test on the key, so
    ``private_token`` and ``Private-Token`` are both masked. ``None`` values
    are left alone.
    """
    patterns = SENSITIVE_PATTERNS | (additional_patterns or frozenset())

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        return {
            key: mask_value
            if value is not None and _is_sensitive(key, patterns)
            else value
            for key, value in event_dict.items()
        }

    return processor


def truncate_large_values(max_length: int = DEFAULT_MAX_VALUE_LENGTH) -> Processor:
    """Cut string values longer than max_length and note the original size."""

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    f"{value[:max_length]}...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor
