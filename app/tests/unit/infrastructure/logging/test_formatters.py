"""Unit tests for propsync.infrastructure.logging.formatters module.

Tests cover:
- add_app_info processor
- mask_sensitive_data processor
- truncate_large_values processor
- SENSITIVE_PATTERNS constant
"""

import pytest

from propsync import __version__
from propsync.infrastructure.logging.formatters import (
    SENSITIVE_PATTERNS,
    add_app_info,
    mask_sensitive_data,
    truncate_large_values,
)


@pytest.mark.unit
class TestAddAppInfo:
    """Test suite for add_app_info processor factory."""

    def test_adds_name_and_version(self):
        processor = add_app_info("propsync", "1.2.3")

        result = processor(None, "info", {"event": "test_event"})

        assert result == {"event": "test_event", "app_name": "propsync", "app_version": "1.2.3"}

    def test_defaults_to_package_version(self):
        result = add_app_info("propsync")(None, "info", {"event": "x"})

        assert result["app_version"] == __version__


@pytest.mark.unit
class TestMaskSensitiveData:
    """Test suite for mask_sensitive_data processor factory."""

    def test_masks_token_fields(self):
        processor = mask_sensitive_data()

        result = processor(
            None,
            "info",
            {"event": "client_created", "private_token": "abc", "Authorization": "Bearer x"},
        )

        assert result["private_token"] == "***REDACTED***"
        assert result["Authorization"] == "***REDACTED***"
        assert result["event"] == "client_created"

    def test_none_values_are_not_masked(self):
        result = mask_sensitive_data()(None, "info", {"token": None})

        assert result["token"] is None

    def test_additional_patterns_and_custom_mask(self):
        processor = mask_sensitive_data(mask_value="[hidden]", additional_patterns=frozenset({"project_id"}))

        result = processor(None, "info", {"project_id": "42", "path": "a.properties"})

        assert result == {"project_id": "[hidden]", "path": "a.properties"}

    def test_patterns_cover_token(self):
        assert "token" in SENSITIVE_PATTERNS


@pytest.mark.unit
class TestTruncateLargeValues:
    """Test suite for truncate_large_values processor factory."""

    def test_truncates_long_strings(self):
        processor = truncate_large_values(max_length=10)

        result = processor(None, "info", {"content": "x" * 25, "count": 3})

        assert result["content"] == "x" * 10 + "...[truncated, 25 chars total]"
        assert result["count"] == 3

    def test_short_strings_untouched(self):
        result = truncate_large_values()(None, "info", {"path": "i18n/messages_zh.properties"})

        assert result["path"] == "i18n/messages_zh.properties"
