"""Unit tests for the settings aggregator and its sections."""

import pytest

from propsync.infrastructure.configuration import (
    CodePlatformSettings,
    I18nSettings,
    Settings,
)


@pytest.mark.unit
class TestCodePlatformSettings:
    def test_default_values(self, monkeypatch):
        monkeypatch.delenv("CODE_PLATFORM_PRIVATE_TOKEN", raising=False)
        monkeypatch.delenv("CODE_PLATFORM_PROJECT_ID", raising=False)

        settings = CodePlatformSettings()

        assert settings.BASE_URL.endswith("/api/v3")
        assert settings.TIMEOUT_SECONDS == 10
        assert settings.missing_settings == (
            "CODE_PLATFORM_PRIVATE_TOKEN",
            "CODE_PLATFORM_PROJECT_ID",
        )

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("CODE_PLATFORM_PRIVATE_TOKEN", "tok")
        monkeypatch.setenv("CODE_PLATFORM_PROJECT_ID", "42")
        monkeypatch.setenv("CODE_PLATFORM_TIMEOUT_SECONDS", "3")

        settings = CodePlatformSettings()

        assert settings.PRIVATE_TOKEN == "tok"
        assert settings.PROJECT_ID == "42"
        assert settings.TIMEOUT_SECONDS == 3
        assert settings.missing_settings == ()


@pytest.mark.unit
class TestI18nSettings:
    def test_default_values(self):
        settings = I18nSettings()

        assert settings.TARGET_BRANCH == "master"
        assert settings.PRIMARY_LOCALE == "zh"
        assert settings.SECONDARY_LOCALES == ["en", "zh_TW"]
        assert settings.TRANSLATION_LOCALE == "en"
        assert settings.COMMIT_MESSAGE_TEMPLATE == "feat: add i18n entry {key}"
        assert settings.CACHE_TTL_SECONDS == 300

    def test_secondary_locales_from_json(self, monkeypatch):
        monkeypatch.setenv("I18N_SECONDARY_LOCALES", '["en"]')
        monkeypatch.setenv("I18N_PRIMARY_PROPERTIES_PATH", "i18n/messages_zh.properties")

        settings = I18nSettings()

        assert settings.SECONDARY_LOCALES == ["en"]
        assert settings.PRIMARY_PROPERTIES_PATH == "i18n/messages_zh.properties"


@pytest.mark.unit
class TestSettings:
    def test_builds_sections(self):
        settings = Settings()

        assert isinstance(settings.code_platform, CodePlatformSettings)
        assert isinstance(settings.i18n, I18nSettings)

    def test_section_override(self):
        i18n = I18nSettings(I18N_TARGET_BRANCH="release")

        settings = Settings(i18n=i18n)

        assert settings.i18n.TARGET_BRANCH == "release"

    @pytest.mark.parametrize("prefix,expected", [("", True), ("dev-", False)])
    def test_is_production(self, monkeypatch, prefix, expected):
        monkeypatch.setenv("PREFIX", prefix)

        assert Settings().is_production is expected
