"""Localization sync feature settings."""

from typing import List

from pydantic import Field

from propsync.infrastructure.configuration.base import FeatureSettings


class I18nSettings(FeatureSettings):
    """Settings for the properties document sync feature.

    Environment Variables:
        I18N_TARGET_BRANCH: Branch that receives the commits (default: master)
        I18N_PRIMARY_PROPERTIES_PATH: Repository path of the primary-locale
            document, e.g. i18n/messages_zh.properties
        I18N_PRIMARY_LOCALE: Locale of the primary document (default: zh)
        I18N_SECONDARY_LOCALES: JSON list of sibling locales invalidated after a
            primary change (default: ["en", "zh_TW"])
        I18N_TRANSLATION_LOCALE: Locale that receives Entry.secondary_value
            (default: en)
        I18N_COMMIT_MESSAGE_TEMPLATE: Single-entry commit message; {key} is
            replaced with the entry key
        I18N_CACHE_TTL_SECONDS: Cache freshness window (default: 300)

    Example:
        ```python
        from propsync.infrastructure.configuration import settings

        path = settings.i18n.PRIMARY_PROPERTIES_PATH
        ttl = settings.i18n.CACHE_TTL_SECONDS
        ```
    """

    TARGET_BRANCH: str = Field(default="master", alias="I18N_TARGET_BRANCH")
    PRIMARY_PROPERTIES_PATH: str = Field(
        default="", alias="I18N_PRIMARY_PROPERTIES_PATH"
    )
    PRIMARY_LOCALE: str = Field(default="zh", alias="I18N_PRIMARY_LOCALE")
    SECONDARY_LOCALES: List[str] = Field(
        default=["en", "zh_TW"], alias="I18N_SECONDARY_LOCALES"
    )
    TRANSLATION_LOCALE: str = Field(default="en", alias="I18N_TRANSLATION_LOCALE")
    COMMIT_MESSAGE_TEMPLATE: str = Field(
        default="feat: add i18n entry {key}", alias="I18N_COMMIT_MESSAGE_TEMPLATE"
    )
    CACHE_TTL_SECONDS: int = Field(default=300, alias="I18N_CACHE_TTL_SECONDS")
