"""Top-level propsync settings."""

from typing import Dict, Type

from pydantic_settings import BaseSettings

from propsync.infrastructure.configuration.base import SECTION_CONFIG
from propsync.infrastructure.configuration.features import I18nSettings
from propsync.infrastructure.configuration.integrations import CodePlatformSettings

# Section attribute -> class built from the environment when not passed in
SECTIONS: Dict[str, Type[BaseSettings]] = {
    "code_platform": CodePlatformSettings,
    "i18n": I18nSettings,
}


class Settings(BaseSettings):
    """All propsync settings, one attribute per section.

    Environment Variables:
        PREFIX: Deployment prefix; empty means production
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Sections:
        code_platform: remote repository file API (CODE_PLATFORM_*)
        i18n: documents, locales, commit template and cache (I18N_*)

    Example:
        ```python
        from propsync.infrastructure.configuration import Settings, I18nSettings

        staging = Settings(i18n=I18nSettings(I18N_TARGET_BRANCH="staging"))
        ```
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    code_platform: CodePlatformSettings
    i18n: I18nSettings

    model_config = SECTION_CONFIG

    def __init__(self, **sections):
        for name, section_class in SECTIONS.items():
            if name not in sections:
                sections[name] = section_class()
        super().__init__(**sections)

    @property
    def is_production(self) -> bool:
        return not self.PREFIX


settings = Settings()
