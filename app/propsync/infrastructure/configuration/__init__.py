"""Infrastructure configuration module - public API.

Centralized configuration management using Pydantic BaseSettings with
domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    CodePlatformSettings: Remote file API settings
    I18nSettings: Localization sync feature settings

Example:
    ```python
    from propsync.infrastructure.configuration import settings

    token = settings.code_platform.PRIVATE_TOKEN
    path = settings.i18n.PRIMARY_PROPERTIES_PATH
    ```
"""

from propsync.infrastructure.configuration.features import I18nSettings
from propsync.infrastructure.configuration.integrations import CodePlatformSettings
from propsync.infrastructure.configuration.settings import Settings, settings

__all__ = ["settings", "Settings", "CodePlatformSettings", "I18nSettings"]
