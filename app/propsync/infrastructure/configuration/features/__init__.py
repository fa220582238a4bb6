"""Feature settings __init__ - exports all feature settings."""

from propsync.infrastructure.configuration.features.i18n import I18nSettings

__all__ = ["I18nSettings"]
