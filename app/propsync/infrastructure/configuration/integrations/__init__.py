"""Integration settings __init__ - exports all integration settings."""

from propsync.infrastructure.configuration.integrations.code_platform import (
    CodePlatformSettings,
)

__all__ = ["CodePlatformSettings"]
