"""Base classes for the settings sections.

Every section reads the process environment and an optional ``.env`` file
with case-sensitive names and ignores variables it does not declare.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    case_sensitive=True,
    extra="ignore",
)


class IntegrationSettings(BaseSettings):
    """Settings of a remote system propsync talks to."""

    model_config = SECTION_CONFIG


class FeatureSettings(BaseSettings):
    """Settings of a propsync feature."""

    model_config = SECTION_CONFIG
