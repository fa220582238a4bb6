"""Code platform (remote file API) integration settings."""

from typing import Tuple

from pydantic import Field

from propsync.infrastructure.configuration.base import IntegrationSettings


class CodePlatformSettings(IntegrationSettings):
    """Code platform configuration settings.

    Environment Variables:
        CODE_PLATFORM_BASE_URL: Base URL of the file content API
        CODE_PLATFORM_PRIVATE_TOKEN: Private token sent in the Private-Token header
        CODE_PLATFORM_PROJECT_ID: Repository (project) identifier
        CODE_PLATFORM_TIMEOUT_SECONDS: Connect/read timeout for each request

    Example:
        ```python
        from propsync.infrastructure.configuration import settings

        token = settings.code_platform.PRIVATE_TOKEN
        project_id = settings.code_platform.PROJECT_ID
        ```
    """

    BASE_URL: str = Field(
        default="https://code.alibaba-inc.com/api/v3", alias="CODE_PLATFORM_BASE_URL"
    )
    PRIVATE_TOKEN: str = Field(default="", alias="CODE_PLATFORM_PRIVATE_TOKEN")
    PROJECT_ID: str = Field(default="", alias="CODE_PLATFORM_PROJECT_ID")
    TIMEOUT_SECONDS: int = Field(default=10, alias="CODE_PLATFORM_TIMEOUT_SECONDS")

    @property
    def missing_settings(self) -> Tuple[str, ...]:
        """Environment names of the required settings that are blank."""
        required = {
            "CODE_PLATFORM_PRIVATE_TOKEN": self.PRIVATE_TOKEN,
            "CODE_PLATFORM_PROJECT_ID": self.PROJECT_ID,
        }
        return tuple(name for name, value in required.items() if not value.strip())
