"""Errors and error codes for the i18n sync module.

Expected outcomes (no match, nothing to commit) are never errors. Configuration
problems are raised as ConfigurationError inside the module and returned to
callers as OperationResult values carrying CONFIGURATION_ERROR. Transport
failures come back from the client already classified (HTTP_<status>, TIMEOUT,
CONNECTION_ERROR) and malformed response bodies as FORMAT_ERROR.
"""

CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
EMPTY_BATCH = "EMPTY_BATCH"


class ConfigurationError(Exception):
    """Raised when a required setting is missing or names an unknown locale.

    Attributes:
        missing: names of the settings that are not configured
        invalid: "NAME=value" for each unsupported locale setting
    """

    def __init__(
        self,
        message: str,
        missing: tuple[str, ...] = (),
        invalid: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.missing = missing
        self.invalid = invalid
