"""Structured logging infrastructure.

Public API:
    - configure_logging(): Initialize logging for the application
    - build_processors(): The processor chain used outside tests
    - get_module_logger(): Get a logger for the calling module
    - bind_operation_context(): Context manager for operation-scoped logging
    - get_correlation_id(): Get current correlation id from context

Example:
    from propsync.infrastructure.logging import get_module_logger

    logger = get_module_logger()
    logger.info("module_initialized")
"""

from propsync.infrastructure.logging.setup import (
    configure_logging,
    build_processors,
    get_module_logger,
)
from propsync.infrastructure.logging.context import (
    bind_operation_context,
    get_correlation_id,
)
from propsync.infrastructure.logging.formatters import (
    SENSITIVE_PATTERNS,
    add_app_info,
    mask_sensitive_data,
    truncate_large_values,
)

__all__ = [
    "configure_logging",
    "build_processors",
    "get_module_logger",
    "bind_operation_context",
    "get_correlation_id",
    "add_app_info",
    "mask_sensitive_data",
    "truncate_large_values",
    "SENSITIVE_PATTERNS",
]
