"""Structlog setup for propsync.

Log events are snake_case names with keyword context, e.g.
``logger.info("commit_skipped_no_changes", path=path, skipped=3)``. Under
pytest every event is dropped.

Usage:
    from propsync.infrastructure.logging import configure_logging, get_module_logger

    configure_logging(log_level="DEBUG")
    logger = get_module_logger()
"""

import inspect
import logging
import sys
from typing import List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from propsync.infrastructure.configuration import settings
from propsync.infrastructure.logging.formatters import (
    add_app_info,
    mask_sensitive_data,
    truncate_large_values,
)

APP_NAME = "propsync"

# Above CRITICAL: nothing reaches a handler
SILENT_LEVEL = logging.CRITICAL + 1


def _running_under_pytest() -> bool:
    return "pytest" in sys.modules


def build_processors(is_production: bool) -> List[Processor]:
    """Processor chain shared by every propsync logger.

    Masking runs before truncation so a secret is never partially printed.
    The last processor renders JSON in production and a console line
    otherwise.
    """
    callsite = structlog.processors.CallsiteParameterAdder(
        parameters=[
            structlog.processors.CallsiteParameter.FILENAME,
            structlog.processors.CallsiteParameter.FUNC_NAME,
            structlog.processors.CallsiteParameter.LINENO,
        ]
    )
    renderer = (
        structlog.processors.JSONRenderer()
        if is_production
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        callsite,
        add_app_info(APP_NAME),
        mask_sensitive_data(),
        truncate_large_values(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def _silence() -> None:
    logging.basicConfig(format="%(message)s", level=SILENT_LEVEL, force=True)
    logging.root.setLevel(SILENT_LEVEL)
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog on top of the standard library root logger.

    Args:
        log_level: Level name; defaults to settings.LOG_LEVEL.
        is_production: JSON output when True; defaults to
            settings.is_production.

    Returns:
        The root propsync logger.
    """
    if _running_under_pytest():
        _silence()
        return structlog.stdlib.get_logger()

    if is_production is None:
        is_production = settings.is_production
    level_name = (log_level or settings.LOG_LEVEL).upper()

    structlog.configure(
        processors=build_processors(is_production),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level_name, logging.INFO),
    )
    return structlog.stdlib.get_logger()


logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Logger bound to the calling module.

    Binds ``component`` (last dotted segment) and ``module_path``, e.g.
    ``component="store"``, ``module_path="propsync.modules.i18n.store"``.
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None
    if module is None:
        return logger.bind(component="unknown")

    name = module.__name__
    return logger.bind(component=name.rsplit(".", 1)[-1], module_path=name)
