"""Operation context binding for structured logging.

Binds a correlation id and operation metadata to every log entry emitted
while a submission is being processed.

Usage:
    from propsync.infrastructure.logging import bind_operation_context

    with bind_operation_context(operation="submit_batch", entry_count=12):
        logger.info("committing_primary_document")
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_operation_context(
    correlation_id: Optional[str] = None,
    operation: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind operation-scoped context to all logs within the block.

    Args:
        correlation_id: Unique operation identifier. Auto-generated if not provided.
        operation: Name of the operation (e.g. "submit_one").
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The correlation id bound for the block.
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}

    if operation is not None:
        context["operation"] = operation

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation id from the logging context."""
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")
