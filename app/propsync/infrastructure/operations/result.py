"""Result value returned by the client, the store and the submission service.

A missing file or a merge with nothing to write is an ordinary result. Only
programming errors propagate as exceptions.
"""

from dataclasses import dataclass
from typing import Any, Optional

from propsync.infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Outcome of one remote or composite operation.

    Attributes:
        status: Outcome class.
        message: Text for logs and for the caller's notification.
        data: Payload: document text, a MergeResult, a SubmissionReport, or
            ``{"status_code", "body"}`` for HTTP errors.
        error_code: Machine-readable code such as ``HTTP_409``,
            ``FORMAT_ERROR`` or ``CONFIGURATION_ERROR``.
        retry_after: Seconds to wait before retrying a rate-limited call.
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None
    retry_after: Optional[int] = None

    @property
    def is_success(self) -> bool:
        return self.status is OperationStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        return self.status is OperationStatus.NOT_FOUND

    @classmethod
    def success(cls, data: Optional[Any] = None, message: str = "ok") -> "OperationResult":
        return cls(OperationStatus.SUCCESS, message, data=data)

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
        data: Optional[Any] = None,
    ) -> "OperationResult":
        """Build a failed result with an explicit status."""
        return cls(
            status,
            message,
            data=data,
            error_code=error_code,
            retry_after=retry_after,
        )

    @classmethod
    def transient_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
        data: Optional[Any] = None,
    ) -> "OperationResult":
        """Failure worth retrying later: timeouts, refused connections, 5xx."""
        return cls.error(
            OperationStatus.TRANSIENT_ERROR, message, error_code, retry_after, data
        )

    @classmethod
    def permanent_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        data: Optional[Any] = None,
    ) -> "OperationResult":
        """Failure that repeats until something changes: bad settings, rejected
        requests, undecodable responses."""
        return cls.error(OperationStatus.PERMANENT_ERROR, message, error_code, data=data)
