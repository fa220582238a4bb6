"""Operation result types, status enums and error classifiers."""

from propsync.infrastructure.operations.classifiers import (
    classify_http_response,
    classify_request_exception,
)
from propsync.infrastructure.operations.result import OperationResult
from propsync.infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "classify_http_response",
    "classify_request_exception",
]
