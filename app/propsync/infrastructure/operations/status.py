"""Outcome classes for OperationResult."""

from enum import Enum


class OperationStatus(Enum):
    """How an operation ended.

    A no-op merge is SUCCESS. NOT_FOUND is only produced by reads; the store
    turns it into an empty document.
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
