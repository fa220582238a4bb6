"""Error classifiers for remote file API calls.

Converts HTTP responses and ``requests`` exceptions into OperationResult
objects so callers never handle transport exceptions directly.

Status Code Mapping:
- 2xx: SUCCESS
- 401/403: UNAUTHORIZED
- 404: NOT_FOUND
- 429: TRANSIENT_ERROR with retry_after
- other 4xx: PERMANENT_ERROR
- 5xx: TRANSIENT_ERROR

Usage:
    try:
        response = session.request("GET", url, timeout=10)
    except requests.RequestException as exc:
        return classify_request_exception(exc)
    return classify_http_response(response)
"""

import json
from typing import Any, Dict, Optional

import requests

from propsync.infrastructure.operations.result import OperationResult
from propsync.infrastructure.operations.status import OperationStatus

DEFAULT_RETRY_AFTER = 60


def extract_error_message(response: requests.Response) -> str:
    """Extract a human-readable error message from a response body.

    Args:
        response: The HTTP response.

    Returns:
        The ``message``/``error``/``detail`` field of a JSON body, otherwise
        the raw text (truncated).
    """
    try:
        body = response.json()
    except (ValueError, json.JSONDecodeError):
        body = None

    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            if key in body:
                return str(body[key])

    text = response.text or ""
    return text[:200] if text else "Unknown error"


def _retry_after(response: requests.Response) -> int:
    header_value = response.headers.get("Retry-After")
    if not header_value:
        return DEFAULT_RETRY_AFTER
    try:
        return int(header_value)
    except (TypeError, ValueError):
        return DEFAULT_RETRY_AFTER


def classify_http_response(
    response: requests.Response, data: Optional[Any] = None
) -> OperationResult:
    """Classify an HTTP response into an OperationResult.

    Args:
        response: Response returned by the remote API.
        data: Payload to attach when the response is a success.

    Returns:
        SUCCESS with ``data`` for 2xx, otherwise an error result whose ``data``
        carries ``status_code`` and ``body``.
    """
    status_code = response.status_code

    if 200 <= status_code < 300:
        return OperationResult.success(data=data, message=f"HTTP {status_code}")

    detail = extract_error_message(response)
    error_data: Dict[str, Any] = {"status_code": status_code, "body": detail}
    error_code = f"HTTP_{status_code}"
    message = f"Request failed ({status_code}): {detail}"

    if status_code in (401, 403):
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED, message, error_code=error_code, data=error_data
        )

    if status_code == 404:
        return OperationResult.error(
            OperationStatus.NOT_FOUND, message, error_code=error_code, data=error_data
        )

    if status_code == 429:
        return OperationResult.transient_error(
            message,
            error_code="RATE_LIMITED",
            retry_after=_retry_after(response),
            data=error_data,
        )

    if 400 <= status_code < 500:
        return OperationResult.permanent_error(
            message, error_code=error_code, data=error_data
        )

    return OperationResult.transient_error(
        message, error_code=error_code, data=error_data
    )


def classify_request_exception(exc: Exception) -> OperationResult:
    """Classify a transport-level exception into an OperationResult.

    Args:
        exc: Exception raised while sending the request.

    Returns:
        TRANSIENT_ERROR with TIMEOUT or CONNECTION_ERROR code; unknown
        exceptions are treated as transient as well.
    """
    if isinstance(exc, requests.Timeout):
        return OperationResult.transient_error(
            f"Request timeout: {exc}", error_code="TIMEOUT"
        )

    if isinstance(exc, requests.ConnectionError):
        return OperationResult.transient_error(
            f"Connection error: {exc}", error_code="CONNECTION_ERROR"
        )

    return OperationResult.transient_error(
        f"Unexpected error: {type(exc).__name__}: {exc}",
        error_code="UNEXPECTED_ERROR",
    )
