"""Unit tests for HTTP response and request exception classifiers.

Tests cover:
- Status code mapping for responses
- Retry-After header extraction
- Error message extraction from JSON and text bodies
- Transport exception classification
"""

from unittest.mock import Mock

import pytest
import requests

from propsync.infrastructure.operations.classifiers import (
    classify_http_response,
    classify_request_exception,
    extract_error_message,
)
from propsync.infrastructure.operations.status import OperationStatus


def make_response(status_code, body=None, text="", headers=None):
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.headers = headers or {}
    response.text = text
    if body is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = body
    return response


@pytest.mark.unit
class TestClassifyHttpResponse:
    """Tests for classify_http_response() function."""

    def test_success_carries_data(self):
        result = classify_http_response(make_response(201), data={"file_path": "x"})

        assert result.is_success
        assert result.data == {"file_path": "x"}

    @pytest.mark.parametrize("status_code", [401, 403])
    def test_unauthorized(self, status_code):
        result = classify_http_response(make_response(status_code, {"message": "denied"}))

        assert result.status == OperationStatus.UNAUTHORIZED
        assert result.error_code == f"HTTP_{status_code}"

    def test_not_found(self):
        result = classify_http_response(make_response(404, {"message": "404 Not Found"}))

        assert result.is_not_found
        assert result.data == {"status_code": 404, "body": "404 Not Found"}

    def test_rate_limited_with_retry_after(self):
        result = classify_http_response(make_response(429, headers={"Retry-After": "30"}))

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "RATE_LIMITED"
        assert result.retry_after == 30

    def test_rate_limited_with_malformed_retry_after(self):
        result = classify_http_response(
            make_response(429, headers={"Retry-After": "soon"})
        )

        assert result.retry_after == 60

    def test_other_client_error_is_permanent(self):
        result = classify_http_response(make_response(409, {"error": "conflict"}))

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "HTTP_409"
        assert "conflict" in result.message

    def test_server_error_is_transient(self):
        result = classify_http_response(make_response(503, text="unavailable"))

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "HTTP_503"
        assert result.data["body"] == "unavailable"


@pytest.mark.unit
class TestExtractErrorMessage:
    def test_json_fields(self):
        assert extract_error_message(make_response(400, {"detail": "bad path"})) == "bad path"

    def test_text_is_truncated(self):
        message = extract_error_message(make_response(500, text="x" * 500))

        assert len(message) == 200

    def test_empty_body(self):
        assert extract_error_message(make_response(500)) == "Unknown error"


@pytest.mark.unit
class TestClassifyRequestException:
    def test_timeout(self):
        result = classify_request_exception(requests.Timeout("slow"))

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "TIMEOUT"

    def test_connection_error(self):
        result = classify_request_exception(requests.ConnectionError("refused"))

        assert result.error_code == "CONNECTION_ERROR"

    def test_unexpected_error(self):
        result = classify_request_exception(requests.TooManyRedirects("loop"))

        assert result.error_code == "UNEXPECTED_ERROR"
        assert "TooManyRedirects" in result.message
