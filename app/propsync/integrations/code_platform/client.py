"""HTTP client for the code platform repository file API.

Reads and writes whole files on a branch. File content travels base64-encoded
inside a JSON body:

    GET  {base_url}/projects/{project_id}/repository/files?file_path=...&ref=...
    POST {base_url}/projects/{project_id}/repository/files   (create)
    PUT  {base_url}/projects/{project_id}/repository/files   (update)

Every call returns an OperationResult; transport exceptions never escape.

Usage:
    client = CodePlatformClient(base_url="https://code.example.com/api/v3", private_token="...")

    result = client.get_file("1234", "master", "i18n/messages_zh.properties")
    if result.is_success:
        text = result.data
"""

import base64
import binascii
from typing import Any, Dict, Optional

import requests
import structlog

from propsync.infrastructure.operations import (
    OperationResult,
    classify_http_response,
    classify_request_exception,
)

logger = structlog.get_logger(__name__)

FORMAT_ERROR = "FORMAT_ERROR"


class FormatError(ValueError):
    """Raised when a response body does not hold decodable file content."""


def decode_file_content(payload: Any) -> str:
    """Decode the base64 ``content`` field of a file response.

    Args:
        payload: Parsed JSON body.

    Returns:
        The file text (empty string for an empty file).

    Raises:
        FormatError: If the body has no string ``content`` field or the content
            is not valid base64-encoded UTF-8.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("content"), str):
        raise FormatError("Response body has no 'content' field")

    try:
        encoded = "".join(payload["content"].split())
        raw = base64.b64decode(encoded, validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise FormatError(f"Invalid file content encoding: {e}") from e


def encode_file_content(content: str) -> str:
    return base64.b64encode(content.encode("utf-8")).decode("ascii")


class CodePlatformClient:
    """Client for the repository file endpoints.

    Attributes:
        base_url: API root, e.g. https://code.example.com/api/v3
        timeout: Connect/read timeout in seconds for each request
        session: Requests session with connection pooling
    """

    def __init__(
        self,
        base_url: str,
        private_token: str,
        timeout: int = 10,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Private-Token": private_token,
                "Accept": "application/json",
            }
        )
        self._logger = logger.bind(component="code_platform_client")

    def _files_url(self, project_id: str) -> str:
        return f"{self.base_url}/projects/{project_id}/repository/files"

    def get_file(self, project_id: str, branch: str, path: str) -> OperationResult:
        """Fetch a file's text.

        Args:
            project_id: Repository identifier.
            branch: Branch (ref) to read from.
            path: File path inside the repository.

        Returns:
            SUCCESS with the decoded text as ``data``, NOT_FOUND when the file
            does not exist, FORMAT_ERROR when the body cannot be decoded, or a
            transport error result.
        """
        log = self._logger.bind(project_id=project_id, branch=branch, path=path)
        log.debug("fetching_file")

        result = self._request(
            "GET",
            self._files_url(project_id),
            params={"file_path": path, "ref": branch},
        )
        if not result.is_success:
            if result.is_not_found:
                log.info("file_not_found")
            else:
                log.warning("fetch_file_failed", error=result.message)
            return result

        try:
            content = decode_file_content(result.data)
        except FormatError as e:
            log.error("fetch_file_format_error", error=str(e))
            return OperationResult.permanent_error(str(e), error_code=FORMAT_ERROR)

        log.debug("fetched_file", size=len(content))
        return OperationResult.success(data=content, message=f"Fetched {path}")

    def create_or_update_file(
        self,
        project_id: str,
        branch: str,
        path: str,
        content: str,
        commit_message: str,
        create: bool = False,
    ) -> OperationResult:
        """Write a whole file in a single commit.

        Args:
            project_id: Repository identifier.
            branch: Target branch.
            path: File path inside the repository.
            content: Full new file text.
            commit_message: Commit message.
            create: POST a new file when True, PUT over the existing one otherwise.

        Returns:
            SUCCESS with the parsed response body, or an error result carrying
            ``status_code`` and ``body``.
        """
        method = "POST" if create else "PUT"
        body = {
            "file_path": path,
            "branch_name": branch,
            "content": encode_file_content(content),
            "encoding": "base64",
            "commit_message": commit_message,
        }
        log = self._logger.bind(
            project_id=project_id, branch=branch, path=path, method=method
        )
        log.info("writing_file", size=len(content))

        result = self._request(method, self._files_url(project_id), json_data=body)
        if result.is_success:
            log.info("wrote_file")
        else:
            log.warning("write_file_failed", error=result.message, code=result.error_code)
        return result

    def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> OperationResult:
        try:
            response = self._session.request(
                method=method,
                url=url,
                params=params,
                json=json_data,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            self._logger.error("code_platform_request_failed", method=method, error=str(e))
            return classify_request_exception(e)

        if not 200 <= response.status_code < 300:
            return classify_http_response(response)

        if not response.content:
            return OperationResult.success(data=None)

        try:
            data = response.json()
        except ValueError:
            # Writes may answer with a non-JSON body; get_file rejects it on decode
            data = response.text

        return classify_http_response(response, data=data)

    def close(self) -> None:
        """Close HTTP session and release connections."""
        self._session.close()


__all__ = ["CodePlatformClient", "FormatError", "decode_file_content", "encode_file_content"]
