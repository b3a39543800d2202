"""
HTTP endpoint for one API base URL.

Design:
- Sync `httpx.Client` (every call blocks until the exchange, retries included, is done)
- Dependency injection via `http_client` makes it testable without real HTTP
- Responses are classified into the `replicate_sdk.errors` taxonomy here, so
  callers only ever see parsed bodies or typed errors
"""

from __future__ import annotations

import json
import logging
import re
import time
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, urlparse

import httpx

from replicate_sdk.errors import (
    APIConnectionError,
    APIError,
    APITimeoutError,
    AuthenticationError,
    ConfigurationError,
    ModelNotFoundError,
    NotFoundError,
    PredictionNotFoundError,
    RateLimitError,
    TrainingNotFoundError,
    ValidationError,
    VersionNotFoundError,
)
from replicate_sdk.version import __version__

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
USER_AGENT = f"replicate-sdk-python/{__version__}"

# per phase: 10s to connect, 20s between reads, 30s for writes and pool waits
DEFAULT_TIMEOUT = httpx.Timeout(30.0, connect=10.0, read=20.0)
# httpx has no whole-request limit; each attempt is cut off after this
ATTEMPT_DEADLINE_S = 30.0

MAX_RETRIES = 3
RETRY_INTERVAL_S = 0.5
RETRY_BACKOFF_FACTOR = 2
RETRY_STATUSES = frozenset({429, 500, 502, 503, 504})
NEVER_RETRY_STATUSES = frozenset({401, 403, 422})

_PATH_RE = re.compile(r"\A[A-Za-z0-9_/.\-]+\Z")

# order matters: a version path also contains /models/
_NOT_FOUND_BY_SEGMENT: tuple[tuple[str, type[NotFoundError], str], ...] = (
    ("/versions/", VersionNotFoundError, "Model version not found"),
    ("/models/", ModelNotFoundError, "Model not found"),
    ("/predictions/", PredictionNotFoundError, "Prediction not found"),
    ("/trainings/", TrainingNotFoundError, "Training not found"),
)


def validate_base_url(url: str | None) -> None:
    """Accept None (disposable upload targets) or an absolute URL with scheme and host."""
    if url is None:
        return
    if not isinstance(url, str):
        raise ConfigurationError(f"Invalid endpoint URL: {url!r}")
    try:
        parsed = urlparse(url)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid endpoint URL format: {url}") from exc
    if not parsed.scheme or not parsed.hostname:
        raise ConfigurationError(f"Invalid endpoint URL: {url}")


def validate_path(path: str | None) -> str:
    """
    Check a request path against the allow-list and return it with a leading slash.

    An empty path targets the base URL itself.
    """
    if path is None or path == "":
        return ""
    if not isinstance(path, str):
        raise ValidationError(f"URL must be a string, got {type(path).__name__}")
    if ".." in path or "\\" in path:
        raise ValidationError("URL contains invalid path characters")
    if not _PATH_RE.match(path):
        raise ValidationError("URL contains invalid characters")
    return "/" + path.lstrip("/")


def should_retry(status_code: int | None, exc: Exception | None = None) -> bool:
    if isinstance(exc, httpx.TimeoutException):
        return False
    if status_code is None or status_code in NEVER_RETRY_STATUSES:
        return False
    return status_code in RETRY_STATUSES


def is_file_like(value: Any) -> bool:
    return callable(getattr(value, "read", None))


def parse_error_message(response: httpx.Response) -> str:
    """Prefer the API's `{"detail": ...}` message, else the raw body text."""
    text = response.text
    try:
        data = json.loads(text)
    except ValueError:
        return text
    if isinstance(data, dict) and data.get("detail"):
        return str(data["detail"])
    return text


def _rewind(kwargs: dict[str, Any]) -> None:
    for value in (kwargs.get("files") or {}).values():
        seek = getattr(value, "seek", None)
        if callable(seek):
            seek(0)


class Endpoint:
    """One configured base URL + credential pair."""

    def __init__(
        self,
        base_url: str | None,
        api_token: str | None = None,
        content_type: str = JSON_CONTENT_TYPE,
        http_client: httpx.Client | None = None,
        timeout: httpx.Timeout = DEFAULT_TIMEOUT,
    ) -> None:
        validate_base_url(base_url)
        self.base_url = base_url
        self.api_token = api_token
        self.content_type = content_type
        self.timeout = timeout
        self._http_client = http_client
        self._owns_client = http_client is None

        # diagnostics, overwritten by every call
        self.last_request_path: str | None = None
        self.last_response: httpx.Response | None = None

    def __repr__(self) -> str:
        return f"Endpoint(base_url={self.base_url!r}, content_type={self.content_type!r})"

    @property
    def agent(self) -> httpx.Client:
        if self._http_client is None:
            self._http_client = httpx.Client(timeout=self.timeout)
        return self._http_client

    def close(self) -> None:
        if self._owns_client and self._http_client is not None:
            self._http_client.close()
            self._http_client = None

    # HTTP verbs

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def head(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return self.request("HEAD", path, params=params)

    def delete(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return self.request("DELETE", path, params=params)

    def post(self, path: str, payload: Mapping[str, Any] | None = None) -> Any:
        payload = dict(payload or {})
        if any(is_file_like(v) for v in payload.values()):
            files = {k: v for k, v in payload.items() if is_file_like(v)}
            data = {k: v for k, v in payload.items() if not is_file_like(v)}
            return self.request("POST", path, files=files, data=data)
        return self.request("POST", path, body=payload)

    def put(
        self,
        path: str,
        payload: Mapping[str, Any] | None = None,
        *,
        content: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        if content is not None:
            return self.request("PUT", path, content=content, headers=headers)
        return self.request("PUT", path, body=dict(payload or {}), headers=headers)

    def patch(self, path: str, payload: Mapping[str, Any] | None = None) -> Any:
        return self.request("PATCH", path, body=dict(payload or {}))

    # Internals

    def build_url(self, path: str) -> str:
        if self.base_url is None:
            raise ConfigurationError(
                "Endpoint has no base URL",
                "Construct the endpoint with an absolute URL before issuing requests",
            )
        if not path:
            return self.base_url
        return f"{self.base_url.rstrip('/')}/{quote(path.lstrip('/'), safe='/')}"

    def build_headers(self, *, multipart: bool = False) -> dict[str, str]:
        headers = {
            "User-Agent": USER_AGENT,
            "Accept": JSON_CONTENT_TYPE,
            "Connection": "keep-alive",
        }
        # httpx writes the multipart boundary header itself
        if not multipart:
            headers["Content-Type"] = self.content_type
        if self.api_token:
            headers["Authorization"] = f"Token {self.api_token}"
        return headers

    def request(
        self,
        method: str,
        path: str | None,
        *,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
        files: Mapping[str, Any] | None = None,
        data: Mapping[str, Any] | None = None,
        content: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Issue one logical request (retries included) and classify the final response."""
        normalized = validate_path(path)
        url = self.build_url(normalized)
        self.last_request_path = normalized

        request_headers = self.build_headers(multipart=files is not None)
        if headers:
            request_headers.update(headers)

        kwargs: dict[str, Any] = {"headers": request_headers, "timeout": self.timeout}
        if params:
            kwargs["params"] = dict(params)
        if files is not None:
            kwargs["files"] = dict(files)
            kwargs["data"] = dict(data or {})
        elif content is not None:
            kwargs["content"] = content
        elif body is not None:
            try:
                kwargs["content"] = json.dumps(body)
            except (TypeError, ValueError) as exc:
                raise ValidationError(f"Request body is not JSON serializable: {exc}") from exc

        response = self._send(method, url, kwargs)
        self.last_response = response
        return self.handle_response(response)

    def _send(self, method: str, url: str, kwargs: dict[str, Any]) -> httpx.Response:
        attempt = 0
        delay = RETRY_INTERVAL_S
        while True:
            logger.debug("%s %s (attempt %d)", method, url, attempt + 1)
            try:
                response = self._attempt(method, url, kwargs)
            except httpx.TimeoutException as exc:
                logger.warning("%s %s timed out", method, url)
                raise APITimeoutError(f"Request timed out: {method} {self.last_request_path}") from exc
            except httpx.TransportError as exc:
                logger.warning("%s %s failed to connect: %s", method, url, exc)
                raise APIConnectionError(f"Connection failed: {exc}") from exc

            logger.debug("%s %s -> %d", method, url, response.status_code)
            if attempt >= MAX_RETRIES or not should_retry(response.status_code):
                return response

            attempt += 1
            logger.warning(
                "%s %s returned %d, retry %d/%d in %.1fs",
                method,
                url,
                response.status_code,
                attempt,
                MAX_RETRIES,
                delay,
            )
            time.sleep(delay)
            delay *= RETRY_BACKOFF_FACTOR
            _rewind(kwargs)

    def _attempt(self, method: str, url: str, kwargs: dict[str, Any]) -> httpx.Response:
        """One exchange, with the body read under the per-attempt deadline."""
        deadline = time.monotonic() + ATTEMPT_DEADLINE_S
        with self.agent.stream(method, url, **kwargs) as response:
            chunks = []
            for chunk in response.iter_bytes():
                if time.monotonic() > deadline:
                    raise httpx.ReadTimeout(
                        f"Exceeded {ATTEMPT_DEADLINE_S:.0f}s per attempt", request=response.request
                    )
                chunks.append(chunk)
        # body is already decoded; its length is recomputed
        headers = [
            (k, v) for k, v in response.headers.multi_items() if k not in ("content-encoding", "content-length")
        ]
        return httpx.Response(
            response.status_code,
            headers=headers,
            content=b"".join(chunks),
            request=response.request,
        )

    def handle_response(self, response: httpx.Response) -> Any:
        status = response.status_code
        body = response.text

        if 200 <= status < 300:
            return self.parse_response_body(response)
        if status == 400:
            raise APIError(f"Bad request (400): {parse_error_message(response)}", status, body)
        if status == 422:
            raise APIError(f"Unprocessable entity (422): {parse_error_message(response)}", status, body)
        if status == 401:
            raise AuthenticationError("Unauthorized (401): Check your API token", status, body)
        if status == 403:
            raise APIError("Forbidden (403): Insufficient permissions", status, body)
        if status == 429:
            raise RateLimitError("Rate limited (429): Too many requests", status, body)
        if status == 404:
            self._raise_not_found(response)
        if 500 <= status <= 599:
            raise APIError(f"Server error ({status}): {parse_error_message(response)}", status, body)
        raise APIError(f"Unexpected response ({status}): {body}", status, body)

    def _raise_not_found(self, response: httpx.Response) -> None:
        message = parse_error_message(response)
        path = self.last_request_path or ""
        for segment, error_cls, label in _NOT_FOUND_BY_SEGMENT:
            if segment in path:
                raise error_cls(f"{label} (404): {message}", 404, response.text)
        raise NotFoundError(f"Not found (404): {message}", 404, response.text)

    def parse_response_body(self, response: httpx.Response) -> Any:
        if not response.content:
            return None
        if self.content_type != JSON_CONTENT_TYPE:
            return response.text
        try:
            return response.json()
        except ValueError as exc:
            raise APIError(
                f"Invalid JSON in response ({response.status_code})",
                response.status_code,
                response.text,
            ) from exc
