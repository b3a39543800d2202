"""Error taxonomy shared by the transport, records and client operations."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CONNECTION = "connection"
    API = "api"
    UPLOAD = "upload"
    MODEL = "model"


class ReplicateError(Exception):
    """
    Base error.

    Every failure raised by the SDK is a subclass, so callers can branch on
    the class (or on `kind`) to decide between retrying and aborting.
    """

    kind: ErrorKind = ErrorKind.API

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body


class ValidationError(ReplicateError, ValueError):
    """Malformed caller input, raised before any network call."""

    kind = ErrorKind.VALIDATION


class ConfigurationError(ReplicateError):
    kind = ErrorKind.CONFIGURATION

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        super().__init__(message)
        self.suggestion = suggestion

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message}\nSuggestion: {self.suggestion}"
        return self.message


class APIError(ReplicateError):
    """The API answered with an error status."""

    kind = ErrorKind.API


class AuthenticationError(APIError):
    kind = ErrorKind.AUTHENTICATION


class RateLimitError(APIError):
    kind = ErrorKind.RATE_LIMIT


class NotFoundError(APIError):
    kind = ErrorKind.NOT_FOUND
    resource_type = "generic"


class ModelNotFoundError(NotFoundError):
    resource_type = "model"


class VersionNotFoundError(NotFoundError):
    resource_type = "version"


class PredictionNotFoundError(NotFoundError):
    resource_type = "prediction"


class TrainingNotFoundError(NotFoundError):
    resource_type = "training"


class APITimeoutError(ReplicateError):
    kind = ErrorKind.TIMEOUT


class APIConnectionError(ReplicateError):
    kind = ErrorKind.CONNECTION


class UploadError(ReplicateError):
    kind = ErrorKind.UPLOAD


class ModelError(ReplicateError):
    kind = ErrorKind.MODEL
