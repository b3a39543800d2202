"""
Python client for the Replicate API.

Prefer an explicit `Client`; the module-level helpers below use a default
instance for scripts::

    import replicate_sdk

    replicate_sdk.configure(api_token="r8_...")
    prediction = replicate_sdk.predict("5c7d5dc6...", {"prompt": "a cat"})
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from replicate_sdk.client import Client
from replicate_sdk.errors import (
    APIConnectionError,
    APIError,
    APITimeoutError,
    AuthenticationError,
    ConfigurationError,
    ErrorKind,
    ModelError,
    ModelNotFoundError,
    NotFoundError,
    PredictionNotFoundError,
    RateLimitError,
    ReplicateError,
    TrainingNotFoundError,
    UploadError,
    ValidationError,
    VersionNotFoundError,
)
from replicate_sdk.records import Model, ModelVersion, Prediction, Training, Upload
from replicate_sdk.version import __version__

_default_client: Client | None = None


def configure(**options: Any) -> Client:
    """Build a validated default client from `options` (see Client) and install it."""
    global _default_client
    client = Client(**options)
    client.require_token()
    if _default_client is not None:
        _default_client.close()
    _default_client = client
    return client


def default_client() -> Client:
    global _default_client
    if _default_client is None:
        _default_client = Client()
    return _default_client


def predict(version: str, input: Mapping[str, Any] | None = None, webhook: str | None = None) -> Prediction:
    params: dict[str, Any] = {"version": version, "input": dict(input or {})}
    if webhook:
        params["webhook"] = webhook
    return default_client().create_prediction(params)


def model(identifier: str, version: str = "latest") -> Model | ModelVersion | list[ModelVersion]:
    return default_client().retrieve_model(identifier, version=version)


def retrieve_model(identifier: str, version: str = "latest") -> Model | ModelVersion | list[ModelVersion]:
    return default_client().retrieve_model(identifier, version=version)


def create_prediction(params: Mapping[str, Any]) -> Prediction:
    return default_client().create_prediction(params)


def retrieve_prediction(id: str) -> Prediction:
    return default_client().retrieve_prediction(id)


def list_predictions(cursor: str | None = None) -> dict[str, Any]:
    return default_client().list_predictions(cursor)


def upload_zip(zip_path: str) -> Upload:
    return default_client().upload_zip(zip_path)


def create_training(params: Mapping[str, Any]) -> Training:
    return default_client().create_training(params)


def retrieve_training(id: str) -> Training:
    return default_client().retrieve_training(id)


__all__ = [
    "APIConnectionError",
    "APIError",
    "APITimeoutError",
    "AuthenticationError",
    "Client",
    "ConfigurationError",
    "ErrorKind",
    "Model",
    "ModelError",
    "ModelNotFoundError",
    "ModelVersion",
    "NotFoundError",
    "Prediction",
    "PredictionNotFoundError",
    "RateLimitError",
    "ReplicateError",
    "Training",
    "TrainingNotFoundError",
    "Upload",
    "UploadError",
    "ValidationError",
    "VersionNotFoundError",
    "__version__",
    "configure",
    "create_prediction",
    "create_training",
    "default_client",
    "list_predictions",
    "model",
    "predict",
    "retrieve_model",
    "retrieve_prediction",
    "retrieve_training",
    "upload_zip",
]
