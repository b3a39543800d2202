"""Client: configuration, endpoints and lookup caches."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import httpx

from replicate_sdk.clients.endpoint import Endpoint, validate_base_url
from replicate_sdk.config.settings import Settings
from replicate_sdk.errors import ConfigurationError, ValidationError
from replicate_sdk.records.model import Model
from replicate_sdk.records.model_version import ModelVersion
from replicate_sdk.services.models import ModelOperations
from replicate_sdk.services.predictions import PredictionOperations
from replicate_sdk.services.trainings import TrainingOperations
from replicate_sdk.services.uploads import UploadOperations
from replicate_sdk.services.validation import is_valid_url

TOKEN_SUGGESTION = (
    "Get your API token from https://replicate.com/account and set it with "
    "REPLICATE_API_TOKEN or Client(api_token='your_token')"
)

_UNSET: Any = object()


class Client(ModelOperations, PredictionOperations, UploadOperations, TrainingOperations):
    """
    Entry point for the API.

    Explicit arguments win over `settings`; when `settings` is omitted a fresh
    Settings() is read from the environment. Endpoints are built lazily, and
    the API token is required at that point.

    Usage::

        with Client(api_token="r8_...") as client:
            prediction = client.create_prediction(
                {"version": "5c7d5dc6...", "input": {"prompt": "a cat"}}
            )
    """

    def __init__(
        self,
        api_token: str | None = _UNSET,
        *,
        webhook_url: str | None = _UNSET,
        api_endpoint_url: str | None = None,
        dreambooth_endpoint_url: str | None = None,
        upload_root: str | Path | None = None,
        settings: Settings | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.settings = settings or Settings()

        if api_token is _UNSET:
            api_token = self.settings.api_token
        elif api_token is None or not str(api_token).strip():
            raise ValidationError("API token cannot be None or empty")
        self.api_token = api_token.strip() if api_token else None

        if webhook_url is _UNSET:
            webhook_url = self.settings.webhook_url
        if webhook_url and not is_valid_url(webhook_url):
            raise ValidationError("Invalid webhook URL format")
        self.webhook_url = webhook_url or None

        self.api_endpoint_url = api_endpoint_url or self.settings.api_endpoint_url
        self.dreambooth_endpoint_url = dreambooth_endpoint_url or self.settings.dreambooth_endpoint_url
        validate_base_url(self.api_endpoint_url)
        validate_base_url(self.dreambooth_endpoint_url)

        root = upload_root if upload_root is not None else self.settings.upload_root
        self.upload_root = Path(root) if root else None

        self.http_client = http_client
        self._api_endpoint: Endpoint | None = None
        self._dreambooth_endpoint: Endpoint | None = None

        self._model_cache: dict[str, Model] = {}
        self._version_cache: dict[str, ModelVersion] = {}

    def __repr__(self) -> str:
        return f"Client(api_endpoint_url={self.api_endpoint_url!r})"

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def require_token(self) -> str:
        if not self.api_token:
            raise ConfigurationError("API token is required", TOKEN_SUGGESTION)
        return self.api_token

    @property
    def api_endpoint(self) -> Endpoint:
        if self._api_endpoint is None:
            self._api_endpoint = Endpoint(
                self.api_endpoint_url,
                api_token=self.require_token(),
                http_client=self.http_client,
            )
        return self._api_endpoint

    @property
    def dreambooth_endpoint(self) -> Endpoint:
        if self._dreambooth_endpoint is None:
            self._dreambooth_endpoint = Endpoint(
                self.dreambooth_endpoint_url,
                api_token=self.require_token(),
                http_client=self.http_client,
            )
        return self._dreambooth_endpoint

    def clear_cache(self) -> None:
        self._model_cache.clear()
        self._version_cache.clear()

    def close(self) -> None:
        for endpoint in (self._api_endpoint, self._dreambooth_endpoint):
            if endpoint is not None:
                endpoint.close()
