"""Prediction operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from replicate_sdk.errors import ValidationError
from replicate_sdk.records.prediction import Prediction
from replicate_sdk.services.coercion import normalize_and_coerce_input, to_string
from replicate_sdk.services.validation import (
    validate_params_mapping,
    validate_resource_id,
    validate_webhook,
)


class PredictionOperations:
    """Mixed into Client."""

    def create_prediction(self, params: Mapping[str, Any]) -> Prediction:
        """
        POST /predictions.

        `version` must be a non-empty string and `input` a mapping; input
        values are coerced to JSON-compatible types. The client's default
        webhook is used when the caller does not pass one. `params` is not
        modified.
        """
        payload = self._validate_prediction_params(params)
        if "webhook" not in payload and self.webhook_url:
            payload["webhook"] = self.webhook_url
        response = self.api_endpoint.post("predictions", payload)
        return Prediction(self, response)

    def retrieve_prediction(self, id: str) -> Prediction:
        validate_resource_id(id, "Prediction")
        return Prediction(self, self.api_endpoint.get(f"predictions/{id}"))

    def cancel_prediction(self, id: str) -> Prediction:
        validate_resource_id(id, "Prediction")
        return Prediction(self, self.api_endpoint.post(f"predictions/{id}/cancel"))

    def list_predictions(self, cursor: str | None = None) -> dict[str, Any]:
        """GET /predictions; `results` are wrapped, `next`/`previous` pass through."""
        params = {"cursor": cursor} if cursor else None
        response = dict(self.api_endpoint.get("predictions", params))
        response["results"] = [Prediction(self, r) for r in response.get("results") or []]
        return response

    def _validate_prediction_params(self, params: Any) -> dict[str, Any]:
        validate_params_mapping(params, "Prediction")
        payload = dict(params)

        version = to_string(payload.get("version"))
        if not version or not version.strip():
            raise ValidationError("Version parameter must be a non-empty string")
        payload["version"] = version

        if not isinstance(payload.get("input"), Mapping):
            raise ValidationError("Input parameter must be a mapping")
        payload["input"] = normalize_and_coerce_input(payload["input"])

        if payload.get("webhook"):
            payload["webhook"] = validate_webhook(payload["webhook"])
        else:
            payload.pop("webhook", None)
        return payload
