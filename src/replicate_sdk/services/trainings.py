"""Training operations against the training API."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from replicate_sdk.records.training import Training
from replicate_sdk.services.coercion import coerce_hash_values, normalize_and_coerce_input
from replicate_sdk.services.validation import (
    validate_params_mapping,
    validate_resource_id,
    validate_webhook,
)


class TrainingOperations:
    """Mixed into Client."""

    def create_training(self, params: Mapping[str, Any]) -> Training:
        """
        POST /trainings.

        Typical params: `input` (instance_prompt, class_prompt, instance_data
        = an upload's serving_url, ...) and `model` ("owner/name").
        """
        validate_params_mapping(params, "Training")
        payload = coerce_hash_values(params)
        if isinstance(payload.get("input"), Mapping):
            payload["input"] = normalize_and_coerce_input(payload["input"])
        if payload.get("webhook"):
            payload["webhook"] = validate_webhook(payload["webhook"])
        elif self.webhook_url:
            payload["webhook"] = self.webhook_url
        return Training(self, self.dreambooth_endpoint.post("trainings", payload))

    def retrieve_training(self, id: str) -> Training:
        validate_resource_id(id, "Training")
        return Training(self, self.dreambooth_endpoint.get(f"trainings/{id}"))
