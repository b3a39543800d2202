from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from replicate_sdk.errors import ModelError
from replicate_sdk.records.base import Record

if TYPE_CHECKING:
    from replicate_sdk.records.prediction import Prediction


class ModelVersion(Record):
    """A specific version of a model; the unit predictions are run against."""

    def predict(self, input: Mapping[str, Any], webhook: str | None = None) -> Prediction:
        version_id = self.get("id")
        if not version_id:
            raise ModelError("Model version has no id; cannot create a prediction")
        params: dict[str, Any] = {"version": version_id, "input": input}
        if webhook:
            params["webhook"] = webhook
        return self.client.create_prediction(params)
