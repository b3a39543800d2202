from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from replicate_sdk.records.base import Record
from replicate_sdk.records.mixins import Refreshable, Statusable
from replicate_sdk.records.model_version import ModelVersion


class Training(Refreshable, Statusable, Record):
    """A fine-tuning job on the training API."""

    def refetch(self) -> Training:
        self.data = self.client.retrieve_training(self.id).data
        return self

    @property
    def version(self) -> Any:
        """The trained version: a ModelVersion for an embedded document, else the raw value."""
        value = self.get("version")
        if isinstance(value, Mapping):
            return ModelVersion(self.client, value)
        return value
