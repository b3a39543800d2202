from __future__ import annotations

from collections.abc import Mapping
from functools import cached_property
from typing import TYPE_CHECKING, Any

from replicate_sdk.errors import ModelError
from replicate_sdk.records.base import Record
from replicate_sdk.records.model_version import ModelVersion

if TYPE_CHECKING:
    from replicate_sdk.client import Client


class Model(Record):
    """
    A model with its metadata.

    `latest_version` is wrapped as a ModelVersion at construction time.
    `versions` is fetched on first access and memoized for the life of the
    object, so later remote changes are not reflected.
    """

    def __init__(self, client: Client | None, params: Any) -> None:
        latest = params.get("latest_version") if isinstance(params, Mapping) else None
        if latest and not isinstance(latest, ModelVersion):
            params = dict(params)
            params["latest_version"] = ModelVersion(client, latest)
        super().__init__(client, params)

    @property
    def latest_version(self) -> ModelVersion | None:
        return self.get("latest_version")

    @property
    def identifier(self) -> str:
        return f"{self.get('owner') or ''}/{self.get('name') or ''}"

    @cached_property
    def versions(self) -> list[ModelVersion]:
        if not self.get("owner") or not self.get("name"):
            raise ModelError("Model record has no owner/name; cannot list versions")
        return self.client.retrieve_model(self.identifier, version="all")
