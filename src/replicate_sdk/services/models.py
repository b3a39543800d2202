"""Model and collection lookups."""

from __future__ import annotations

import logging
from typing import Any

from replicate_sdk.records.model import Model
from replicate_sdk.records.model_version import ModelVersion
from replicate_sdk.services.validation import (
    validate_collection_slug,
    validate_model_identifier,
    validate_version_parameter,
)

logger = logging.getLogger(__name__)

LATEST = "latest"
ALL = "all"


class ModelOperations:
    """
    Mixed into Client.

    `retrieve_model` caches "latest" models and specific versions per
    "{identifier}:{version}" until `clear_cache()`. There is no TTL and no
    request coalescing: concurrent misses on one key each fetch, last write wins.
    """

    def retrieve_model(
        self, model: str, version: str = LATEST
    ) -> Model | ModelVersion | list[ModelVersion]:
        validate_model_identifier(model)
        validate_version_parameter(version)

        if version == ALL:
            response = self.api_endpoint.get(f"models/{model}/versions")
            return [ModelVersion(self, result) for result in response["results"]]

        cache_key = f"{model}:{version}"
        cache = self._model_cache if version == LATEST else self._version_cache
        cached = cache.get(cache_key)
        if cached is not None:
            logger.debug("cache hit for %s", cache_key)
            return cached

        if version == LATEST:
            record: Model | ModelVersion = Model(self, self.api_endpoint.get(f"models/{model}"))
        else:
            record = ModelVersion(self, self.api_endpoint.get(f"models/{model}/versions/{version}"))
        cache[cache_key] = record
        return record

    def retrieve_collection(self, slug: str) -> Any:
        validate_collection_slug(slug)
        return self.api_endpoint.get(f"collections/{slug}")
