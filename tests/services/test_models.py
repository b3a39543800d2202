"""Tests for model lookups and caching."""

from __future__ import annotations

import pytest

from replicate_sdk.errors import ModelNotFoundError, ValidationError, VersionNotFoundError
from replicate_sdk.records.model import Model
from replicate_sdk.records.model_version import ModelVersion

MODEL_PATH = "/v1/models/owner/name"


def test_latest_fetches_once_then_hits_cache(client, api):
    api.add("GET", MODEL_PATH, json={"owner": "owner", "name": "name", "latest_version": {"id": "v1"}})

    first = client.retrieve_model("owner/name")
    second = client.retrieve_model("owner/name", version="latest")

    assert isinstance(first, Model)
    assert first is second
    assert first.latest_version.id == "v1"
    assert len(api.calls("GET", MODEL_PATH)) == 1


def test_all_versions_are_never_cached(client, api):
    api.add("GET", f"{MODEL_PATH}/versions", json={"results": [{"id": "v1"}, {"id": "v2"}]})

    first = client.retrieve_model("owner/name", version="all")
    client.retrieve_model("owner/name", version="all")

    assert [v.id for v in first] == ["v1", "v2"]
    assert all(isinstance(v, ModelVersion) for v in first)
    assert len(api.calls("GET", f"{MODEL_PATH}/versions")) == 2


def test_specific_version_is_cached(client, api):
    api.add("GET", f"{MODEL_PATH}/versions/abc123", json={"id": "abc123"})

    first = client.retrieve_model("owner/name", version="abc123")
    second = client.retrieve_model("owner/name", version="abc123")

    assert isinstance(first, ModelVersion)
    assert first is second
    assert len(api.calls("GET", f"{MODEL_PATH}/versions/abc123")) == 1


def test_clear_cache_forces_refetch(client, api):
    api.add("GET", MODEL_PATH, json={"owner": "owner", "name": "name"})

    client.retrieve_model("owner/name")
    client.clear_cache()
    client.retrieve_model("owner/name")

    assert len(api.calls("GET", MODEL_PATH)) == 2


@pytest.mark.parametrize("identifier", ["", "   ", "no-slash", "a/b/c", "own er/name", None])
def test_invalid_identifier_fails_before_any_request(client, api, identifier):
    with pytest.raises(ValidationError):
        client.retrieve_model(identifier)
    assert api.requests == []


def test_invalid_version_fails_before_any_request(client, api):
    with pytest.raises(ValidationError):
        client.retrieve_model("owner/name", version="")
    assert api.requests == []


def test_missing_model_and_version_are_typed(client, api):
    api.add("GET", MODEL_PATH, status=404, json={"detail": "Not found."})
    api.add("GET", f"{MODEL_PATH}/versions/nope", status=404, json={"detail": "Not found."})

    with pytest.raises(ModelNotFoundError):
        client.retrieve_model("owner/name")
    with pytest.raises(VersionNotFoundError):
        client.retrieve_model("owner/name", version="nope")


def test_retrieve_collection(client, api):
    api.add("GET", "/v1/collections/text-to-image", json={"name": "Text to image", "models": []})
    assert client.retrieve_collection("text-to-image") == {"name": "Text to image", "models": []}


def test_retrieve_collection_validates_slug(client, api):
    with pytest.raises(ValidationError):
        client.retrieve_collection("bad/slug")
    assert api.requests == []
