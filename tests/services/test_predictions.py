"""Tests for prediction operations."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from replicate_sdk.errors import PredictionNotFoundError, ValidationError
from replicate_sdk.records.prediction import Prediction


def _sent(api, index=0):
    return json.loads(api.requests[index].content)


def test_create_prediction_posts_and_wraps(client, api):
    api.add("POST", "/v1/predictions", status=201, json={"id": "p1", "status": "starting"})

    prediction = client.create_prediction({"version": "v1", "input": {"prompt": "a cat"}})

    assert isinstance(prediction, Prediction)
    assert prediction.id == "p1"
    assert _sent(api) == {"version": "v1", "input": {"prompt": "a cat"}}


def test_create_prediction_coerces_input(client, api):
    api.add("POST", "/v1/predictions", json={"id": "p1"})

    client.create_prediction(
        {
            "version": "v1",
            "input": {
                "steps": 20,
                "scale": 7.5,
                "upscale": True,
                "image": Path("/tmp/cat.png"),
                "nested": {"tags": ("a", Path("b"))},
                "seed": None,
            },
        }
    )

    assert _sent(api)["input"] == {
        "steps": 20,
        "scale": 7.5,
        "upscale": True,
        "image": "/tmp/cat.png",
        "nested": {"tags": ["a", "b"]},
        "seed": None,
    }


def test_create_prediction_does_not_mutate_params(client, api):
    api.add("POST", "/v1/predictions", json={"id": "p1"})
    params = {"version": "v1", "input": {"image": Path("x.png")}}
    client.create_prediction(params)
    assert params == {"version": "v1", "input": {"image": Path("x.png")}}


def test_default_webhook_is_injected(make_client, api):
    api.add("POST", "/v1/predictions", json={"id": "p1"})
    client = make_client(webhook_url="https://hooks.example.com/default")

    client.create_prediction({"version": "v1", "input": {}})
    client.create_prediction({"version": "v1", "input": {}, "webhook": "https://hooks.example.com/mine"})

    assert _sent(api, 0)["webhook"] == "https://hooks.example.com/default"
    assert _sent(api, 1)["webhook"] == "https://hooks.example.com/mine"


@pytest.mark.parametrize(
    "params",
    [
        "not a mapping",
        {"input": {}},
        {"version": "  ", "input": {}},
        {"version": "v1"},
        {"version": "v1", "input": ["a"]},
        {"version": "v1", "input": {}, "webhook": "not-a-url"},
    ],
)
def test_invalid_prediction_params_fail_before_any_request(client, api, params):
    with pytest.raises(ValidationError):
        client.create_prediction(params)
    assert api.requests == []


def test_retrieve_and_cancel_prediction(client, api):
    api.add("GET", "/v1/predictions/p1", json={"id": "p1", "status": "processing"})
    api.add("POST", "/v1/predictions/p1/cancel", json={"id": "p1", "status": "canceled"})

    assert client.retrieve_prediction("p1").is_processing()
    assert client.cancel_prediction("p1").is_canceled()


@pytest.mark.parametrize("bad_id", ["", "   ", None, 42])
def test_prediction_id_must_be_non_empty_string(client, api, bad_id):
    with pytest.raises(ValidationError):
        client.retrieve_prediction(bad_id)
    with pytest.raises(ValidationError):
        client.cancel_prediction(bad_id)
    assert api.requests == []


def test_missing_prediction_is_typed(client, api):
    api.add("GET", "/v1/predictions/gone", status=404, json={"detail": "Not found."})
    with pytest.raises(PredictionNotFoundError, match="Not found."):
        client.retrieve_prediction("gone")


def test_list_predictions_wraps_results_and_passes_pagination(client, api):
    api.add(
        "GET",
        "/v1/predictions",
        json={
            "previous": None,
            "next": "https://api.test/v1/predictions?cursor=c2",
            "results": [{"id": "p1", "status": "succeeded"}, {"id": "p2", "status": "failed"}],
        },
    )

    page = client.list_predictions()

    assert [p.id for p in page["results"]] == ["p1", "p2"]
    assert all(isinstance(p, Prediction) for p in page["results"])
    assert page["next"] == "https://api.test/v1/predictions?cursor=c2"
    assert page["previous"] is None
    assert "cursor" not in api.requests[0].url.params


def test_list_predictions_sends_cursor(client, api):
    api.add("GET", "/v1/predictions", json={"results": []})
    client.list_predictions("c2")
    assert api.requests[0].url.params["cursor"] == "c2"
