"""Tests for the immutable record base."""

from __future__ import annotations

import pytest

from replicate_sdk.records.base import FrozenDict, FrozenList, Record, deep_freeze
from replicate_sdk.records.model_version import ModelVersion
from replicate_sdk.records.prediction import Prediction


def _record(data=None):
    return Record(None, data if data is not None else {"id": "abc", "nested": {"tags": ["a", "b"]}})


def test_keys_are_readable_as_attributes():
    record = _record()
    assert record.id == "abc"
    assert record.nested == {"tags": ["a", "b"]}
    assert record.nested["tags"] == ["a", "b"]


def test_unknown_attribute_raises():
    with pytest.raises(AttributeError, match="no attribute 'missing'"):
        _record().missing


def test_dynamic_attributes_take_no_arguments():
    record = _record()
    with pytest.raises(TypeError):
        record.id("extra")


def test_data_is_deeply_immutable():
    record = _record()
    with pytest.raises(TypeError):
        record.data["id"] = "other"
    with pytest.raises(TypeError):
        record.nested["new"] = 1
    with pytest.raises(TypeError):
        record.nested["tags"][0] = "z"
    with pytest.raises(AttributeError):
        record.nested["tags"].append("c")


def test_freezing_does_not_touch_the_source():
    source = {"items": [1, 2]}
    record = _record(source)
    source["items"].append(3)
    assert record.items == [1, 2]


def test_deep_freeze_types():
    frozen = deep_freeze({"a": [{"b": 1}], "c": "x"})
    assert isinstance(frozen, FrozenDict)
    assert isinstance(frozen["a"], FrozenList)
    assert isinstance(frozen["a"][0], FrozenDict)
    assert frozen == {"a": [{"b": 1}], "c": "x"}


def test_get_and_item_access():
    record = _record()
    assert record.get("id") == "abc"
    assert record.get("missing") is None
    assert record.get("missing", "fallback") == "fallback"
    assert record["id"] == "abc"
    assert "id" in record
    with pytest.raises(KeyError):
        record["missing"]


def test_to_dict_returns_mutable_copy():
    record = _record()
    copy = record.to_dict()
    copy["nested"]["tags"].append("c")
    assert record.nested["tags"] == ["a", "b"]


def test_equality_is_structural_and_per_type():
    a = Record(None, {"id": "1", "x": [1]})
    b = Record(None, {"id": "1", "x": [1]})
    assert a == b
    assert hash(a) == hash(b)
    assert a != Record(None, {"id": "2"})
    assert Prediction(None, {"id": "1"}) != ModelVersion(None, {"id": "1"})


def test_records_work_as_set_members():
    records = {Record(None, {"id": "1"}), Record(None, {"id": "1"}), Record(None, {"id": "2"})}
    assert len(records) == 2


def test_non_mapping_data_has_no_dynamic_attributes():
    record = Record(None, ["a", "b"])
    assert record.data == ["a", "b"]
    assert record.get("a") is None
    with pytest.raises(AttributeError):
        record.a
