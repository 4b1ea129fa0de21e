"""Tests for upload deserialisation and FeatureCollection checks."""

from __future__ import annotations

import json

import pytest

from campus_geo.core.exceptions import ValidationError
from campus_geo.core.ingress import deserialize_upload, load_feature_collection

COLLECTION = {"type": "FeatureCollection", "features": [{"type": "Feature"}]}


class TestDeserializeUpload:
    """Accepted body shapes."""

    def test_str(self) -> None:
        assert deserialize_upload(json.dumps(COLLECTION)) == COLLECTION

    def test_bytes(self) -> None:
        assert deserialize_upload(json.dumps(COLLECTION).encode("utf-8")) == COLLECTION

    def test_mapping_is_copied(self) -> None:
        result = deserialize_upload(COLLECTION)
        assert result == COLLECTION
        assert result is not COLLECTION

    def test_invalid_utf8(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            deserialize_upload(b"\xff\xfe{")
        assert exc_info.value.code == "INVALID_ENCODING"
        assert exc_info.value.stage == "ingress"

    def test_invalid_json(self) -> None:
        with pytest.raises(ValidationError, match="not valid JSON") as exc_info:
            deserialize_upload("{not json")
        assert exc_info.value.code == "INVALID_JSON"

    @pytest.mark.parametrize("body", ["[]", "42", '"text"', "null"])
    def test_json_not_an_object(self, body: str) -> None:
        with pytest.raises(ValidationError, match="must be an object") as exc_info:
            deserialize_upload(body)
        assert exc_info.value.code == "INVALID_INPUT_TYPE"

    @pytest.mark.parametrize("body", [None, 42, ["features"]])
    def test_unexpected_type(self, body: object) -> None:
        with pytest.raises(ValidationError, match="Unexpected upload type"):
            deserialize_upload(body)


class TestLoadFeatureCollection:
    """Top-level FeatureCollection shape."""

    def test_returns_features(self) -> None:
        assert load_feature_collection(COLLECTION) == [{"type": "Feature"}]

    def test_empty_features(self) -> None:
        assert load_feature_collection({"type": "FeatureCollection", "features": []}) == []

    def test_sample_export(self, buildings_geojson: str) -> None:
        assert len(load_feature_collection(buildings_geojson)) == 5

    @pytest.mark.parametrize(
        "payload",
        [
            {"features": []},
            {"type": "Feature", "features": []},
            {"type": "featurecollection", "features": []},
        ],
    )
    def test_wrong_type(self, payload: dict[str, object]) -> None:
        with pytest.raises(ValidationError, match="Expected FeatureCollection") as exc_info:
            load_feature_collection(payload)
        assert exc_info.value.code == "INVALID_FEATURE_COLLECTION"

    @pytest.mark.parametrize("features", [None, "abc", {"0": {}}])
    def test_features_not_a_list(self, features: object) -> None:
        with pytest.raises(ValidationError) as exc_info:
            load_feature_collection({"type": "FeatureCollection", "features": features})
        assert exc_info.value.code == "INVALID_FEATURE_COLLECTION"
