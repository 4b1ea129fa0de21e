"""Tests for library configuration.

Covers:
- Default values
- Loading from environment variables
- Type coercion (string env vars to numeric fields)
- Fail-fast range validation
"""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from campus_geo.core.config import ConfigValidationError, GeoConfig
from campus_geo.core.exceptions import GeoError

_ENV_KEYS = (
    "CAMPUS_GEO_FINGERPRINT_PRECISION",
    "CAMPUS_GEO_EARTH_RADIUS_KM",
    "CAMPUS_GEO_SEARCH_RESULT_LIMIT",
    "CAMPUS_GEO_IMPORT_MAX_WORKERS",
    "CAMPUS_GEO_CENTROID_STRATEGY",
)


def _clean_env() -> dict[str, str]:
    return {k: v for k, v in os.environ.items() if k not in _ENV_KEYS}


class TestGeoConfigDefaults:
    """Verify default configuration values."""

    def test_default_precision(self) -> None:
        assert GeoConfig().fingerprint_precision == 7

    def test_default_earth_radius(self) -> None:
        assert GeoConfig().earth_radius_km == 6371.0

    def test_default_search_limit(self) -> None:
        assert GeoConfig().search_result_limit == 5

    def test_default_workers(self) -> None:
        assert GeoConfig().import_max_workers == 1

    def test_default_centroid_strategy(self) -> None:
        assert GeoConfig().centroid_strategy == "vertex_mean"

    def test_frozen(self) -> None:
        cfg = GeoConfig()
        with pytest.raises(AttributeError):
            cfg.search_result_limit = 10  # type: ignore[misc]


class TestGeoConfigFromEnv:
    """Verify loading from environment variables."""

    def test_loads_from_environment(self) -> None:
        env = {
            "CAMPUS_GEO_FINGERPRINT_PRECISION": "5",
            "CAMPUS_GEO_EARTH_RADIUS_KM": "6378.137",
            "CAMPUS_GEO_SEARCH_RESULT_LIMIT": "10",
            "CAMPUS_GEO_IMPORT_MAX_WORKERS": "4",
            "CAMPUS_GEO_CENTROID_STRATEGY": "area",
        }
        with patch.dict(os.environ, env, clear=False):
            cfg = GeoConfig.from_env()

        assert cfg.fingerprint_precision == 5
        assert cfg.earth_radius_km == 6378.137
        assert cfg.search_result_limit == 10
        assert cfg.import_max_workers == 4
        assert cfg.centroid_strategy == "area"

    def test_defaults_when_env_missing(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            cfg = GeoConfig.from_env()
        assert cfg == GeoConfig()

    def test_unparseable_number(self) -> None:
        with (
            patch.dict(os.environ, {"CAMPUS_GEO_EARTH_RADIUS_KM": "abc"}, clear=False),
            pytest.raises(ValueError),
        ):
            GeoConfig.from_env()


class TestGeoConfigValidation:
    """Out-of-range values fail at load time."""

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("CAMPUS_GEO_FINGERPRINT_PRECISION", "-1"),
            ("CAMPUS_GEO_FINGERPRINT_PRECISION", "16"),
            ("CAMPUS_GEO_EARTH_RADIUS_KM", "0"),
            ("CAMPUS_GEO_EARTH_RADIUS_KM", "-6371"),
            ("CAMPUS_GEO_SEARCH_RESULT_LIMIT", "0"),
            ("CAMPUS_GEO_IMPORT_MAX_WORKERS", "0"),
            ("CAMPUS_GEO_CENTROID_STRATEGY", "median"),
        ],
    )
    def test_rejects_out_of_range(self, key: str, value: str) -> None:
        with (
            patch.dict(os.environ, {key: value}, clear=False),
            pytest.raises(ConfigValidationError) as exc_info,
        ):
            GeoConfig.from_env()
        assert exc_info.value.key == key

    @pytest.mark.parametrize("precision", ["0", "15"])
    def test_precision_bounds_inclusive(self, precision: str) -> None:
        env = {"CAMPUS_GEO_FINGERPRINT_PRECISION": precision}
        with patch.dict(os.environ, env, clear=False):
            cfg = GeoConfig.from_env()
        assert cfg.fingerprint_precision == int(precision)

    def test_error_is_structured(self) -> None:
        env = {"CAMPUS_GEO_SEARCH_RESULT_LIMIT": "0"}
        with patch.dict(os.environ, env, clear=False), pytest.raises(GeoError) as exc_info:
            GeoConfig.from_env()
        err = exc_info.value
        assert err.code == "CONFIG_VALIDATION_FAILED"
        assert err.stage == "config"
        assert "CAMPUS_GEO_SEARCH_RESULT_LIMIT=0" in str(err)
        assert err.to_error_dict()["category"] == "permanent"
