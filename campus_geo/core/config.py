"""Library configuration loaded from environment variables.

All values have defaults matching the behaviour of the existing map and
import surfaces; the environment only needs to be set to override them.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out of
    its valid range, so a bad deployment fails at startup rather than on
    the first import.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from campus_geo.core.constants import (
    DEFAULT_FINGERPRINT_PRECISION,
    DEFAULT_SEARCH_RESULT_LIMIT,
    EARTH_RADIUS_KM,
)
from campus_geo.core.exceptions import GeoError

#: Centroid strategies understood by ``campus_geo.geometry.centroid``.
CENTROID_STRATEGIES = frozenset({"vertex_mean", "area"})

#: Largest precision that still round-trips through a float.
MAX_FINGERPRINT_PRECISION = 15


class ConfigValidationError(GeoError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class GeoConfig:
    """Immutable library configuration.

    Attributes:
        fingerprint_precision: Decimal places kept when fingerprinting.
        earth_radius_km: Sphere radius used for Haversine distances.
        search_result_limit: Default number of results returned by ``search``.
        import_max_workers: Worker threads used for store writes during an
            import (``1`` writes sequentially).
        centroid_strategy: ``"vertex_mean"`` or ``"area"``.
    """

    fingerprint_precision: int = DEFAULT_FINGERPRINT_PRECISION
    earth_radius_km: float = EARTH_RADIUS_KM
    search_result_limit: int = DEFAULT_SEARCH_RESULT_LIMIT
    import_max_workers: int = 1
    centroid_strategy: str = "vertex_mean"

    @classmethod
    def from_env(cls) -> GeoConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``CAMPUS_GEO_EARTH_RADIUS_KM=abc``).
        """
        config = cls(
            fingerprint_precision=int(
                os.getenv("CAMPUS_GEO_FINGERPRINT_PRECISION", str(DEFAULT_FINGERPRINT_PRECISION))
            ),
            earth_radius_km=float(os.getenv("CAMPUS_GEO_EARTH_RADIUS_KM", str(EARTH_RADIUS_KM))),
            search_result_limit=int(
                os.getenv("CAMPUS_GEO_SEARCH_RESULT_LIMIT", str(DEFAULT_SEARCH_RESULT_LIMIT))
            ),
            import_max_workers=int(os.getenv("CAMPUS_GEO_IMPORT_MAX_WORKERS", "1")),
            centroid_strategy=os.getenv("CAMPUS_GEO_CENTROID_STRATEGY", "vertex_mean"),
        )
        _validate(config)
        return config


def _validate(config: GeoConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not 0 <= config.fingerprint_precision <= MAX_FINGERPRINT_PRECISION:
        raise ConfigValidationError(
            "CAMPUS_GEO_FINGERPRINT_PRECISION",
            config.fingerprint_precision,
            f"must be between 0 and {MAX_FINGERPRINT_PRECISION} (decimal places)",
        )

    if config.earth_radius_km <= 0:
        raise ConfigValidationError(
            "CAMPUS_GEO_EARTH_RADIUS_KM",
            config.earth_radius_km,
            "must be > 0 (kilometres)",
        )

    if config.search_result_limit < 1:
        raise ConfigValidationError(
            "CAMPUS_GEO_SEARCH_RESULT_LIMIT",
            config.search_result_limit,
            "must be >= 1",
        )

    if config.import_max_workers < 1:
        raise ConfigValidationError(
            "CAMPUS_GEO_IMPORT_MAX_WORKERS",
            config.import_max_workers,
            "must be >= 1",
        )

    if config.centroid_strategy not in CENTROID_STRATEGIES:
        raise ConfigValidationError(
            "CAMPUS_GEO_CENTROID_STRATEGY",
            config.centroid_strategy,
            f"must be one of {', '.join(sorted(CENTROID_STRATEGIES))}",
        )
