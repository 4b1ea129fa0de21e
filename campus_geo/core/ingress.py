"""Ingress boundary helpers for raw import uploads.

An upload reaches the library either as the raw request body (``str`` or
``bytes``) or as an object an HTTP framework already parsed.  This module
normalises both into a plain dict and checks the FeatureCollection shape
before any feature is processed, so structural problems fail the whole
call and never produce a partial report.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from campus_geo.core.constants import FEATURE_COLLECTION
from campus_geo.core.exceptions import ValidationError

logger = logging.getLogger("campus_geo.core.ingress")


def deserialize_upload(raw: str | bytes | Mapping[str, Any] | object) -> dict[str, Any]:
    """Normalise an upload body to a plain dict.

    Args:
        raw: JSON text, UTF-8 bytes, or an already-parsed mapping.

    Returns:
        Parsed dict payload.

    Raises:
        ValidationError: If *raw* is not JSON, not an object, or of an
            unexpected type.
    """
    if isinstance(raw, bytes | bytearray):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"Upload is not valid UTF-8: {exc}"
            raise ValidationError(msg, stage="ingress", code="INVALID_ENCODING") from exc
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except (json.JSONDecodeError, ValueError) as exc:
            msg = f"Upload is not valid JSON: {exc}"
            raise ValidationError(msg, stage="ingress", code="INVALID_JSON") from exc
        if not isinstance(parsed, dict):
            msg = f"Upload JSON must be an object, got {type(parsed).__name__}"
            raise ValidationError(msg, stage="ingress", code="INVALID_INPUT_TYPE")
        return parsed
    if isinstance(raw, Mapping):
        return dict(raw)
    msg = f"Unexpected upload type: {type(raw).__name__}"
    raise ValidationError(msg, stage="ingress", code="INVALID_INPUT_TYPE")


def load_feature_collection(raw: str | bytes | Mapping[str, Any] | object) -> list[Any]:
    """Validate a GeoJSON FeatureCollection and return its features.

    Only the top-level shape is checked here; individual features are
    validated (and may fail in isolation) by the import pipeline.

    Raises:
        ValidationError: If the payload is not a FeatureCollection with a
            ``features`` list.
    """
    payload = deserialize_upload(raw)

    if payload.get("type") != FEATURE_COLLECTION:
        msg = "Invalid GeoJSON format. Expected FeatureCollection."
        raise ValidationError(msg, code="INVALID_FEATURE_COLLECTION")

    features = payload.get("features")
    if not isinstance(features, list | tuple):
        msg = (
            "Invalid GeoJSON format. FeatureCollection.features must be a list, "
            f"got {type(features).__name__}"
        )
        raise ValidationError(msg, code="INVALID_FEATURE_COLLECTION")

    logger.debug("Loaded FeatureCollection | features=%d", len(features))
    return list(features)
