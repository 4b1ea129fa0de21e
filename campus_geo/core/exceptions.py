"""Unified exception taxonomy.

Every domain exception inherits from ``GeoError`` and carries structured
context fields so that callers (an HTTP layer, a CLI, a test) can decide
how to surface a failure without parsing message strings.

Taxonomy categories
-------------------
- ``ValidationError``:     structural input malformed, fatal to the call.
- ``ScopeNotFoundError``:  the target scope (campus) does not exist, fatal.
- ``DecodeError``:         one geometry could not be decoded, isolated.
- ``SinkError``:           the store failed for one record, isolated.

Only the first two ever escape ``run_import``; the last two are folded
into the import report.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging and API responses.
"""

from __future__ import annotations


class GeoError(Exception):
    """Base exception for all campus-geo errors.

    Attributes:
        message: Human-readable error description.
        stage: Component where the error occurred
            (e.g. ``"decode"``, ``"import"``).
        code: Machine-readable error code (e.g. ``"SCOPE_NOT_FOUND"``).
        retryable: Whether repeating the operation may succeed.
        correlation_id: Request correlation identifier, if any.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.correlation_id = correlation_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ScopeNotFoundError):
            return "scope"
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, DecodeError):
            return "decode"
        if isinstance(self, SinkError):
            return "sink"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "correlation_id": self.correlation_id,
        }


# ---------------------------------------------------------------------------
# Fatal (whole-call) errors
# ---------------------------------------------------------------------------


class ValidationError(GeoError):
    """Structural input failure. Never retryable."""

    default_stage = "import"
    default_code = "VALIDATION_FAILED"

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ScopeNotFoundError(ValidationError):
    """Raised when the target scope (campus) does not exist.

    Attributes:
        scope: The scope identifier that was looked up.
    """

    default_code = "SCOPE_NOT_FOUND"

    def __init__(self, scope: str, **kwargs: object) -> None:
        self.scope = scope
        super().__init__(f"Campus with ID {scope} not found", **kwargs)


# ---------------------------------------------------------------------------
# Per-feature (isolated) errors
# ---------------------------------------------------------------------------


class DecodeError(GeoError):
    """A coordinate source could not be decoded into a geometry."""

    default_stage = "decode"
    default_code = "GEOMETRY_DECODE_FAILED"

    @property
    def reason(self) -> str:
        """Human-readable reason recorded in import reports."""
        return self.message


class UnparseableGeometryError(DecodeError):
    """A string coordinate source is not valid JSON."""

    default_code = "GEOMETRY_UNPARSEABLE"


class UnsupportedGeometryTypeError(DecodeError):
    """A geometry ``type`` is not Point, LineString, Polygon or MultiPolygon."""

    default_code = "GEOMETRY_UNSUPPORTED_TYPE"


class MissingCoordinatesError(DecodeError):
    """No coordinate source matched any accepted shape."""

    default_code = "GEOMETRY_MISSING_COORDINATES"


class InvalidCoordinateError(DecodeError):
    """A position is malformed, non-finite, or outside WGS 84 bounds."""

    default_code = "GEOMETRY_INVALID_COORDINATE"


class SinkError(GeoError):
    """The entity store failed while handling one record.

    Attributes:
        name: Display name of the record being written.
    """

    default_stage = "import"
    default_code = "SINK_FAILED"

    def __init__(self, name: str, message: str = "", **kwargs: object) -> None:
        self.name = name
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]
