"""Import records and the aggregate import report.

Each feature in an upload produces exactly one ``ImportRecord``:

- ``Imported``: the feature was written to the store.
- ``Duplicate``: its geometry fingerprint already existed (in the store or
  earlier in the same upload).
- ``ImportFailure``: it could not be imported; ``reason`` says why.

``ImportReport`` aggregates the records of one run.  Its wire form is
produced through the pydantic ``ImportReportPayload`` model so the JSON
shape returned to the admin UI stays stable:

    {"total": 3, "imported": 2, "duplicates": 1, "errors": 0,
     "details": {"imported": [...], "duplicates": [...], "errors": [...]}}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from campus_geo.models.geometry import CanonicalGeometry


# ---------------------------------------------------------------------------
# Per-feature records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Imported:
    """A feature that was accepted and written to the store."""

    name: str
    slug: str
    fingerprint: str
    feature_index: int = 0


@dataclass(frozen=True, slots=True)
class Duplicate:
    """A feature whose geometry already exists in the target scope."""

    name: str
    feature_index: int = 0


@dataclass(frozen=True, slots=True)
class ImportFailure:
    """A feature that could not be imported.

    Attributes:
        name: Display name, or ``"Unknown"`` when none could be determined.
        reason: Human-readable failure reason.
        code: Machine-readable code of the underlying error, if known.
    """

    name: str
    reason: str
    feature_index: int = 0
    code: str = ""


ImportRecord = Imported | Duplicate | ImportFailure


@dataclass(frozen=True, slots=True)
class ImportedEntity:
    """The record handed to ``EntityStore.save`` for an accepted feature.

    Attributes:
        name: Display name (possibly generated by the naming policy).
        slug: URL-safe identifier, unique within ``scope``.
        scope: Scope (campus) identifier.
        geometry: Decoded canonical geometry.
        fingerprint: Duplicate-detection key; stores persist it so later
            imports can find it.
        kind: Entity kind (``"building"``, ``"path"``...).
        description: Provenance note, ``"Imported from GeoJSON (FID: ...)"``.
        properties: Remaining feature properties (name keys removed).
        feature_index: Zero-based index of the feature in the upload.
    """

    name: str
    slug: str
    scope: str
    geometry: CanonicalGeometry
    fingerprint: str
    kind: str = ""
    description: str = ""
    properties: dict[str, Any] = field(default_factory=dict)
    feature_index: int = 0


# ---------------------------------------------------------------------------
# Wire payload
# ---------------------------------------------------------------------------


class ImportErrorDetail(BaseModel):
    """One entry of ``details.errors``."""

    name: str
    error: str


class ImportDetails(BaseModel):
    """Names grouped by outcome, in upload order."""

    imported: list[str] = Field(default_factory=list)
    duplicates: list[str] = Field(default_factory=list)
    errors: list[ImportErrorDetail] = Field(default_factory=list)


class ImportReportPayload(BaseModel):
    """Serialised import report returned to API clients."""

    total: int = 0
    imported: int = 0
    duplicates: int = 0
    errors: int = 0
    details: ImportDetails = Field(default_factory=ImportDetails)


# ---------------------------------------------------------------------------
# Aggregate report
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ImportReport:
    """Outcome of one import run.

    Counts are derived from ``records`` so that
    ``imported_count + duplicate_count + error_count == total`` holds by
    construction.
    """

    records: tuple[ImportRecord, ...] = ()

    @property
    def total(self) -> int:
        return len(self.records)

    @property
    def imported(self) -> list[str]:
        return [r.name for r in self.records if isinstance(r, Imported)]

    @property
    def duplicates(self) -> list[str]:
        return [r.name for r in self.records if isinstance(r, Duplicate)]

    @property
    def errors(self) -> list[ImportFailure]:
        return [r for r in self.records if isinstance(r, ImportFailure)]

    @property
    def imported_count(self) -> int:
        return len(self.imported)

    @property
    def duplicate_count(self) -> int:
        return len(self.duplicates)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def to_payload(self) -> ImportReportPayload:
        return ImportReportPayload(
            total=self.total,
            imported=self.imported_count,
            duplicates=self.duplicate_count,
            errors=self.error_count,
            details=ImportDetails(
                imported=self.imported,
                duplicates=self.duplicates,
                errors=[ImportErrorDetail(name=e.name, error=e.reason) for e in self.errors],
            ),
        )

    def to_dict(self) -> dict[str, object]:
        """Serialise to the API wire format."""
        return self.to_payload().model_dump()
