"""GeoJSON bulk import with duplicate detection and slug allocation.

Takes a FeatureCollection upload and writes one entity per feature to an
``EntityStore``, classifying every feature as imported, duplicate, or
failed.

Failure policy:
- Structural problems (not a FeatureCollection, unknown scope) raise
  before any feature is touched; no partial report is ever produced.
- Everything per feature (missing name, undecodable geometry, a store
  error) is caught and recorded in the report; one bad feature never
  aborts the batch.  Failures are reported under the feature's own name,
  or ``"Unknown"``, never under a generated label.

Duplicate detection compares geometry fingerprints against the store and
against fingerprints saved earlier in the same upload, so a file
containing the same shape twice imports it once.  A failed save stores
nothing, so its fingerprint and slug stay free for later features.

Features are classified in upload order.  With
``GeoConfig.import_max_workers`` above one, saves run on a bounded thread
pool while classification moves on; a feature whose outcome depends on an
unfinished save (same fingerprint, same slug family, or an auto-label
whose number depends on earlier outcomes) waits for the pending saves
first.  The report is therefore identical to a sequential run.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from campus_geo.core.config import GeoConfig
from campus_geo.core.constants import UNKNOWN_NAME
from campus_geo.core.exceptions import DecodeError, ScopeNotFoundError, SinkError
from campus_geo.core.ingress import load_feature_collection
from campus_geo.geometry import decode, explain_invalid, fingerprint
from campus_geo.ingest.profiles import NamingMode
from campus_geo.models.report import (
    Duplicate,
    Imported,
    ImportedEntity,
    ImportFailure,
    ImportRecord,
    ImportReport,
)
from campus_geo.utils.slugs import allocate, slugify

if TYPE_CHECKING:
    from concurrent.futures import Future

    from campus_geo.ingest.profiles import ImportProfile
    from campus_geo.store import EntityStore

logger = logging.getLogger("campus_geo.ingest")

MISSING_NAME_REASON = "Missing name"
UNKNOWN_ERROR_REASON = "Unknown error"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def run_import(
    collection: str | bytes | Mapping[str, Any],
    scope: str,
    store: EntityStore,
    *,
    profile: ImportProfile,
    config: GeoConfig | None = None,
    correlation_id: str = "",
) -> ImportReport:
    """Import a GeoJSON FeatureCollection into *scope*.

    Args:
        collection: The upload: raw JSON text/bytes or a parsed mapping.
        scope: Target scope (campus) identifier.
        store: Persistence adapter.
        profile: Entity-kind profile (naming policy, name keys).
        config: Library configuration (defaults to ``GeoConfig()``).
        correlation_id: Request identifier propagated to errors and logs.

    Returns:
        An ``ImportReport`` with one record per feature, in upload order.

    Raises:
        ValidationError: If the upload is not a FeatureCollection.
        ScopeNotFoundError: If *scope* does not exist.
    """
    config = config or GeoConfig()
    features = load_feature_collection(collection)

    if not store.scope_exists(scope):
        raise ScopeNotFoundError(scope, correlation_id=correlation_id)

    logger.info(
        "Import started | kind=%s | scope=%s | features=%d | workers=%d | correlation_id=%s",
        profile.kind,
        scope,
        len(features),
        config.import_max_workers,
        correlation_id,
    )

    batch = _ImportBatch(
        scope=scope,
        store=store,
        profile=profile,
        config=config,
        correlation_id=correlation_id,
    )
    if config.import_max_workers > 1:
        with ThreadPoolExecutor(
            max_workers=config.import_max_workers, thread_name_prefix="campus-geo"
        ) as pool:
            records = batch.run(features, pool)
    else:
        records = batch.run(features)

    report = ImportReport(records=tuple(records))
    logger.info(
        "Import finished | kind=%s | scope=%s | total=%d | imported=%d | duplicates=%d | "
        "errors=%d | correlation_id=%s",
        profile.kind,
        scope,
        report.total,
        report.imported_count,
        report.duplicate_count,
        report.error_count,
        correlation_id,
    )
    return report


# ---------------------------------------------------------------------------
# Batch state
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class _PendingSave:
    entity: ImportedEntity
    report_name: str
    future: Future[ImportRecord]


@dataclass(slots=True)
class _ImportBatch:
    """Per-run state: what this upload has saved so far and what is in flight.

    Attributes:
        counted: Features imported or reported as duplicates so far; drives
            the auto-label counter.
    """

    scope: str
    store: EntityStore
    profile: ImportProfile
    config: GeoConfig
    correlation_id: str = ""
    counted: int = 0
    saved_fingerprints: set[str] = field(default_factory=set)
    saved_slugs: set[str] = field(default_factory=set)
    records: dict[int, ImportRecord] = field(default_factory=dict)
    pending: dict[int, _PendingSave] = field(default_factory=dict)

    def run(
        self,
        features: list[Any],
        pool: ThreadPoolExecutor | None = None,
    ) -> list[ImportRecord]:
        """Process every feature and return the records in upload order."""
        for index, feature in enumerate(features):
            self._process(index, feature, pool)
        self._drain()
        return [self.records[index] for index in range(len(features))]

    # -- classification -----------------------------------------------------

    def _process(self, index: int, feature: object, pool: ThreadPoolExecutor | None) -> None:
        if not isinstance(feature, Mapping):
            msg = f"Feature must be an object, got {type(feature).__name__}"
            logger.warning(
                "Feature rejected | index=%d | scope=%s | reason=%s", index, self.scope, msg
            )
            self._record(ImportFailure(name=UNKNOWN_NAME, reason=msg, feature_index=index))
            return

        properties = feature.get("properties")
        if not isinstance(properties, Mapping):
            properties = {}

        own_name = _display_name(properties, self.profile.name_keys)
        report_name = own_name or UNKNOWN_NAME
        name = own_name
        if name is None:
            if self.profile.naming.mode is NamingMode.AUTO_LABEL:
                self._drain()
            name = self.profile.naming.label_for(self.counted)
            if name is None:
                logger.warning(
                    "Feature rejected | index=%d | scope=%s | reason=%s",
                    index,
                    self.scope,
                    MISSING_NAME_REASON,
                )
                self._record(
                    ImportFailure(
                        name=UNKNOWN_NAME, reason=MISSING_NAME_REASON, feature_index=index
                    )
                )
                return

        try:
            geometry = decode(feature.get("geometry"))
        except DecodeError as exc:
            logger.warning(
                "Feature rejected | index=%d | name=%s | code=%s | reason=%s",
                index,
                name,
                exc.code,
                exc.reason,
            )
            self._record(
                ImportFailure(
                    name=report_name, reason=exc.reason, feature_index=index, code=exc.code
                )
            )
            return

        problem = explain_invalid(geometry)
        if problem:
            logger.warning("Invalid polygon topology | name=%s | detail=%s", name, problem)

        key = fingerprint(geometry, precision=self.config.fingerprint_precision)
        if any(p.entity.fingerprint == key for p in self.pending.values()):
            self._drain()

        try:
            if key in self.saved_fingerprints or self.store.fingerprint_exists(self.scope, key):
                logger.debug("Duplicate geometry | index=%d | name=%s", index, name)
                self._record(Duplicate(name=name, feature_index=index))
                return
            base = slugify(name) or slugify(self.profile.kind)
            if any(_in_slug_family(p.entity.slug, base) for p in self.pending.values()):
                self._drain()
            slug = allocate(name, self.scope, self._slug_taken, fallback=self.profile.kind)
        except Exception as exc:
            self._record(_sink_failure(report_name, index, exc, self.correlation_id))
            return

        entity = ImportedEntity(
            name=name,
            slug=slug,
            scope=self.scope,
            geometry=geometry,
            fingerprint=key,
            kind=self.profile.kind,
            description=_description(properties),
            properties={k: v for k, v in properties.items() if k not in self.profile.name_keys},
            feature_index=index,
        )
        if pool is None:
            self._finish(entity, self._save(entity, report_name))
        else:
            future = pool.submit(self._save, entity, report_name)
            self.pending[index] = _PendingSave(entity, report_name, future)

    def _slug_taken(self, slug: str) -> bool:
        return (
            slug in self.saved_slugs
            or any(p.entity.slug == slug for p in self.pending.values())
            or self.store.slug_exists(self.scope, slug)
        )

    # -- writing ------------------------------------------------------------

    def _save(self, entity: ImportedEntity, report_name: str) -> ImportRecord:
        try:
            self.store.save(entity)
        except Exception as exc:
            return _sink_failure(report_name, entity.feature_index, exc, self.correlation_id)
        return Imported(
            name=entity.name,
            slug=entity.slug,
            fingerprint=entity.fingerprint,
            feature_index=entity.feature_index,
        )

    def _finish(self, entity: ImportedEntity, record: ImportRecord) -> None:
        if isinstance(record, Imported):
            self.saved_fingerprints.add(entity.fingerprint)
            self.saved_slugs.add(entity.slug)
        self._record(record)

    def _drain(self) -> None:
        """Wait for every in-flight save and fold its outcome into the batch."""
        for index in sorted(self.pending):
            pending = self.pending[index]
            self._finish(pending.entity, pending.future.result())
        self.pending.clear()

    def _record(self, record: ImportRecord) -> None:
        if isinstance(record, Imported | Duplicate):
            self.counted += 1
        self.records[record.feature_index] = record


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _sink_failure(
    name: str,
    index: int,
    exc: Exception,
    correlation_id: str = "",
) -> ImportFailure:
    reason = str(exc) or UNKNOWN_ERROR_REASON
    error = SinkError(name, reason, correlation_id=correlation_id)
    logger.warning(
        "Store failure | index=%d | name=%s | error=%s | detail=%s",
        index,
        name,
        type(exc).__name__,
        error.to_error_dict(),
    )
    return ImportFailure(name=name, reason=reason, feature_index=index, code=error.code)


def _in_slug_family(slug: str, base: str) -> bool:
    """``True`` if *slug* is *base* or one of its ``base-N`` variants."""
    return slug == base or slug.startswith(f"{base}-")


def _display_name(properties: Mapping[str, Any], keys: tuple[str, ...]) -> str | None:
    """Return the first non-blank name found under *keys*."""
    for key in keys:
        value = properties.get(key)
        if isinstance(value, bool) or not isinstance(value, str | int | float):
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def _description(properties: Mapping[str, Any]) -> str:
    fid = properties.get("fid")
    label = "N/A" if fid is None or fid == "" else fid
    return f"Imported from GeoJSON (FID: {label})"
