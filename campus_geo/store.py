"""EntityStore abstract base class.

Defines the contract the import pipeline uses to reach persistence.  The
pipeline interacts exclusively with this interface; it never knows which
database (if any) is behind it.

Lifecycle of one import:
    1. ``scope_exists(scope)``               : once, before any feature.
    2. ``fingerprint_exists(scope, fp)``     : per feature, duplicate check.
    3. ``slug_exists(scope, slug)``          : per accepted feature, may repeat.
    4. ``save(entity)``                      : per accepted feature.

Any ``Exception`` raised by 2-4 is recorded against the one feature being
processed; it never aborts the batch.  Cancellation signals that derive
from ``BaseException`` only are not caught.

Example usage::

    store = InMemoryStore(scopes={"main-campus"})
    report = run_import(upload, "main-campus", store, profile=BUILDING_PROFILE)
"""

from __future__ import annotations

import abc
import threading
from collections import defaultdict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from campus_geo.models.report import ImportedEntity


class EntityStore(abc.ABC):
    """Abstract base class for entity persistence adapters."""

    @abc.abstractmethod
    def scope_exists(self, scope: str) -> bool:
        """Return ``True`` if *scope* (a campus id) exists."""

    @abc.abstractmethod
    def fingerprint_exists(self, scope: str, fingerprint: str) -> bool:
        """Return ``True`` if an entity with this geometry fingerprint exists in *scope*."""

    @abc.abstractmethod
    def slug_exists(self, scope: str, slug: str) -> bool:
        """Return ``True`` if *slug* is taken in *scope*."""

    @abc.abstractmethod
    def save(self, entity: ImportedEntity) -> None:
        """Persist one accepted entity.

        Raises:
            Exception: Any failure; the pipeline records it for this entity.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class InMemoryStore(EntityStore):
    """Thread-safe, dict-backed store.

    Useful for tests, previews ("what would this upload do?") and callers
    prototyping without a database.

    Args:
        scopes: Scope identifiers that exist.  Saving into an unknown
            scope is allowed; only ``scope_exists`` consults this set.
    """

    def __init__(self, scopes: Iterable[str] = ()) -> None:
        self._scopes: set[str] = set(scopes)
        self._entities: dict[str, list[ImportedEntity]] = defaultdict(list)
        self._fingerprints: dict[str, set[str]] = defaultdict(set)
        self._slugs: dict[str, set[str]] = defaultdict(set)
        self._lock = threading.Lock()

    def add_scope(self, scope: str) -> None:
        with self._lock:
            self._scopes.add(scope)

    def scope_exists(self, scope: str) -> bool:
        with self._lock:
            return scope in self._scopes

    def fingerprint_exists(self, scope: str, fingerprint: str) -> bool:
        with self._lock:
            return fingerprint in self._fingerprints[scope]

    def slug_exists(self, scope: str, slug: str) -> bool:
        with self._lock:
            return slug in self._slugs[scope]

    def save(self, entity: ImportedEntity) -> None:
        with self._lock:
            if entity.slug in self._slugs[entity.scope]:
                msg = f"Slug {entity.slug!r} already exists in scope {entity.scope!r}"
                raise ValueError(msg)
            self._entities[entity.scope].append(entity)
            self._fingerprints[entity.scope].add(entity.fingerprint)
            self._slugs[entity.scope].add(entity.slug)

    def entities(self, scope: str) -> list[ImportedEntity]:
        """Return the entities saved into *scope*, in save order."""
        with self._lock:
            return list(self._entities[scope])

    def __repr__(self) -> str:
        return f"InMemoryStore(scopes={sorted(self._scopes)!r})"
