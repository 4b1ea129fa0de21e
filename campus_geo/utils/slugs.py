"""URL-safe slug derivation with per-scope collision resolution.

``allocate`` never talks to a store: the caller injects an ``exists``
predicate bound to the target scope (campus).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

logger = logging.getLogger("campus_geo.utils.slugs")

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def slugify(display_name: str) -> str:
    """Lowercase, collapse non-alphanumeric runs to ``-``, trim hyphens.

    >>> slugify("  Main Library (North Wing) ")
    'main-library-north-wing'
    """
    return _NON_ALPHANUMERIC.sub("-", display_name.lower()).strip("-")


def allocate(
    display_name: str,
    scope: str,
    exists: Callable[[str], bool],
    *,
    fallback: str | None = None,
) -> str:
    """Return a slug for *display_name* that is unused within *scope*.

    Tries the base slug, then ``base-1``, ``base-2``, ... until ``exists``
    returns ``False``.

    Args:
        display_name: Human-readable name to derive the slug from.
        scope: Scope identifier the ``exists`` predicate is bound to.
        exists: Returns ``True`` if a slug is already taken in *scope*.
        fallback: Name to slugify when *display_name* yields an empty slug
            (e.g. a name with no ASCII letters or digits).

    Raises:
        ValueError: If neither *display_name* nor *fallback* yields a
            non-empty slug.
    """
    base = slugify(display_name)
    if not base and fallback is not None:
        base = slugify(fallback)
    if not base:
        msg = f"Cannot derive a slug from {display_name!r} and no fallback was given"
        raise ValueError(msg)

    slug = base
    counter = 1
    while exists(slug):
        slug = f"{base}-{counter}"
        counter += 1

    if slug != base:
        logger.debug("Slug collision resolved | scope=%s | base=%s | slug=%s", scope, base, slug)
    return slug
