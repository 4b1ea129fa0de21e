"""Per-entity-kind import profiles.

Entity kinds disagree on what a feature without a name means:

- buildings and open spaces reject it (``"Missing name"``);
- paths get a generated ``"Path N"`` label, since GIS exports of walkways
  are routinely unnamed;
- boundaries fall back to a fixed ``"Unnamed Boundary"`` label and read
  their name from ``display name`` first.

These behaviours are kept apart on purpose and passed to the pipeline
explicitly; there is no default policy.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class NamingMode(enum.Enum):
    """What to do with a feature that has no display name."""

    ERROR = "error"
    AUTO_LABEL = "auto_label"
    DEFAULT_LABEL = "default_label"


@dataclass(frozen=True, slots=True)
class NamingPolicy:
    """Missing-name policy.

    Attributes:
        mode: The policy mode.
        label: Prefix for ``AUTO_LABEL`` (``"Path"`` → ``"Path 3"``) or the
            fixed label for ``DEFAULT_LABEL``.
        start: First number used by ``AUTO_LABEL``.  Callers importing into
            a scope that already holds N entities pass ``N + 1``.
    """

    mode: NamingMode
    label: str = ""
    start: int = 1

    def __post_init__(self) -> None:
        if self.mode is not NamingMode.ERROR and not self.label.strip():
            msg = f"NamingPolicy mode {self.mode.value} requires a non-empty label"
            raise ValueError(msg)

    @classmethod
    def error(cls) -> NamingPolicy:
        return cls(mode=NamingMode.ERROR)

    @classmethod
    def auto_label(cls, prefix: str, *, start: int = 1) -> NamingPolicy:
        return cls(mode=NamingMode.AUTO_LABEL, label=prefix, start=start)

    @classmethod
    def default_label(cls, label: str) -> NamingPolicy:
        return cls(mode=NamingMode.DEFAULT_LABEL, label=label)

    def label_for(self, counted: int) -> str | None:
        """Return the generated name for an unnamed feature, or ``None`` to reject it.

        Args:
            counted: Features of this run already imported or reported as
                duplicates.  Rejected features do not advance the
                ``AUTO_LABEL`` counter.
        """
        if self.mode is NamingMode.AUTO_LABEL:
            return f"{self.label} {self.start + counted}"
        if self.mode is NamingMode.DEFAULT_LABEL:
            return self.label
        return None


@dataclass(frozen=True, slots=True)
class ImportProfile:
    """How features of one entity kind are named and labelled.

    Attributes:
        kind: Entity kind, also the slug fallback for unsluggable names.
        naming: Missing-name policy.
        name_keys: Feature property keys searched for the display name,
            in order.
    """

    kind: str
    naming: NamingPolicy
    name_keys: tuple[str, ...] = ("name",)

    def with_start(self, start: int) -> ImportProfile:
        """Return a copy whose auto-label counter starts at *start*."""
        naming = NamingPolicy(mode=self.naming.mode, label=self.naming.label, start=start)
        return ImportProfile(kind=self.kind, naming=naming, name_keys=self.name_keys)


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

BUILDING_PROFILE = ImportProfile(kind="building", naming=NamingPolicy.error())
OPEN_SPACE_PROFILE = ImportProfile(kind="open-space", naming=NamingPolicy.error())
PATH_PROFILE = ImportProfile(kind="path", naming=NamingPolicy.auto_label("Path"))
BOUNDARY_PROFILE = ImportProfile(
    kind="boundary",
    naming=NamingPolicy.default_label("Unnamed Boundary"),
    name_keys=("display name", "name", "displayName"),
)

PROFILES: dict[str, ImportProfile] = {
    p.kind: p for p in (BUILDING_PROFILE, OPEN_SPACE_PROFILE, PATH_PROFILE, BOUNDARY_PROFILE)
}


def get_profile(kind: str) -> ImportProfile:
    """Look up a preset profile by entity kind.

    Raises:
        KeyError: If *kind* has no preset.
    """
    try:
        return PROFILES[kind]
    except KeyError:
        msg = f"No import profile for entity kind {kind!r}; known: {', '.join(sorted(PROFILES))}"
        raise KeyError(msg) from None
