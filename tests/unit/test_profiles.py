"""Tests for per-kind import profiles and naming policies."""

from __future__ import annotations

import pytest

from campus_geo.ingest import (
    BOUNDARY_PROFILE,
    BUILDING_PROFILE,
    OPEN_SPACE_PROFILE,
    PATH_PROFILE,
    PROFILES,
    NamingMode,
    NamingPolicy,
    get_profile,
)


class TestNamingPolicy:
    """Generated names for unnamed features."""

    def test_error_policy_rejects(self) -> None:
        assert NamingPolicy.error().label_for(0) is None

    def test_auto_label_numbers_from_start(self) -> None:
        policy = NamingPolicy.auto_label("Path")
        assert [policy.label_for(i) for i in range(3)] == ["Path 1", "Path 2", "Path 3"]

    def test_auto_label_start(self) -> None:
        assert NamingPolicy.auto_label("Path", start=11).label_for(2) == "Path 13"

    def test_default_label_constant(self) -> None:
        policy = NamingPolicy.default_label("Unnamed Boundary")
        assert policy.label_for(0) == policy.label_for(9) == "Unnamed Boundary"

    @pytest.mark.parametrize("mode", [NamingMode.AUTO_LABEL, NamingMode.DEFAULT_LABEL])
    def test_label_required(self, mode: NamingMode) -> None:
        with pytest.raises(ValueError, match="requires a non-empty label"):
            NamingPolicy(mode=mode, label="  ")


class TestPresets:
    """Built-in profiles per entity kind."""

    def test_building_and_open_space_reject_unnamed(self) -> None:
        assert BUILDING_PROFILE.naming.mode is NamingMode.ERROR
        assert OPEN_SPACE_PROFILE.naming.mode is NamingMode.ERROR

    def test_path_auto_labels(self) -> None:
        assert PATH_PROFILE.naming.label_for(0) == "Path 1"

    def test_boundary_name_keys(self) -> None:
        assert BOUNDARY_PROFILE.name_keys == ("display name", "name", "displayName")
        assert BOUNDARY_PROFILE.naming.label_for(0) == "Unnamed Boundary"

    def test_with_start_returns_copy(self) -> None:
        shifted = PATH_PROFILE.with_start(4)
        assert shifted.naming.label_for(0) == "Path 4"
        assert PATH_PROFILE.naming.start == 1
        assert shifted.kind == "path"

    def test_registry(self) -> None:
        assert set(PROFILES) == {"building", "open-space", "path", "boundary"}
        assert get_profile("path") is PATH_PROFILE

    def test_unknown_kind(self) -> None:
        with pytest.raises(KeyError, match="No import profile"):
            get_profile("parking")
