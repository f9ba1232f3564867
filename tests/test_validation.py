"""Tests for post-generation validation."""

import dataclasses

from islandgen.builder import Island
from islandgen.castaway import CastawayMarker
from islandgen.config import IslandConfig
from islandgen.structures import Structure, StructureRole
from islandgen.types import Point
from islandgen.validation import ValidationResult, validate_island


def shrine(anchor: Point, sides: int, role: StructureRole) -> Structure:
    return Structure(anchor=anchor, sides=sides, radius=3.0, rotation=0.0, role=role)


class TestValidationResult:
    """Tests for ValidationResult bookkeeping."""

    def test_starts_passed(self) -> None:
        result = ValidationResult()
        assert result.passed
        assert result.errors == []

    def test_error_fails(self) -> None:
        result = ValidationResult()
        result.add_error("broken")
        assert not result.passed
        assert result.errors == ["broken"]

    def test_warning_keeps_passed(self) -> None:
        result = ValidationResult()
        result.add_warning("odd")
        assert result.passed
        assert result.warnings == ["odd"]


class TestValidateIsland:
    """Tests for island validation checks."""

    def test_generated_island_passes(
        self, full_island: Island, full_config: IslandConfig
    ) -> None:
        result = validate_island(full_island, full_config)
        assert result.passed, result.errors
        assert not any("steepness" in w for w in result.warnings)

    def test_structure_off_island(self, full_island: Island, full_config: IslandConfig) -> None:
        stray = shrine(Point(x=-1000, y=-1000), 4, StructureRole.HOUSE)
        island = dataclasses.replace(
            full_island, structures=full_island.structures + (stray,)
        )
        result = validate_island(island, full_config)
        assert not result.passed
        assert any("off the island" in e for e in result.errors)

    def test_satellites_exceed_houses(
        self, full_island: Island, full_config: IslandConfig
    ) -> None:
        anchor = full_island.settlement.anchor
        island = dataclasses.replace(
            full_island,
            structures=(
                shrine(anchor, 5, StructureRole.SHRINE_PRIMARY),
                shrine(anchor, 3, StructureRole.SHRINE_SATELLITE),
            ),
        )
        result = validate_island(island, full_config)
        assert any("exceed" in e for e in result.errors)

    def test_satellite_more_sides_than_primary(
        self, full_island: Island, full_config: IslandConfig
    ) -> None:
        anchor = full_island.settlement.anchor
        island = dataclasses.replace(
            full_island,
            structures=(
                shrine(anchor, 4, StructureRole.HOUSE),
                shrine(anchor, 3, StructureRole.SHRINE_PRIMARY),
                shrine(anchor, 5, StructureRole.SHRINE_SATELLITE),
            ),
        )
        result = validate_island(island, full_config)
        assert any("more sides" in e for e in result.errors)

    def test_marker_outside_band(self, full_island: Island, full_config: IslandConfig) -> None:
        """A marker on the outline has zero elevation."""
        coast = full_island.border.points[0]
        island = dataclasses.replace(
            full_island,
            marker=CastawayMarker(location=coast, orientation=0.0, coast=coast),
        )
        result = validate_island(island, full_config)
        assert any("Marker elevation" in e for e in result.errors)

    def test_marker_too_close(self, full_island: Island, full_config: IslandConfig) -> None:
        marker = full_island.marker
        close = full_island.settlement.model_copy(update={"anchor": marker.location})
        island = dataclasses.replace(full_island, settlement=close)
        result = validate_island(island, full_config)
        assert any("from settlement" in e for e in result.errors)
