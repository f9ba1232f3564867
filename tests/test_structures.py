"""Tests for house and shrine complex placement."""

import numpy as np
import pytest
from pydantic import ValidationError

from islandgen.config import StructureConfig
from islandgen.elevation import ElevationMap
from islandgen.structures import (
    Structure,
    StructureRole,
    place_houses,
    place_shrine_complex,
)
from islandgen.types import Point

ANCHOR = Point(x=100, y=100)


@pytest.fixture
def lone_cell() -> ElevationMap:
    """60x60 map where only the anchor cell (100, 100) is defined."""
    values = np.full((60, 60), np.nan)
    values[30, 30] = 0.4
    return ElevationMap(Point(x=70, y=70), values)


class TestStructure:
    """Tests for the Structure model."""

    def test_vertices(self) -> None:
        square = Structure(
            anchor=Point(x=0, y=0), sides=4, radius=1.0, rotation=0.0, role=StructureRole.HOUSE
        )
        corners = square.vertices()
        assert len(corners) == 4
        assert corners[0] == pytest.approx((1.0, 0.0))
        assert corners[1] == pytest.approx((0.0, 1.0))

    def test_needs_three_sides(self) -> None:
        with pytest.raises(ValidationError):
            Structure(
                anchor=Point(x=0, y=0),
                sides=2,
                radius=1.0,
                rotation=0.0,
                role=StructureRole.SHRINE_SATELLITE,
            )

    def test_role_values(self) -> None:
        assert StructureRole("shrine-primary") is StructureRole.SHRINE_PRIMARY


class TestPlaceHouses:
    """Tests for house placement."""

    def test_houses_on_ring(self, flat_elevation: ElevationMap) -> None:
        """Houses are squares 19-22 tiles from the anchor."""
        config = StructureConfig()
        for seed in range(20):
            houses = place_houses(ANCHOR, flat_elevation, np.random.default_rng(seed), config)
            assert 1 <= len(houses) <= 5
            for house in houses:
                assert house.role == StructureRole.HOUSE
                assert house.sides == 4
                assert house.anchor in flat_elevation
                distance = house.anchor.distance_to(ANCHOR)
                assert 19 - 1 <= distance <= 22 + 1
                assert 0.0 <= house.rotation < 360.0

    def test_off_island_candidates_skipped(self, lone_cell: ElevationMap) -> None:
        """No retry: candidates off the island just reduce the count."""
        houses = place_houses(ANCHOR, lone_cell, np.random.default_rng(4), StructureConfig())
        assert houses == []

    def test_fixed_count(self, flat_elevation: ElevationMap) -> None:
        config = StructureConfig(house_count_min=3, house_count_max=3)
        houses = place_houses(ANCHOR, flat_elevation, np.random.default_rng(0), config)
        assert len(houses) == 3

    def test_deterministic(self, flat_elevation: ElevationMap) -> None:
        config = StructureConfig()
        a = place_houses(ANCHOR, flat_elevation, np.random.default_rng(5), config)
        b = place_houses(ANCHOR, flat_elevation, np.random.default_rng(5), config)
        assert a == b


class TestPlaceShrineComplex:
    """Tests for shrine complex placement."""

    def test_complex_rules(self, flat_elevation: ElevationMap) -> None:
        """One primary at the anchor; satellites capped and never more-sided."""
        config = StructureConfig()
        for seed in range(40):
            rng = np.random.default_rng(seed)
            houses = place_houses(ANCHOR, flat_elevation, rng, config)
            complex_ = place_shrine_complex(ANCHOR, len(houses), flat_elevation, rng, config)

            primary, satellites = complex_[0], complex_[1:]
            assert primary.role == StructureRole.SHRINE_PRIMARY
            assert primary.anchor == ANCHOR
            assert 3 <= primary.sides <= 6

            assert len(satellites) <= min(3, len(houses))
            for satellite in satellites:
                assert satellite.role == StructureRole.SHRINE_SATELLITE
                assert 3 <= satellite.sides <= primary.sides
                assert satellite.anchor.distance_to(ANCHOR) == pytest.approx(12, abs=1)

    def test_no_houses_no_satellites(self, flat_elevation: ElevationMap) -> None:
        for seed in range(10):
            complex_ = place_shrine_complex(
                ANCHOR, 0, flat_elevation, np.random.default_rng(seed), StructureConfig()
            )
            assert len(complex_) == 1

    def test_off_island_satellites_skipped(self, lone_cell: ElevationMap) -> None:
        """Primary still placed; satellites off the island are dropped."""
        for seed in range(10):
            complex_ = place_shrine_complex(
                ANCHOR, 5, lone_cell, np.random.default_rng(seed), StructureConfig()
            )
            assert [s.role for s in complex_] == [StructureRole.SHRINE_PRIMARY]

    def test_satellite_cap(self, flat_elevation: ElevationMap) -> None:
        config = StructureConfig(satellite_max=1)
        for seed in range(10):
            complex_ = place_shrine_complex(
                ANCHOR, 5, flat_elevation, np.random.default_rng(seed), config
            )
            assert len(complex_) <= 2
