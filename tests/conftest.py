"""Shared test fixtures for island generation tests."""

from collections.abc import Callable

import numpy as np
import pytest

from islandgen.builder import Island, build_island
from islandgen.config import (
    CastawayConfig,
    IslandConfig,
    ShapeConfig,
    StageProbabilities,
)
from islandgen.elevation import ElevationMap
from islandgen.shape import Border
from islandgen.types import Point


def _border(*coords: tuple[int, int]) -> Border:
    return Border(points=tuple(Point(x=x, y=y) for x, y in coords))


def _small_config(seed: int = 7, **overrides) -> IslandConfig:
    data = {
        "seed": seed,
        "width": 300,
        "height": 260,
        "shape": ShapeConfig(
            radius_x=110.0, radius_y=90.0, coarse_weight=40.0, fine_weight=5.0
        ),
        "castaway": CastawayConfig(min_distance=60.0),
    }
    data.update(overrides)
    return IslandConfig(**data)


@pytest.fixture
def make_border() -> Callable[..., Border]:
    """Factory building a Border from (x, y) pairs in traversal order."""
    return _border


@pytest.fixture
def small_config() -> Callable[..., IslandConfig]:
    """Factory for island configs small enough for fast tests."""
    return _small_config


@pytest.fixture
def square_border() -> Border:
    """Axis-aligned 10x10 square from (0, 0) to (10, 10).

        (0,0) ----- (10,0)
          |            |
        (0,10) ---- (10,10)
    """
    return _border((0, 0), (10, 0), (10, 10), (0, 10))


@pytest.fixture
def triangle_border() -> Border:
    """Right triangle with a diagonal edge from (10, 0) to (0, 10)."""
    return _border((0, 0), (10, 0), (0, 10))


@pytest.fixture
def flat_elevation() -> ElevationMap:
    """200x200 map at constant elevation 0.5, origin (0, 0)."""
    return ElevationMap(Point(x=0, y=0), np.full((200, 200), 0.5))


@pytest.fixture(scope="session")
def full_config() -> IslandConfig:
    """Default-sized config with every optional stage forced on.

    Seed 3 finds a flat settlement site well within the attempt limit.
    """
    return IslandConfig(
        seed=3,
        probabilities=StageProbabilities(settlement=1.0, shrine=1.0, castaway=1.0),
    )


@pytest.fixture(scope="session")
def full_island(full_config: IslandConfig) -> Island:
    """Island built from full_config."""
    return build_island(full_config)
