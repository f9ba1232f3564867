"""Structure placement: houses and the shrine complex around a settlement."""

import logging
import math
from enum import Enum

import numpy as np
from pydantic import BaseModel, Field

from .config import StructureConfig
from .elevation import ElevationMap
from .types import Point

logger = logging.getLogger(__name__)


class StructureRole(str, Enum):
    """Roles a placed structure can play."""

    HOUSE = "house"
    SHRINE_PRIMARY = "shrine-primary"
    SHRINE_SATELLITE = "shrine-satellite"


class Structure(BaseModel, frozen=True):
    """A regular polygon placed on the island."""

    anchor: Point
    sides: int = Field(ge=3)
    radius: float = Field(gt=0)
    rotation: float = Field(description="Rotation in degrees")
    role: StructureRole

    def vertices(self) -> list[tuple[float, float]]:
        """Polygon corners around the anchor, for renderers."""
        corners = []
        for i in range(self.sides):
            theta = math.radians(self.rotation + 360.0 * i / self.sides)
            corners.append(
                (
                    self.anchor.x + self.radius * math.cos(theta),
                    self.anchor.y + self.radius * math.sin(theta),
                )
            )
        return corners


def _random_angle(rng: np.random.Generator) -> float:
    return float(rng.uniform(0.0, 360.0))


def place_houses(
    anchor: Point,
    elevation: ElevationMap,
    rng: np.random.Generator,
    config: StructureConfig,
) -> list[Structure]:
    """Scatter square houses on a ring around the settlement anchor.

    Candidates that land off the island are skipped, not retried.

    Args:
        anchor: Settlement anchor.
        elevation: Island elevation field (its keys are the interior set).
        rng: Random number generator.
        config: Placement parameters.

    Returns:
        Placed houses, possibly fewer than requested.
    """
    requested = int(rng.integers(config.house_count_min, config.house_count_max + 1))
    houses: list[Structure] = []

    for _ in range(requested):
        angle = _random_angle(rng)
        distance = float(
            rng.uniform(config.house_distance_min, config.house_distance_max)
        )
        candidate = anchor.polar_offset(angle, distance)
        if candidate not in elevation:
            logger.debug(f"House candidate {candidate} off island, skipped")
            continue
        houses.append(
            Structure(
                anchor=candidate,
                sides=4,
                radius=config.house_radius,
                rotation=_random_angle(rng),
                role=StructureRole.HOUSE,
            )
        )

    logger.info(f"Placed {len(houses)} of {requested} houses")
    return houses


def place_shrine_complex(
    anchor: Point,
    house_count: int,
    elevation: ElevationMap,
    rng: np.random.Generator,
    config: StructureConfig,
) -> list[Structure]:
    """Place the primary shrine at the anchor and its satellites around it.

    Satellites never outnumber the houses and never have more sides than
    the primary shrine.

    Args:
        anchor: Settlement anchor.
        house_count: Number of houses actually placed.
        elevation: Island elevation field (its keys are the interior set).
        rng: Random number generator.
        config: Placement parameters.

    Returns:
        Primary shrine followed by any placed satellites.
    """
    primary_sides = int(
        rng.integers(config.shrine_sides_min, config.shrine_sides_max + 1)
    )
    complex_: list[Structure] = [
        Structure(
            anchor=anchor,
            sides=primary_sides,
            radius=config.shrine_radius,
            rotation=_random_angle(rng),
            role=StructureRole.SHRINE_PRIMARY,
        )
    ]

    cap = min(config.satellite_max, house_count)
    requested = int(rng.integers(0, cap + 1))

    for _ in range(requested):
        candidate = anchor.polar_offset(_random_angle(rng), config.satellite_distance)
        if candidate not in elevation:
            logger.debug(f"Satellite candidate {candidate} off island, skipped")
            continue
        complex_.append(
            Structure(
                anchor=candidate,
                sides=int(rng.integers(3, primary_sides + 1)),
                radius=config.satellite_radius,
                rotation=_random_angle(rng),
                role=StructureRole.SHRINE_SATELLITE,
            )
        )

    logger.info(
        f"Placed {primary_sides}-sided shrine with "
        f"{len(complex_) - 1} of {requested} satellites"
    )
    return complex_
