"""Castaway marker placement near the coast, away from the settlement."""

import logging
import math

import numpy as np
from pydantic import BaseModel

from .config import CastawayConfig
from .elevation import ElevationMap
from .shape import Border
from .types import Point

logger = logging.getLogger(__name__)


class CastawayMarker(BaseModel, frozen=True):
    """Distress marker with its orientation in degrees."""

    location: Point
    orientation: float
    coast: Point


def castaway_orientation(location: Point, coast: Point) -> float:
    """Approximate the angle perpendicular to the coast at a location.

    Args:
        location: Marker position.
        coast: Nearest border point to the marker.

    Returns:
        Orientation in degrees.
    """
    dist = location.distance_to(coast)
    rx = (coast.x - location.x) / dist if dist > 0 else 1.0
    # Guard acos against float drift just outside [-1, 1]
    theta = math.degrees(math.acos(max(-1.0, min(1.0, rx))))
    if location.y < coast.y:
        return theta - 90.0
    return -theta - 90.0


def castaway_candidates(
    elevation: ElevationMap,
    config: CastawayConfig,
    settlement_anchor: Point | None = None,
) -> np.ndarray:
    """Interior points in the coastal band, far enough from the settlement.

    Returns:
        (N, 2) array of (x, y) in row-major order.
    """
    points = elevation.points()
    values = elevation.elevations()
    keep = (values > config.elevation_min) & (values <= config.elevation_max)

    if settlement_anchor is not None:
        dx = points[:, 0] - settlement_anchor.x
        dy = points[:, 1] - settlement_anchor.y
        keep &= np.hypot(dx, dy) > config.min_distance

    return points[keep]


def place_castaway(
    border: Border,
    elevation: ElevationMap,
    rng: np.random.Generator,
    config: CastawayConfig,
    settlement_anchor: Point | None = None,
) -> CastawayMarker | None:
    """Pick a coastal location for the distress marker.

    Args:
        border: Island outline.
        elevation: Island elevation field.
        rng: Random number generator.
        config: Band and distance parameters.
        settlement_anchor: Settlement to keep away from, if any.

    Returns:
        CastawayMarker, or None when no location qualifies.
    """
    candidates = castaway_candidates(elevation, config, settlement_anchor)
    if len(candidates) == 0:
        logger.info("No castaway candidates, marker omitted")
        return None

    x, y = candidates[rng.integers(len(candidates))]
    location = Point(x=int(x), y=int(y))
    idx, _ = border.nearest(location.x, location.y)
    coast = border.points[idx]
    orientation = castaway_orientation(location, coast)

    logger.info(
        f"Castaway marker at {location} facing {orientation:.1f} deg "
        f"({len(candidates):,} candidates)"
    )
    return CastawayMarker(location=location, orientation=orientation, coast=coast)
