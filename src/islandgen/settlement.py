"""Settlement siting: bounded random search for flat ground."""

import logging

import numpy as np
from pydantic import BaseModel

from .config import SettlementConfig
from .elevation import ElevationMap
from .exceptions import NoSuitableSiteError
from .types import Point

logger = logging.getLogger(__name__)


class Settlement(BaseModel, frozen=True):
    """Accepted settlement site."""

    anchor: Point
    steepness: float
    attempts: int


def steepness_at(
    elevation: ElevationMap,
    point: Point,
    neighborhood: int,
    min_samples: int = 1,
) -> float | None:
    """Standard deviation of elevation in the square window around point.

    Returns:
        Population std-dev, or None when fewer than min_samples cells of
        the window lie on the island.
    """
    samples = elevation.window(point, neighborhood)
    if samples.size < max(min_samples, 1):
        return None
    return float(np.std(samples))


def locate_settlement(
    elevation: ElevationMap,
    rng: np.random.Generator,
    config: SettlementConfig,
) -> Settlement:
    """Find a random interior point whose neighbourhood is flat enough.

    Args:
        elevation: Island elevation field.
        rng: Random number generator.
        config: Search parameters.

    Returns:
        Settlement at the first accepted site, or at the flattest candidate
        when fallback is enabled.

    Raises:
        NoSuitableSiteError: If max_attempts candidates are rejected and
            fallback is disabled (or no candidate was usable).
    """
    points = elevation.points()
    if len(points) == 0:
        raise NoSuitableSiteError(attempts=0)

    min_samples = int(np.ceil(config.min_coverage * config.neighborhood**2))
    best: tuple[float, Point] | None = None

    for attempt in range(1, config.max_attempts + 1):
        x, y = points[rng.integers(len(points))]
        candidate = Point(x=int(x), y=int(y))
        steepness = steepness_at(
            elevation, candidate, config.neighborhood, min_samples
        )
        if steepness is None:
            continue

        if steepness <= config.steepness_threshold:
            logger.info(
                f"Settlement at {candidate} after {attempt} attempts "
                f"(steepness {steepness:.4f})"
            )
            return Settlement(anchor=candidate, steepness=steepness, attempts=attempt)

        if best is None or steepness < best[0]:
            best = (steepness, candidate)

    if config.fallback_to_flattest and best is not None:
        steepness, candidate = best
        logger.warning(
            f"No site under steepness {config.steepness_threshold} in "
            f"{config.max_attempts} attempts, falling back to {candidate} "
            f"(steepness {steepness:.4f})"
        )
        return Settlement(
            anchor=candidate, steepness=steepness, attempts=config.max_attempts
        )

    raise NoSuitableSiteError(
        attempts=config.max_attempts,
        best_steepness=best[0] if best is not None else None,
    )
