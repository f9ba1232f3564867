"""Post-generation validation of island invariants."""

import logging

import numpy as np

from .builder import Island
from .config import IslandConfig
from .settlement import steepness_at
from .shape import max_step_bound
from .structures import StructureRole

logger = logging.getLogger(__name__)


class ValidationResult:
    """Result of island validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_island(island: Island, config: IslandConfig) -> ValidationResult:
    """Check a generated island against its structural constraints.

    Args:
        island: Generated island.
        config: Configuration it was generated with.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()

    # Check 1: Border is a closed outline without gaps
    _check_border(island, config, result)

    # Check 2: Elevation is defined only on the island, within range
    _check_elevation(island, result)

    # Check 3: Settlement site is flat
    _check_settlement(island, config, result)

    # Check 4: Structures are on the island and obey shrine rules
    _check_structures(island, result)

    # Check 5: Marker sits in the coastal band away from the settlement
    _check_marker(island, config, result)

    if result.passed:
        logger.info("Island validation passed")
    else:
        logger.warning(f"Island validation failed with {len(result.errors)} errors")
        for error in result.errors:
            logger.error(f"  - {error}")

    for warning in result.warnings:
        logger.warning(f"  - {warning}")

    return result


def _check_border(
    island: Island,
    config: IslandConfig,
    result: ValidationResult,
) -> None:
    """Check step bound, membership and simplicity of the border."""
    border = island.border
    if len(border) < 3:
        result.add_error(f"Border has only {len(border)} points")
        return

    bound = max_step_bound(config.shape)
    step = border.max_step()
    if step > bound:
        result.add_error(f"Border step {step:.1f} exceeds bound {bound:.1f}")

    outside = sum(1 for p in border if not border.contains(p))
    if outside:
        result.add_error(f"{outside} border points fail the membership test")

    crossings = border.self_intersections()
    if crossings:
        result.add_warning(f"Border self-intersects at {len(crossings)} edge pairs")


def _check_elevation(island: Island, result: ValidationResult) -> None:
    """Check elevation keys are inside the border and values in [0, 1]."""
    elevation = island.elevation
    if len(elevation) == 0:
        result.add_error("Elevation map is empty")
        return

    values = elevation.elevations()
    out_of_range = int(np.count_nonzero((values < 0.0) | (values > 1.0)))
    if out_of_range:
        result.add_error(f"{out_of_range} elevation values outside [0, 1]")

    origin, mask = island.border.interior_mask()
    if origin != elevation.origin or not np.array_equal(mask, elevation.defined):
        result.add_error("Elevation keys do not match the border interior")


def _check_settlement(
    island: Island,
    config: IslandConfig,
    result: ValidationResult,
) -> None:
    """Check the settlement neighbourhood is within the steepness threshold."""
    settlement = island.settlement
    if settlement is None:
        return

    if settlement.anchor not in island.elevation:
        result.add_error(f"Settlement anchor {settlement.anchor} is off the island")
        return

    steepness = steepness_at(
        island.elevation, settlement.anchor, config.settlement.neighborhood
    )
    if steepness is not None and steepness > config.settlement.steepness_threshold:
        result.add_warning(
            f"Settlement steepness {steepness:.4f} exceeds threshold "
            f"{config.settlement.steepness_threshold}"
        )


def _check_structures(island: Island, result: ValidationResult) -> None:
    """Check structure anchors and shrine complex rules."""
    off_island = [s for s in island.structures if s.anchor not in island.elevation]
    if off_island:
        result.add_error(f"{len(off_island)} structures anchored off the island")

    primaries = island.with_role(StructureRole.SHRINE_PRIMARY)
    satellites = island.satellites
    if len(primaries) > 1:
        result.add_error(f"{len(primaries)} primary shrines, expected at most 1")
    if satellites and not primaries:
        result.add_error("Satellite shrines without a primary shrine")
    if len(satellites) > len(island.houses):
        result.add_error(
            f"{len(satellites)} satellites exceed {len(island.houses)} houses"
        )
    if primaries:
        too_many_sides = [s for s in satellites if s.sides > primaries[0].sides]
        if too_many_sides:
            result.add_error(
                f"{len(too_many_sides)} satellites have more sides than the primary"
            )


def _check_marker(
    island: Island,
    config: IslandConfig,
    result: ValidationResult,
) -> None:
    """Check the castaway marker band and settlement distance."""
    marker = island.marker
    if marker is None:
        return

    if marker.location not in island.elevation:
        result.add_error(f"Marker {marker.location} is off the island")
        return

    value = island.elevation[marker.location]
    band = config.castaway
    if not band.elevation_min < value <= band.elevation_max:
        result.add_error(
            f"Marker elevation {value:.3f} outside "
            f"({band.elevation_min}, {band.elevation_max}]"
        )

    if island.settlement is not None:
        distance = marker.location.distance_to(island.settlement.anchor)
        if distance <= band.min_distance:
            result.add_error(
                f"Marker {distance:.1f} from settlement, minimum {band.min_distance}"
            )
