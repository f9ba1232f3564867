"""Island generation orchestration."""

import logging
from dataclasses import dataclass

import numpy as np

from .castaway import CastawayMarker, place_castaway
from .config import IslandConfig, StageProbabilities
from .elevation import ElevationMap, synthesize_elevation
from .exceptions import NoSuitableSiteError
from .noise import NoiseField
from .settlement import Settlement, locate_settlement
from .shape import Border, generate_border
from .structures import (
    Structure,
    StructureRole,
    place_houses,
    place_shrine_complex,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StageDecisions:
    """Which optional stages run, decided once up front."""

    settlement: bool
    shrine: bool
    castaway: bool


def decide_stages(
    rng: np.random.Generator,
    probabilities: StageProbabilities,
) -> StageDecisions:
    """Draw one uniform value per optional stage.

    Draw order is settlement, shrine, castaway. The shrine can only be
    included alongside a settlement.
    """
    settlement = bool(rng.random() < probabilities.settlement)
    shrine = bool(rng.random() < probabilities.shrine)
    castaway = bool(rng.random() < probabilities.castaway)
    return StageDecisions(
        settlement=settlement,
        shrine=shrine and settlement,
        castaway=castaway,
    )


@dataclass(frozen=True)
class Island:
    """Generated island. Immutable once built.

    Compares by value but is unhashable, since the elevation map is.
    """

    __hash__ = None

    seed: int
    border: Border
    elevation: ElevationMap
    structures: tuple[Structure, ...]
    marker: CastawayMarker | None
    settlement: Settlement | None
    decisions: StageDecisions

    def with_role(self, role: StructureRole) -> tuple[Structure, ...]:
        """Structures with the given role, in placement order."""
        return tuple(s for s in self.structures if s.role == role)

    @property
    def houses(self) -> tuple[Structure, ...]:
        return self.with_role(StructureRole.HOUSE)

    @property
    def shrine(self) -> Structure | None:
        primaries = self.with_role(StructureRole.SHRINE_PRIMARY)
        return primaries[0] if primaries else None

    @property
    def satellites(self) -> tuple[Structure, ...]:
        return self.with_role(StructureRole.SHRINE_SATELLITE)


def build_island(config: IslandConfig) -> Island:
    """Generate an island from configuration.

    Stages run in a fixed order: shape, elevation, settlement and houses,
    shrine complex, castaway marker. All randomness flows from one
    generator seeded with config.seed.

    Args:
        config: Island generation configuration.

    Returns:
        The finished Island.

    Raises:
        NoSuitableSiteError: If a settlement is decided and required but no
            flat site is found.
    """
    rng = np.random.default_rng(config.seed)
    noise = NoiseField(config.seed)

    logger.info(f"Generating island {config.width}x{config.height} with seed {config.seed}")

    # Stage A: Border
    logger.info("Stage A: Shaping border...")
    border = generate_border(noise, config.shape, config.center)

    # Stage B: Elevation
    logger.info("Stage B: Synthesizing elevation...")
    elevation = synthesize_elevation(border, noise, config.elevation)

    decisions = decide_stages(rng, config.probabilities)
    logger.info(
        f"Stages: settlement={decisions.settlement}, shrine={decisions.shrine}, "
        f"castaway={decisions.castaway}"
    )

    structures: list[Structure] = []
    settlement: Settlement | None = None

    # Stage C: Settlement and houses
    if decisions.settlement:
        logger.info("Stage C: Locating settlement...")
        try:
            settlement = locate_settlement(elevation, rng, config.settlement)
        except NoSuitableSiteError as e:
            if config.settlement.required:
                raise
            logger.warning(f"{e}; continuing without settlement")

    houses: list[Structure] = []
    if settlement is not None:
        houses = place_houses(settlement.anchor, elevation, rng, config.structures)
        structures.extend(houses)

    # Stage D: Shrine complex
    if decisions.shrine and settlement is not None:
        logger.info("Stage D: Placing shrine complex...")
        structures.extend(
            place_shrine_complex(
                settlement.anchor, len(houses), elevation, rng, config.structures
            )
        )

    # Stage E: Castaway marker
    marker: CastawayMarker | None = None
    if decisions.castaway:
        logger.info("Stage E: Placing castaway marker...")
        marker = place_castaway(
            border,
            elevation,
            rng,
            config.castaway,
            settlement.anchor if settlement is not None else None,
        )

    logger.info(
        f"Island complete: {len(structures)} structures, "
        f"marker {'placed' if marker is not None else 'absent'}"
    )

    return Island(
        seed=config.seed,
        border=border,
        elevation=elevation,
        structures=tuple(structures),
        marker=marker,
        settlement=settlement,
        decisions=decisions,
    )


def generate_island(seed: int, **overrides) -> Island:
    """Build an island from the default configuration.

    Args:
        seed: Random seed.
        **overrides: Top-level IslandConfig fields to replace.

    Returns:
        The finished Island.
    """
    config = IslandConfig(seed=seed, **overrides)
    return build_island(config)
