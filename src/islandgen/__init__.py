"""Procedural island generation.

This package builds a single island from a seed: a noise-distorted border,
a coast-attenuated elevation field, and placed features (settlement houses,
a shrine complex and a castaway marker).
"""

from .builder import Island, StageDecisions, build_island, decide_stages, generate_island
from .castaway import CastawayMarker
from .config import IslandConfig, load_config
from .elevation import ElevationMap
from .exceptions import ConfigError, IslandError, NoSuitableSiteError
from .noise import NoiseField
from .persistence import load_island, save_island
from .settlement import Settlement
from .shape import Border
from .structures import Structure, StructureRole
from .types import Point
from .validation import ValidationResult, validate_island

__all__ = [
    "Border",
    "CastawayMarker",
    "ConfigError",
    "ElevationMap",
    "Island",
    "IslandConfig",
    "IslandError",
    "NoSuitableSiteError",
    "NoiseField",
    "Point",
    "Settlement",
    "StageDecisions",
    "Structure",
    "StructureRole",
    "ValidationResult",
    "build_island",
    "decide_stages",
    "generate_island",
    "load_config",
    "load_island",
    "save_island",
    "validate_island",
]
