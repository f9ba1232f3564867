"""Island generation configuration models."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, model_validator

from .exceptions import ConfigError


class ShapeConfig(BaseModel):
    """Border shape parameters."""

    radius_x: float = Field(default=220.0, gt=0, description="Base ellipse half-width")
    radius_y: float = Field(default=180.0, gt=0, description="Base ellipse half-height")
    coarse_weight: float = Field(
        default=80.0, gt=0, description="Weight of the large-amplitude noise pass"
    )
    fine_weight: float = Field(
        default=10.0, gt=0, description="Weight of the small-amplitude noise pass"
    )
    angle_step: float = Field(
        default=1.0, gt=0, le=120.0, description="Angular step in degrees"
    )


class ElevationConfig(BaseModel):
    """Elevation field parameters."""

    frequency: float = Field(default=0.01, gt=0, description="Terrain noise frequency")


class SettlementConfig(BaseModel):
    """Settlement site search parameters."""

    neighborhood: int = Field(default=20, ge=1, description="Square window size in tiles")
    steepness_threshold: float = Field(
        default=0.02, ge=0, description="Max elevation std-dev for a flat site"
    )
    max_attempts: int = Field(default=2000, ge=1, description="Bounded retry count")
    min_coverage: float = Field(
        default=0.5,
        ge=0,
        le=1,
        description="Fraction of the window that must lie on the island",
    )
    fallback_to_flattest: bool = Field(
        default=False, description="Use the flattest candidate when no site qualifies"
    )
    required: bool = Field(
        default=False, description="Propagate search failure instead of skipping"
    )


class StructureConfig(BaseModel):
    """House and shrine complex placement parameters."""

    house_count_min: int = Field(default=1, ge=0)
    house_count_max: int = Field(default=5, ge=0)
    house_distance_min: float = Field(default=19.0, ge=0)
    house_distance_max: float = Field(default=22.0, ge=0)
    house_radius: float = Field(default=4.0, gt=0)
    shrine_sides_min: int = Field(default=3, ge=3)
    shrine_sides_max: int = Field(default=6, ge=3)
    shrine_radius: float = Field(default=6.0, gt=0)
    satellite_max: int = Field(default=3, ge=0, description="Cap on satellite shrines")
    satellite_distance: float = Field(default=12.0, ge=0)
    satellite_radius: float = Field(default=3.0, gt=0)

    @model_validator(mode="after")
    def check_ranges(self) -> "StructureConfig":
        if self.house_count_min > self.house_count_max:
            raise ValueError("house_count_min must not exceed house_count_max")
        if self.house_distance_min > self.house_distance_max:
            raise ValueError("house_distance_min must not exceed house_distance_max")
        if self.shrine_sides_min > self.shrine_sides_max:
            raise ValueError("shrine_sides_min must not exceed shrine_sides_max")
        return self


class CastawayConfig(BaseModel):
    """Distress marker placement parameters."""

    elevation_min: float = Field(
        default=0.1, ge=0, le=1, description="Exclusive lower bound of the band"
    )
    elevation_max: float = Field(
        default=0.2, ge=0, le=1, description="Inclusive upper bound of the band"
    )
    min_distance: float = Field(
        default=120.0, ge=0, description="Min distance from the settlement anchor"
    )

    @model_validator(mode="after")
    def check_band(self) -> "CastawayConfig":
        if self.elevation_min >= self.elevation_max:
            raise ValueError("elevation_min must be below elevation_max")
        return self


class StageProbabilities(BaseModel):
    """Independent inclusion chances for the optional stages."""

    settlement: float = Field(default=0.5, ge=0, le=1)
    shrine: float = Field(
        default=0.5, ge=0, le=1, description="Conditional on a settlement"
    )
    castaway: float = Field(default=0.5, ge=0, le=1)


class IslandConfig(BaseModel):
    """Complete island generation configuration."""

    seed: int = Field(default=42, description="Random seed for reproducibility")
    width: int = Field(default=600, gt=0, description="Canvas width in tiles")
    height: int = Field(default=500, gt=0, description="Canvas height in tiles")

    shape: ShapeConfig = Field(default_factory=ShapeConfig)
    elevation: ElevationConfig = Field(default_factory=ElevationConfig)
    settlement: SettlementConfig = Field(default_factory=SettlementConfig)
    structures: StructureConfig = Field(default_factory=StructureConfig)
    castaway: CastawayConfig = Field(default_factory=CastawayConfig)
    probabilities: StageProbabilities = Field(default_factory=StageProbabilities)

    @property
    def center(self) -> tuple[int, int]:
        """Integer canvas center the border is built around."""
        return (self.width // 2, self.height // 2)


def load_config(config_path: Path) -> IslandConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed IslandConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigError: If the TOML is malformed or fails validation.
    """
    with open(config_path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Malformed config {config_path}: {e}") from e
    try:
        return IslandConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e
