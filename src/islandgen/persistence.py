"""Island persistence: save and load generated islands."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

import numpy as np

from .builder import Island, StageDecisions
from .castaway import CastawayMarker
from .config import IslandConfig
from .elevation import ElevationMap
from .settlement import Settlement
from .shape import Border
from .structures import Structure
from .types import Point

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def _encode(data: object) -> bytes:
    return json.dumps(data).encode("utf-8")


def _decode(data: np.ndarray) -> object:
    return json.loads(data.tobytes().decode("utf-8"))


def save_island(path: Path, island: Island, config: IslandConfig) -> Path:
    """Save a generated island to disk.

    Uses numpy's compressed .npz format; feature records are stored as JSON.

    Args:
        path: Output path. A .npz suffix is appended when missing.
        island: Island to save.
        config: Generation configuration used.

    Returns:
        Path of the written file.
    """
    if path.suffix != ".npz":
        path = path.with_suffix(path.suffix + ".npz")

    elevation = island.elevation
    metadata = {
        "version": FORMAT_VERSION,
        "seed": island.seed,
        "width": config.width,
        "height": config.height,
        "decisions": {
            "settlement": island.decisions.settlement,
            "shrine": island.decisions.shrine,
            "castaway": island.decisions.castaway,
        },
        "generated_at": datetime.now(timezone.utc).isoformat(),
    }

    np.savez_compressed(
        path,
        border=island.border.as_array(),
        elevation=elevation.array,
        origin=np.array(elevation.origin.as_tuple(), dtype=np.int64),
        structures=_encode([s.model_dump(mode="json") for s in island.structures]),
        marker=_encode(
            island.marker.model_dump(mode="json") if island.marker else None
        ),
        settlement=_encode(
            island.settlement.model_dump(mode="json") if island.settlement else None
        ),
        metadata=_encode(metadata),
    )

    file_size = path.stat().st_size / 1024
    logger.info(f"Saved island to {path} ({file_size:.1f} KB)")
    return path


def load_island(path: Path) -> tuple[Island, dict]:
    """Load an island from disk.

    Args:
        path: Path to .npz file.

    Returns:
        Tuple of (Island, metadata dict).

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValueError: If file format is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Island file not found: {path}")

    with np.load(path) as data:
        for key in ("border", "elevation", "origin", "metadata"):
            if key not in data:
                raise ValueError(f"Invalid island file: missing '{key}' array")

        border_arr = data["border"]
        values = data["elevation"]
        ox, oy = (int(v) for v in data["origin"])
        metadata = _decode(data["metadata"])
        structures_data = _decode(data["structures"]) if "structures" in data else []
        marker_data = _decode(data["marker"]) if "marker" in data else None
        settlement_data = _decode(data["settlement"]) if "settlement" in data else None

    border = Border(points=tuple(Point(x=int(x), y=int(y)) for x, y in border_arr))
    decisions = metadata.get("decisions", {})

    island = Island(
        seed=int(metadata.get("seed", 0)),
        border=border,
        elevation=ElevationMap(Point(x=ox, y=oy), values),
        structures=tuple(Structure.model_validate(s) for s in structures_data),
        marker=CastawayMarker.model_validate(marker_data) if marker_data else None,
        settlement=(
            Settlement.model_validate(settlement_data) if settlement_data else None
        ),
        decisions=StageDecisions(
            settlement=bool(decisions.get("settlement", False)),
            shrine=bool(decisions.get("shrine", False)),
            castaway=bool(decisions.get("castaway", False)),
        ),
    )

    logger.info(f"Loaded island from {path}: {len(border)} border points")
    return island, metadata
