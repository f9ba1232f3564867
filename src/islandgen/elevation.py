"""Elevation field: noise attenuated by distance to the coast."""

import logging
from collections.abc import Iterator, Mapping

import numpy as np
from numpy.typing import NDArray
from scipy.spatial import cKDTree

from .config import ElevationConfig
from .noise import CHANNEL_TERRAIN, NoiseField
from .shape import Border
from .types import Point

logger = logging.getLogger(__name__)


class ElevationMap(Mapping):
    """Read-only mapping from interior Point to elevation in [0, 1].

    Backed by an array over the border's bounding box where NaN marks
    cells outside the island. Iteration is in row-major order.
    """

    def __init__(self, origin: Point, values: NDArray[np.float64]):
        data = np.array(values, dtype=np.float64)
        if data.ndim != 2:
            raise ValueError(f"Elevation values must be 2D, got shape {data.shape}")
        data.flags.writeable = False
        self._origin = origin
        self._values = data
        self._defined = ~np.isnan(data)
        self._defined.flags.writeable = False
        self._points: NDArray[np.int64] | None = None

    @property
    def origin(self) -> Point:
        """Lattice point covered by array cell [0, 0]."""
        return self._origin

    @property
    def array(self) -> NDArray[np.float64]:
        """Read-only backing array, NaN outside the island."""
        return self._values

    @property
    def defined(self) -> NDArray[np.bool_]:
        """Read-only mask of cells with an elevation."""
        return self._defined

    def _cell(self, point: Point) -> tuple[int, int] | None:
        row = point.y - self._origin.y
        col = point.x - self._origin.x
        height, width = self._values.shape
        if 0 <= row < height and 0 <= col < width and self._defined[row, col]:
            return row, col
        return None

    def __getitem__(self, point: Point) -> float:
        cell = self._cell(point) if isinstance(point, Point) else None
        if cell is None:
            raise KeyError(point)
        return float(self._values[cell])

    def __contains__(self, point: object) -> bool:
        return isinstance(point, Point) and self._cell(point) is not None

    def __iter__(self) -> Iterator[Point]:
        for x, y in self.points():
            yield Point(x=int(x), y=int(y))

    def __len__(self) -> int:
        return int(np.count_nonzero(self._defined))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ElevationMap):
            return NotImplemented
        return self._origin == other._origin and np.array_equal(
            self._values, other._values, equal_nan=True
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"ElevationMap(origin={self._origin}, points={len(self)})"

    def points(self) -> NDArray[np.int64]:
        """Defined points as an (N, 2) array of (x, y), row-major order."""
        if self._points is None:
            rc = np.argwhere(self._defined)
            pts = np.column_stack(
                [rc[:, 1] + self._origin.x, rc[:, 0] + self._origin.y]
            ).astype(np.int64)
            pts.flags.writeable = False
            self._points = pts
        return self._points

    def elevations(self) -> NDArray[np.float64]:
        """Defined elevations in the same order as points()."""
        return self._values[self._defined]

    def window(self, center: Point, size: int) -> NDArray[np.float64]:
        """Defined elevations in a size x size square around center.

        The window spans offsets -size//2 .. size - size//2 - 1 on each axis
        and is clipped to the map.
        """
        half = size // 2
        height, width = self._values.shape
        row0 = center.y - self._origin.y - half
        col0 = center.x - self._origin.x - half
        r0, r1 = max(row0, 0), min(row0 + size, height)
        c0, c1 = max(col0, 0), min(col0 + size, width)
        if r0 >= r1 or c0 >= c1:
            return np.empty(0, dtype=np.float64)
        block = self._values[r0:r1, c0:c1]
        return block[self._defined[r0:r1, c0:c1]]


def coast_distance(border: Border, points: NDArray[np.int64]) -> NDArray[np.float64]:
    """Square root of the euclidean distance to the nearest border point.

    The square root flattens the gradient near the coast.
    """
    if len(points) == 0:
        return np.empty(0, dtype=np.float64)
    tree = cKDTree(border.as_array())
    nearest, _ = tree.query(points)
    return np.sqrt(nearest)


def synthesize_elevation(
    border: Border,
    noise: NoiseField,
    config: ElevationConfig,
) -> ElevationMap:
    """Compute elevation for every lattice point inside or on the border.

    Elevation is terrain noise scaled by normalized coast distance, so
    coastal points stay low while the interior reaches the full noise range.

    Args:
        border: Island outline.
        noise: Noise source.
        config: Elevation parameters.

    Returns:
        ElevationMap over the border's bounding box.
    """
    origin, mask = border.interior_mask()
    rows, cols = np.nonzero(mask)
    points = np.column_stack([cols + origin.x, rows + origin.y]).astype(np.int64)

    dist = coast_distance(border, points)
    max_dist = float(dist.max()) if dist.size else 0.0
    if max_dist > 0:
        factor = dist / max_dist
    else:
        factor = np.zeros_like(dist)

    height, width = mask.shape
    xs = np.arange(origin.x, origin.x + width, dtype=np.float64) * config.frequency
    ys = np.arange(origin.y, origin.y + height, dtype=np.float64) * config.frequency
    terrain = noise.sample_grid(xs, ys, CHANNEL_TERRAIN)

    values = np.full(mask.shape, np.nan, dtype=np.float64)
    values[rows, cols] = np.clip(factor * terrain[rows, cols], 0.0, 1.0)

    elevation = ElevationMap(origin, values)
    if len(elevation):
        logger.info(
            f"Elevation: {len(elevation):,} interior points, max coast distance "
            f"{max_dist:.2f}, range [{np.nanmin(values):.3f}, {np.nanmax(values):.3f}]"
        )
    return elevation
