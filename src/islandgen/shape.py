"""Island outline: noise-distorted ellipse border and lattice membership."""

import logging
import math
from dataclasses import dataclass
from functools import cached_property

import numpy as np
from numpy.typing import NDArray

from .config import ShapeConfig
from .noise import CHANNEL_X, CHANNEL_Y, NoiseField
from .types import Point

logger = logging.getLogger(__name__)


def noisify(x: float, y: float, weight: float, noise: NoiseField) -> tuple[int, int]:
    """Displace a point by one octave of noise.

    The displacement on each axis lies in [-weight/2, weight/2] and the
    noise is sampled at frequency 1/weight, so heavier passes move points
    further and vary more slowly along the outline.

    Args:
        x: X coordinate relative to the island center.
        y: Y coordinate relative to the island center.
        weight: Amplitude (and inverse frequency) of the pass.
        noise: Noise source.

    Returns:
        Displaced coordinates, rounded to the lattice.
    """
    f = 1.0 / weight
    nx = weight * noise.sample(f * x, f * y, CHANNEL_X) - weight / 2
    ny = weight * noise.sample(f * x, f * y, CHANNEL_Y) - weight / 2
    return int(round(x + nx)), int(round(y + ny))


@dataclass(frozen=True)
class Border:
    """Closed island outline in angular order.

    The last point connects back to the first. Membership tests are
    boundary-inclusive: vertices and every lattice point lying exactly on
    an edge count as inside.
    """

    points: tuple[Point, ...]

    def __post_init__(self) -> None:
        if not self.points:
            raise ValueError("Border needs at least one point")

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def as_array(self) -> NDArray[np.int64]:
        """Border vertices as an (N, 2) array of (x, y)."""
        return self._vertices.copy()

    @cached_property
    def _vertices(self) -> NDArray[np.int64]:
        return np.array([p.as_tuple() for p in self.points], dtype=np.int64).reshape(-1, 2)

    @cached_property
    def _edges(self) -> tuple[NDArray[np.int64], ...]:
        a = self._vertices
        b = np.roll(a, -1, axis=0)
        return a[:, 0], a[:, 1], b[:, 0], b[:, 1]

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        """Bounding box as (min_x, min_y, max_x, max_y), inclusive."""
        v = self._vertices
        return (
            int(v[:, 0].min()),
            int(v[:, 1].min()),
            int(v[:, 0].max()),
            int(v[:, 1].max()),
        )

    def max_step(self) -> float:
        """Largest distance between consecutive points, closing edge included."""
        ax, ay, bx, by = self._edges
        return float(np.max(np.hypot(bx - ax, by - ay)))

    def _row_inside(self, y: int, xs: NDArray[np.int64]) -> NDArray[np.bool_]:
        """Boundary-inclusive membership for lattice points on row y."""
        ax, ay, bx, by = self._edges

        # Even-odd rule: count edge crossings to the right of each x
        spans = (ay > y) != (by > y)
        sax, say, sbx, sby = ax[spans], ay[spans], bx[spans], by[spans]
        x_cross = sax + (y - say) * (sbx - sax) / (sby - say)
        crossings = np.count_nonzero(xs[:, None] < x_cross[None, :], axis=1)
        inside = (crossings % 2) == 1

        # Exact on-edge test in integer arithmetic
        touching = (np.minimum(ay, by) <= y) & (np.maximum(ay, by) >= y)
        flat = touching & (ay == by)
        lo = np.minimum(ax[flat], bx[flat])
        hi = np.maximum(ax[flat], bx[flat])
        on_edge = ((xs[:, None] >= lo[None, :]) & (xs[:, None] <= hi[None, :])).any(axis=1)

        slanted = touching & (ay != by)
        num = (y - ay[slanted]) * (bx[slanted] - ax[slanted])
        den = by[slanted] - ay[slanted]
        exact = num % den == 0
        x_on = ax[slanted][exact] + num[exact] // den[exact]
        on_edge |= np.isin(xs, x_on)

        return inside | on_edge

    def contains(self, point: Point) -> bool:
        """Whether a lattice point is inside or on the border."""
        xs = np.array([point.x], dtype=np.int64)
        return bool(self._row_inside(point.y, xs)[0])

    def interior_mask(self) -> tuple[Point, NDArray[np.bool_]]:
        """Rasterize inside-or-on membership over the bounding box.

        Returns:
            Tuple of (origin, mask) where origin is the top-left lattice point
            of the bounding box and mask[row, col] covers point
            (origin.x + col, origin.y + row).
        """
        min_x, min_y, max_x, max_y = self.bounds
        xs = np.arange(min_x, max_x + 1, dtype=np.int64)
        mask = np.zeros((max_y - min_y + 1, xs.size), dtype=bool)
        for row, y in enumerate(range(min_y, max_y + 1)):
            mask[row] = self._row_inside(y, xs)
        return Point(x=min_x, y=min_y), mask

    def nearest(self, x: float, y: float) -> tuple[int, float]:
        """Find the closest border point.

        Ties resolve to the first point in traversal order.

        Returns:
            Tuple of (index into points, distance).
        """
        v = self._vertices
        d2 = (v[:, 0] - x) ** 2 + (v[:, 1] - y) ** 2
        idx = int(np.argmin(d2))
        return idx, float(math.sqrt(d2[idx]))

    def self_intersections(self) -> list[tuple[int, int]]:
        """Find pairs of non-adjacent edges that properly cross.

        Consecutive duplicate points are collapsed first; touching without
        crossing is not reported.

        Returns:
            List of (i, j) edge index pairs into the collapsed outline.
        """
        v = self._vertices
        keep = np.any(v != np.roll(v, 1, axis=0), axis=1)
        if not keep.any():
            return []
        v = v[keep]
        n = len(v)
        if n < 4:
            return []

        a = v
        b = np.roll(v, -1, axis=0)

        def orient(p, q, r):
            return np.sign(
                (q[..., 0] - p[..., 0]) * (r[..., 1] - p[..., 1])
                - (q[..., 1] - p[..., 1]) * (r[..., 0] - p[..., 0])
            )

        ai, bi = a[:, None, :], b[:, None, :]
        aj, bj = a[None, :, :], b[None, :, :]
        o1 = orient(ai, bi, aj)
        o2 = orient(ai, bi, bj)
        o3 = orient(aj, bj, ai)
        o4 = orient(aj, bj, bi)
        crossing = (o1 * o2 < 0) & (o3 * o4 < 0)

        idx = np.arange(n)
        gap = np.abs(idx[:, None] - idx[None, :])
        non_adjacent = (gap > 1) & (gap < n - 1)
        pairs = np.argwhere(np.triu(crossing & non_adjacent))
        return [(int(i), int(j)) for i, j in pairs]


def generate_border(
    noise: NoiseField,
    config: ShapeConfig,
    center: tuple[int, int],
) -> Border:
    """Build the island outline by distorting an ellipse with two noise passes.

    Args:
        noise: Noise source.
        config: Shape parameters.
        center: Integer canvas position of the ellipse center.

    Returns:
        Closed Border in angular order.
    """
    cx, cy = center
    points: list[Point] = []

    for r in np.arange(0.0, 360.0, config.angle_step):
        theta = math.radians(float(r))
        x = config.radius_x * math.cos(theta)
        y = config.radius_y * math.sin(theta)

        # Coarse pass sets the gross outline, fine pass roughens it
        x, y = noisify(x, y, config.coarse_weight, noise)
        x, y = noisify(x, y, config.fine_weight, noise)

        points.append(Point(x=x + cx, y=y + cy))

    border = Border(points=tuple(points))
    logger.info(
        f"Border: {len(border)} points, bounds {border.bounds}, "
        f"max step {border.max_step():.1f}"
    )
    return border


def max_step_bound(config: ShapeConfig) -> float:
    """Upper bound on the gap between consecutive border points.

    Base arc length per step plus the worst-case relative displacement of
    both noise passes and their rounding.
    """
    arc = max(config.radius_x, config.radius_y) * math.radians(config.angle_step)
    return arc + math.sqrt(2) * (config.coarse_weight + config.fine_weight + 1.0)
