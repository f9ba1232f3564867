"""Coherent noise sampling for island generation.

Wraps OpenSimplex with independent per-channel generators so the x and y
border displacements and the terrain field are decorrelated.
"""

import numpy as np
from numpy.typing import NDArray
from opensimplex import OpenSimplex

# Channel indices used by the generation stages
CHANNEL_X = 0
CHANNEL_Y = 1
CHANNEL_TERRAIN = 2

_CHANNEL_SEED_STRIDE = 1000


class NoiseField:
    """Deterministic 2D noise with values in [0, 1].

    Each channel is an independent OpenSimplex generator seeded with
    ``seed + channel * 1000``.
    """

    def __init__(self, seed: int):
        self.seed = seed
        self._generators: dict[int, OpenSimplex] = {}

    def _generator(self, channel: int) -> OpenSimplex:
        gen = self._generators.get(channel)
        if gen is None:
            gen = OpenSimplex(seed=self.seed + channel * _CHANNEL_SEED_STRIDE)
            self._generators[channel] = gen
        return gen

    def sample(self, x: float, y: float, channel: int = 0) -> float:
        """Sample noise at a single coordinate.

        Args:
            x: X coordinate in noise space.
            y: Y coordinate in noise space.
            channel: Independent noise channel index.

        Returns:
            Noise value in [0, 1].
        """
        raw = self._generator(channel).noise2(float(x), float(y))
        return min(1.0, max(0.0, (raw + 1.0) / 2.0))

    def sample_grid(
        self,
        xs: NDArray[np.float64],
        ys: NDArray[np.float64],
        channel: int = 0,
    ) -> NDArray[np.float64]:
        """Sample noise on the lattice spanned by xs and ys.

        Args:
            xs: 1D array of X coordinates in noise space.
            ys: 1D array of Y coordinates in noise space.
            channel: Independent noise channel index.

        Returns:
            Array of shape (len(ys), len(xs)) with values in [0, 1].
        """
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        raw = self._generator(channel).noise2array(xs, ys)
        return np.clip((raw + 1.0) / 2.0, 0.0, 1.0)
