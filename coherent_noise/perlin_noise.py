"""
perlin_noise.py

Perlin gradient noise in any number of dimensions.

Each generator owns a shuffled permutation table and a table of random unit
gradients, both built once from the seed. Evaluating a point takes the
2^D corners of the grid cell around it, dots each corner's gradient with the
offset from the corner to the point, and blends the dot products axis by axis
with a smoothstep of configurable order. Output lies in [-1, 1].
"""
import logging
from dataclasses import dataclass

import numpy as np

from .base import CoherentNoise
from .noise_math import ipow, mod, smoothstep
from .point import as_point
from .vector import Vector, dot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PerlinConfig:
    """
    Static configuration of a Perlin noise generator.

    dimensions:    number of input coordinates (>= 1)
    smoothness:    smoothstep order used for interpolation (>= 0)
    num_gradients: size of the gradient and permutation tables (>= 1). More
                   gradients give a less repetitive field at a higher setup cost.
    dtype:         floating point type of gradients and results
    grid_dtype:    integer type of grid coordinates
    """
    dimensions: int = 2
    smoothness: int = 2
    num_gradients: int = 256
    dtype: type = np.float64
    grid_dtype: type = np.int64

    def __post_init__(self):
        if self.dimensions < 1:
            raise ValueError(f"dimensions must be at least 1, got {self.dimensions}")
        if self.smoothness < 0:
            raise ValueError(f"smoothness must be non-negative, got {self.smoothness}")
        if self.num_gradients < 1:
            raise ValueError(f"num_gradients must be at least 1, got {self.num_gradients}")
        if not np.issubdtype(np.dtype(self.dtype), np.floating):
            raise TypeError(f"dtype must be a floating point type, got {np.dtype(self.dtype)}")
        if not np.issubdtype(np.dtype(self.grid_dtype), np.signedinteger):
            raise TypeError(f"grid_dtype must be a signed integer type, got {np.dtype(self.grid_dtype)}")

    def create(self, seed=None):
        return PerlinNoiseGenerator(self, seed)


def check_seed(seed):
    if seed is not None and seed < 0:
        raise ValueError(f"seed must be a non-negative integer, got {seed}")


class PerlinNoiseGenerator(CoherentNoise):
    def __init__(self, config=None, seed=None):
        self.config = config if config is not None else PerlinConfig()
        check_seed(seed)
        self.seed = seed

        dims = self.config.dimensions
        g = self.config.num_gradients
        rng = np.random.default_rng(seed)

        permutation = np.arange(g, dtype=self.config.grid_dtype)
        rng.shuffle(permutation)

        gradients = np.empty((g, dims), dtype=self.config.dtype)
        for i in range(g):
            gradients[i] = Vector.random_unit(rng, dims, dtype=self.config.dtype).to_array()

        # corner c of a cell is offset by 1 along axis d when bit d of c is set
        num_corners = ipow(2, dims)
        corners = (np.arange(num_corners)[:, None] >> np.arange(dims)[None, :]) & 1

        permutation.flags.writeable = False
        gradients.flags.writeable = False
        corners.flags.writeable = False
        self._permutation = permutation
        self._gradients = gradients
        self._corner_offsets = corners.astype(self.config.grid_dtype)

        logger.debug("Built %dD perlin noise: %d gradients, smoothness %d, seed %s",
                     dims, g, self.config.smoothness, seed)

    @property
    def permutation(self):
        return self._permutation

    @property
    def gradients(self):
        return self._gradients

    def gradient_index(self, grid_points):
        """
        Hash integer grid coordinates of shape (..., D) into gradient indices.

        The coordinates are folded from the last axis to the first through the
        permutation table, so a grid point always hashes to the same gradient.
        """
        grid_points = np.asarray(grid_points)
        g = self.config.num_gradients
        idx = mod(grid_points[..., -1], g)
        for d in range(self.dimensions - 2, -1, -1):
            idx = mod(grid_points[..., d] + self._permutation[idx], g)
        return idx

    def gradient_at(self, grid_point):
        """Gradient vector assigned to an integer grid point."""
        grid_point = as_point(grid_point, self.dimensions, self.config.grid_dtype)
        return Vector(self._gradients[self.gradient_index(grid_point.to_array())], dtype=self.config.dtype)

    def _evaluate(self, points):
        # points: (M, D) floats
        base = np.floor(points).astype(self.config.grid_dtype)
        nodes = base[:, None, :] + self._corner_offsets[None, :, :]

        gradients = self._gradients[self.gradient_index(nodes)]
        offsets = points[:, None, :] - nodes.astype(points.dtype)
        values = np.einsum("mcd,mcd->mc", gradients, offsets)

        t = smoothstep(points - base, self.config.smoothness)
        for d in range(self.dimensions):
            values = values[:, 0::2] + t[:, d:d + 1] * (values[:, 1::2] - values[:, 0::2])

        # rounding can push the result just past the theoretical bounds
        return np.clip(values[:, 0], -1.0, 1.0).astype(self.config.dtype)

    def dot_at_corner(self, p, grid_point):
        """Contribution of one cell corner: its gradient dotted with the offset to p."""
        p = as_point(p, self.dimensions, self.config.dtype)
        grid_point = as_point(grid_point, self.dimensions, self.config.grid_dtype)
        offset = Vector.from_point(p) - Vector.from_point(grid_point.convert_to(self.config.dtype))
        return dot(self.gradient_at(grid_point), offset)
