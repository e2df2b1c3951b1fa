"""
seamless_noise.py

2D noise that tiles without seams.

The x coordinate is wound around one circle and the y coordinate around a
second one, and the 4D point made of both circles is handed to a 4D noise
generator. Moving x by the tile width (or y by the tile height) walks once
around its circle, so the output repeats with exactly that period. The
circle radii are width / 2pi and height / 2pi, which keeps the feature size
the same as unwrapped noise over a width x height area.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .base import CoherentNoise
from .fractal_noise import FractalConfig
from .perlin_noise import PerlinConfig, check_seed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeamlessConfig:
    """
    inner:  configuration of a 4-dimensional generator (Perlin or fractal)
    width:  tile period along x (> 0)
    height: tile period along y (> 0)
    """
    inner: Any = field(default_factory=lambda: FractalConfig(inner=PerlinConfig(dimensions=4)))
    width: float = 6
    height: float = 4

    def __post_init__(self):
        if self.inner.dimensions != 4:
            raise ValueError(f"seamless noise needs a 4-dimensional inner generator, got {self.inner.dimensions}")
        if self.width <= 0:
            raise ValueError(f"width must be positive, got {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be positive, got {self.height}")

    @property
    def dimensions(self):
        return 2

    @property
    def dtype(self):
        return self.inner.dtype

    def create(self, seed=None):
        return SeamlessNoiseGenerator2D(self, seed)


class SeamlessNoiseGenerator2D(CoherentNoise):
    def __init__(self, config=None, seed=None):
        self.config = config if config is not None else SeamlessConfig()
        check_seed(seed)
        self.seed = seed
        self.noise = self.config.inner.create(seed)

        logger.debug("Built %gx%g seamless noise over %r", self.config.width, self.config.height, self.noise)

    def lift(self, points):
        """Map 2D points of shape (M, 2) onto the 4D torus, shape (M, 4)."""
        two_pi = 2.0 * math.pi
        width = float(self.config.width)
        height = float(self.config.height)

        s = points[:, 0] / width
        t = points[:, 1] / height
        rx = width / two_pi
        ry = height / two_pi
        return np.stack([
            np.cos(s * two_pi) * rx,
            np.cos(t * two_pi) * ry,
            np.sin(s * two_pi) * rx,
            np.sin(t * two_pi) * ry,
        ], axis=1)

    def _evaluate(self, points):
        return self.noise._evaluate(self.lift(points).astype(self.config.dtype))
