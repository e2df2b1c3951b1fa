"""
fractal_noise.py

Fractal (multi-octave) noise on top of any coherent generator.

Octave i evaluates the inner generator at the point scaled by frequency(i)
and weighs the result by weight(i). The weighted sum is then squeezed back
into [-1, 1] with a smoothstep of the configured contrast order, so the
output stays bounded whatever laws and octave count are used. Higher
contrast pushes mid-range values further towards the extremes.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

import numpy as np

from .base import CoherentNoise
from .noise_math import smoothstep
from .octave_laws import DEFAULT_FREQUENCY, DEFAULT_WEIGHT
from .perlin_noise import PerlinConfig, check_seed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FractalConfig:
    """
    inner:     configuration of the generator every octave samples
    octaves:   number of octaves (>= 1)
    weight:    law giving the weight of octave i
    frequency: law giving the coordinate scale of octave i
    contrast:  smoothstep order of the final renormalization (>= 0)
    """
    inner: Any = field(default_factory=PerlinConfig)
    octaves: int = 3
    weight: Callable[[int], float] = DEFAULT_WEIGHT
    frequency: Callable[[int], float] = DEFAULT_FREQUENCY
    contrast: int = 2

    def __post_init__(self):
        if self.octaves < 1:
            raise ValueError(f"octaves must be at least 1, got {self.octaves}")
        if self.contrast < 0:
            raise ValueError(f"contrast must be non-negative, got {self.contrast}")
        if not callable(self.weight):
            raise TypeError(f"weight law must be callable, got {self.weight!r}")
        if not callable(self.frequency):
            raise TypeError(f"frequency law must be callable, got {self.frequency!r}")

    @property
    def dimensions(self):
        return self.inner.dimensions

    @property
    def dtype(self):
        return self.inner.dtype

    def create(self, seed=None):
        return FractalNoiseGenerator(self, seed)


class FractalNoiseGenerator(CoherentNoise):
    def __init__(self, config=None, seed=None):
        self.config = config if config is not None else FractalConfig()
        check_seed(seed)
        self.seed = seed

        octaves = range(self.config.octaves)
        weights = np.array([self.config.weight(i) for i in octaves], dtype=np.float64)
        frequencies = np.array([self.config.frequency(i) for i in octaves], dtype=np.float64)
        if not np.all(np.isfinite(weights)):
            raise ValueError(f"weight law {self.config.weight!r} is not finite over {self.config.octaves} octaves")
        if not np.all(np.isfinite(frequencies)):
            raise ValueError(f"frequency law {self.config.frequency!r} is not finite over {self.config.octaves} octaves")
        weights.flags.writeable = False
        frequencies.flags.writeable = False
        self.weights = weights
        self.frequencies = frequencies

        self.noise = self.config.inner.create(seed)

        logger.debug("Built %d-octave fractal noise over %r", self.config.octaves, self.noise)

    def _evaluate(self, points):
        total = np.zeros(points.shape[0], dtype=np.float64)
        for w, f in zip(self.weights, self.frequencies):
            total += w * self.noise._evaluate(points * f)

        # [-1, 1] -> [0, 1] -> smoothstep -> [-1, 1]
        shaped = smoothstep((total + 1.0) / 2.0, self.config.contrast)
        return (shaped * 2.0 - 1.0).astype(self.config.dtype)
