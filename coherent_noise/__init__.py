"""
Coherent gradient noise in any number of dimensions, fractal (multi-octave)
noise on top of it, and 2D noise that tiles seamlessly.

    >>> from coherent_noise import PerlinConfig
    >>> noise = PerlinConfig(dimensions=3, smoothness=2).create(seed=10)
    >>> noise.at((0.5, 1.25, -3.0))  # doctest: +SKIP
"""
from .fractal_noise import FractalConfig, FractalNoiseGenerator
from .noise_math import binomial, ipow, lerp, mod, smoothstep
from .octave_laws import (
    ConstantLaw,
    ExponentialLaw,
    GaussianDecayLaw,
    GaussianGrowthLaw,
    HyperbolicLaw,
    LinearLaw,
    PolynomialLaw,
)
from .perlin_noise import PerlinConfig, PerlinNoiseGenerator
from .point import Point
from .seamless_noise import SeamlessConfig, SeamlessNoiseGenerator2D
from .vector import Vector, dot, magnitude, normalized

__version__ = "0.1.0"
