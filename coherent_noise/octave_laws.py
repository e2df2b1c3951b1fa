"""
octave_laws.py

Weight and frequency laws for fractal noise. A law maps a 0-based octave
index to a multiplier. The laws are small frozen dataclasses so they compare
and print nicely inside a FractalConfig; any callable taking an int and
returning a number can be used instead.

Constants are stored as Fractions, so FractalConfig(weight=ExponentialLaw(0.5))
and ExponentialLaw(Fraction(1, 2)) are the same law.
"""
import math
from dataclasses import dataclass
from fractions import Fraction


def _rational(value):
    return value if isinstance(value, Fraction) else Fraction(value)


@dataclass(frozen=True)
class _Law:
    def __post_init__(self):
        for name in self.__dataclass_fields__:
            object.__setattr__(self, name, _rational(getattr(self, name)))

    def __call__(self, octave: int) -> float:
        if octave < 0:
            raise ValueError(f"octave index must be non-negative, got {octave}")
        try:
            return float(self.value(octave))
        except OverflowError:
            return math.inf

    def value(self, octave):
        raise NotImplementedError


@dataclass(frozen=True)
class ConstantLaw(_Law):
    """c for every octave."""
    c: Fraction = Fraction(1)

    def value(self, octave):
        return self.c


@dataclass(frozen=True)
class LinearLaw(_Law):
    """offset + slope * i. The default gives 1, 2, 3, ... (classic octave frequencies)."""
    slope: Fraction = Fraction(1)
    offset: Fraction = Fraction(1)

    def value(self, octave):
        return self.offset + self.slope * octave


@dataclass(frozen=True)
class HyperbolicLaw(_Law):
    """scale / (i + 1). The default gives 1, 1/2, 1/3, ..."""
    scale: Fraction = Fraction(1)

    def value(self, octave):
        return self.scale / (octave + 1)


@dataclass(frozen=True)
class ExponentialLaw(_Law):
    """scale * base ** i. Base 1/2 is the usual persistence, base 2 the usual lacunarity."""
    base: Fraction = Fraction(1, 2)
    scale: Fraction = Fraction(1)

    def value(self, octave):
        return self.scale * self.base ** octave


@dataclass(frozen=True)
class PolynomialLaw(_Law):
    """scale * (i + 1) ** exponent. Negative exponents decay."""
    exponent: Fraction = Fraction(-2)
    scale: Fraction = Fraction(1)

    def value(self, octave):
        return float(self.scale) * (octave + 1) ** float(self.exponent)


@dataclass(frozen=True)
class GaussianDecayLaw(_Law):
    """scale * exp(-i^2 / (2 width^2))."""
    width: Fraction = Fraction(8)
    scale: Fraction = Fraction(1)

    def value(self, octave):
        return float(self.scale) * math.exp(-(octave ** 2) / (2 * float(self.width) ** 2))


@dataclass(frozen=True)
class GaussianGrowthLaw(_Law):
    """scale * exp(i^2 / (2 width^2)). Overflows quickly for small widths."""
    width: Fraction = Fraction(8)
    scale: Fraction = Fraction(1)

    def value(self, octave):
        return float(self.scale) * math.exp((octave ** 2) / (2 * float(self.width) ** 2))


DEFAULT_WEIGHT = HyperbolicLaw()
DEFAULT_FREQUENCY = LinearLaw()
