import numpy as np

from .point import as_point


class CoherentNoise:
    """
    Shared evaluation surface of the noise generators.

    Subclasses set `config` (which provides `dimensions` and `dtype`) and
    implement `_evaluate`, taking an (M, D) float array and returning M values.
    """

    config = None

    @property
    def dimensions(self):
        return self.config.dimensions

    def at(self, p):
        """Noise value at a single point (Point, sequence or 1-D array)."""
        p = as_point(p, self.dimensions, self.config.dtype)
        return float(self._evaluate(p.to_array()[None, :])[0])

    def at_many(self, points):
        """Noise values for an array of points of shape (..., D)."""
        points = np.asarray(points, dtype=self.config.dtype)
        if points.shape[-1:] != (self.dimensions,):
            raise ValueError(f"expected points of shape (..., {self.dimensions}), got {points.shape}")
        flat = points.reshape(-1, self.dimensions)
        return self._evaluate(flat).reshape(points.shape[:-1])

    def _evaluate(self, points):
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}(config={self.config!r}, seed={self.seed!r})"
