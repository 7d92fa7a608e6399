from __future__ import annotations
from typing import Tuple

import numpy as np

from .errors import InvalidConfigurationError


class Grid:
    """Square lattice of n_steps x n_steps candidate points over [lo, hi]^2."""

    def __init__(self, lower_bound: float, upper_bound: float, n_steps: int):
        if not lower_bound < upper_bound:
            raise InvalidConfigurationError(
                f"lower bound must be < upper bound, got ({lower_bound}, {upper_bound})")
        if n_steps < 2:
            raise InvalidConfigurationError(f"n_steps must be >= 2, got {n_steps}")
        self.lower_bound = float(lower_bound)
        self.upper_bound = float(upper_bound)
        self.n_steps = int(n_steps)

        step = (self.upper_bound - self.lower_bound) / (self.n_steps - 1)
        vals = self.lower_bound + np.arange(self.n_steps) * step
        # pin the endpoint, the product above can be off by an ulp
        vals[-1] = self.upper_bound
        vals.setflags(write=False)
        self.x_vals = vals
        self.y_vals = vals

    @property
    def bounds(self) -> Tuple[float, float]:
        return self.lower_bound, self.upper_bound

    @property
    def shape(self) -> Tuple[int, int]:
        return self.n_steps, self.n_steps

    def coordinate(self, i: int, j: int) -> Tuple[float, float]:
        return float(self.x_vals[i]), float(self.y_vals[j])

    def nearest_index(self, value: float, axis: str = "x") -> int:
        """Index of the grid value closest to `value`; the first one wins ties."""
        if axis == "x":
            vals = self.x_vals
        elif axis == "y":
            vals = self.y_vals
        else:
            raise ValueError(f"axis must be 'x' or 'y', got {axis!r}")
        return int(np.argmin(np.abs(vals - value)))

    def nearest_position(self, x: float, y: float) -> Tuple[int, int]:
        return self.nearest_index(x, "x"), self.nearest_index(y, "y")

    def mesh(self) -> Tuple[np.ndarray, np.ndarray]:
        """Coordinate arrays with X[i, j] = x_vals[i] and Y[i, j] = y_vals[j]."""
        return np.meshgrid(self.x_vals, self.y_vals, indexing="ij")

    def __repr__(self) -> str:
        return f"Grid(bounds={self.bounds}, n_steps={self.n_steps})"
