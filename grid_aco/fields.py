from __future__ import annotations
from typing import Optional, Tuple

import numpy as np

from .errors import InvalidConfigurationError
from .grid import Grid
from .objectives import Objective


class HeuristicField:
    """Static desirability eta(i, j) = 1 / (f(x_i, y_j) + eps), computed once."""

    def __init__(self, grid: Grid, objective: Objective, eps: float = 1e-10):
        X, Y = grid.mesh()
        # cell by cell, objectives only have to accept plain floats
        costs = np.vectorize(objective, otypes=[float])(X, Y)
        values = 1.0 / (costs + eps)
        if not np.all(np.isfinite(values)) or np.any(values < 0):
            raise InvalidConfigurationError(
                "heuristic field must be finite and non-negative; "
                f"objective ranges over [{costs.min():g}, {costs.max():g}] on the grid")
        values.setflags(write=False)
        self.costs = costs
        self.values = values
        self.eps = eps

    def __getitem__(self, position: Tuple[int, int]) -> float:
        return float(self.values[position])


class PheromoneField:
    """Mutable n x n pheromone intensities, owned by one colony run."""

    def __init__(self, n_steps: int, initial: float):
        if initial <= 0:
            raise InvalidConfigurationError(f"initial pheromone must be > 0, got {initial}")
        self.tau = np.full((n_steps, n_steps), float(initial))

    @classmethod
    def initialize(cls, n: int, value: float) -> "PheromoneField":
        return cls(n, value)

    @property
    def values(self) -> np.ndarray:
        return self.tau

    def __getitem__(self, position: Tuple[int, int]) -> float:
        return float(self.tau[position])

    def evaporate(self, rate: float):
        if not 0.0 <= rate < 1.0:
            raise InvalidConfigurationError(f"evaporation rate must be in [0, 1), got {rate}")
        self.tau *= (1.0 - rate)

    def deposit(self, position: Tuple[int, int], amount: float):
        if amount < 0:
            raise ValueError(f"deposit amount must be >= 0, got {amount}")
        i, j = position
        self.tau[i, j] += amount

    @staticmethod
    def deposit_amount(Q: float, value: float, floor: float = 1e-10) -> float:
        # objective values at or below zero are clamped to `floor`
        return Q / max(value, floor)

    def clip(self, tau_min: Optional[float], tau_max: Optional[float]):
        np.clip(self.tau, tau_min, tau_max, out=self.tau)

    def snapshot(self) -> np.ndarray:
        return self.tau.copy()
