from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .errors import DegenerateDistributionError
from .fields import HeuristicField, PheromoneField
from .grid import Grid
from .objectives import Objective


@dataclass(frozen=True)
class AntSolution:
    position: Tuple[int, int]
    x: float
    y: float
    value: float


def weighted_choice(weights: np.ndarray, rng: np.random.Generator) -> int:
    """Roulette-wheel draw of a flat index with probability weights[k] / sum(weights)."""
    cumulative = np.cumsum(weights, dtype=float)
    total = cumulative[-1]
    if not np.isfinite(total) or total <= 0.0:
        raise DegenerateDistributionError(
            f"selection weights sum to {total}; cannot sample a cell "
            "(check alpha/beta and the pheromone/heuristic ranges)")
    r = rng.random() * total
    # first index whose running sum exceeds r, so zero-weight cells are never picked
    k = int(np.searchsorted(cumulative, r, side="right"))
    return min(k, len(cumulative) - 1)


class AntWalker:
    """
    One ant: starts on a uniformly random cell, then jumps `steps` times to a
    cell drawn from the whole grid with probability proportional to
    tau^alpha * eta^beta. The terminal cell is its solution.
    """

    def __init__(self, grid: Grid, heuristic: HeuristicField, pheromone: PheromoneField,
                 objective: Objective, alpha: float, beta: float, rng: np.random.Generator):
        self.grid = grid
        self.heuristic = heuristic
        self.pheromone = pheromone
        self.objective = objective
        self.alpha = alpha
        self.beta = beta
        self.rng = rng
        self.position: Tuple[int, int] = (0, 0)
        self.path: List[Tuple[int, int]] = []

    def selection_weights(self) -> np.ndarray:
        """
        tau^alpha * eta^beta for every cell, divided by its largest entry.

        Built in log space so that large exponents or a huge heuristic at the
        optimum do not overflow; the normalized distribution is unchanged.
        All zeros means no cell is reachable.
        """
        log_w = np.zeros(self.grid.shape)
        with np.errstate(divide="ignore"):
            if self.alpha != 0:
                log_w += self.alpha * np.log(self.pheromone.values)
            if self.beta != 0:
                log_w += self.beta * np.log(self.heuristic.values)
        peak = log_w.max()
        if not np.isfinite(peak):
            return np.zeros(self.grid.shape)
        return np.exp(log_w - peak)

    def selection_probabilities(self) -> np.ndarray:
        w = self.selection_weights()
        total = w.sum()
        if total <= 0.0:
            raise DegenerateDistributionError(
                "selection weights are zero on every cell "
                "(check alpha and the pheromone field)")
        return w / total

    def _start(self):
        n = self.grid.n_steps
        self.position = (int(self.rng.integers(n)), int(self.rng.integers(n)))
        self.path = [self.position]

    def _step(self):
        # fresh every step; the colony only writes the field between iterations
        p = self.selection_probabilities()
        k = weighted_choice(p.ravel(), self.rng)
        self.position = tuple(int(v) for v in np.unravel_index(k, p.shape))
        self.path.append(self.position)

    def run(self, steps: int) -> AntSolution:
        self._start()
        for _ in range(steps):
            self._step()
        i, j = self.position
        x, y = self.grid.coordinate(i, j)
        return AntSolution(position=(i, j), x=x, y=y, value=float(self.objective(x, y)))
