from __future__ import annotations
import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .ant import AntSolution, AntWalker
from .errors import InvalidConfigurationError
from .fields import HeuristicField, PheromoneField
from .grid import Grid
from .objectives import Objective

logger = logging.getLogger(__name__)


@dataclass
class ACOConfig:
    alpha: float = 1.0          # pheromone influence
    beta: float = 2.0           # heuristic influence
    rho: float = 0.5            # evaporation rate
    Q: float = 1.0              # pheromone deposit factor
    tau0: float = 1.0           # initial pheromone
    n_ants: int = 10
    n_iterations: int = 50
    lower_bound: float = -5.0
    upper_bound: float = 5.0
    n_steps: int = 100          # grid points per axis
    ant_steps: int = 10         # transitions per ant walk
    eps: float = 1e-10          # heuristic offset, 1 / (f + eps)
    deposit_floor: float = 1e-10  # objective values below this deposit Q / deposit_floor
    tau_min: Optional[float] = None
    tau_max: Optional[float] = None
    n_workers: int = 1
    record_pheromone: bool = False
    seed: Optional[int] = None

    @property
    def bounds(self) -> Tuple[float, float]:
        return self.lower_bound, self.upper_bound

    def validate(self):
        checks = [
            (self.n_ants >= 1, f"n_ants must be >= 1, got {self.n_ants}"),
            (self.n_iterations >= 1, f"n_iterations must be >= 1, got {self.n_iterations}"),
            (self.alpha >= 0, f"alpha must be >= 0, got {self.alpha}"),
            (self.beta >= 0, f"beta must be >= 0, got {self.beta}"),
            (0 <= self.rho < 1, f"rho must be in [0, 1), got {self.rho}"),
            (self.tau0 > 0, f"tau0 must be > 0, got {self.tau0}"),
            (math.isfinite(self.lower_bound) and math.isfinite(self.upper_bound),
             f"bounds must be finite, got {self.bounds}"),
            (self.lower_bound < self.upper_bound, f"bounds must satisfy lo < hi, got {self.bounds}"),
            (self.n_steps >= 2, f"n_steps must be >= 2, got {self.n_steps}"),
            (self.ant_steps >= 0, f"ant_steps must be >= 0, got {self.ant_steps}"),
            (self.Q > 0, f"Q must be > 0, got {self.Q}"),
            (self.eps > 0, f"eps must be > 0, got {self.eps}"),
            (self.deposit_floor > 0, f"deposit_floor must be > 0, got {self.deposit_floor}"),
            (self.n_workers >= 1, f"n_workers must be >= 1, got {self.n_workers}"),
        ]
        for ok, msg in checks:
            if not ok:
                raise InvalidConfigurationError(msg)
        return self


@dataclass
class ACOResult:
    best_x: float
    best_y: float
    best_value: float
    best_position: Tuple[int, int]
    history_best_values: List[float]
    history_iteration_best: List[float]
    config: ACOConfig
    elapsed_sec: float

    @property
    def best(self) -> Tuple[float, float, float]:
        return self.best_x, self.best_y, self.best_value


class ACOBase:
    def __init__(self, objective: Objective, cfg: ACOConfig):
        self.cfg = cfg.validate()
        self.objective = objective
        self.grid = Grid(cfg.lower_bound, cfg.upper_bound, cfg.n_steps)
        self.heuristic = HeuristicField(self.grid, objective, eps=cfg.eps)
        self._reset()

    def _reset(self):
        self.rng = np.random.default_rng(self.cfg.seed)
        self.pheromone = PheromoneField(self.cfg.n_steps, self.cfg.tau0)
        self._apply_bounds_if_needed()

        self.best: Optional[AntSolution] = None
        self.best_value = math.inf
        # per-iteration history for plots
        self.history_best_values: List[float] = []
        self.history_iteration_best: List[float] = []
        self.history_best_positions: List[Tuple[int, int]] = []
        self.history_pheromone: List[np.ndarray] = []

    def _make_ant(self, rng: np.random.Generator) -> AntWalker:
        return AntWalker(self.grid, self.heuristic, self.pheromone, self.objective,
                         self.cfg.alpha, self.cfg.beta, rng)

    def _ant_rngs(self) -> List[np.random.Generator]:
        # drawn in ant order from the colony generator, so the outcome does not depend on n_workers
        seeds = self.rng.integers(0, 2**63 - 1, size=self.cfg.n_ants)
        return [np.random.default_rng(int(s)) for s in seeds]

    def _construct_solutions(self, executor: Optional[ThreadPoolExecutor] = None) -> List[AntSolution]:
        ants = [self._make_ant(rng) for rng in self._ant_rngs()]
        steps = self.cfg.ant_steps
        if executor is None:
            return [ant.run(steps) for ant in ants]
        futures = [executor.submit(ant.run, steps) for ant in ants]
        # barrier: every walk finishes before the field is touched
        return [f.result() for f in futures]

    def _update_best(self, solutions: List[AntSolution]):
        for s in solutions:
            if s.value < self.best_value:
                self.best_value = s.value
                self.best = s

    def _evaporate(self):
        self.pheromone.evaporate(self.cfg.rho)

    def _deposit(self, solutions: List[AntSolution]):
        for s in solutions:
            position = self.grid.nearest_position(s.x, s.y)
            amount = self.pheromone.deposit_amount(self.cfg.Q, s.value, self.cfg.deposit_floor)
            self.pheromone.deposit(position, amount)

    def _apply_bounds_if_needed(self):
        # Overridden by MMAS
        pass

    def _iterate(self, executor: Optional[ThreadPoolExecutor] = None) -> List[AntSolution]:
        solutions = self._construct_solutions(executor)
        self._update_best(solutions)

        self._evaporate()
        self._deposit(solutions)
        self._apply_bounds_if_needed()
        return solutions

    def run(self) -> ACOResult:
        cfg = self.cfg
        start = time.time()
        self._reset()
        logger.info(f"{self.__class__.__name__}: {cfg.n_ants} ants x {cfg.n_iterations} iterations "
                    f"on {self.grid} (seed={cfg.seed})")

        executor = ThreadPoolExecutor(max_workers=cfg.n_workers) if cfg.n_workers > 1 else None
        try:
            for it in range(cfg.n_iterations):
                solutions = self._iterate(executor)

                self.history_best_values.append(self.best_value)
                self.history_iteration_best.append(min(s.value for s in solutions))
                self.history_best_positions.append(self.best.position)
                if cfg.record_pheromone:
                    self.history_pheromone.append(self.pheromone.snapshot())
                logger.debug(f"Iteration {it + 1}: best value so far = {self.best_value:.6g}")
        finally:
            if executor is not None:
                executor.shutdown(wait=True)

        elapsed = time.time() - start
        best = self.best
        logger.info(f"Best value {best.value:.6g} at ({best.x:.4f}, {best.y:.4f}) in {elapsed:.2f}s")
        return ACOResult(best_x=best.x, best_y=best.y, best_value=best.value,
                         best_position=best.position,
                         history_best_values=list(self.history_best_values),
                         history_iteration_best=list(self.history_iteration_best),
                         config=cfg, elapsed_sec=elapsed)
