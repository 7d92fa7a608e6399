from __future__ import annotations
from typing import List
from .aco_base import ACOBase, ACOConfig
from .ant import AntSolution
from .errors import InvalidConfigurationError
from .objectives import Objective

class MaxMinAntSystem(ACOBase):
    """Max-Min Ant System (MMAS): deposit only by the iteration-best ant, enforce tau_min <= tau <= tau_max."""
    def __init__(self, objective: Objective, cfg: ACOConfig):
        if cfg.tau_min is None or cfg.tau_max is None:
            raise InvalidConfigurationError("MMAS requires tau_min and tau_max.")
        if not 0 < cfg.tau_min <= cfg.tau_max:
            raise InvalidConfigurationError("MMAS requires 0 < tau_min <= tau_max.")
        super().__init__(objective, cfg)

    def _deposit(self, solutions: List[AntSolution]):
        # only best ant deposits; min() keeps the first on ties
        best = min(solutions, key=lambda s: s.value)
        position = self.grid.nearest_position(best.x, best.y)
        amount = self.pheromone.deposit_amount(self.cfg.Q, best.value, self.cfg.deposit_floor)
        self.pheromone.deposit(position, amount)

    def _apply_bounds_if_needed(self):
        self.pheromone.clip(self.cfg.tau_min, self.cfg.tau_max)
