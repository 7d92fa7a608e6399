from __future__ import annotations
from .aco_base import ACOBase, ACOConfig
from .objectives import Objective

class AntSystem(ACOBase):
    """Classic Ant System (AS): every ant deposits Q / f at its terminal cell."""
    def __init__(self, objective: Objective, cfg: ACOConfig):
        super().__init__(objective, cfg)
