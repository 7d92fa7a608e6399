from .errors import ACOError, InvalidConfigurationError, DegenerateDistributionError
from .objectives import ackley, sphere, constant, get_objective, OBJECTIVES
from .grid import Grid
from .fields import HeuristicField, PheromoneField
from .ant import AntWalker, AntSolution, weighted_choice
from .aco_base import ACOConfig, ACOResult
from .ant_system import AntSystem
from .mmas import MaxMinAntSystem
from .experiments import run_parameter_sweep, run_repeated_trials
