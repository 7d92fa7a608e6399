from __future__ import annotations


class ACOError(Exception):
    """Base class for errors raised by the colony optimizer."""


class InvalidConfigurationError(ACOError, ValueError):
    """A parameter lies outside its documented domain."""


class DegenerateDistributionError(ACOError, ArithmeticError):
    """All selection weights vanished, so no cell can be sampled."""
