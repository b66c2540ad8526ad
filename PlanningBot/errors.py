"""
PlanningBot exceptions.

The decision pass itself never raises for stale references, missing
targets or unaffordable actions; those are skip paths. The errors here
cover configuration and lifecycle misuse by the hosting loop.
"""


class PlanningBotError(Exception):
    """Base class for all PlanningBot errors."""


class ConfigError(PlanningBotError, ValueError):
    """A DecisionConfig value is out of range or unknown."""


class RoundNotStartedError(PlanningBotError, RuntimeError):
    """on_step() was called before initialize_round()."""
