"""
DecisionConfig — tuning knobs for one PlanningBot instance.

Defaults reproduce the reference behaviour. run.py builds one from the
root config.py; tests build them directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from PlanningBot.errors import ConfigError
from PlanningBot.world.unit_types import DEFAULT_COSTS, UnitType

# Dispatch modes understood by ActionSelector
RUNNING_MAX = "running_max"   # fire every action that raises the running max
ARGMAX = "argmax"             # fire only the single best action
DISPATCH_MODES = (RUNNING_MAX, ARGMAX)


@dataclass
class DecisionConfig:
    costs: Dict[UnitType, int] = field(default_factory=lambda: dict(DEFAULT_COSTS))

    # Workers are only trained while we have at most this many
    max_workers: int = 15

    # Phase thresholds
    rich_gold_threshold: int = 2000       # gold >= this keeps us in BUILD
    attack_archer_threshold: int = 7      # archers > this -> ATTACK
    attack_soldier_threshold: int = 10    # soldiers >= this -> ATTACK

    dispatch_mode: str = RUNNING_MAX

    # Exclude a site from selection for the rest of the tick once a build
    # handler has claimed it
    reserve_sites: bool = False

    def __post_init__(self) -> None:
        if self.dispatch_mode not in DISPATCH_MODES:
            raise ConfigError(
                f"dispatch_mode must be one of {DISPATCH_MODES}, got {self.dispatch_mode!r}"
            )
        missing = [t.value for t in UnitType if t not in self.costs]
        if missing:
            raise ConfigError(f"costs missing unit types: {missing}")
        negative = [t.value for t, c in self.costs.items() if c < 0]
        if negative:
            raise ConfigError(f"costs must be non-negative: {negative}")
        if self.max_workers < 0:
            raise ConfigError("max_workers must be non-negative")

    def cost(self, unit_type: UnitType) -> int:
        return self.costs[unit_type]

    def can_afford(self, gold: int, unit_type: UnitType) -> bool:
        return gold >= self.costs[unit_type]
