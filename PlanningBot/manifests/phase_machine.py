"""
PhaseMachine — picks the game phase for this tick.

Classification is a pure function of the current snapshot: the same unit
counts and gold always give the same phase, whatever the phase was last
tick. The machine keeps no memory.

Priority table
--------------
Rules are checked in order; the first match wins. BUILD is always last
and always matches.

  1. WIN     — enemy has no workers, archers or soldiers left
  2. BUILD   — we are rich (gold >= rich_gold_threshold)
  3. ATTACK  — archers > attack_archer_threshold OR
               soldiers >= attack_soldier_threshold
  4. BUILD   — default

The order is the tie-break policy: a wealthy agent with a large army
goes back to BUILD rather than ATTACK.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, List

from PlanningBot.world.unit_types import UnitType

if TYPE_CHECKING:
    from PlanningBot.decision_config import DecisionConfig
    from PlanningBot.world.snapshot import WorldSnapshot


class GamePhase(Enum):
    BUILD  = "build"
    ATTACK = "attack"
    WIN    = "win"


@dataclass
class _PhaseRule:
    """
    One entry in the priority table.

    enter(snapshot, config) -> True means this phase applies.
    """
    phase: GamePhase
    enter: Callable[["WorldSnapshot", "DecisionConfig"], bool]


_RULES: List[_PhaseRule] = [
    # ── 1. Nothing left to contest ──────────────────────────────────────────
    # Also fires when no enemy is visible at all: empty rosters count as zero.
    _PhaseRule(
        phase=GamePhase.WIN,
        enter=lambda s, c: (
            s.enemy_count(UnitType.ARCHER) == 0
            and s.enemy_count(UnitType.SOLDIER) == 0
            and s.enemy_count(UnitType.WORKER) == 0
        ),
    ),

    # ── 2. Rich: spend it ───────────────────────────────────────────────────
    _PhaseRule(
        phase=GamePhase.BUILD,
        enter=lambda s, c: s.gold >= c.rich_gold_threshold,
    ),

    # ── 3. Army is big enough to push ───────────────────────────────────────
    _PhaseRule(
        phase=GamePhase.ATTACK,
        enter=lambda s, c: (
            s.my_count(UnitType.ARCHER) > c.attack_archer_threshold
            or s.my_count(UnitType.SOLDIER) >= c.attack_soldier_threshold
        ),
    ),

    # ── 4. Default ──────────────────────────────────────────────────────────
    _PhaseRule(
        phase=GamePhase.BUILD,
        enter=lambda s, c: True,
    ),
]


class PhaseMachine:
    """Stateless phase classifier over the priority table."""

    def __init__(self, config: "DecisionConfig") -> None:
        self.config = config

    def classify(self, snapshot: "WorldSnapshot") -> GamePhase:
        """Return the first phase whose enter() condition holds."""
        for rule in _RULES:
            if rule.enter(snapshot, self.config):
                return rule.phase
        return GamePhase.BUILD
