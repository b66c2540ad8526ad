"""
HeuristicEvaluator - Stage 2 of the decision pass.

Turns a WorldSnapshot plus the tick's GamePhase into one score per action,
in ACTION_ORDER. Pure deterministic math; no simulation access.

Score shape
-----------
Every score is clamped to [0, 1].

  build / train   need(snapshot) * afford(gold, cost)
                  Both factors are clamped, so a structure we do not need
                  or cannot pay for scores exactly 0.
  gather          rises as gold drops below the phase's comfort level.
  attack          0/1 indicators keyed to army-size comparisons.

afford() is clamp(gold - (cost - 1)) which, for integer gold, is 1 exactly
when gold >= cost. This is what keeps an unaffordable train or build from
ever being dispatched.

The attack-everything term in BUILD and ATTACK compares the tracked
enemy's agent id against the enemy's remaining units. That comparison is
odd but it is the tuned behaviour; it only matters while the enemy still
has units, since WIN takes over once they are gone.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, List

from PlanningBot.abilities.action import ACTION_ORDER, ActionKind, ActionScore
from PlanningBot.manifests.phase_machine import GamePhase
from PlanningBot.world.unit_types import UnitType as T

if TYPE_CHECKING:
    from PlanningBot.decision_config import DecisionConfig
    from PlanningBot.world.snapshot import WorldSnapshot

ScoreFn = Callable[["WorldSnapshot", "DecisionConfig"], float]


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


def afford(s: "WorldSnapshot", c: "DecisionConfig", unit_type: T) -> float:
    return clamp01(s.gold - (c.cost(unit_type) - 1))


def _attack_everything(s: "WorldSnapshot", c: "DecisionConfig") -> float:
    remaining = s.enemy_combatants
    return clamp01(s.enemy_id_or_zero - remaining) * clamp01(remaining)


# ── Weight tables ─────────────────────────────────────────────────────────────

_BUILD_TABLE: Dict[ActionKind, ScoreFn] = {
    ActionKind.BUILD_BASE: lambda s, c: (
        clamp01(1 - s.my_count(T.BASE)) * afford(s, c, T.BASE)
    ),
    ActionKind.BUILD_BARRACKS: lambda s, c: (
        clamp01(s.enemy_count(T.BARRACKS) - s.my_count(T.BARRACKS) + 2) * afford(s, c, T.BARRACKS)
    ),
    ActionKind.BUILD_REFINERY: lambda s, c: (
        clamp01(3 - s.my_count(T.REFINERY)) * afford(s, c, T.REFINERY)
    ),
    ActionKind.TRAIN_ARCHER: lambda s, c: (
        clamp01(s.enemy_count(T.ARCHER) * 2) * afford(s, c, T.ARCHER)
    ),
    ActionKind.TRAIN_SOLDIER: lambda s, c: (
        clamp01(s.my_count(T.SOLDIER)) * afford(s, c, T.SOLDIER)
    ),
    ActionKind.TRAIN_WORKER: lambda s, c: (
        clamp01(s.enemy_count(T.BASE) - s.my_count(T.WORKER) + 5) * afford(s, c, T.WORKER)
    ),
    ActionKind.GATHER: lambda s, c: clamp01(1500 - s.gold),
    ActionKind.ATTACK_WITH_ARCHERS: lambda s, c: clamp01(s.my_count(T.ARCHER) - 10),
    ActionKind.ATTACK_WITH_SOLDIERS: lambda s, c: clamp01(s.my_count(T.SOLDIER) - 10),
    ActionKind.ATTACK_EVERYTHING: _attack_everything,
}

_ATTACK_TABLE: Dict[ActionKind, ScoreFn] = {
    ActionKind.BUILD_BASE: lambda s, c: (
        clamp01(1 - s.my_count(T.BASE)) * afford(s, c, T.BASE)
    ),
    ActionKind.BUILD_BARRACKS: lambda s, c: (
        clamp01(s.my_count(T.BARRACKS) - s.enemy_count(T.BARRACKS) - 3) * afford(s, c, T.BARRACKS)
    ),
    ActionKind.BUILD_REFINERY: lambda s, c: (
        clamp01(1 - s.my_count(T.REFINERY)) * afford(s, c, T.REFINERY)
    ),
    ActionKind.TRAIN_ARCHER: lambda s, c: (
        clamp01(s.enemy_count(T.ARCHER) - s.my_count(T.ARCHER) - 4) * afford(s, c, T.ARCHER)
    ),
    ActionKind.TRAIN_SOLDIER: lambda s, c: (
        clamp01(s.enemy_count(T.SOLDIER) - s.my_count(T.SOLDIER) - 4) * afford(s, c, T.SOLDIER)
    ),
    ActionKind.TRAIN_WORKER: lambda s, c: (
        clamp01(s.my_count(T.WORKER) - 4) * afford(s, c, T.WORKER)
    ),
    ActionKind.GATHER: lambda s, c: clamp01(150 - s.gold),
    ActionKind.ATTACK_WITH_ARCHERS: lambda s, c: clamp01(s.enemy_combatants - 4),
    ActionKind.ATTACK_WITH_SOLDIERS: lambda s, c: clamp01(s.enemy_combatants - 4),
    ActionKind.ATTACK_EVERYTHING: _attack_everything,
}

# Nothing left to fight: only sweeping the remaining structures matters
_WIN_TABLE: Dict[ActionKind, ScoreFn] = {
    kind: (lambda s, c: 0.0) for kind in ACTION_ORDER
}
_WIN_TABLE[ActionKind.ATTACK_EVERYTHING] = lambda s, c: 1.0

PHASE_TABLES: Dict[GamePhase, Dict[ActionKind, ScoreFn]] = {
    GamePhase.BUILD:  _BUILD_TABLE,
    GamePhase.ATTACK: _ATTACK_TABLE,
    GamePhase.WIN:    _WIN_TABLE,
}


class HeuristicEvaluator:
    """Scores the fixed action list for a given phase."""

    def __init__(self, config: "DecisionConfig") -> None:
        self.config = config

    def score(self, snapshot: "WorldSnapshot", phase: GamePhase) -> List[ActionScore]:
        table = PHASE_TABLES[phase]
        return [
            ActionScore(kind, clamp01(table[kind](snapshot, self.config)))
            for kind in ACTION_ORDER
        ]
