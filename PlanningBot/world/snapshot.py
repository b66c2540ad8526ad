"""
SnapshotBuilder — Stage 1 of the decision pass.

Pulls the ids of every tracked unit category for this agent and for the
single tracked enemy, plus the agent's gold. Pure read; the snapshot is
rebuilt from scratch every tick and never patched incrementally.

Single tracked enemy
--------------------
Only the first id returned by get_enemy_agent_ids() is followed. In a game
with more than one opponent the others are ignored. That is a deliberate
scope limit: the targeting handlers are written against one enemy roster.
When no enemy is discoverable the enemy rosters stay empty, which the rest
of the core reads as "no enemy visible", not as an error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from PlanningBot.world.simulation import Simulation
from PlanningBot.world.unit_types import OWNED_TYPES, UnitType


def _empty_roster() -> Dict[UnitType, List[int]]:
    return {unit_type: [] for unit_type in OWNED_TYPES}


@dataclass
class WorldSnapshot:
    """
    Unit ids by category for one tick.

    Every roster is a list (possibly empty), never None.
    """
    agent_id: int = 0
    gold: int = 0
    enemy_agent_id: Optional[int] = None
    mine: Dict[UnitType, List[int]] = field(default_factory=_empty_roster)
    enemy: Dict[UnitType, List[int]] = field(default_factory=_empty_roster)
    mines: List[int] = field(default_factory=list)

    # ---- Convenience counts used by the phase machine and heuristics ----

    def my_count(self, unit_type: UnitType) -> int:
        return len(self.mine.get(unit_type, ()))

    def enemy_count(self, unit_type: UnitType) -> int:
        return len(self.enemy.get(unit_type, ()))

    @property
    def enemy_combatants(self) -> int:
        """Enemy workers + archers + soldiers: what is left to contest the map."""
        return (
            self.enemy_count(UnitType.WORKER)
            + self.enemy_count(UnitType.ARCHER)
            + self.enemy_count(UnitType.SOLDIER)
        )

    @property
    def enemy_id_or_zero(self) -> int:
        return self.enemy_agent_id if self.enemy_agent_id is not None else 0

    def is_empty(self) -> bool:
        return (
            not self.mines
            and not any(self.mine.values())
            and not any(self.enemy.values())
        )

    def summary(self) -> str:
        """One-line description for debug logs."""
        mine = ",".join(f"{t.value}={len(ids)}" for t, ids in self.mine.items())
        enemy = ",".join(f"{t.value}={len(ids)}" for t, ids in self.enemy.items())
        return f"gold={self.gold} mines={len(self.mines)} own[{mine}] enemy#{self.enemy_agent_id}[{enemy}]"


class SnapshotBuilder:
    """Reads the simulation into a fresh WorldSnapshot."""

    def __init__(self, sim: Simulation) -> None:
        self.sim = sim

    def refresh(self, agent_id: int) -> WorldSnapshot:
        snapshot = WorldSnapshot(agent_id=agent_id, gold=self.sim.get_gold(agent_id))

        snapshot.mines = list(self.sim.get_units_of_type(UnitType.MINE))

        for unit_type in OWNED_TYPES:
            snapshot.mine[unit_type] = list(self.sim.get_units_of_type(unit_type, agent_id))

        enemy_ids = self.sim.get_enemy_agent_ids(agent_id)
        if enemy_ids:
            enemy_id = enemy_ids[0]
            snapshot.enemy_agent_id = enemy_id
            for unit_type in OWNED_TYPES:
                snapshot.enemy[unit_type] = list(self.sim.get_units_of_type(unit_type, enemy_id))

        return snapshot
