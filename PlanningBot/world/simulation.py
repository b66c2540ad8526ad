"""
Simulation — the boundary between the decision core and the world engine.

The core only reads through these queries and writes through the four
fire-and-forget commands. Unit positions, health, pathfinding and the
actual execution of a command all belong to the implementation behind
this protocol (the host game, or GridWorld in the sandbox package).

Unit references are plain ints. They carry no lifetime guarantee: a unit
may be gone by the time a handler looks it up, in which case get_unit()
returns None and the caller skips it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple, runtime_checkable

from PlanningBot.world.unit_types import GridPosition, UnitAction, UnitType


@dataclass(frozen=True)
class UnitView:
    """Read-only view of one unit at the moment it was looked up."""
    unit_id: int
    unit_type: UnitType
    owner: Optional[int]          # None for neutral units (mines)
    position: GridPosition
    health: float
    is_built: bool
    current_action: UnitAction

    @property
    def is_idle(self) -> bool:
        return self.current_action == UnitAction.IDLE


@runtime_checkable
class Simulation(Protocol):
    """Everything the decision core consumes from the world engine."""

    # ---- Queries ----

    @property
    def map_bounds(self) -> Tuple[int, int]:
        """(width, height) of the grid."""

    def get_units_of_type(self, unit_type: UnitType, owner: Optional[int] = None) -> List[int]:
        """Ids of every unit of unit_type, optionally restricted to one owner."""

    def get_unit(self, unit_id: int) -> Optional[UnitView]:
        """Current view of a unit, or None if it no longer exists."""

    def get_enemy_agent_ids(self, self_id: int) -> List[int]:
        """Opposing agent ids, in discovery order."""

    def get_gold(self, agent_id: int) -> int:
        """The agent's current gold."""

    def is_bounded_area_buildable(self, unit_type: UnitType, position: GridPosition) -> bool:
        """True if a unit_type footprint anchored at position can be placed now."""

    # ---- Commands (fire-and-forget) ----

    def build(self, unit: UnitView, position: GridPosition, unit_type: UnitType) -> None: ...

    def train(self, structure: UnitView, unit_type: UnitType) -> None: ...

    def attack(self, unit: UnitView, target: UnitView) -> None: ...

    def gather(self, unit: UnitView, mine: UnitView, base: UnitView) -> None: ...
