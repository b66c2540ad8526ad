"""
PlanningBot.world — unit vocabulary, the Simulation boundary, snapshots.

Round-scoped state lives in PlanningBot.world.round_state and is imported
from there directly.
"""

from PlanningBot.world.simulation import Simulation, UnitView
from PlanningBot.world.snapshot import SnapshotBuilder, WorldSnapshot
from PlanningBot.world.unit_types import GridPosition, UnitAction, UnitType

__all__ = [
    "Simulation",
    "UnitView",
    "SnapshotBuilder",
    "WorldSnapshot",
    "GridPosition",
    "UnitAction",
    "UnitType",
]
