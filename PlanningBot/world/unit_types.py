"""
Unit categories, unit actions and grid coordinates shared by every layer.

All structures (base, barracks, refinery) occupy the same 3x3 footprint,
which is why a single build-site catalog serves every build handler.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, NamedTuple


class UnitType(Enum):
    WORKER   = "worker"
    ARCHER   = "archer"
    SOLDIER  = "soldier"
    BASE     = "base"
    BARRACKS = "barracks"
    REFINERY = "refinery"
    MINE     = "mine"

    @property
    def is_structure(self) -> bool:
        return self in STRUCTURE_TYPES


class UnitAction(Enum):
    """What a unit is currently doing, as reported by the simulation."""
    IDLE   = "idle"
    MOVE   = "move"
    BUILD  = "build"
    GATHER = "gather"
    TRAIN  = "train"
    ATTACK = "attack"


class GridPosition(NamedTuple):
    x: int
    y: int

    def sq_distance_to(self, other: "GridPosition") -> int:
        dx = self.x - other[0]
        dy = self.y - other[1]
        return dx * dx + dy * dy


STRUCTURE_TYPES: frozenset = frozenset({
    UnitType.BASE, UnitType.BARRACKS, UnitType.REFINERY,
})

# Side length of every structure footprint
FOOTPRINT: int = 3

# Categories tracked per owner in the snapshot (mines are ownerless)
OWNED_TYPES: tuple = (
    UnitType.WORKER,
    UnitType.ARCHER,
    UnitType.SOLDIER,
    UnitType.BASE,
    UnitType.BARRACKS,
    UnitType.REFINERY,
)

# Which structure trains which unit
PRODUCER: Dict[UnitType, UnitType] = {
    UnitType.WORKER:  UnitType.BASE,
    UnitType.ARCHER:  UnitType.BARRACKS,
    UnitType.SOLDIER: UnitType.BARRACKS,
}

DEFAULT_COSTS: Dict[UnitType, int] = {
    UnitType.WORKER:   100,
    UnitType.ARCHER:   250,
    UnitType.SOLDIER:  250,
    UnitType.BASE:     500,
    UnitType.BARRACKS: 500,
    UnitType.REFINERY: 500,
    UnitType.MINE:     0,
}
