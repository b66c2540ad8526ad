"""
RoundState — everything that lives for exactly one round.

Owned by PlanningBot and replaced wholesale by initialize_round(). Holds
the build-site catalog, the main gather route (MainAnchor), the latest
snapshot and the tick-local site reservations. Nothing here survives into
the next round.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Set

from PlanningBot.construction.placement_resolver import BuildSiteCatalog
from PlanningBot.world.snapshot import WorldSnapshot
from PlanningBot.world.unit_types import GridPosition


@dataclass
class MainAnchor:
    """
    Primary mine and base used as the default gather route.

    Either id may point at a unit that has since been destroyed; callers
    re-validate through Simulation.get_unit() before use.
    """
    mine_id: Optional[int] = None
    base_id: Optional[int] = None

    @property
    def is_set(self) -> bool:
        return self.mine_id is not None and self.base_id is not None

    def reset(self) -> None:
        self.mine_id = None
        self.base_id = None


@dataclass
class RoundState:
    catalog: BuildSiteCatalog
    anchor: MainAnchor = field(default_factory=MainAnchor)
    snapshot: WorldSnapshot = field(default_factory=WorldSnapshot)
    reserved_sites: Set[GridPosition] = field(default_factory=set)
    tick: int = 0

    def begin_tick(self, tick: int, snapshot: WorldSnapshot) -> None:
        """Swap in this tick's snapshot and drop last tick's reservations."""
        self.tick = tick
        self.snapshot = snapshot
        self.reserved_sites.clear()
