"""
Action — the atomic unit of what the agent *does* in one tick.

Design principles
-----------------
- Each ActionKind has exactly one ActionHandler. The handler is the final
  translation layer between "this action won the scoring" and the
  commands sent to the simulation.
- Handlers are stateless. Everything they need flows in via ActionContext.
- execute() returns the number of commands issued. Zero is a normal
  outcome: no idle units, no targets, nothing affordable.
- Handlers never raise for a unit that has vanished. ActionContext.lookup()
  returns None for a stale id and the handler skips that unit.

ActionContext
-------------
The per-tick blackboard handed to every handler:

    PlanningBot  -> sets sim, agent_id, round_state, config, rng, tick
    handler      -> reads snapshot / catalog / anchor, issues commands
    ActionContext-> forwards commands to the simulation and tallies them
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

from PlanningBot.logger import get_logger

if TYPE_CHECKING:
    from PlanningBot.decision_config import DecisionConfig
    from PlanningBot.game_stats import RoundStatsTracker
    from PlanningBot.world.round_state import RoundState
    from PlanningBot.world.simulation import Simulation, UnitView
    from PlanningBot.world.snapshot import WorldSnapshot
    from PlanningBot.world.unit_types import GridPosition, UnitType

log = get_logger()


class ActionKind(Enum):
    BUILD_BASE          = "build_base"
    BUILD_BARRACKS      = "build_barracks"
    BUILD_REFINERY      = "build_refinery"
    TRAIN_ARCHER        = "train_archer"
    TRAIN_SOLDIER       = "train_soldier"
    TRAIN_WORKER        = "train_worker"
    GATHER              = "gather"
    ATTACK_WITH_ARCHERS = "attack_with_archers"
    ATTACK_WITH_SOLDIERS = "attack_with_soldiers"
    ATTACK_EVERYTHING   = "attack_everything"


# Fixed scan order shared by every phase. The dispatcher walks this list
# front to back, so it decides which handler fires first in a tick.
ACTION_ORDER: Tuple[ActionKind, ...] = (
    ActionKind.BUILD_BASE,
    ActionKind.BUILD_BARRACKS,
    ActionKind.BUILD_REFINERY,
    ActionKind.TRAIN_ARCHER,
    ActionKind.TRAIN_SOLDIER,
    ActionKind.TRAIN_WORKER,
    ActionKind.GATHER,
    ActionKind.ATTACK_WITH_ARCHERS,
    ActionKind.ATTACK_WITH_SOLDIERS,
    ActionKind.ATTACK_EVERYTHING,
)


@dataclass(frozen=True)
class ActionScore:
    """One scored candidate; lives for a single tick."""
    kind: ActionKind
    score: float


# ---------------------------------------------------------------------------
# ActionContext: the per-tick blackboard
# ---------------------------------------------------------------------------

@dataclass
class ActionContext:
    sim: "Simulation"
    agent_id: int
    round_state: "RoundState"
    config: "DecisionConfig"
    rng: random.Random = field(default_factory=random.Random)
    stats: Optional["RoundStatsTracker"] = None

    @property
    def snapshot(self) -> "WorldSnapshot":
        return self.round_state.snapshot

    @property
    def tick(self) -> int:
        return self.round_state.tick

    @property
    def gold(self) -> int:
        return self.round_state.snapshot.gold

    # ---- Reference resolution ----

    def lookup(self, unit_id: Optional[int]) -> Optional["UnitView"]:
        """Resolve a unit id, or None if it no longer exists."""
        if unit_id is None:
            return None
        view = self.sim.get_unit(unit_id)
        if view is None:
            log.debug("Stale unit reference %s skipped", unit_id, tick=self.tick)
            if self.stats is not None:
                self.stats.record_stale(unit_id)
        return view

    # ---- Commands ----

    def issue_build(self, worker: "UnitView", site: "GridPosition", unit_type: "UnitType") -> None:
        self.sim.build(worker, site, unit_type)
        self._record("build")
        log.debug(
            "build %s at %s by worker %d", unit_type.value, tuple(site), worker.unit_id,
            tick=self.tick,
        )

    def issue_train(self, structure: "UnitView", unit_type: "UnitType") -> None:
        self.sim.train(structure, unit_type)
        self._record("train")
        log.debug(
            "train %s at %s %d", unit_type.value, structure.unit_type.value, structure.unit_id,
            tick=self.tick,
        )

    def issue_attack(self, unit: "UnitView", target: "UnitView") -> None:
        self.sim.attack(unit, target)
        self._record("attack")

    def issue_gather(self, worker: "UnitView", mine: "UnitView", base: "UnitView") -> None:
        self.sim.gather(worker, mine, base)
        self._record("gather")

    def _record(self, command: str) -> None:
        if self.stats is not None:
            self.stats.record_command(command)


# ---------------------------------------------------------------------------
# ActionHandler base class
# ---------------------------------------------------------------------------

class ActionHandler(ABC):
    """
    Carries out one ActionKind.

    Subclass and implement:
      - KIND      : which ActionKind this handler answers for
      - execute() : issue commands; return how many were issued
    """

    KIND: ActionKind

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    def execute(self, ctx: ActionContext) -> int:
        """Issue this action's commands for the current tick."""
