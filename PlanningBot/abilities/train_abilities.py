"""
Train handlers — worker, archer and soldier production.

Each handler walks our producer structures (bases for workers, barracks
for archers and soldiers) and queues one unit at every producer that
still exists, is fully built, is idle, and while we can pay for it.

Gold is read from the tick's snapshot and is not debited locally; when
several producers are eligible in one tick each gets a train command and
the simulation refuses any it cannot fund.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from PlanningBot.abilities.action import ActionContext, ActionHandler, ActionKind
from PlanningBot.world.unit_types import PRODUCER, UnitType

if TYPE_CHECKING:
    from PlanningBot.abilities.action_registry import ActionRegistry


class TrainHandler(ActionHandler):
    """Queue one UNIT_TYPE at every eligible producer."""

    UNIT_TYPE: UnitType

    def execute(self, ctx: ActionContext) -> int:
        producer_type = PRODUCER[self.UNIT_TYPE]
        issued = 0
        for structure_id in ctx.snapshot.mine[producer_type]:
            structure = ctx.lookup(structure_id)
            if structure is None:
                continue
            if not structure.is_built or not structure.is_idle:
                continue
            if not ctx.config.can_afford(ctx.gold, self.UNIT_TYPE):
                continue
            ctx.issue_train(structure, self.UNIT_TYPE)
            issued += 1
        return issued


class TrainArcherHandler(TrainHandler):
    KIND = ActionKind.TRAIN_ARCHER
    UNIT_TYPE = UnitType.ARCHER


class TrainSoldierHandler(TrainHandler):
    KIND = ActionKind.TRAIN_SOLDIER
    UNIT_TYPE = UnitType.SOLDIER


class TrainWorkerHandler(TrainHandler):
    """
    Worker production, capped at config.max_workers.

    Also where the MainAnchor is (re)chosen: the first mine on the map and
    our first base become the default gather route. If we have no base the
    previous base choice is kept, and it is re-validated by the gather
    handler before use.
    """

    KIND = ActionKind.TRAIN_WORKER
    UNIT_TYPE = UnitType.WORKER

    def execute(self, ctx: ActionContext) -> int:
        snapshot = ctx.snapshot
        if snapshot.my_count(UnitType.WORKER) > ctx.config.max_workers:
            return 0

        anchor = ctx.round_state.anchor
        anchor.mine_id = snapshot.mines[0] if snapshot.mines else None
        bases = snapshot.mine[UnitType.BASE]
        if bases:
            anchor.base_id = bases[0]

        return super().execute(ctx)


def register_train_handlers(registry: "ActionRegistry") -> None:
    registry.register_many(
        TrainArcherHandler(),
        TrainSoldierHandler(),
        TrainWorkerHandler(),
    )
