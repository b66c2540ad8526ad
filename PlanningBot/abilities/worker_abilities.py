"""
Worker abilities — gathering.

GatherHandler
-------------
Sends every idle worker along the MainAnchor route: mine -> base. The route
is only chosen by TrainWorkerHandler, so until a worker has been trained at
least once (or while we have never owned a base) there is no route and
nothing is gathered. A mine with no health left is treated as exhausted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from PlanningBot.abilities.action import ActionContext, ActionHandler, ActionKind
from PlanningBot.world.unit_types import UnitType

if TYPE_CHECKING:
    from PlanningBot.abilities.action_registry import ActionRegistry


class GatherHandler(ActionHandler):
    KIND = ActionKind.GATHER

    def execute(self, ctx: ActionContext) -> int:
        anchor = ctx.round_state.anchor
        if not anchor.is_set:
            return 0

        issued = 0
        for worker_id in ctx.snapshot.mine[UnitType.WORKER]:
            worker = ctx.lookup(worker_id)
            if worker is None or not worker.is_idle:
                continue
            mine = ctx.lookup(anchor.mine_id)
            base = ctx.lookup(anchor.base_id)
            if mine is None or base is None or mine.health <= 0:
                continue
            ctx.issue_gather(worker, mine, base)
            issued += 1
        return issued


def register_worker_handlers(registry: "ActionRegistry") -> None:
    registry.register(GatherHandler())
