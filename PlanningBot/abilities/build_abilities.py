"""
Build handlers — base, barracks and refinery placement.

Stack position
--------------
    HeuristicEvaluator     (decides "a barracks is worth building")
        ↓
    BuildHandler.execute() (pairs workers with anchors)
        ↓  BuildSiteCatalog.nearest(anchor, type)
    Simulation.build(worker, site, type)

Pairing
-------
Every worker is paired with every anchor in turn: mines for a base, our
own bases for barracks and refineries. For each pair the nearest site that
is buildable *now* for this structure type is chosen and a build command
issued, as long as the tick's gold covers the cost. A call can therefore
issue several build commands.

Two pairs that pick the same site in one tick both submit a command; the
simulation accepts the first and rejects the rest. With
config.reserve_sites the first claim excludes that site for the remainder
of the tick instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from PlanningBot.abilities.action import ActionContext, ActionHandler, ActionKind
from PlanningBot.logger import get_logger
from PlanningBot.world.unit_types import UnitType

if TYPE_CHECKING:
    from PlanningBot.abilities.action_registry import ActionRegistry

log = get_logger()


class BuildHandler(ActionHandler):
    """Place STRUCTURE near each anchor for each available worker."""

    STRUCTURE: UnitType

    def anchor_ids(self, ctx: ActionContext) -> List[int]:
        """Units whose position each build should be close to."""
        return ctx.snapshot.mine[UnitType.BASE]

    def execute(self, ctx: ActionContext) -> int:
        catalog = ctx.round_state.catalog
        reserved = ctx.round_state.reserved_sites if ctx.config.reserve_sites else None
        issued = 0

        for worker_id in ctx.snapshot.mine[UnitType.WORKER]:
            for anchor_id in self.anchor_ids(ctx):
                worker = ctx.lookup(worker_id)
                anchor = ctx.lookup(anchor_id)
                if worker is None or anchor is None:
                    continue
                if not ctx.config.can_afford(ctx.gold, self.STRUCTURE):
                    continue

                site = catalog.nearest(anchor.position, self.STRUCTURE, ctx.sim, exclude=reserved)
                if site is None:
                    log.debug(
                        "%s: no site near %s", self.name, tuple(anchor.position), tick=ctx.tick,
                    )
                    continue

                ctx.issue_build(worker, site, self.STRUCTURE)
                if reserved is not None:
                    reserved.add(site)
                issued += 1

        return issued


class BuildBaseHandler(BuildHandler):
    """Bases go next to mines."""

    KIND = ActionKind.BUILD_BASE
    STRUCTURE = UnitType.BASE

    def anchor_ids(self, ctx: ActionContext) -> List[int]:
        return ctx.snapshot.mines


class BuildBarracksHandler(BuildHandler):
    KIND = ActionKind.BUILD_BARRACKS
    STRUCTURE = UnitType.BARRACKS


class BuildRefineryHandler(BuildHandler):
    KIND = ActionKind.BUILD_REFINERY
    STRUCTURE = UnitType.REFINERY


def register_build_handlers(registry: "ActionRegistry") -> None:
    registry.register_many(
        BuildBaseHandler(),
        BuildBarracksHandler(),
        BuildRefineryHandler(),
    )
