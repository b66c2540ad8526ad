"""
Attack handlers — focus fire and the final sweep.

Focus fire (AttackWithArchersHandler / AttackWithSoldiersHandler)
-----------------------------------------------------------------
Enemy categories are walked in a fixed priority order: workers, then
archers, then soldiers. For each enemy unit in the current category every
idle troop of ours is ordered to attack it. Both handlers use the same
order, so archers and soldiers converge on the same targets. This is a
many-to-many assignment: a troop that is still reported idle after its
first order will be ordered again at the next target.

Sweep (AttackEverythingHandler)
-------------------------------
For each troop group we have (archers, then soldiers), every idle troop
picks a uniformly random target from the first non-empty enemy category
in this order: archers, soldiers, workers, bases, barracks, refineries.
The random source is ActionContext.rng, so a seeded generator makes the
sweep reproducible.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple

from PlanningBot.abilities.action import ActionContext, ActionHandler, ActionKind
from PlanningBot.world.unit_types import UnitType

if TYPE_CHECKING:
    from PlanningBot.abilities.action_registry import ActionRegistry


FOCUS_FIRE_ORDER: Tuple[UnitType, ...] = (
    UnitType.WORKER,
    UnitType.ARCHER,
    UnitType.SOLDIER,
)

SWEEP_ORDER: Tuple[UnitType, ...] = (
    UnitType.ARCHER,
    UnitType.SOLDIER,
    UnitType.WORKER,
    UnitType.BASE,
    UnitType.BARRACKS,
    UnitType.REFINERY,
)


class FocusFireHandler(ActionHandler):
    """Every idle TROOP attacks every enemy of each category in turn."""

    TROOP: UnitType

    def execute(self, ctx: ActionContext) -> int:
        issued = 0
        troops = ctx.snapshot.mine[self.TROOP]
        for category in FOCUS_FIRE_ORDER:
            for enemy_id in ctx.snapshot.enemy[category]:
                target = ctx.lookup(enemy_id)
                if target is None:
                    continue
                for troop_id in troops:
                    troop = ctx.lookup(troop_id)
                    if troop is None or not troop.is_idle:
                        continue
                    ctx.issue_attack(troop, target)
                    issued += 1
        return issued


class AttackWithArchersHandler(FocusFireHandler):
    KIND = ActionKind.ATTACK_WITH_ARCHERS
    TROOP = UnitType.ARCHER


class AttackWithSoldiersHandler(FocusFireHandler):
    KIND = ActionKind.ATTACK_WITH_SOLDIERS
    TROOP = UnitType.SOLDIER


class AttackEverythingHandler(ActionHandler):
    KIND = ActionKind.ATTACK_EVERYTHING

    def execute(self, ctx: ActionContext) -> int:
        issued = 0
        for troop_type in (UnitType.ARCHER, UnitType.SOLDIER):
            troops = ctx.snapshot.mine[troop_type]
            if troops:
                issued += self._sweep(ctx, troops)
        return issued

    def _sweep(self, ctx: ActionContext, troops: List[int]) -> int:
        issued = 0
        for troop_id in troops:
            troop = ctx.lookup(troop_id)
            if troop is None or not troop.is_idle:
                continue
            candidates = self._first_target_group(ctx)
            if not candidates:
                continue
            target = ctx.lookup(ctx.rng.choice(candidates))
            if target is None:
                continue
            ctx.issue_attack(troop, target)
            issued += 1
        return issued

    @staticmethod
    def _first_target_group(ctx: ActionContext) -> List[int]:
        for category in SWEEP_ORDER:
            ids = ctx.snapshot.enemy[category]
            if ids:
                return ids
        return []


def register_attack_handlers(registry: "ActionRegistry") -> None:
    registry.register_many(
        AttackWithArchersHandler(),
        AttackWithSoldiersHandler(),
        AttackEverythingHandler(),
    )
