"""
ActionSelector — the dispatch layer between scores and handlers.

Position in the stack
---------------------
    PhaseMachine.classify()
        ↓  (GamePhase)
    HeuristicEvaluator.score()
        ↓  (ActionScore list in ACTION_ORDER)
    ActionSelector.dispatch()
        ↓  (looks up handlers in the registry)
    ActionHandler.execute()
        ↓
    Simulation command

Dispatch modes
--------------
running_max (default)
    Walk the list once, tracking the highest score seen so far (starting at
    0). Every time a score is strictly greater than that running max, fire
    its handler immediately and raise the max. Several handlers can fire in
    one tick when scores climb in list order; an equal or lower score never
    fires. With scores [0.2, 0.1, 0.5, 0.5, 0.9] the handlers at 0, 2 and 4
    fire.

argmax
    Fire only the first action holding the highest score, and only if that
    score is above 0.

Handlers fire in list order within a tick, so their commands reach the
simulation in that order too.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence

from PlanningBot.decision_config import ARGMAX, RUNNING_MAX
from PlanningBot.errors import ConfigError
from PlanningBot.logger import get_logger

if TYPE_CHECKING:
    from PlanningBot.abilities.action import ActionContext, ActionKind, ActionScore
    from PlanningBot.abilities.action_registry import ActionRegistry

log = get_logger()


def running_max_indices(values: Sequence[float]) -> List[int]:
    """Indices whose value strictly exceeds every earlier value and 0."""
    fired: List[int] = []
    highest = 0.0
    for index, value in enumerate(values):
        if value > highest:
            highest = value
            fired.append(index)
    return fired


def argmax_indices(values: Sequence[float]) -> List[int]:
    """The first index of the maximum value, if that maximum is above 0."""
    best_index = -1
    highest = 0.0
    for index, value in enumerate(values):
        if value > highest:
            highest = value
            best_index = index
    return [best_index] if best_index >= 0 else []


_SELECTORS = {
    RUNNING_MAX: running_max_indices,
    ARGMAX: argmax_indices,
}


class ActionSelector:
    """
    Chooses which handlers fire for a scored action list and fires them.

    The selector is stateless between ticks; scores and the fired list are
    dropped once dispatch() returns.
    """

    def __init__(self, registry: "ActionRegistry", mode: str = RUNNING_MAX) -> None:
        if mode not in _SELECTORS:
            raise ConfigError(f"unknown dispatch mode {mode!r}")
        self.registry = registry
        self.mode = mode

    def select(self, scores: Sequence["ActionScore"]) -> List["ActionKind"]:
        """Kinds that would fire for these scores, in firing order."""
        indices = _SELECTORS[self.mode]([s.score for s in scores])
        return [scores[i].kind for i in indices]

    def dispatch(self, scores: Sequence["ActionScore"], ctx: "ActionContext") -> List["ActionKind"]:
        """
        Fire the selected handlers in list order.

        Returns the kinds that fired (including any that issued no commands).
        """
        fired: List["ActionKind"] = []
        by_kind = {s.kind: s.score for s in scores}

        for kind in self.select(scores):
            handler = self.registry.get(kind)
            if handler is None:
                log.warning("No handler registered for %s", kind.name, tick=ctx.tick)
                continue
            commands = handler.execute(ctx)
            fired.append(kind)
            if ctx.stats is not None:
                ctx.stats.record_action(kind)
            log.action(kind.name, score=by_kind[kind], commands=commands, tick=ctx.tick)

        return fired
