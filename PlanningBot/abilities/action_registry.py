"""
ActionRegistry — maps each ActionKind to its handler.

Usage
-----
The registry is populated once per PlanningBot via default_registry().
The dispatcher looks handlers up by kind; the scan order itself lives in
ACTION_ORDER, not here.

    registry = ActionRegistry()
    registry.register(GatherHandler())
    registry.get(ActionKind.GATHER).execute(ctx)
"""

from __future__ import annotations

from typing import Dict, Optional

from PlanningBot.abilities.action import ACTION_ORDER, ActionHandler, ActionKind


class ActionRegistry:
    """One handler per ActionKind."""

    def __init__(self) -> None:
        self._handlers: Dict[ActionKind, ActionHandler] = {}

    # ------------------------------------------------------------------
    # Registration API
    # ------------------------------------------------------------------

    def register(self, handler: ActionHandler) -> None:
        """Register a handler, replacing any earlier one for the same kind."""
        self._handlers[handler.KIND] = handler

    def register_many(self, *handlers: ActionHandler) -> None:
        for handler in handlers:
            self.register(handler)

    # ------------------------------------------------------------------
    # Query API
    # ------------------------------------------------------------------

    def get(self, kind: ActionKind) -> Optional[ActionHandler]:
        return self._handlers.get(kind)

    def is_complete(self) -> bool:
        """True if every kind in ACTION_ORDER has a handler."""
        return all(kind in self._handlers for kind in ACTION_ORDER)

    # ------------------------------------------------------------------
    # Debug
    # ------------------------------------------------------------------

    def summary(self) -> str:
        """Human-readable listing in scan order (for startup logs)."""
        lines = []
        for kind in ACTION_ORDER:
            handler = self._handlers.get(kind)
            lines.append(f"  {kind.name}: {handler.name if handler else '(none)'}")
        return "\n".join(lines)


def default_registry() -> ActionRegistry:
    """Registry with the full set of handlers wired up."""
    from PlanningBot.abilities.attack_abilities import register_attack_handlers
    from PlanningBot.abilities.build_abilities import register_build_handlers
    from PlanningBot.abilities.train_abilities import register_train_handlers
    from PlanningBot.abilities.worker_abilities import register_worker_handlers

    registry = ActionRegistry()
    register_build_handlers(registry)
    register_train_handlers(registry)
    register_worker_handlers(registry)
    register_attack_handlers(registry)
    return registry
