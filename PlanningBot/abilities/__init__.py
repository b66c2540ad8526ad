"""
PlanningBot.abilities — action handlers and dispatch.

Public API
----------
    from PlanningBot.abilities import ActionHandler, ActionContext, ActionKind
    from PlanningBot.abilities import ActionRegistry, default_registry, ActionSelector
    from PlanningBot.abilities.build_abilities import register_build_handlers
"""

from PlanningBot.abilities.action import (
    ACTION_ORDER,
    ActionContext,
    ActionHandler,
    ActionKind,
    ActionScore,
)
from PlanningBot.abilities.action_registry import ActionRegistry, default_registry
from PlanningBot.abilities.action_selector import ActionSelector

__all__ = [
    "ACTION_ORDER",
    "ActionContext",
    "ActionHandler",
    "ActionKind",
    "ActionScore",
    "ActionRegistry",
    "default_registry",
    "ActionSelector",
]
