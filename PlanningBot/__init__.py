"""
PlanningBot - a per-tick decision core for a grid-based RTS agent.

Public API
----------
    from PlanningBot import PlanningBot, DecisionConfig
    from PlanningBot.sandbox.grid_world import GridWorld
"""

from PlanningBot.decision_config import DecisionConfig
from PlanningBot.planning_bot import PlanningBot

__all__ = [
    "DecisionConfig",
    "PlanningBot",
]
