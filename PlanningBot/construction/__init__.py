"""
PlanningBot.construction — build-site catalog and placement.

Public API
----------
    from PlanningBot.construction import BuildSiteCatalog
"""

from PlanningBot.construction.placement_resolver import BuildSiteCatalog

__all__ = [
    "BuildSiteCatalog",
]
