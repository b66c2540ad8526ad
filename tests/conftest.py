"""
Shared fixtures and fakes for the PlanningBot test-suite.
"""

import os
import random
import tempfile

# Keep log files out of the working tree; must be set before PlanningBot.logger loads
os.environ.setdefault("PLANNINGBOT_LOG_DIR", tempfile.mkdtemp(prefix="planningbot-logs-"))

import pytest

from PlanningBot.abilities.action import ActionContext
from PlanningBot.construction.placement_resolver import BuildSiteCatalog
from PlanningBot.decision_config import DecisionConfig
from PlanningBot.game_stats import RoundStatsTracker
from PlanningBot.world.round_state import RoundState
from PlanningBot.world.simulation import UnitView
from PlanningBot.world.snapshot import SnapshotBuilder, WorldSnapshot
from PlanningBot.world.unit_types import FOOTPRINT, OWNED_TYPES, GridPosition, UnitAction, UnitType


class FakeSim:
    """
    Minimal Simulation that never changes on its own.

    Commands are only recorded in ``commands``; unit actions, gold and
    occupancy stay exactly as the test set them up. Useful for checking
    what the handlers asked for without the world reacting.
    """

    def __init__(self, width=20, height=20, gold=None, enemies=(2,)):
        self.width = width
        self.height = height
        self.units = {}
        self.gold = dict(gold or {})
        self.enemies = list(enemies)
        self.blocked = set()
        self.commands = []
        self._next_id = 1

    def add(self, unit_type, owner, position=(0, 0), health=100, built=True, action=UnitAction.IDLE):
        unit_id = self._next_id
        self._next_id += 1
        self.units[unit_id] = UnitView(
            unit_id=unit_id,
            unit_type=unit_type,
            owner=owner,
            position=GridPosition(*position),
            health=health,
            is_built=built,
            current_action=action,
        )
        return unit_id

    def vanish(self, unit_id):
        del self.units[unit_id]

    # ---- Simulation protocol ----

    @property
    def map_bounds(self):
        return self.width, self.height

    def get_units_of_type(self, unit_type, owner=None):
        return [
            uid for uid, u in sorted(self.units.items())
            if u.unit_type == unit_type and (owner is None or u.owner == owner)
        ]

    def get_unit(self, unit_id):
        return self.units.get(unit_id)

    def get_enemy_agent_ids(self, self_id):
        return [e for e in self.enemies if e != self_id]

    def get_gold(self, agent_id):
        return self.gold.get(agent_id, 0)

    def is_bounded_area_buildable(self, unit_type, position):
        x, y = position
        in_bounds = x >= 0 and y >= 0 and x + FOOTPRINT <= self.width and y + FOOTPRINT <= self.height
        return in_bounds and tuple(position) not in self.blocked

    def build(self, unit, position, unit_type):
        self.commands.append(("build", unit.unit_id, tuple(position), unit_type))

    def train(self, structure, unit_type):
        self.commands.append(("train", structure.unit_id, unit_type))

    def attack(self, unit, target):
        self.commands.append(("attack", unit.unit_id, target.unit_id))

    def gather(self, unit, mine, base):
        self.commands.append(("gather", unit.unit_id, mine.unit_id, base.unit_id))


def snapshot_with(gold=0, mine=None, enemy=None, mines=0, enemy_agent_id=2):
    """
    Build a WorldSnapshot from unit counts.

    ``mine`` / ``enemy`` map UnitType -> count; ids are made up and unique.
    """
    ids = iter(range(1000, 100000))
    snap = WorldSnapshot(agent_id=1, gold=gold, enemy_agent_id=enemy_agent_id)
    for unit_type in OWNED_TYPES:
        snap.mine[unit_type] = [next(ids) for _ in range((mine or {}).get(unit_type, 0))]
        snap.enemy[unit_type] = [next(ids) for _ in range((enemy or {}).get(unit_type, 0))]
    snap.mines = [next(ids) for _ in range(mines)]
    return snap


@pytest.fixture
def fake_sim():
    return FakeSim(gold={1: 0, 2: 0})


@pytest.fixture
def make_context():
    """
    Factory: ActionContext for ``agent_id`` over ``sim`` with a fresh
    RoundState, catalog and snapshot taken right now.
    """
    def _make(sim, agent_id=1, config=None, rng=None, tick=1):
        state = RoundState(catalog=BuildSiteCatalog.compute(sim))
        state.begin_tick(tick, SnapshotBuilder(sim).refresh(agent_id))
        return ActionContext(
            sim=sim,
            agent_id=agent_id,
            round_state=state,
            config=config or DecisionConfig(),
            rng=rng or random.Random(0),
            stats=RoundStatsTracker(),
        )
    return _make
