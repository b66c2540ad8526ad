"""
GridWorld - a small in-memory world engine for headless matches and tests.

Implements the Simulation protocol with deterministic, seeded rules:

- Square grid; terrain blocking and structure footprints kept as numpy
  boolean/int grids indexed [x, y].
- Structures and mines occupy a 3x3 footprint anchored at their position
  (the anchor is the lowest x/y corner). Mobile units occupy nothing.
- Commands are validated when issued. Invalid ones (unit gone, wrong unit
  type, not enough gold, area blocked) are rejected and recorded, never
  raised, so two build commands aimed at the same site in one tick leave
  one accepted and one rejected.
- advance() moves the world on by one tick: construction and training
  timers run down, gatherers deliver gold every GATHER_TICKS, attackers
  deal their damage once per tick. There is no movement or range: an
  attack order lands wherever the target is.

Every command lands in ``command_log`` so tests can assert on exactly what
the decision core asked for.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from PlanningBot.logger import get_logger
from PlanningBot.world.simulation import UnitView
from PlanningBot.world.unit_types import (
    DEFAULT_COSTS,
    FOOTPRINT,
    PRODUCER,
    GridPosition,
    UnitAction,
    UnitType,
)

log = get_logger()


# ── Unit stats ────────────────────────────────────────────────────────────────

UNIT_STATS: Dict[UnitType, Dict[str, int]] = {
    UnitType.WORKER:   {"hp": 50,   "damage": 0, "time": 5},
    UnitType.ARCHER:   {"hp": 60,   "damage": 6, "time": 8},
    UnitType.SOLDIER:  {"hp": 100,  "damage": 8, "time": 8},
    UnitType.BASE:     {"hp": 1000, "damage": 0, "time": 20},
    UnitType.BARRACKS: {"hp": 600,  "damage": 0, "time": 15},
    UnitType.REFINERY: {"hp": 400,  "damage": 0, "time": 10},
    UnitType.MINE:     {"hp": 5000, "damage": 0, "time": 0},
}

GATHER_TICKS: int = 5       # ticks per delivery trip
GATHER_AMOUNT: int = 25     # gold per delivery


@dataclass
class CommandRecord:
    tick: int
    command: str            # "build" | "train" | "attack" | "gather"
    agent: Optional[int]
    unit_id: int
    accepted: bool
    detail: str = ""


@dataclass
class _SimUnit:
    unit_id: int
    unit_type: UnitType
    owner: Optional[int]
    position: GridPosition
    health: float
    is_built: bool = True
    action: UnitAction = UnitAction.IDLE
    target_id: Optional[int] = None
    mine_id: Optional[int] = None
    base_id: Optional[int] = None
    training: Optional[UnitType] = None
    timer: int = 0

    def view(self) -> UnitView:
        return UnitView(
            unit_id=self.unit_id,
            unit_type=self.unit_type,
            owner=self.owner,
            position=self.position,
            health=self.health,
            is_built=self.is_built,
            current_action=self.action,
        )


class GridWorld:
    """
    Reference Simulation.

    Build one by hand (spawn() units onto an empty map) or with
    GridWorld.standard() for a two-agent starting layout.
    """

    def __init__(
        self,
        width: int = 30,
        height: int = 30,
        agents: Iterable[int] = (1, 2),
        starting_gold: int = 600,
        costs: Optional[Dict[UnitType, int]] = None,
    ) -> None:
        self.width = width
        self.height = height
        self.agents: List[int] = list(agents)
        self.costs = dict(costs or DEFAULT_COSTS)
        self.gold: Dict[int, int] = {a: starting_gold for a in self.agents}
        self.tick: int = 0

        self.blocked = np.zeros((width, height), dtype=bool)
        self.occupied = np.full((width, height), -1, dtype=np.int64)

        self.units: Dict[int, _SimUnit] = {}
        self.command_log: List[CommandRecord] = []
        self._next_id: int = 1

    # ------------------------------------------------------------------ #
    # Layout
    # ------------------------------------------------------------------ #

    @classmethod
    def standard(
        cls,
        width: int = 30,
        height: int = 30,
        seed: int = 0,
        starting_gold: int = 600,
        workers_per_agent: int = 3,
        obstacle_density: float = 0.02,
    ) -> "GridWorld":
        """
        Two agents (1 and 2) in opposite corners, each with a base, a mine
        beside it and a few workers. Scattered blocked tiles elsewhere.
        """
        world = cls(width, height, agents=(1, 2), starting_gold=starting_gold)
        rng = random.Random(seed)

        corners = {
            1: (GridPosition(2, 2), GridPosition(2, 7)),
            2: (GridPosition(width - 5, height - 5), GridPosition(width - 5, height - 10)),
        }
        for agent, (base_pos, mine_pos) in corners.items():
            world.spawn(UnitType.BASE, agent, base_pos)
            world.spawn(UnitType.MINE, None, mine_pos)
            for i in range(workers_per_agent):
                world.spawn(UnitType.WORKER, agent, GridPosition(base_pos.x + 3 + i % 2, base_pos.y + i))

        spawn_zones = [p for pair in corners.values() for p in pair]
        for _ in range(int(width * height * obstacle_density)):
            x, y = rng.randrange(width), rng.randrange(height)
            if any(abs(x - p.x) < 8 and abs(y - p.y) < 8 for p in spawn_zones):
                continue
            if world.occupied[x, y] < 0:
                world.blocked[x, y] = True

        return world

    def spawn(
        self,
        unit_type: UnitType,
        owner: Optional[int],
        position: Tuple[int, int],
        built: bool = True,
        health: Optional[float] = None,
    ) -> int:
        """Place a unit directly, bypassing costs. Returns its id."""
        unit_id = self._next_id
        self._next_id += 1
        unit = _SimUnit(
            unit_id=unit_id,
            unit_type=unit_type,
            owner=owner,
            position=GridPosition(*position),
            health=UNIT_STATS[unit_type]["hp"] if health is None else health,
            is_built=built,
        )
        self.units[unit_id] = unit
        if self._has_footprint(unit_type):
            self._mark_footprint(unit.position, unit_id)
        return unit_id

    def remove(self, unit_id: int) -> None:
        unit = self.units.pop(unit_id, None)
        if unit is not None and self._has_footprint(unit.unit_type):
            self._mark_footprint(unit.position, -1)

    # ------------------------------------------------------------------ #
    # Simulation protocol: queries
    # ------------------------------------------------------------------ #

    @property
    def map_bounds(self) -> Tuple[int, int]:
        return self.width, self.height

    def get_units_of_type(self, unit_type: UnitType, owner: Optional[int] = None) -> List[int]:
        return [
            uid for uid, u in sorted(self.units.items())
            if u.unit_type == unit_type and (owner is None or u.owner == owner)
        ]

    def get_unit(self, unit_id: int) -> Optional[UnitView]:
        unit = self.units.get(unit_id)
        return unit.view() if unit is not None else None

    def get_enemy_agent_ids(self, self_id: int) -> List[int]:
        return [a for a in self.agents if a != self_id]

    def get_gold(self, agent_id: int) -> int:
        return self.gold.get(agent_id, 0)

    def is_bounded_area_buildable(self, unit_type: UnitType, position: GridPosition) -> bool:
        x, y = position
        if x < 0 or y < 0 or x + FOOTPRINT > self.width or y + FOOTPRINT > self.height:
            return False
        area = (slice(x, x + FOOTPRINT), slice(y, y + FOOTPRINT))
        return not self.blocked[area].any() and bool((self.occupied[area] < 0).all())

    # ------------------------------------------------------------------ #
    # Simulation protocol: commands
    # ------------------------------------------------------------------ #

    def build(self, unit: UnitView, position: GridPosition, unit_type: UnitType) -> None:
        worker = self.units.get(unit.unit_id)
        if worker is None or worker.unit_type != UnitType.WORKER:
            self._reject("build", unit, "not a live worker")
            return
        if not unit_type.is_structure:
            self._reject("build", unit, f"{unit_type.value} is not a structure")
            return
        if self.gold[worker.owner] < self.costs[unit_type]:
            self._reject("build", unit, "insufficient gold")
            return
        if not self.is_bounded_area_buildable(unit_type, position):
            self._reject("build", unit, f"area at {tuple(position)} not buildable")
            return

        self.gold[worker.owner] -= self.costs[unit_type]
        structure_id = self.spawn(unit_type, worker.owner, position, built=False)
        self.units[structure_id].timer = UNIT_STATS[unit_type]["time"]
        worker.action = UnitAction.BUILD
        worker.target_id = structure_id
        self._accept("build", unit, f"{unit_type.value} at {tuple(position)}")

    def train(self, structure: UnitView, unit_type: UnitType) -> None:
        producer = self.units.get(structure.unit_id)
        if producer is None or PRODUCER.get(unit_type) != producer.unit_type:
            self._reject("train", structure, f"cannot train {unit_type.value} here")
            return
        if not producer.is_built or producer.action != UnitAction.IDLE:
            self._reject("train", structure, "producer busy or unfinished")
            return
        if self.gold[producer.owner] < self.costs[unit_type]:
            self._reject("train", structure, "insufficient gold")
            return

        self.gold[producer.owner] -= self.costs[unit_type]
        producer.action = UnitAction.TRAIN
        producer.training = unit_type
        producer.timer = UNIT_STATS[unit_type]["time"]
        self._accept("train", structure, unit_type.value)

    def attack(self, unit: UnitView, target: UnitView) -> None:
        attacker = self.units.get(unit.unit_id)
        victim = self.units.get(target.unit_id)
        if attacker is None or victim is None:
            self._reject("attack", unit, "attacker or target gone")
            return
        if UNIT_STATS[attacker.unit_type]["damage"] <= 0 or attacker.owner == victim.owner:
            self._reject("attack", unit, "invalid attack")
            return

        attacker.action = UnitAction.ATTACK
        attacker.target_id = victim.unit_id
        self._accept("attack", unit, f"target={victim.unit_id}")

    def gather(self, unit: UnitView, mine: UnitView, base: UnitView) -> None:
        worker = self.units.get(unit.unit_id)
        mine_unit = self.units.get(mine.unit_id)
        base_unit = self.units.get(base.unit_id)
        if worker is None or mine_unit is None or base_unit is None:
            self._reject("gather", unit, "worker, mine or base gone")
            return
        if (
            worker.unit_type != UnitType.WORKER
            or mine_unit.unit_type != UnitType.MINE
            or base_unit.unit_type != UnitType.BASE
            or base_unit.owner != worker.owner
        ):
            self._reject("gather", unit, "invalid gather route")
            return

        worker.action = UnitAction.GATHER
        worker.mine_id = mine_unit.unit_id
        worker.base_id = base_unit.unit_id
        worker.timer = GATHER_TICKS
        self._accept("gather", unit, f"mine={mine_unit.unit_id} base={base_unit.unit_id}")

    # ------------------------------------------------------------------ #
    # Time
    # ------------------------------------------------------------------ #

    def advance(self, ticks: int = 1) -> None:
        for _ in range(ticks):
            self.tick += 1
            for unit_id in sorted(self.units):
                unit = self.units.get(unit_id)
                if unit is None:
                    continue  # destroyed earlier this tick
                if not unit.is_built:
                    self._advance_construction(unit)
                elif unit.action == UnitAction.TRAIN:
                    self._advance_training(unit)
                elif unit.action == UnitAction.GATHER:
                    self._advance_gathering(unit)
                elif unit.action == UnitAction.ATTACK:
                    self._advance_attack(unit)
                elif unit.action == UnitAction.BUILD and unit.target_id not in self.units:
                    self._go_idle(unit)

    def is_over(self) -> bool:
        """True once some agent has no units left."""
        owners = {u.owner for u in self.units.values() if u.owner is not None}
        return any(a not in owners for a in self.agents)

    def winner(self) -> Optional[int]:
        owners = {u.owner for u in self.units.values() if u.owner is not None}
        alive = [a for a in self.agents if a in owners]
        return alive[0] if len(alive) == 1 else None

    def commands(self, command: Optional[str] = None, accepted: Optional[bool] = None) -> List[CommandRecord]:
        """Filter the command log."""
        return [
            c for c in self.command_log
            if (command is None or c.command == command)
            and (accepted is None or c.accepted == accepted)
        ]

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _advance_construction(self, structure: _SimUnit) -> None:
        structure.timer -= 1
        if structure.timer > 0:
            return
        structure.is_built = True
        for unit in self.units.values():
            if unit.action == UnitAction.BUILD and unit.target_id == structure.unit_id:
                self._go_idle(unit)

    def _advance_training(self, producer: _SimUnit) -> None:
        producer.timer -= 1
        if producer.timer > 0:
            return
        spawn_at = GridPosition(max(0, producer.position.x - 1), producer.position.y)
        self.spawn(producer.training, producer.owner, spawn_at)
        producer.training = None
        self._go_idle(producer)

    def _advance_gathering(self, worker: _SimUnit) -> None:
        mine = self.units.get(worker.mine_id)
        base = self.units.get(worker.base_id)
        if mine is None or base is None or mine.health <= 0:
            self._go_idle(worker)
            return
        worker.timer -= 1
        if worker.timer > 0:
            return
        amount = int(min(GATHER_AMOUNT, mine.health))
        mine.health -= amount
        self.gold[worker.owner] += amount
        worker.timer = GATHER_TICKS

    def _advance_attack(self, attacker: _SimUnit) -> None:
        target = self.units.get(attacker.target_id)
        if target is None:
            self._go_idle(attacker)
            return
        target.health -= UNIT_STATS[attacker.unit_type]["damage"]
        if target.health <= 0:
            self.remove(target.unit_id)
            self._go_idle(attacker)

    @staticmethod
    def _go_idle(unit: _SimUnit) -> None:
        unit.action = UnitAction.IDLE
        unit.target_id = None
        unit.mine_id = None
        unit.base_id = None
        unit.timer = 0

    @staticmethod
    def _has_footprint(unit_type: UnitType) -> bool:
        return unit_type.is_structure or unit_type == UnitType.MINE

    def _mark_footprint(self, position: GridPosition, value: int) -> None:
        x, y = position
        self.occupied[x:x + FOOTPRINT, y:y + FOOTPRINT] = value

    def _accept(self, command: str, unit: UnitView, detail: str) -> None:
        self.command_log.append(
            CommandRecord(self.tick, command, unit.owner, unit.unit_id, True, detail)
        )

    def _reject(self, command: str, unit: UnitView, reason: str) -> None:
        log.debug("GridWorld: %s by %d rejected (%s)", command, unit.unit_id, reason, tick=self.tick)
        self.command_log.append(
            CommandRecord(self.tick, command, unit.owner, unit.unit_id, False, reason)
        )
