"""
Tests for worker / archer / soldier training.
"""

import pytest

from conftest import FakeSim
from PlanningBot.abilities.train_abilities import (
    TrainArcherHandler,
    TrainSoldierHandler,
    TrainWorkerHandler,
)
from PlanningBot.sandbox.grid_world import GridWorld
from PlanningBot.world.unit_types import UnitAction, UnitType


def trains(sim):
    return [c for c in sim.commands if c[0] == "train"]


class TestAffordability:

    @pytest.mark.parametrize("handler, producer, gold", [
        (TrainWorkerHandler, UnitType.BASE, 99),
        (TrainArcherHandler, UnitType.BARRACKS, 249),
        (TrainSoldierHandler, UnitType.BARRACKS, 249),
    ])
    def test_no_train_below_cost(self, make_context, handler, producer, gold):
        """One gold under the unit cost the producer is never asked to train."""
        sim = FakeSim(gold={1: gold})
        sim.add(producer, 1)

        assert handler().execute(make_context(sim)) == 0
        assert trains(sim) == []

    def test_train_at_cost(self, make_context):
        sim = FakeSim(gold={1: 100})
        base = sim.add(UnitType.BASE, 1)

        assert TrainWorkerHandler().execute(make_context(sim)) == 1
        assert trains(sim) == [("train", base, UnitType.WORKER)]

    def test_gold_is_not_debited_between_producers(self, make_context):
        """Every eligible producer gets a command; the world refuses what it cannot fund."""
        world = GridWorld(12, 12, starting_gold=150)
        world.spawn(UnitType.BASE, 1, (0, 0))
        world.spawn(UnitType.BASE, 1, (6, 6))

        assert TrainWorkerHandler().execute(make_context(world)) == 2
        assert len(world.commands("train", accepted=True)) == 1
        assert len(world.commands("train", accepted=False)) == 1
        assert world.get_gold(1) == 50


class TestProducerChecks:

    def test_unbuilt_and_busy_producers_skipped(self, make_context):
        sim = FakeSim(gold={1: 1000})
        sim.add(UnitType.BARRACKS, 1, built=False)
        sim.add(UnitType.BARRACKS, 1, action=UnitAction.TRAIN)
        ready = sim.add(UnitType.BARRACKS, 1)

        assert TrainArcherHandler().execute(make_context(sim)) == 1
        assert trains(sim) == [("train", ready, UnitType.ARCHER)]

    def test_soldiers_come_from_barracks(self, make_context):
        sim = FakeSim(gold={1: 1000})
        sim.add(UnitType.BASE, 1)
        barracks = sim.add(UnitType.BARRACKS, 1)

        TrainSoldierHandler().execute(make_context(sim))
        assert trains(sim) == [("train", barracks, UnitType.SOLDIER)]

    def test_vanished_producer_skipped(self, make_context):
        sim = FakeSim(gold={1: 1000})
        base = sim.add(UnitType.BASE, 1)
        ctx = make_context(sim)
        sim.vanish(base)

        assert TrainWorkerHandler().execute(ctx) == 0
        assert ctx.stats.stale_references == 1


class TestWorkerCap:

    def test_fifteen_workers_still_train(self, make_context):
        """The cap check is 'at most 15', so a sixteenth worker is still trained."""
        sim = FakeSim(gold={1: 1000})
        sim.add(UnitType.BASE, 1)
        for _ in range(15):
            sim.add(UnitType.WORKER, 1)

        assert TrainWorkerHandler().execute(make_context(sim)) == 1

    def test_sixteen_workers_stop_training(self, make_context):
        sim = FakeSim(gold={1: 1000})
        sim.add(UnitType.BASE, 1)
        for _ in range(16):
            sim.add(UnitType.WORKER, 1)

        assert TrainWorkerHandler().execute(make_context(sim)) == 0
        assert trains(sim) == []


class TestMainAnchor:

    def test_anchor_set_from_first_mine_and_base(self, make_context):
        sim = FakeSim(gold={1: 0})
        mine = sim.add(UnitType.MINE, None)
        sim.add(UnitType.MINE, None)
        base = sim.add(UnitType.BASE, 1)
        ctx = make_context(sim)

        TrainWorkerHandler().execute(ctx)

        assert ctx.round_state.anchor.mine_id == mine
        assert ctx.round_state.anchor.base_id == base

    def test_no_mine_clears_mine_anchor(self, make_context):
        sim = FakeSim(gold={1: 0})
        sim.add(UnitType.BASE, 1)
        ctx = make_context(sim)
        ctx.round_state.anchor.mine_id = 99

        TrainWorkerHandler().execute(ctx)
        assert ctx.round_state.anchor.mine_id is None

    def test_no_base_keeps_previous_base(self, make_context):
        sim = FakeSim(gold={1: 0})
        sim.add(UnitType.MINE, None)
        ctx = make_context(sim)
        ctx.round_state.anchor.base_id = 42

        TrainWorkerHandler().execute(ctx)
        assert ctx.round_state.anchor.base_id == 42

    def test_anchor_untouched_above_worker_cap(self, make_context):
        sim = FakeSim(gold={1: 1000})
        sim.add(UnitType.MINE, None)
        sim.add(UnitType.BASE, 1)
        for _ in range(16):
            sim.add(UnitType.WORKER, 1)
        ctx = make_context(sim)

        TrainWorkerHandler().execute(ctx)
        assert not ctx.round_state.anchor.is_set
