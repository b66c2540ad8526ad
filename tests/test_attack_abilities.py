"""
Tests for focus fire and the final sweep.
"""

import random

from conftest import FakeSim
from PlanningBot.abilities.attack_abilities import (
    AttackEverythingHandler,
    AttackWithArchersHandler,
    AttackWithSoldiersHandler,
)
from PlanningBot.world.unit_types import UnitAction, UnitType


def attacks(sim):
    return [(c[1], c[2]) for c in sim.commands if c[0] == "attack"]


class TestFocusFire:

    def test_targets_walked_in_priority_order(self, make_context):
        """Workers first, then archers; every idle troop hits every target."""
        sim = FakeSim()
        enemy_archer = sim.add(UnitType.ARCHER, 2)
        enemy_worker = sim.add(UnitType.WORKER, 2)
        a1 = sim.add(UnitType.ARCHER, 1)
        a2 = sim.add(UnitType.ARCHER, 1)

        assert AttackWithArchersHandler().execute(make_context(sim)) == 4
        assert attacks(sim) == [
            (a1, enemy_worker), (a2, enemy_worker),
            (a1, enemy_archer), (a2, enemy_archer),
        ]

    def test_busy_troops_skipped(self, make_context):
        sim = FakeSim()
        target = sim.add(UnitType.SOLDIER, 2)
        sim.add(UnitType.SOLDIER, 1, action=UnitAction.ATTACK)
        idle = sim.add(UnitType.SOLDIER, 1)

        AttackWithSoldiersHandler().execute(make_context(sim))
        assert attacks(sim) == [(idle, target)]

    def test_structures_are_not_focus_targets(self, make_context):
        sim = FakeSim()
        sim.add(UnitType.BASE, 2)
        sim.add(UnitType.ARCHER, 1)

        assert AttackWithArchersHandler().execute(make_context(sim)) == 0

    def test_stale_ids_skipped_without_error(self, make_context):
        """Units that vanished after the snapshot are passed over."""
        sim = FakeSim()
        enemy_worker = sim.add(UnitType.WORKER, 2)
        enemy_archer = sim.add(UnitType.ARCHER, 2)
        lost = sim.add(UnitType.ARCHER, 1)
        kept = sim.add(UnitType.ARCHER, 1)
        ctx = make_context(sim)
        sim.vanish(enemy_worker)
        sim.vanish(lost)

        assert AttackWithArchersHandler().execute(ctx) == 1
        assert attacks(sim) == [(kept, enemy_archer)]
        assert ctx.stats.stale_references == 2

    def test_vanished_troop_counted_once(self, make_context):
        """A lost troop is looked up once per target but counted as one stale unit."""
        sim = FakeSim()
        worker_a = sim.add(UnitType.WORKER, 2)
        worker_b = sim.add(UnitType.WORKER, 2)
        lost = sim.add(UnitType.SOLDIER, 1)
        kept = sim.add(UnitType.SOLDIER, 1)
        ctx = make_context(sim)
        sim.vanish(lost)

        assert AttackWithSoldiersHandler().execute(ctx) == 2
        assert attacks(sim) == [(kept, worker_a), (kept, worker_b)]
        assert ctx.stats.stale_references == 1


class TestAttackEverything:

    def test_first_non_empty_group_is_targeted(self, make_context):
        """With no enemy troops left, workers come before structures."""
        sim = FakeSim()
        sim.add(UnitType.BASE, 2)
        worker = sim.add(UnitType.WORKER, 2)
        archer = sim.add(UnitType.ARCHER, 1)
        soldier = sim.add(UnitType.SOLDIER, 1)

        assert AttackEverythingHandler().execute(make_context(sim)) == 2
        assert attacks(sim) == [(archer, worker), (soldier, worker)]

    def test_structures_swept_last(self, make_context):
        sim = FakeSim()
        barracks = sim.add(UnitType.BARRACKS, 2)
        refinery = sim.add(UnitType.REFINERY, 2)
        archer = sim.add(UnitType.ARCHER, 1)

        AttackEverythingHandler().execute(make_context(sim))
        assert attacks(sim) == [(archer, barracks)]
        assert refinery not in [t for _, t in attacks(sim)]

    def test_nothing_to_hit(self, make_context):
        sim = FakeSim(enemies=())
        sim.add(UnitType.ARCHER, 1)

        assert AttackEverythingHandler().execute(make_context(sim)) == 0

    def test_seeded_sweep_is_reproducible(self, make_context):
        """The same seed gives the same target picks."""

        def run(seed):
            sim = FakeSim()
            for _ in range(6):
                sim.add(UnitType.ARCHER, 2)
            for _ in range(6):
                sim.add(UnitType.ARCHER, 1)
            AttackEverythingHandler().execute(make_context(sim, rng=random.Random(seed)))
            return attacks(sim)

        first = run(42)
        assert first == run(42)
        assert len(first) == 6
        assert all(1 <= target <= 6 for _, target in first)

    def test_vanished_target_is_skipped(self, make_context):
        """The only enemy in the chosen group is gone: no attack, no error."""
        sim = FakeSim()
        enemy_archer = sim.add(UnitType.ARCHER, 2)
        sim.add(UnitType.BASE, 2)
        sim.add(UnitType.ARCHER, 1)
        ctx = make_context(sim)
        sim.vanish(enemy_archer)

        assert AttackEverythingHandler().execute(ctx) == 0
        assert attacks(sim) == []
        assert ctx.stats.stale_references == 1

    def test_vanished_troop_is_skipped(self, make_context):
        sim = FakeSim()
        target = sim.add(UnitType.SOLDIER, 2)
        lost = sim.add(UnitType.ARCHER, 1)
        kept = sim.add(UnitType.ARCHER, 1)
        ctx = make_context(sim)
        sim.vanish(lost)

        assert AttackEverythingHandler().execute(ctx) == 1
        assert attacks(sim) == [(kept, target)]
        assert ctx.stats.stale_references == 1
