"""
Tests for the agent lifecycle and full games on GridWorld.
"""

import random

import pytest

from conftest import FakeSim
from PlanningBot import DecisionConfig, PlanningBot
from PlanningBot.abilities.action import ActionKind
from PlanningBot.errors import RoundNotStartedError
from PlanningBot.manifests.phase_machine import GamePhase
from PlanningBot.sandbox.grid_world import GridWorld
from PlanningBot.world.unit_types import OWNED_TYPES, UnitType


def new_match(seed=3, config=None):
    world = GridWorld.standard(seed=seed, starting_gold=600)
    bots = [
        PlanningBot(world, agent_id, config=config, rng=random.Random(seed + agent_id))
        for agent_id in (1, 2)
    ]
    for bot in bots:
        bot.initialize_match()
        bot.initialize_round()
    return world, bots


def play(world, bots, ticks):
    for tick in range(1, ticks + 1):
        for bot in bots:
            bot.on_step(tick)
        world.advance()
        if world.is_over():
            break


class TestLifecycle:

    def test_step_before_round_raises(self):
        bot = PlanningBot(GridWorld.standard(), agent_id=1)
        bot.initialize_match()
        with pytest.raises(RoundNotStartedError):
            bot.on_step(1)

    def test_round_starts_clean(self):
        """A new round has a non-empty catalog, no anchor and empty rosters."""
        world, (bot, _) = new_match()
        state = bot.round_state

        assert len(state.catalog) > 0
        assert not state.anchor.is_set
        assert state.snapshot.is_empty()
        assert all(state.snapshot.mine[t] == [] for t in OWNED_TYPES)

    def test_round_reset_forgets_previous_round(self):
        world, bots = new_match()
        play(world, bots, 10)
        bot = bots[0]
        assert bot.round_state.anchor.is_set

        fresh = GridWorld.standard(seed=9, starting_gold=600)
        bot.initialize_round(fresh)

        assert bot.sim is fresh
        assert not bot.round_state.anchor.is_set
        assert bot.round_state.snapshot.is_empty()
        assert bot.stats.total_ticks == 0

    def test_learn_returns_report(self):
        world, bots = new_match()
        play(world, bots, 3)

        report = bots[0].learn()
        assert "END-OF-ROUND STATS" in report
        assert bots[0].rounds_played == 1


class TestDecisionPass:

    def test_opening_tick_builds_barracks(self):
        """At 600 gold the first new maximum is the barracks score."""
        world, (bot, _) = new_match()

        fired = bot.on_step(1)

        assert bot.last_phase == GamePhase.BUILD
        assert fired == [ActionKind.BUILD_BARRACKS]
        accepted = [c for c in world.commands("build", accepted=True) if c.agent == 1]
        assert len(accepted) == 1
        assert world.get_gold(1) == 100

    def test_second_tick_trains_a_worker_and_sets_route(self):
        world, (bot, _) = new_match()
        bot.on_step(1)
        world.advance()

        fired = bot.on_step(2)

        assert fired == [ActionKind.TRAIN_WORKER]
        assert bot.round_state.anchor.is_set
        assert [c.agent for c in world.commands("train", accepted=True)] == [1]

    def test_workers_gather_once_route_exists(self):
        world, bots = new_match()
        play(world, bots, 60)

        gathered = [c for c in world.commands("gather", accepted=True) if c.agent == 1]
        assert gathered
        assert len(world.get_units_of_type(UnitType.WORKER, 1)) > 3

    def test_win_phase_once_enemy_army_is_gone(self):
        """With only enemy structures left the bot sweeps them."""
        world = GridWorld(20, 20)
        world.spawn(UnitType.BASE, 2, (15, 15))
        archer = world.spawn(UnitType.ARCHER, 1, (0, 0))
        bot = PlanningBot(world, 1, rng=random.Random(0))
        bot.initialize_round()

        fired = bot.on_step(1)

        assert bot.last_phase == GamePhase.WIN
        assert fired == [ActionKind.ATTACK_EVERYTHING]
        assert world.commands("attack", accepted=True)[0].unit_id == archer


class TestFullGame:

    def test_game_is_reproducible(self):
        """Same seeds, same commands."""
        logs = []
        for _ in range(2):
            world, bots = new_match(seed=11)
            play(world, bots, 150)
            logs.append(list(world.command_log))
        assert logs[0] == logs[1]

    def test_argmax_and_reservation_modes_play(self):
        config = DecisionConfig(dispatch_mode="argmax", reserve_sites=True)
        world, bots = new_match(config=config)
        play(world, bots, 100)

        for bot in bots:
            assert bot.stats.total_ticks > 0
            assert bot.stats.total_commands > 0


class TestShortOfGold:

    @pytest.mark.parametrize("kind, unit_type, gold, mine, enemy", [
        (ActionKind.TRAIN_WORKER, UnitType.WORKER, 99,
         [UnitType.BASE], [UnitType.WORKER]),
        (ActionKind.TRAIN_ARCHER, UnitType.ARCHER, 249,
         [UnitType.BARRACKS], [UnitType.ARCHER]),
        (ActionKind.TRAIN_SOLDIER, UnitType.SOLDIER, 249,
         [UnitType.BARRACKS, UnitType.SOLDIER], [UnitType.WORKER]),
    ])
    def test_wanted_unit_not_trained_one_gold_short(self, kind, unit_type, gold, mine, enemy):
        """The unit is wanted but one gold short, so its handler never fires."""
        sim = FakeSim(gold={1: gold, 2: 0})
        for t in mine:
            sim.add(t, 1)
        for t in enemy:
            sim.add(t, 2)
        bot = PlanningBot(sim, agent_id=1, rng=random.Random(0))
        bot.initialize_match()
        bot.initialize_round()

        fired = bot.on_step(1)

        assert bot.last_phase is not GamePhase.WIN
        assert kind not in fired
        assert not [c for c in sim.commands if c[0] == "train" and c[2] == unit_type]
