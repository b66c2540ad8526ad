"""
Run script for a headless PlanningBot match using config.py settings.

Two PlanningBots play each other for ROUNDS rounds, each round on a
freshly generated GridWorld.
"""

import logging
import random

from PlanningBot import DecisionConfig, PlanningBot
from PlanningBot.logger import get_logger
from PlanningBot.sandbox.grid_world import GridWorld
from config import (
    BOT_NAME,
    DISPATCH_MODE,
    MAP_HEIGHT,
    MAP_WIDTH,
    RESERVE_BUILD_SITES,
    ROUNDS,
    RUN_VERBOSE,
    SEED,
    STARTING_GOLD,
    TICKS_PER_ROUND,
)

log = get_logger()


def new_world(rng):
    return GridWorld.standard(
        MAP_WIDTH, MAP_HEIGHT, seed=rng.randrange(2 ** 31), starting_gold=STARTING_GOLD,
    )


def play_round(world, bots):
    """Step every bot once per tick until one side is wiped out or time runs out."""
    for tick in range(1, TICKS_PER_ROUND + 1):
        for bot in bots:
            bot.on_step(tick)
        world.advance()
        if world.is_over():
            return tick
    return TICKS_PER_ROUND


def main():
    """Run a full match"""

    if RUN_VERBOSE:
        log.set_console_level(logging.DEBUG)

    log.info("=" * 50)
    log.info("%s self-play", BOT_NAME)
    log.info("=" * 50)
    log.info("Map: %dx%d", MAP_WIDTH, MAP_HEIGHT)
    log.info("Rounds: %d x %d ticks", ROUNDS, TICKS_PER_ROUND)
    log.info("Dispatch: %s  reserve sites: %s", DISPATCH_MODE, RESERVE_BUILD_SITES)

    config = DecisionConfig(dispatch_mode=DISPATCH_MODE, reserve_sites=RESERVE_BUILD_SITES)
    rng = random.Random(SEED)

    world = new_world(rng)
    bots = [
        PlanningBot(
            world, agent_id, name=f"{BOT_NAME}#{agent_id}", config=config,
            rng=random.Random(rng.randrange(2 ** 31)),
        )
        for agent_id in (1, 2)
    ]
    for bot in bots:
        bot.initialize_match()

    wins = {bot.agent_id: 0 for bot in bots}
    for round_no in range(1, ROUNDS + 1):
        if round_no > 1:
            world = new_world(rng)
        for bot in bots:
            bot.initialize_round(world)

        last_tick = play_round(world, bots)
        for bot in bots:
            bot.learn()

        winner = world.winner()
        if winner is not None:
            wins[winner] += 1
        log.info(
            "Round %d finished at tick %d, winner: %s (%d commands, %d rejected)",
            round_no, last_tick, winner if winner is not None else "none",
            len(world.command_log), len(world.commands(accepted=False)),
        )

    log.info("Match finished! Wins: %s", ", ".join(f"agent {a} = {n}" for a, n in wins.items()))


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        log.info("Match stopped by user")
    except Exception as e:
        log.exception("Unexpected error in main: %s", e)
