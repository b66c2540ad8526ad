"""
PlanningBot - Main Agent Class

The per-tick decision pass:
- Snapshot refresh (own + single tracked enemy rosters, gold)
- Game-phase classification (BUILD / ATTACK / WIN)
- Heuristic scoring of the fixed action list
- Dispatch of the winning handlers, which issue commands

Lifecycle, driven by the host loop:

    bot = PlanningBot(sim, agent_id=1)
    bot.initialize_match()
    for each round:
        bot.initialize_round()
        for each tick:
            bot.on_step(tick)
        bot.learn()
"""

from __future__ import annotations

import random
from typing import List, Optional

from PlanningBot.abilities.action import ActionContext, ActionKind, ActionScore
from PlanningBot.abilities.action_registry import ActionRegistry, default_registry
from PlanningBot.abilities.action_selector import ActionSelector
from PlanningBot.construction.placement_resolver import BuildSiteCatalog
from PlanningBot.decision_config import DecisionConfig
from PlanningBot.errors import RoundNotStartedError
from PlanningBot.game_stats import RoundStatsTracker
from PlanningBot.logger import get_logger
from PlanningBot.manifests.heuristics import HeuristicEvaluator
from PlanningBot.manifests.phase_machine import GamePhase, PhaseMachine
from PlanningBot.world.round_state import RoundState
from PlanningBot.world.simulation import Simulation
from PlanningBot.world.snapshot import SnapshotBuilder


log = get_logger()


class PlanningBot:
    """
    One agent's decision core.

    Owns the round-scoped RoundState and rebuilds it on initialize_round().
    Everything per-tick (snapshot, scores, fired handlers) is rebuilt from
    scratch in on_step() and discarded afterwards.
    """

    def __init__(
        self,
        sim: Simulation,
        agent_id: int,
        name: str = "PlanningBot",
        config: Optional[DecisionConfig] = None,
        rng: Optional[random.Random] = None,
        registry: Optional[ActionRegistry] = None,
    ) -> None:
        self.sim = sim
        self.agent_id = agent_id
        self.name = name
        self.config = config or DecisionConfig()
        self.rng = rng or random.Random()

        self.snapshot_builder = SnapshotBuilder(sim)
        self.phase_machine = PhaseMachine(self.config)
        self.evaluator = HeuristicEvaluator(self.config)
        self.registry = registry or default_registry()
        self.selector = ActionSelector(self.registry, mode=self.config.dispatch_mode)

        self.round_state: Optional[RoundState] = None
        self.stats: RoundStatsTracker = RoundStatsTracker()
        self.rounds_played: int = 0

        # Last tick's outputs, kept for inspection only
        self.last_phase: Optional[GamePhase] = None
        self.last_scores: List[ActionScore] = []
        self.last_fired: List[ActionKind] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize_match(self) -> None:
        """Called once before the first round of a match."""
        self.rounds_played = 0
        log.game_event("MATCH_START", f"{self.name} as agent {self.agent_id}")
        log.debug("Action handlers:\n%s", self.registry.summary())

    def initialize_round(self, sim: Optional[Simulation] = None) -> None:
        """
        Fresh round: recompute the build-site catalog, forget the anchors,
        start from an empty snapshot.

        Pass ``sim`` when the host builds a new world for each round.
        """
        if sim is not None:
            self.sim = sim
            self.snapshot_builder = SnapshotBuilder(sim)
        self.round_state = RoundState(catalog=BuildSiteCatalog.compute(self.sim))
        self.stats = RoundStatsTracker()
        self.last_phase = None
        self.last_scores = []
        self.last_fired = []
        log.game_event(
            "ROUND_START",
            f"agent={self.agent_id} round={self.rounds_played + 1} sites={len(self.round_state.catalog)}",
            tick=0,
        )

    def on_step(self, tick: int) -> List[ActionKind]:
        """
        Run one decision pass. Returns the action kinds whose handlers fired.
        """
        if self.round_state is None:
            raise RoundNotStartedError("initialize_round() must be called before on_step()")

        # STAGE 1: Snapshot
        snapshot = self.snapshot_builder.refresh(self.agent_id)
        self.round_state.begin_tick(tick, snapshot)

        # STAGE 2: Phase
        phase = self.phase_machine.classify(snapshot)
        if self.stats.record_phase(phase):
            log.game_event("PHASE", f"{self.last_phase.name} -> {phase.name}", tick=tick)
        self.last_phase = phase

        # STAGE 3: Scores
        scores = self.evaluator.score(snapshot, phase)
        log.scores(phase.name, scores, tick=tick)

        # STAGE 4: Dispatch
        ctx = ActionContext(
            sim=self.sim,
            agent_id=self.agent_id,
            round_state=self.round_state,
            config=self.config,
            rng=self.rng,
            stats=self.stats,
        )
        fired = self.selector.dispatch(scores, ctx)

        self.last_scores = scores
        self.last_fired = fired
        return fired

    def learn(self) -> str:
        """Called at the end of each round. Logs and returns the round report."""
        self.rounds_played += 1
        tick = self.round_state.tick if self.round_state is not None else None
        return self.stats.finalize(self.agent_id, tick=tick)
