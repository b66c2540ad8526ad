"""
RoundStatsTracker — end-of-round decision metrics.

Accumulates what the decision core did during one round and writes a
formatted summary to the log when the round ends. The summary is emitted
as a ROUND_STATS game event so it appears at GAME level in the log file
and is easy to grep.

Tracked statistics
------------------
Phases:
  ticks per phase       How many decision passes ran in BUILD/ATTACK/WIN.
  phase changes         How often the classified phase differed from the
                        previous tick's.

Actions:
  handler firings       How many times each ActionKind's handler fired.

Commands:
  build / train / attack / gather
                        Commands handed to the simulation (accepted or not;
                        the core never learns the outcome).
  stale references      Distinct unit ids that resolved to nothing when a
                        handler looked them up. An id looked up again
                        later in the round is not counted twice.

Integration
-----------
    # initialize_round
    self.stats = RoundStatsTracker()

    # on_step
    self.stats.record_phase(phase)
    (ActionSelector / ActionContext record actions and commands)

    # learn
    self.stats.finalize(agent_id, tick)
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Optional, Set

from PlanningBot.abilities.action import ACTION_ORDER
from PlanningBot.logger import get_logger
from PlanningBot.manifests.phase_machine import GamePhase

if TYPE_CHECKING:
    from PlanningBot.abilities.action import ActionKind

log = get_logger()

COMMAND_NAMES: tuple = ("build", "train", "attack", "gather")


class RoundStatsTracker:
    """
    Lightweight accumulator for all end-of-round statistics.

    Call record_phase()   once per on_step.
    Call record_action()  each time a handler fires.
    Call record_command() for every command issued.
    Call finalize()       from learn().
    """

    def __init__(self) -> None:
        self.phase_ticks: Counter = Counter()
        self.phase_changes: int = 0
        self.action_firings: Counter = Counter()
        self.commands: Counter = Counter()
        self.stale_ids: Set[int] = set()

        self._last_phase: Optional[GamePhase] = None

    # ── Per-tick recording ────────────────────────────────────────────────────

    def record_phase(self, phase: GamePhase) -> bool:
        """Count a tick in ``phase``. Returns True if the phase changed."""
        self.phase_ticks[phase] += 1
        changed = self._last_phase is not None and phase != self._last_phase
        if changed:
            self.phase_changes += 1
        self._last_phase = phase
        return changed

    def record_action(self, kind: "ActionKind") -> None:
        self.action_firings[kind] += 1

    def record_command(self, command: str) -> None:
        self.commands[command] += 1

    def record_stale(self, unit_id: int) -> None:
        self.stale_ids.add(unit_id)

    @property
    def stale_references(self) -> int:
        return len(self.stale_ids)

    @property
    def total_ticks(self) -> int:
        return sum(self.phase_ticks.values())

    @property
    def total_commands(self) -> int:
        return sum(self.commands.values())

    # ── Finalization ──────────────────────────────────────────────────────────

    def finalize(self, agent_id: int, tick: Optional[int] = None) -> str:
        """Format the report, log it, and return it."""
        report = self._format_report(agent_id)
        log.game_event("ROUND_STATS", "\n" + report, tick=tick)
        return report

    def _format_report(self, agent_id: int) -> str:
        W = 52

        def row(label: str, value: str) -> str:
            return f"  {label:<24} : {value}"

        sep_thick = "═" * W
        sep_thin  = "─" * W

        lines = [
            sep_thick,
            f"  END-OF-ROUND STATS  (agent {agent_id})",
            sep_thick,
            row("Ticks", str(self.total_ticks)),
            row("Phase changes", str(self.phase_changes)),
        ]

        # ── phases ───────────────────────────────────────────────────────
        lines += [sep_thin, "  PHASES  (ticks spent)"]
        for phase in GamePhase:
            lines.append(row(phase.name, str(self.phase_ticks[phase])))

        # ── actions ──────────────────────────────────────────────────────
        lines += [sep_thin, "  ACTIONS  (handler firings)"]
        for kind in ACTION_ORDER:
            lines.append(row(kind.name, str(self.action_firings[kind])))

        # ── commands ─────────────────────────────────────────────────────
        lines += [sep_thin, "  COMMANDS  (issued)"]
        for name in COMMAND_NAMES:
            lines.append(row(name.capitalize(), str(self.commands[name])))
        lines += [
            row("Stale references", str(self.stale_references)),
            sep_thick,
        ]

        return "\n".join(lines)
