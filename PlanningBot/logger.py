"""
PlanningBot Logger - Persistent file-based logging.

Provides structured, levelled logging to rotating log files so a round can
be reviewed tick by tick after it ends, without relying on the host
simulation's console.

Usage
-----
    from PlanningBot.logger import get_logger

    log = get_logger()          # module-level logger
    log.info("Round started")
    log.debug("Snapshot: %s", snapshot)

    # Game-specific helpers
    log.game_event("PHASE", "BUILD -> ATTACK", tick=1234)
    log.action("BUILD_BARRACKS", score=1.0, commands=2, tick=1234)

The log file lives at  logs/planning_<timestamp>.log  relative to the CWD,
or under $PLANNINGBOT_LOG_DIR when that variable is set.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

if TYPE_CHECKING:
    from PlanningBot.abilities.action import ActionScore


# ── Configuration ────────────────────────────────────────────────────────────

LOG_DIR          = Path(os.environ.get("PLANNINGBOT_LOG_DIR", "logs"))
LOG_LEVEL        = logging.DEBUG        # File log level  (very verbose)
CONSOLE_LEVEL    = logging.INFO         # Console level   (INFO and above)
LOG_BACKUP_COUNT = 10                   # How many old log files to keep
MAX_BYTES        = 5 * 1024 * 1024      # 5 MB per file before rotating


# ── Custom log levels ─────────────────────────────────────────────────────────

GAME_EVENT_LEVEL = 25   # between INFO (20) and WARNING (30)
ACTION_LEVEL     = 15   # between DEBUG (10) and INFO (20)

logging.addLevelName(GAME_EVENT_LEVEL, "GAME")
logging.addLevelName(ACTION_LEVEL,     "ACTION")


# ── Custom formatter ──────────────────────────────────────────────────────────

class PlanningFormatter(logging.Formatter):
    """
    Adds a [tick] column when a 'tick' extra field is present, so log lines
    can be correlated directly to a specific decision pass.

    Example output:
        2026-10-19 21:14:03.412 | INFO    |       - | Round started
        2026-10-19 21:14:05.001 | GAME    |     128 | PHASE | BUILD -> ATTACK
        2026-10-19 21:14:05.002 | ACTION  |     128 | ATTACK_WITH_ARCHERS | score=1.00 commands=6
    """

    BASE_FMT  = "%(asctime)s.%(msecs)03d | %(levelname)-7s | %(tick_col)7s | %(message)s"
    DATE_FMT  = "%Y-%m-%d %H:%M:%S"

    def format(self, record: logging.LogRecord) -> str:
        tick = getattr(record, "tick", None)
        record.tick_col = "-" if tick is None else str(tick)
        record.levelname = record.levelname[:7]
        return super().format(record)


# ── Logger factory ────────────────────────────────────────────────────────────

_logger_instance: Optional["PlanningLogger"] = None


def get_logger(name: str = "planning") -> "PlanningLogger":
    """
    Return the singleton PlanningLogger, creating it on first call.

    Call this once at module level in each file that needs logging:

        log = get_logger()
    """
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = PlanningLogger(name)
    return _logger_instance


class PlanningLogger:
    """
    Thin wrapper around Python's standard logging that adds game-specific
    helpers and wires up both a rotating file handler and a console handler.
    """

    def __init__(self, name: str = "planning") -> None:
        self._logger = logging.getLogger(name)
        self._logger.setLevel(LOG_LEVEL)

        # Avoid adding duplicate handlers if the logger is re-initialised
        if self._logger.handlers:
            return

        self._setup_handlers()

    # ── Setup ─────────────────────────────────────────────────────────────────

    def _setup_handlers(self) -> None:
        LOG_DIR.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file  = LOG_DIR / f"planning_{timestamp}.log"

        formatter = PlanningFormatter(
            fmt     = PlanningFormatter.BASE_FMT,
            datefmt = PlanningFormatter.DATE_FMT,
        )

        # ── Rotating file handler ──────────────────────────────────────────
        file_handler = logging.handlers.RotatingFileHandler(
            filename    = log_file,
            maxBytes    = MAX_BYTES,
            backupCount = LOG_BACKUP_COUNT,
            encoding    = "utf-8",
        )
        file_handler.setLevel(LOG_LEVEL)
        file_handler.setFormatter(formatter)

        # ── Console handler ────────────────────────────────────────────────
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(CONSOLE_LEVEL)
        console_handler.setFormatter(formatter)

        self._logger.addHandler(file_handler)
        self._logger.addHandler(console_handler)

        self._logger.info(
            "Logger initialised, writing to %s",
            log_file.resolve(),
        )

    def set_console_level(self, level: int) -> None:
        """Raise or lower console verbosity (run.py uses this for RUN_VERBOSE)."""
        for handler in self._logger.handlers:
            if not isinstance(handler, logging.handlers.RotatingFileHandler):
                handler.setLevel(level)

    # ── Standard log levels ───────────────────────────────────────────────────

    def debug(self, msg: str, *args, tick: Optional[int] = None, **kwargs) -> None:
        self._logger.debug(msg, *args, extra={"tick": tick}, **kwargs)

    def info(self, msg: str, *args, tick: Optional[int] = None, **kwargs) -> None:
        self._logger.info(msg, *args, extra={"tick": tick}, **kwargs)

    def warning(self, msg: str, *args, tick: Optional[int] = None, **kwargs) -> None:
        self._logger.warning(msg, *args, extra={"tick": tick}, **kwargs)

    def error(self, msg: str, *args, tick: Optional[int] = None, **kwargs) -> None:
        self._logger.error(msg, *args, extra={"tick": tick}, **kwargs)

    def exception(self, msg: str, *args, tick: Optional[int] = None, **kwargs) -> None:
        self._logger.exception(msg, *args, extra={"tick": tick}, **kwargs)

    # ── Game-specific helpers ─────────────────────────────────────────────────

    def game_event(
        self,
        event_type: str,
        detail: str,
        tick: Optional[int] = None,
    ) -> None:
        """
        Log a significant named game event (phase changes, round start/end).

        Example:
            log.game_event("PHASE", "BUILD -> ATTACK", tick=1280)
            log.game_event("ROUND_START", "agent=1 sites=412", tick=0)
        """
        self._logger.log(
            GAME_EVENT_LEVEL,
            "%s | %s",
            event_type.upper(),
            detail,
            extra={"tick": tick},
        )

    def action(
        self,
        kind_name: str,
        score: float,
        commands: int,
        tick: Optional[int] = None,
    ) -> None:
        """
        Log one fired action handler and how many commands it issued.

        Example:
            log.action("GATHER", score=1.0, commands=4, tick=1280)
        """
        self._logger.log(
            ACTION_LEVEL,
            "%s | score=%.2f commands=%d",
            kind_name,
            score,
            commands,
            extra={"tick": tick},
        )

    def scores(
        self,
        phase_name: str,
        scores: Iterable["ActionScore"],
        tick: Optional[int] = None,
    ) -> None:
        """Log the full score vector for one tick at DEBUG level."""
        body = " ".join(f"{s.kind.name.lower()}={s.score:.2f}" for s in scores)
        self._logger.debug(
            "Scores [%s] | %s",
            phase_name,
            body,
            extra={"tick": tick},
        )
