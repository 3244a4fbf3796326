"""External driving loop for a SimulationEngine.

The engine only knows how to compute one tick. ``SimulationDriver`` decides
how many ticks to compute and when:

- speed multiplier: each external tick calls ``engine.step()`` N times
- tick limit: no further steps once ``tick >= tick_limit`` (when enabled)
- pacing: ``advance_by()`` converts elapsed wall-clock time into external
  ticks with a fixed-timestep accumulator (one per ``tick_rate`` ms)
"""

from __future__ import annotations

import logging
from typing import List, Optional

from reef.config.simulation import MAX_CATCH_UP_TICKS
from reef.simulation.engine import SimulationEngine
from reef.simulation.tick_context import TickReport
from reef.statistics import ReefStats

logger = logging.getLogger(__name__)


class SimulationDriver:
    """Paces an engine according to its scheduling parameters.

    Attributes:
        engine: The engine being driven
        external_ticks: External ticks performed since creation or reset
    """

    def __init__(self, engine: SimulationEngine) -> None:
        self.engine = engine
        self.external_ticks = 0
        self._accumulator = 0.0
        self._limit_logged = False

    @property
    def tick_interval(self) -> float:
        """Wall-clock seconds per external tick."""
        return self.engine.params.tick_rate / 1000.0

    @property
    def finished(self) -> bool:
        """True when the tick limit is enabled and has been reached."""
        params = self.engine.params
        return bool(params.enable_tick_limit) and self.engine.tick >= params.tick_limit

    def reset(self) -> None:
        """Forget accumulated time (call after the engine is reset)."""
        self.external_ticks = 0
        self._accumulator = 0.0
        self._limit_logged = False

    def advance(self) -> List[TickReport]:
        """Perform one external tick.

        Returns:
            Reports for the engine steps taken (empty once finished)
        """
        reports: List[TickReport] = []
        for _ in range(self.engine.params.speed_multiplier):
            if self.finished:
                break
            reports.append(self.engine.step())
        self.external_ticks += 1

        if self.finished and not self._limit_logged:
            logger.info("Tick limit reached at tick %d", self.engine.tick)
            self._limit_logged = True
        return reports

    def advance_by(self, elapsed_seconds: float) -> List[TickReport]:
        """Run the external ticks that fall due in ``elapsed_seconds``.

        A backlog larger than MAX_CATCH_UP_TICKS is dropped rather than
        replayed.
        """
        if elapsed_seconds < 0:
            raise ValueError(f"elapsed_seconds must be non-negative, got {elapsed_seconds}")

        interval = self.tick_interval
        self._accumulator += elapsed_seconds
        due = int(self._accumulator // interval)
        if due > MAX_CATCH_UP_TICKS:
            logger.debug("Dropping %d overdue ticks", due - MAX_CATCH_UP_TICKS)
            due = MAX_CATCH_UP_TICKS
            self._accumulator = 0.0
        else:
            self._accumulator -= due * interval

        reports: List[TickReport] = []
        for _ in range(due):
            if self.finished:
                self._accumulator = 0.0
                break
            reports.extend(self.advance())
        return reports

    def run_headless(
        self,
        max_ticks: Optional[int] = None,
        stats_interval: int = 100,
    ) -> ReefStats:
        """Step as fast as possible, logging statistics periodically.

        Stops after ``max_ticks`` engine steps or at the tick limit,
        whichever comes first. Without either, ``max_ticks`` is required.
        """
        if max_ticks is None and not self.engine.params.enable_tick_limit:
            raise ValueError("run_headless needs max_ticks when no tick limit is enabled")

        engine = self.engine
        steps = 0
        logger.info("Headless run starting at tick %d", engine.tick)
        while not self.finished and (max_ticks is None or steps < max_ticks):
            engine.step()
            steps += 1
            if stats_interval > 0 and engine.tick % stats_interval == 0:
                stats = engine.get_statistics()
                logger.info(
                    "Tick %d: urchins=%d (juv %d, adult %d), corals H/D/X=%d/%d/%d, "
                    "algae=%.1f%%, harvested=%d",
                    stats.tick,
                    stats.total_urchins,
                    stats.juvenile_urchins,
                    stats.adult_urchins,
                    stats.healthy_corals,
                    stats.degraded_corals,
                    stats.dead_corals,
                    stats.algae_coverage,
                    stats.harvested_urchins,
                )

        stats = engine.get_statistics()
        logger.info("Headless run finished after %d ticks (tick %d)", steps, engine.tick)
        return stats
