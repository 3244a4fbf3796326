"""Statistics and history for the reef simulation.

``snapshot()`` summarises a settled world; ``record()`` appends a point to
the bounded history every ``frequency`` ticks. ``StatisticsSampler`` ties
the two together and caches the latest summary for collaborators.

All history series are parallel lists that are appended to and truncated
together, so index ``i`` always refers to the same sample in every series.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

from reef.config.parameters import SimulationParameters
from reef.config.simulation import MIN_HISTORY_CAPACITY, UNBOUNDED_HISTORY_CAPACITY
from reef.entities import CoralStatus
from reef.world import WorldState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReefStats:
    """Population and health summary of one settled tick.

    Attributes:
        tick: Tick the summary describes
        juvenile_urchins: Urchins not yet adult
        adult_urchins: Adult urchins
        total_urchins: juvenile + adult
        healthy_corals, degraded_corals, dead_corals: Coral status counts
        algae_coverage: Mean algae level over all corals, as a percentage
        coral_health: Share of corals that are healthy, as a percentage
        harvested_urchins: Cumulative harvest since reset
        harvester_count: Harvesters currently deployed
    """

    tick: int = 0
    juvenile_urchins: int = 0
    adult_urchins: int = 0
    total_urchins: int = 0
    healthy_corals: int = 0
    degraded_corals: int = 0
    dead_corals: int = 0
    algae_coverage: float = 0.0
    coral_health: float = 0.0
    harvested_urchins: int = 0
    harvester_count: int = 0

    @property
    def total_corals(self) -> int:
        return self.healthy_corals + self.degraded_corals + self.dead_corals

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tick": self.tick,
            "juvenileUrchins": self.juvenile_urchins,
            "adultUrchins": self.adult_urchins,
            "totalUrchins": self.total_urchins,
            "healthyCorals": self.healthy_corals,
            "degradedCorals": self.degraded_corals,
            "deadCorals": self.dead_corals,
            "algaeCoverage": self.algae_coverage,
            "coralHealth": self.coral_health,
            "harvestedUrchins": self.harvested_urchins,
            "harvesterCount": self.harvester_count,
        }


@dataclass
class HistoryBuffer:
    """Bounded, index-aligned time series of sampled statistics."""

    capacity: int = UNBOUNDED_HISTORY_CAPACITY
    ticks: List[int] = field(default_factory=list)
    urchin_population: List[int] = field(default_factory=list)
    coral_health: List[float] = field(default_factory=list)
    algae_coverage: List[float] = field(default_factory=list)
    juvenile_urchins: List[int] = field(default_factory=list)
    adult_urchins: List[int] = field(default_factory=list)
    healthy_corals: List[int] = field(default_factory=list)
    degraded_corals: List[int] = field(default_factory=list)
    dead_corals: List[int] = field(default_factory=list)
    harvested_urchins: List[int] = field(default_factory=list)

    def _series(self) -> List[List[Any]]:
        return [getattr(self, f.name) for f in fields(self) if f.name != "capacity"]

    def __len__(self) -> int:
        return len(self.ticks)

    def append(self, stats: ReefStats) -> None:
        """Append one sample to every series, then drop the oldest overflow."""
        self.ticks.append(stats.tick)
        self.urchin_population.append(stats.total_urchins)
        self.coral_health.append(stats.coral_health)
        self.algae_coverage.append(stats.algae_coverage)
        self.juvenile_urchins.append(stats.juvenile_urchins)
        self.adult_urchins.append(stats.adult_urchins)
        self.healthy_corals.append(stats.healthy_corals)
        self.degraded_corals.append(stats.degraded_corals)
        self.dead_corals.append(stats.dead_corals)
        self.harvested_urchins.append(stats.harvested_urchins)

        overflow = len(self.ticks) - self.capacity
        if overflow > 0:
            for series in self._series():
                del series[:overflow]

    def clear(self) -> None:
        for series in self._series():
            series.clear()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "capacity": self.capacity,
            "ticks": list(self.ticks),
            "urchinPop": list(self.urchin_population),
            "coralHealth": list(self.coral_health),
            "algaeCoverage": list(self.algae_coverage),
            "juvenileUrchins": list(self.juvenile_urchins),
            "adultUrchins": list(self.adult_urchins),
            "healthyCorals": list(self.healthy_corals),
            "degradedCorals": list(self.degraded_corals),
            "deadCorals": list(self.dead_corals),
            "harvestedUrchins": list(self.harvested_urchins),
        }


def history_capacity(params: SimulationParameters) -> int:
    """Size the history to the expected number of samples in a run.

    With a tick limit the whole run fits; without one a generous fixed
    window is kept.
    """
    if params.enable_tick_limit:
        expected = math.ceil(params.tick_limit / params.data_recording_frequency)
        return max(MIN_HISTORY_CAPACITY, expected)
    return UNBOUNDED_HISTORY_CAPACITY


def snapshot(world: WorldState) -> ReefStats:
    """Summarise a settled world. Read-only; safe on empty populations."""
    juveniles = 0
    adults = 0
    for urchin in world.urchins:
        if urchin.is_adult:
            adults += 1
        else:
            juveniles += 1

    healthy = degraded = dead = 0
    algae_total = 0.0
    for coral in world.corals:
        if coral.status is CoralStatus.HEALTHY:
            healthy += 1
        elif coral.status is CoralStatus.DEGRADED:
            degraded += 1
        else:
            dead += 1
        algae_total += coral.algae_level

    coral_count = len(world.corals)
    algae_coverage = (algae_total / coral_count) * 100 if coral_count > 0 else 0.0
    coral_health = (healthy / coral_count) * 100 if coral_count > 0 else 0.0

    return ReefStats(
        tick=world.tick,
        juvenile_urchins=juveniles,
        adult_urchins=adults,
        total_urchins=juveniles + adults,
        healthy_corals=healthy,
        degraded_corals=degraded,
        dead_corals=dead,
        algae_coverage=algae_coverage,
        coral_health=coral_health,
        harvested_urchins=world.cumulative_harvested,
        harvester_count=len(world.harvesters),
    )


def record(
    world: WorldState,
    stats: ReefStats,
    history: HistoryBuffer,
    frequency: int,
) -> HistoryBuffer:
    """Append a history point on sampling ticks (never at tick 0)."""
    if world.tick > 0 and world.tick % frequency == 0:
        history.append(stats)
    return history


class StatisticsSampler:
    """Keeps the latest ReefStats and the history buffer for one engine.

    Attributes:
        stats: Summary of the most recently observed tick
        history: Sampled time series
    """

    def __init__(self, params: Optional[SimulationParameters] = None) -> None:
        params = params or SimulationParameters()
        self.stats = ReefStats()
        self.history = HistoryBuffer(capacity=history_capacity(params))

    def clear(self, params: SimulationParameters) -> None:
        """Forget everything (called by reset)."""
        self.stats = ReefStats()
        self.history = HistoryBuffer(capacity=history_capacity(params))

    def refresh(self, world: WorldState) -> ReefStats:
        """Recompute the cached summary without touching the history."""
        self.stats = snapshot(world)
        return self.stats

    def observe(self, world: WorldState, params: SimulationParameters) -> ReefStats:
        """Refresh statistics after a tick and record history when due."""
        capacity = history_capacity(params)
        if capacity != self.history.capacity:
            logger.debug("History capacity changed %d -> %d", self.history.capacity, capacity)
            self.history.capacity = capacity
        stats = self.refresh(world)
        record(world, stats, self.history, params.data_recording_frequency)
        return stats
