"""Simulation entities: sea urchins, harvesters and coral cells.

Urchins and harvesters are mobile agents with a position and a velocity.
Corals sit at fixed grid-cell centres and only change health, algae and
status. Algae is not an entity of its own; it is the ``algae_level`` scalar
carried by each coral.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from reef.config.corals import ALGAE_VISIBILITY_THRESHOLD, CORAL_MAX_HEALTH
from reef.entity_ids import HarvesterId, UrchinId


class CoralStatus(str, Enum):
    """Health state of a coral cell.

    DEAD is terminal: a dead coral is never healed.
    """

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    DEAD = "dead"


@dataclass
class Urchin:
    """A grazing sea urchin.

    Attributes:
        urchin_id: Unique identifier
        x, y: Position inside the world rectangle
        vx, vy: Velocity (units per tick)
        age: Ticks lived
        maturity_time: Age at which this individual becomes an adult
        is_adult: Sticky maturity flag; never reverts to False
        energy: Starvation budget; the urchin is culled at 0
        last_spawn_tick: Tick of the most recent spawn (cooldown tracking)
    """

    urchin_id: UrchinId
    x: float
    y: float
    vx: float
    vy: float
    age: int
    maturity_time: int
    is_adult: bool
    energy: float
    last_spawn_tick: int = 0

    def grow_older(self) -> None:
        """Advance age by one tick and latch adulthood once mature."""
        self.age += 1
        if self.age >= self.maturity_time:
            self.is_adult = True

    def is_starved(self) -> bool:
        return self.energy <= 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": int(self.urchin_id),
            "x": self.x,
            "y": self.y,
            "vx": self.vx,
            "vy": self.vy,
            "age": self.age,
            "maturityTime": self.maturity_time,
            "isAdult": self.is_adult,
            "energy": self.energy,
            "lastSpawnTick": self.last_spawn_tick,
        }


@dataclass
class Harvester:
    """A human harvester collecting adult urchins. Harvesters never die."""

    harvester_id: HarvesterId
    x: float
    y: float
    vx: float
    vy: float
    harvest_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": int(self.harvester_id),
            "x": self.x,
            "y": self.y,
            "vx": self.vx,
            "vy": self.vy,
            "harvestCount": self.harvest_count,
        }


@dataclass
class Coral:
    """A coral occupying one grid cell.

    Attributes:
        coral_id: "coral-{col}-{row}", stable for the lifetime of a run
        col, row: Grid cell coordinates
        x, y: Cell centre in world units
        health: 0..100
        algae_level: 0..max_algae_density
        status: Derived from health thresholds
    """

    coral_id: str
    col: int
    row: int
    x: float
    y: float
    health: float = CORAL_MAX_HEALTH
    algae_level: float = 0.0
    status: CoralStatus = CoralStatus.HEALTHY

    @property
    def is_dead(self) -> bool:
        return self.status is CoralStatus.DEAD

    @property
    def has_visible_algae(self) -> bool:
        """Whether a renderer should draw an algae overlay on this cell."""
        return self.algae_level > ALGAE_VISIBILITY_THRESHOLD

    def take_damage(self, amount: float, degradation_threshold: float) -> None:
        """Lose health and move along healthy -> degraded -> dead."""
        self.health -= amount
        if self.health <= 0:
            self.status = CoralStatus.DEAD
            self.health = 0.0
        elif self.health < degradation_threshold:
            self.status = CoralStatus.DEGRADED

    def heal(self, amount: float, degradation_threshold: float) -> None:
        """Regain health (capped) and recover to healthy above the threshold.

        Dead corals are skipped.
        """
        if self.is_dead:
            return
        self.health = min(CORAL_MAX_HEALTH, self.health + amount)
        if self.health > degradation_threshold:
            self.status = CoralStatus.HEALTHY

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.coral_id,
            "col": self.col,
            "row": self.row,
            "x": self.x,
            "y": self.y,
            "health": self.health,
            "algaeLevel": self.algae_level,
            "status": self.status.value,
        }
