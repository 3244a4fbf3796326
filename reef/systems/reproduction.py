"""Broadcast spawning among adult urchins.

There is no mate selection: an adult with enough energy, off cooldown, and
with at least one other adult nearby gets one stochastic spawn attempt per
tick. Newborns are collected first and appended only after every parent
has been evaluated, so they never count as neighbours on their birth tick.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List

from reef.config.urchins import (
    SPAWN_COOLDOWN_TICKS,
    SPAWN_ENERGY_COST,
    SPAWN_ENERGY_THRESHOLD,
)
from reef.entities import Urchin
from reef.entity_factory import create_offspring
from reef.math_utils import distance
from reef.systems.base import BaseSystem, SystemResult
from reef.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from reef.simulation.engine import SimulationEngine

logger = logging.getLogger(__name__)


@runs_in_phase(UpdatePhase.REPRODUCTION)
class ReproductionSystem(BaseSystem):
    """Spawns juveniles next to eligible adults."""

    def __init__(self, engine: "SimulationEngine") -> None:
        super().__init__(engine, "Reproduction")

    def can_spawn(self, urchin: Urchin, tick: int) -> bool:
        """Energy and cooldown gate (neighbour presence is checked separately)."""
        return (
            urchin.is_adult
            and urchin.energy > SPAWN_ENERGY_THRESHOLD
            and tick - urchin.last_spawn_tick > SPAWN_COOLDOWN_TICKS
        )

    def _has_nearby_adult(self, urchin: Urchin, adults: List[Urchin], radius: float) -> bool:
        for other in adults:
            if other is urchin:
                continue
            if distance(urchin.x, urchin.y, other.x, other.y) < radius:
                return True
        return False

    def _do_update(self, tick: int) -> SystemResult:
        world = self.world
        params = self.params
        rng = self.rng

        adults = [u for u in world.urchins if u.is_adult]
        offspring: List[Urchin] = []

        for parent in adults:
            if not self.can_spawn(parent, tick):
                continue
            if not self._has_nearby_adult(parent, adults, params.spawn_radius):
                continue
            if rng.random() >= params.reproduction_rate:
                continue

            offspring.append(create_offspring(parent, world, params, rng))
            parent.energy -= SPAWN_ENERGY_COST
            parent.last_spawn_tick = tick

        world.urchins.extend(offspring)

        if offspring:
            logger.debug("Tick %d: %d urchins spawned", tick, len(offspring))

        return SystemResult(
            entities_spawned=len(offspring),
            details={"newborns": len(offspring), "eligible_adults": len(adults)},
        )
