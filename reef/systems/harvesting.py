"""Harvesters collecting adult urchins.

Harvesters act one after another in list order against the shared, shrinking
urchin population: an urchin taken by an earlier harvester is no longer
available to later ones in the same tick.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from reef.config.harvesters import HARVEST_PROBABILITY_FACTOR
from reef.math_utils import distance
from reef.systems.base import BaseSystem, SystemResult
from reef.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from reef.simulation.engine import SimulationEngine

logger = logging.getLogger(__name__)


@runs_in_phase(UpdatePhase.HARVEST)
class HarvestingSystem(BaseSystem):
    """Each harvester may take the single nearest adult within its radius."""

    def __init__(self, engine: "SimulationEngine") -> None:
        super().__init__(engine, "Harvesting")

    def _do_update(self, tick: int) -> SystemResult:
        world = self.world
        params = self.params
        rng = self.rng
        radius = params.harvest_radius
        probability = params.harvesting_rate * HARVEST_PROBABILITY_FACTOR

        harvested = 0
        for harvester in world.harvesters:
            hx, hy = harvester.x, harvester.y
            targets = [
                u
                for u in world.urchins
                if u.is_adult and distance(hx, hy, u.x, u.y) < radius
            ]
            if not targets or rng.random() >= probability:
                continue

            # min() keeps the earliest urchin on distance ties
            nearest = min(targets, key=lambda u: distance(hx, hy, u.x, u.y))
            world.urchins.remove(nearest)
            harvester.harvest_count += 1
            world.cumulative_harvested += 1
            harvested += 1

        if harvested:
            logger.debug("Tick %d: %d urchins harvested", tick, harvested)

        return SystemResult(entities_removed=harvested, details={"harvested": harvested})
