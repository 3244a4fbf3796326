"""Urchin death by starvation.

This system is the single owner of the normal death path: an urchin whose
energy has reached zero is removed from the population.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from reef.systems.base import BaseSystem, SystemResult
from reef.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from reef.simulation.engine import SimulationEngine

logger = logging.getLogger(__name__)


@runs_in_phase(UpdatePhase.STARVATION)
class StarvationSystem(BaseSystem):
    """Culls urchins with energy <= 0 and counts the deaths."""

    def __init__(self, engine: "SimulationEngine") -> None:
        super().__init__(engine, "Starvation")

    def _do_update(self, tick: int) -> SystemResult:
        world = self.world
        survivors = [u for u in world.urchins if not u.is_starved()]
        starved = len(world.urchins) - len(survivors)
        world.urchins = survivors

        if starved:
            logger.debug("Tick %d: %d urchins starved", tick, starved)

        return SystemResult(entities_removed=starved, details={"starved": starved})
