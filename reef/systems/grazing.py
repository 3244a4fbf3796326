"""Urchin grazing on corals.

Every urchin is tested against every coral (no spatial index). A contact
is any pair closer than one grid cell where the coral is still alive.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from reef.config.urchins import GRAZING_ALGAE_FACTOR, GRAZING_ENERGY_FACTOR
from reef.math_utils import distance
from reef.systems.base import BaseSystem, SystemResult
from reef.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from reef.simulation.engine import SimulationEngine

logger = logging.getLogger(__name__)


@runs_in_phase(UpdatePhase.GRAZING)
class GrazingSystem(BaseSystem):
    """Urchins eat coral tissue and the algae growing on it.

    Per contact: urchin energy += grazing_rate * 0.5, coral health -=
    grazing_rate (with status transitions), coral algae -= grazing_rate * 0.3
    floored at 0.
    """

    def __init__(self, engine: "SimulationEngine") -> None:
        super().__init__(engine, "Grazing")

    def _do_update(self, tick: int) -> SystemResult:
        world = self.world
        params = self.params
        grazing_rate = params.grazing_rate
        threshold = params.coral_degradation_threshold
        reach = world.cell_size

        energy_gain = grazing_rate * GRAZING_ENERGY_FACTOR
        algae_loss = grazing_rate * GRAZING_ALGAE_FACTOR

        contacts = 0
        killed = 0
        for urchin in world.urchins:
            for coral in world.corals:
                if coral.is_dead:
                    continue
                if distance(urchin.x, urchin.y, coral.x, coral.y) >= reach:
                    continue

                contacts += 1
                urchin.energy += energy_gain
                coral.take_damage(grazing_rate, threshold)
                if coral.is_dead:
                    killed += 1
                coral.algae_level = max(0.0, coral.algae_level - algae_loss)

        if killed:
            logger.debug("Tick %d: %d corals grazed to death", tick, killed)

        return SystemResult(
            entities_affected=contacts,
            details={"contacts": contacts, "corals_killed": killed},
        )
