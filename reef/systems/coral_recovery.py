"""Coral healing and algae growth.

Healing depends on global grazing pressure: while urchin density (urchins
per grid cell) stays below 0.5, every living coral regains health. Algae
grows on every degraded or dead coral, so dead reef keeps fouling even
though it never heals.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from reef.config.corals import HEALING_DENSITY_THRESHOLD
from reef.entities import CoralStatus
from reef.systems.base import BaseSystem, SystemResult
from reef.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from reef.simulation.engine import SimulationEngine


@runs_in_phase(UpdatePhase.CORAL_RECOVERY)
class CoralRecoverySystem(BaseSystem):
    """Heals living corals under low grazing pressure and grows algae."""

    def __init__(self, engine: "SimulationEngine") -> None:
        super().__init__(engine, "CoralRecovery")

    def _do_update(self, tick: int) -> SystemResult:
        world = self.world
        params = self.params
        density = world.urchin_density()
        healing = density < HEALING_DENSITY_THRESHOLD
        max_algae = params.max_algae_density

        healed = 0
        fouled = 0
        for coral in world.corals:
            if healing and not coral.is_dead:
                coral.heal(params.coral_healing_rate, params.coral_degradation_threshold)
                healed += 1

            if coral.status in (CoralStatus.DEGRADED, CoralStatus.DEAD):
                coral.algae_level = min(max_algae, coral.algae_level + params.algae_growth_rate)
                fouled += 1
            elif coral.algae_level > max_algae:
                # max_algae_density was lowered since the algae grew
                coral.algae_level = max_algae

        return SystemResult(
            entities_affected=healed + fouled,
            details={"density": density, "healed": healed, "fouled": fouled},
        )
