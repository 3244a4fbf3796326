"""Locomotion systems for urchins and harvesters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from reef.config.urchins import URCHIN_ENERGY_DECAY
from reef.movement import random_walk
from reef.systems.base import BaseSystem, SystemResult
from reef.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from reef.simulation.engine import SimulationEngine


@runs_in_phase(UpdatePhase.URCHIN_MOVE)
class UrchinLocomotionSystem(BaseSystem):
    """Moves every urchin, ages it by one tick and burns its idle energy.

    Energy decays by a fixed 0.1 per tick, floored at 0. Adulthood latches
    the first tick age reaches the individual's maturity time.
    """

    def __init__(self, engine: "SimulationEngine") -> None:
        super().__init__(engine, "UrchinLocomotion")

    def _do_update(self, tick: int) -> SystemResult:
        world = self.world
        speed = self.params.urchin_speed
        rng = self.rng
        matured = 0

        for urchin in world.urchins:
            random_walk(urchin, speed, rng, world.width, world.height)
            was_adult = urchin.is_adult
            urchin.grow_older()
            if urchin.is_adult and not was_adult:
                matured += 1
            urchin.energy = max(0.0, urchin.energy - URCHIN_ENERGY_DECAY)

        return SystemResult(
            entities_affected=len(world.urchins),
            details={"matured": matured},
        )


@runs_in_phase(UpdatePhase.HARVESTER_MOVE)
class HarvesterLocomotionSystem(BaseSystem):
    """Moves every harvester with the same random walk as urchins."""

    def __init__(self, engine: "SimulationEngine") -> None:
        super().__init__(engine, "HarvesterLocomotion")

    def _do_update(self, tick: int) -> SystemResult:
        world = self.world
        speed = self.params.harvester_speed
        rng = self.rng

        for harvester in world.harvesters:
            random_walk(harvester, speed, rng, world.width, world.height)

        return SystemResult(entities_affected=len(world.harvesters))
