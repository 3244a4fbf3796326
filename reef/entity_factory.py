"""Entity factory for seeding a world.

Single source of truth for creating corals, urchins and harvesters, used
by reset(), by reproduction (offspring) and by live population resizes.
"""

from __future__ import annotations

import logging
import random
from typing import List

from reef.config.corals import CORAL_INITIAL_ALGAE, CORAL_MAX_HEALTH
from reef.config.parameters import SimulationParameters
from reef.config.urchins import (
    INITIAL_ADULT_PROBABILITY,
    OFFSPRING_JITTER,
    URCHIN_INITIAL_ENERGY,
    URCHIN_OFFSPRING_ENERGY,
)
from reef.entities import Coral, CoralStatus, Harvester, Urchin
from reef.math_utils import clamp
from reef.movement import initial_velocity
from reef.world import WorldState

logger = logging.getLogger(__name__)


def draw_maturity_time(params: SimulationParameters, rng: random.Random) -> int:
    """Per-individual maturity, uniform over the configured bounds."""
    if params.has_fixed_maturity:
        return params.min_maturity_time
    return rng.randint(params.min_maturity_time, params.max_maturity_time)


def create_corals(world: WorldState, params: SimulationParameters, rng: random.Random) -> List[Coral]:
    """One Bernoulli draw per grid cell, column by column.

    Each cell holds a coral with probability initial_coral_coverage / 100.
    """
    coverage = params.initial_coral_coverage / 100
    cell = world.cell_size
    corals = []
    for col in range(world.grid_width):
        for row in range(world.grid_height):
            if rng.random() < coverage:
                corals.append(
                    Coral(
                        coral_id=f"coral-{col}-{row}",
                        col=col,
                        row=row,
                        x=col * cell + cell / 2,
                        y=row * cell + cell / 2,
                        health=CORAL_MAX_HEALTH,
                        algae_level=CORAL_INITIAL_ALGAE,
                        status=CoralStatus.HEALTHY,
                    )
                )
    return corals


def create_urchin(world: WorldState, params: SimulationParameters, rng: random.Random) -> Urchin:
    """A freshly seeded urchin at a uniform random position.

    Half of the seeded urchins start mature (one tick past their maturity
    time); the rest start as juveniles of random age.
    """
    x = rng.random() * world.width
    y = rng.random() * world.height
    vx, vy = initial_velocity(params.urchin_speed, rng)
    maturity_time = draw_maturity_time(params, rng)
    if rng.random() < INITIAL_ADULT_PROBABILITY:
        age = maturity_time + 1
    else:
        age = rng.randint(0, maturity_time - 1)
    return Urchin(
        urchin_id=world.ids.next_urchin(),
        x=x,
        y=y,
        vx=vx,
        vy=vy,
        age=age,
        maturity_time=maturity_time,
        is_adult=age >= maturity_time,
        energy=URCHIN_INITIAL_ENERGY,
        last_spawn_tick=0,
    )


def create_offspring(
    parent: Urchin,
    world: WorldState,
    params: SimulationParameters,
    rng: random.Random,
) -> Urchin:
    """A newborn juvenile next to its parent (up to +/-10 units per axis)."""
    x = clamp(parent.x + (rng.random() - 0.5) * OFFSPRING_JITTER, 0, world.width)
    y = clamp(parent.y + (rng.random() - 0.5) * OFFSPRING_JITTER, 0, world.height)
    vx, vy = initial_velocity(params.urchin_speed, rng)
    return Urchin(
        urchin_id=world.ids.next_urchin(),
        x=x,
        y=y,
        vx=vx,
        vy=vy,
        age=0,
        maturity_time=draw_maturity_time(params, rng),
        is_adult=False,
        energy=URCHIN_OFFSPRING_ENERGY,
        last_spawn_tick=world.tick,
    )


def create_harvester(world: WorldState, params: SimulationParameters, rng: random.Random) -> Harvester:
    """A harvester at a uniform random position with an empty tally."""
    x = rng.random() * world.width
    y = rng.random() * world.height
    vx, vy = initial_velocity(params.harvester_speed, rng)
    return Harvester(
        harvester_id=world.ids.next_harvester(),
        x=x,
        y=y,
        vx=vx,
        vy=vy,
        harvest_count=0,
    )


def create_initial_population(params: SimulationParameters, rng: random.Random) -> WorldState:
    """Build a brand-new world from the current parameters.

    Corals are drawn first, then urchins, then harvesters, so a given seed
    always yields the same world.
    """
    world = WorldState()
    world.corals = create_corals(world, params, rng)
    world.urchins = [create_urchin(world, params, rng) for _ in range(params.initial_urchins)]
    world.harvesters = [
        create_harvester(world, params, rng) for _ in range(params.harvester_count)
    ]
    logger.debug(
        "Seeded world: %d corals, %d urchins, %d harvesters",
        len(world.corals),
        len(world.urchins),
        len(world.harvesters),
    )
    return world
