"""Pytest configuration and fixtures for reef tests."""

import random

import pytest

from reef.config.parameters import SimulationParameters
from reef.entities import Coral, Harvester, Urchin
from reef.simulation.engine import SimulationEngine


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def simulation_engine():
    """Setup a simulation engine with the default world and a fixed seed."""
    engine = SimulationEngine(seed=42)
    engine.reset()
    return engine


@pytest.fixture
def empty_engine():
    """An engine whose world has no urchins, harvesters or corals.

    Tests populate it by hand with the make_* fixtures.
    """
    params = SimulationParameters(initial_urchins=0, harvester_count=0, initial_coral_coverage=0)
    engine = SimulationEngine(params, seed=7)
    engine.reset()
    return engine


@pytest.fixture
def make_urchin(empty_engine):
    """Build an urchin with a fresh id from the engine's world."""

    def _make(x=100.0, y=100.0, *, adult=True, energy=50.0, maturity_time=60, last_spawn_tick=0):
        return Urchin(
            urchin_id=empty_engine.world.ids.next_urchin(),
            x=x,
            y=y,
            vx=0.0,
            vy=0.0,
            age=maturity_time + 1 if adult else 0,
            maturity_time=maturity_time,
            is_adult=adult,
            energy=energy,
            last_spawn_tick=last_spawn_tick,
        )

    return _make


@pytest.fixture
def make_harvester(empty_engine):
    def _make(x=100.0, y=100.0):
        return Harvester(
            harvester_id=empty_engine.world.ids.next_harvester(),
            x=x,
            y=y,
            vx=0.0,
            vy=0.0,
        )

    return _make


@pytest.fixture
def make_coral():
    def _make(col=5, row=5, *, health=100.0, algae=0.0, status=None):
        coral = Coral(
            coral_id=f"coral-{col}-{row}",
            col=col,
            row=row,
            x=col * 20 + 10,
            y=row * 20 + 10,
            health=health,
            algae_level=algae,
        )
        if status is not None:
            coral.status = status
        return coral

    return _make
