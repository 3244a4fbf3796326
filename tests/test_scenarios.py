"""End-to-end reef scenarios run through the full tick pipeline."""

import pytest

from reef.config.parameters import SimulationParameters
from reef.entities import CoralStatus
from reef.simulation.engine import SimulationEngine


def test_reef_without_urchins_stays_pristine():
    params = SimulationParameters.from_mapping(
        {"initialUrchins": 0, "harvesterCount": 0, "initialCoralCoverage": 100, "grazingRate": 0.5}
    )
    engine = SimulationEngine(params, seed=21)
    engine.reset()

    engine.run(100)

    corals = engine.world.corals
    assert len(corals) == 1200
    assert all(c.health == 100 and c.status is CoralStatus.HEALTHY for c in corals)
    assert all(c.algae_level == 0 for c in corals)
    stats = engine.get_statistics()
    assert stats.coral_health == 100.0
    assert stats.algae_coverage == 0.0


def test_heavy_grazing_kills_corals_and_dead_reef_fouls():
    params = SimulationParameters.from_mapping(
        {"initialUrchins": 50, "harvesterCount": 0, "grazingRate": 2.0, "initialCoralCoverage": 50}
    )
    engine = SimulationEngine(params, seed=4)
    engine.reset()

    engine.run(300)

    dead = [c for c in engine.world.corals if c.status is CoralStatus.DEAD]
    assert dead, "expected heavy grazing to kill at least one coral"
    assert all(c.health == 0 for c in dead)

    previous = {c.coral_id: c.algae_level for c in dead}
    for _ in range(30):
        engine.step()
        for coral in engine.world.corals:
            if coral.coral_id not in previous:
                continue
            assert coral.status is CoralStatus.DEAD
            assert coral.health == 0
            assert previous[coral.coral_id] <= coral.algae_level <= params.max_algae_density
            previous[coral.coral_id] = coral.algae_level


def test_harvester_on_top_of_an_adult_takes_it_once(empty_engine, make_urchin, make_harvester):
    engine = empty_engine
    engine.update_params(harvesting_rate=5.0, reproduction_rate=0.0)
    engine.set_system_enabled("UrchinLocomotion", False)
    engine.set_system_enabled("HarvesterLocomotion", False)
    engine.world.urchins.append(make_urchin(x=400, y=300, energy=200.0))
    harvester = make_harvester(x=400, y=300)
    engine.world.harvesters.append(harvester)

    engine.run(500)

    assert harvester.harvest_count == 1
    assert engine.world.urchins == []
    assert engine.get_statistics().harvested_urchins == 1


def test_harvest_rate_tracks_probability():
    # A radius covering the whole world keeps adults in range every tick
    params = SimulationParameters(
        initial_urchins=600,
        harvester_count=1,
        harvesting_rate=5.0,
        harvest_radius=2000.0,
        reproduction_rate=0.0,
        initial_coral_coverage=0,
        min_maturity_time=1,
        max_maturity_time=1,
    )
    engine = SimulationEngine(params, seed=99)
    engine.reset()
    ticks = 400

    engine.run(ticks)

    harvester = engine.world.harvesters[0]
    expected = ticks * 0.5
    # Binomial(400, 0.5) has a standard deviation of 10
    assert harvester.harvest_count == pytest.approx(expected, abs=50)
    assert harvester.harvest_count <= params.initial_urchins
    assert engine.world.cumulative_harvested == harvester.harvest_count
