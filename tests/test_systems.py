"""Unit tests for the individual tick systems on hand-built worlds."""

import pytest

from reef.entities import CoralStatus
from reef.update_phases import UpdatePhase


class TestUrchinLocomotion:
    def test_ages_and_decays_energy(self, empty_engine, make_urchin):
        urchin = make_urchin(adult=False, maturity_time=1, energy=0.05)
        empty_engine.world.urchins.append(urchin)

        result = empty_engine.urchin_locomotion.update(0)

        assert urchin.age == 1
        assert urchin.is_adult
        assert urchin.energy == 0.0
        assert result.details["matured"] == 1


class TestGrazing:
    def test_contact_inside_one_cell(self, empty_engine, make_urchin, make_coral):
        engine = empty_engine
        engine.update_params(grazing_rate=2.0)
        coral = make_coral(algae=0.5)
        urchin = make_urchin(x=coral.x + 19.9, y=coral.y, energy=10.0)
        engine.world.corals.append(coral)
        engine.world.urchins.append(urchin)

        result = engine.grazing_system.update(0)

        assert result.details["contacts"] == 1
        assert urchin.energy == pytest.approx(11.0)
        assert coral.health == pytest.approx(98.0)
        assert coral.algae_level == 0.0

    def test_exactly_one_cell_away_is_out_of_reach(self, empty_engine, make_urchin, make_coral):
        engine = empty_engine
        coral = make_coral()
        engine.world.corals.append(coral)
        engine.world.urchins.append(make_urchin(x=coral.x + 20.0, y=coral.y))

        result = engine.grazing_system.update(0)

        assert result.details["contacts"] == 0
        assert coral.health == 100.0

    def test_dead_corals_are_not_grazed(self, empty_engine, make_urchin, make_coral):
        engine = empty_engine
        coral = make_coral(health=0.0, algae=0.4, status=CoralStatus.DEAD)
        urchin = make_urchin(x=coral.x, y=coral.y, energy=10.0)
        engine.world.corals.append(coral)
        engine.world.urchins.append(urchin)

        engine.grazing_system.update(0)

        assert urchin.energy == 10.0
        assert coral.algae_level == 0.4

    def test_grazing_kills_and_floors_health(self, empty_engine, make_urchin, make_coral):
        engine = empty_engine
        engine.update_params(grazing_rate=3.0)
        coral = make_coral(health=2.0, status=CoralStatus.DEGRADED)
        engine.world.corals.append(coral)
        engine.world.urchins.append(make_urchin(x=coral.x, y=coral.y))

        result = engine.grazing_system.update(0)

        assert coral.status is CoralStatus.DEAD
        assert coral.health == 0.0
        assert result.details["corals_killed"] == 1


class TestStarvation:
    def test_removes_only_empty_urchins(self, empty_engine, make_urchin):
        engine = empty_engine
        keep = make_urchin(energy=0.1)
        engine.world.urchins.extend([make_urchin(energy=0.0), keep, make_urchin(energy=0.0)])

        result = engine.starvation_system.update(0)

        assert result.entities_removed == 2
        assert engine.world.urchins == [keep]


class TestReproduction:
    def _setup(self, engine, tick=100):
        engine.update_params(reproduction_rate=1.0, spawn_radius=50.0)
        engine.world.tick = tick

    def test_adults_near_each_other_spawn(self, empty_engine, make_urchin):
        engine = empty_engine
        self._setup(engine)
        a = make_urchin(x=100, y=100, energy=70.0)
        b = make_urchin(x=130, y=100, energy=70.0)
        engine.world.urchins.extend([a, b])

        result = engine.reproduction_system.update(100)

        assert result.entities_spawned == 2
        assert len(engine.world.urchins) == 4
        assert a.energy == 50.0 and b.energy == 50.0
        assert a.last_spawn_tick == 100
        newborns = engine.world.urchins[2:]
        for baby in newborns:
            assert not baby.is_adult
            assert baby.age == 0
            assert baby.energy == 30.0
            assert baby.last_spawn_tick == 100
        assert abs(newborns[0].x - a.x) <= 10 and abs(newborns[0].y - a.y) <= 10

    def test_lone_adult_does_not_spawn(self, empty_engine, make_urchin):
        engine = empty_engine
        self._setup(engine)
        engine.world.urchins.extend(
            [make_urchin(x=100, y=100, energy=70.0), make_urchin(x=300, y=300, energy=70.0)]
        )

        assert engine.reproduction_system.update(100).entities_spawned == 0

    def test_juveniles_are_not_spawning_partners(self, empty_engine, make_urchin):
        engine = empty_engine
        self._setup(engine)
        engine.world.urchins.extend(
            [make_urchin(x=100, y=100, energy=70.0), make_urchin(x=101, y=100, adult=False)]
        )

        assert engine.reproduction_system.update(100).entities_spawned == 0

    @pytest.mark.parametrize(
        "energy, last_spawn_tick",
        [(60.0, 0), (70.0, 50)],
        ids=["energy-at-threshold", "cooldown-not-elapsed"],
    )
    def test_spawn_gates(self, empty_engine, make_urchin, energy, last_spawn_tick):
        engine = empty_engine
        self._setup(engine)
        engine.world.urchins.extend(
            [
                make_urchin(x=100, y=100, energy=energy, last_spawn_tick=last_spawn_tick),
                make_urchin(x=110, y=100, energy=energy, last_spawn_tick=last_spawn_tick),
            ]
        )

        assert engine.reproduction_system.update(100).entities_spawned == 0

    def test_neighbour_must_be_strictly_inside_radius(self, empty_engine, make_urchin):
        engine = empty_engine
        self._setup(engine)
        engine.world.urchins.extend(
            [make_urchin(x=100, y=100, energy=70.0), make_urchin(x=150, y=100, energy=70.0)]
        )

        assert engine.reproduction_system.update(100).entities_spawned == 0


class TestHarvesting:
    def test_nearest_adult_is_taken(self, empty_engine, make_urchin, make_harvester):
        engine = empty_engine
        engine.update_params(harvesting_rate=10.0, harvest_radius=30.0)
        far = make_urchin(x=120, y=100)
        near = make_urchin(x=105, y=100)
        juvenile = make_urchin(x=100, y=100, adult=False)
        harvester = make_harvester(x=100, y=100)
        engine.world.urchins.extend([far, near, juvenile])
        engine.world.harvesters.append(harvester)

        result = engine.harvesting_system.update(0)

        assert result.entities_removed == 1
        assert engine.world.urchins == [far, juvenile]
        assert harvester.harvest_count == 1
        assert engine.world.cumulative_harvested == 1

    def test_first_come_first_served(self, empty_engine, make_urchin, make_harvester):
        engine = empty_engine
        engine.update_params(harvesting_rate=10.0)
        engine.world.urchins.append(make_urchin(x=100, y=100))
        first = make_harvester(x=101, y=100)
        second = make_harvester(x=100, y=100)
        engine.world.harvesters.extend([first, second])

        engine.harvesting_system.update(0)

        assert first.harvest_count == 1
        assert second.harvest_count == 0
        assert engine.world.urchins == []

    def test_distance_tie_takes_earliest(self, empty_engine, make_urchin, make_harvester):
        engine = empty_engine
        engine.update_params(harvesting_rate=10.0)
        left = make_urchin(x=90, y=100)
        right = make_urchin(x=110, y=100)
        engine.world.urchins.extend([left, right])
        engine.world.harvesters.append(make_harvester(x=100, y=100))

        engine.harvesting_system.update(0)

        assert engine.world.urchins == [right]

    def test_zero_rate_never_harvests(self, empty_engine, make_urchin, make_harvester):
        engine = empty_engine
        engine.update_params(harvesting_rate=0.0)
        engine.world.urchins.append(make_urchin(x=100, y=100))
        engine.world.harvesters.append(make_harvester(x=100, y=100))

        for tick in range(50):
            engine.harvesting_system.update(tick)

        assert engine.world.cumulative_harvested == 0


class TestCoralRecovery:
    def test_heals_under_low_density(self, empty_engine, make_coral):
        engine = empty_engine
        engine.update_params(coral_healing_rate=2.0)
        coral = make_coral(health=49.0, status=CoralStatus.DEGRADED)
        engine.world.corals.append(coral)

        result = engine.coral_recovery_system.update(0)

        assert coral.health == 51.0
        assert coral.status is CoralStatus.HEALTHY
        assert result.details["density"] == 0.0

    def test_no_healing_at_high_density(self, empty_engine, make_coral, make_urchin):
        engine = empty_engine
        engine.update_params(coral_healing_rate=2.0)
        coral = make_coral(health=49.0, status=CoralStatus.DEGRADED)
        engine.world.corals.append(coral)
        engine.world.urchins.extend(make_urchin() for _ in range(600))

        result = engine.coral_recovery_system.update(0)

        assert result.details["density"] == 0.5
        assert coral.health == 49.0

    def test_algae_grows_on_degraded_and_dead_up_to_cap(self, empty_engine, make_coral):
        engine = empty_engine
        engine.update_params(algae_growth_rate=0.3, max_algae_density=0.8)
        healthy = make_coral(col=1)
        degraded = make_coral(col=2, health=30.0, status=CoralStatus.DEGRADED)
        dead = make_coral(col=3, health=0.0, algae=0.7, status=CoralStatus.DEAD)
        engine.world.corals.extend([healthy, degraded, dead])

        engine.coral_recovery_system.update(0)

        assert healthy.algae_level == 0.0
        assert degraded.algae_level == pytest.approx(0.3)
        assert dead.algae_level == 0.8
        assert dead.health == 0.0

    def test_algae_clamped_when_cap_lowered(self, empty_engine, make_coral):
        engine = empty_engine
        engine.update_params(max_algae_density=0.2)
        coral = make_coral(algae=0.6)
        engine.world.corals.append(coral)

        engine.coral_recovery_system.update(0)

        assert coral.algae_level == 0.2


class TestSystemContract:
    def test_phases_are_declared(self, simulation_engine):
        phases = [s.phase for s in simulation_engine.get_systems()]
        assert phases == [
            UpdatePhase.URCHIN_MOVE,
            UpdatePhase.GRAZING,
            UpdatePhase.STARVATION,
            UpdatePhase.REPRODUCTION,
            UpdatePhase.HARVESTER_MOVE,
            UpdatePhase.HARVEST,
            UpdatePhase.CORAL_RECOVERY,
        ]

    def test_disabled_system_is_skipped(self, simulation_engine):
        assert simulation_engine.set_system_enabled("Harvesting", False)
        result = simulation_engine.harvesting_system.update(0)
        assert result.skipped
        assert simulation_engine.harvesting_system.update_count == 0
