"""Tests for statistics snapshots and the sampled history."""

from reef.config.parameters import SimulationParameters
from reef.entities import CoralStatus
from reef.simulation.engine import SimulationEngine
from reef.statistics import HistoryBuffer, ReefStats, history_capacity, snapshot
from reef.world import WorldState


def test_snapshot_counts(empty_engine, make_urchin, make_coral, make_harvester):
    world = empty_engine.world
    world.urchins.extend([make_urchin(), make_urchin(adult=False), make_urchin(adult=False)])
    world.corals.extend(
        [
            make_coral(col=1, algae=0.0),
            make_coral(col=2, health=20.0, algae=0.4, status=CoralStatus.DEGRADED),
            make_coral(col=3, health=0.0, algae=0.8, status=CoralStatus.DEAD),
            make_coral(col=4, algae=0.0),
        ]
    )
    world.harvesters.append(make_harvester())
    world.cumulative_harvested = 7

    stats = snapshot(world)

    assert (stats.juvenile_urchins, stats.adult_urchins, stats.total_urchins) == (2, 1, 3)
    assert (stats.healthy_corals, stats.degraded_corals, stats.dead_corals) == (2, 1, 1)
    assert stats.total_corals == 4
    assert stats.coral_health == 50.0
    assert abs(stats.algae_coverage - 30.0) < 1e-9
    assert stats.harvested_urchins == 7
    assert stats.harvester_count == 1


def test_snapshot_of_empty_world_is_all_zero():
    stats = snapshot(WorldState())
    assert stats == ReefStats()


def test_stats_to_dict_keys():
    data = ReefStats(tick=3, adult_urchins=2).to_dict()
    assert data["tick"] == 3
    assert data["adultUrchins"] == 2
    assert set(data) == {
        "tick",
        "juvenileUrchins",
        "adultUrchins",
        "totalUrchins",
        "healthyCorals",
        "degradedCorals",
        "deadCorals",
        "algaeCoverage",
        "coralHealth",
        "harvestedUrchins",
        "harvesterCount",
    }


class TestHistory:
    def test_sampled_every_frequency_ticks_never_at_zero(self):
        engine = SimulationEngine(SimulationParameters(data_recording_frequency=10), seed=3)
        engine.reset()
        assert len(engine.get_history()) == 0

        engine.run(35)

        history = engine.get_history()
        assert history.ticks == [10, 20, 30]

    def test_series_stay_aligned(self):
        engine = SimulationEngine(SimulationParameters(data_recording_frequency=1), seed=3)
        engine.reset()
        engine.run(40)

        data = engine.get_history().to_dict()
        lengths = {len(v) for k, v in data.items() if k != "capacity"}
        assert lengths == {40}

    def test_buffer_drops_oldest_beyond_capacity(self):
        history = HistoryBuffer(capacity=3)
        for tick in range(1, 6):
            history.append(ReefStats(tick=tick, total_urchins=tick * 10))

        assert history.ticks == [3, 4, 5]
        assert history.urchin_population == [30, 40, 50]
        assert len(history.dead_corals) == 3

    def test_long_run_keeps_most_recent_samples(self):
        engine = SimulationEngine(
            SimulationParameters(data_recording_frequency=1, initial_urchins=5, initial_coral_coverage=10),
            seed=3,
        )
        engine.reset()
        engine.run(1050)

        history = engine.get_history()
        assert len(history) == 1000
        assert history.ticks[0] == 51
        assert history.ticks[-1] == 1050

    def test_history_copy_is_detached(self, simulation_engine):
        simulation_engine.run(10)
        copy = simulation_engine.get_history()
        copy.ticks.clear()
        assert simulation_engine.get_history().ticks == [10]

    def test_capacity_follows_tick_limit(self):
        assert history_capacity(SimulationParameters()) == 1000
        limited = SimulationParameters(enable_tick_limit=True, tick_limit=5000, data_recording_frequency=10)
        assert history_capacity(limited) == 500
        short = SimulationParameters(enable_tick_limit=True, tick_limit=200, data_recording_frequency=10)
        assert history_capacity(short) == 100
