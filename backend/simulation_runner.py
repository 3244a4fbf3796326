"""Background simulation runner thread.

Owns one SimulationEngine and its SimulationDriver. A daemon thread paces
the driver in real time; HTTP handlers call the public methods from other
threads. Every engine access goes through ``self.lock`` so readers never
see a partially computed tick.
"""

import asyncio
import logging
import random
import threading
import time
from typing import Any, Dict, List, Mapping, Optional, Tuple

import orjson

from reef.config.parameters import SimulationParameters
from reef.config.simulation import STATUS_LOG_INTERVAL_SECONDS
from reef.driver import SimulationDriver
from reef.exceptions import StepError
from reef.simulation.engine import PopulationKind, SimulationEngine
from reef.simulation.tick_context import TickReport

logger = logging.getLogger(__name__)

# Upper bound on one sleep so pause/stop stay responsive at slow tick rates
MAX_POLL_INTERVAL_SECONDS = 0.1


class SimulationRunner:
    """Runs the reef simulation in a background thread."""

    def __init__(
        self,
        params: Optional[SimulationParameters] = None,
        seed: Optional[int] = None,
    ):
        """Initialize the runner with a freshly reset world.

        Args:
            params: Initial parameters (defaults if omitted)
            seed: Optional random seed for deterministic behavior
        """
        self.seed = seed
        self.engine = SimulationEngine(params, seed=seed)
        self.engine.reset()
        self.driver = SimulationDriver(self.engine)

        self.running = False
        self.paused = False
        self.thread: Optional[threading.Thread] = None
        self.lock = threading.Lock()

        # Performance instrumentation
        self._perf_stats = {"step": {"count": 0, "total_ms": 0.0, "max_ms": 0.0}}
        self._step_failures = 0

        # TPS tracking
        self.last_tps_time = time.time()
        self.tps_tick_count = 0
        self.current_tps = 0.0

    # =========================================================================
    # Thread lifecycle
    # =========================================================================

    def start(self, start_paused: bool = False) -> None:
        """Start the simulation thread (no-op when already running)."""
        self.paused = start_paused
        if not self.running:
            self.running = True
            self.thread = threading.Thread(target=self._run_loop, name="reef-simulation", daemon=True)
            self.thread.start()

    def stop(self) -> None:
        """Stop the simulation thread."""
        self.running = False
        if self.thread:
            self.thread.join(timeout=2.0)
            self.thread = None

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def _run_loop(self) -> None:
        """Main simulation loop."""
        logger.info("Simulation loop: Starting")
        last_time = time.perf_counter()

        try:
            while self.running:
                now = time.perf_counter()
                elapsed = now - last_time
                last_time = now

                if not self.paused:
                    with self.lock:
                        # pause() may have landed while waiting for the lock
                        if not self.paused:
                            self._advance_locked(elapsed)

                self._log_status_if_due()
                time.sleep(min(self.driver.tick_interval, MAX_POLL_INTERVAL_SECONDS))

        except Exception as e:
            logger.error(f"Simulation loop: Fatal error, loop exiting: {e}", exc_info=True)
            self.running = False
        finally:
            logger.info(f"Simulation loop: Ended at tick {self.engine.tick}")

    def _advance_locked(self, elapsed: float) -> None:
        """Advance the driver by wall-clock time; caller holds the lock."""
        try:
            start_time = time.perf_counter()
            reports = self.driver.advance_by(elapsed)
            duration_ms = (time.perf_counter() - start_time) * 1000
            if reports:
                mst = self._perf_stats["step"]
                mst["count"] += len(reports)
                mst["total_ms"] += duration_ms
                if duration_ms > mst["max_ms"]:
                    mst["max_ms"] = duration_ms
            self.tps_tick_count += len(reports)
        except StepError as e:
            # The engine rolled the world back; keep running
            self._step_failures += 1
            logger.error(f"Simulation loop: Step failed at tick {e.tick}: {e}")

        if self.driver.finished:
            self.paused = True

    def _log_status_if_due(self) -> None:
        current_time = time.time()
        if current_time - self.last_tps_time < STATUS_LOG_INTERVAL_SECONDS:
            return

        self.current_tps = self.tps_tick_count / (current_time - self.last_tps_time)
        self.tps_tick_count = 0
        self.last_tps_time = current_time
        if self.paused:
            return

        with self.lock:
            stats = self.engine.get_statistics()

        perf_log = ""
        mst = self._perf_stats["step"]
        if mst["count"] > 0:
            avg_ms = mst["total_ms"] / mst["count"]
            perf_log = f" | step={avg_ms:.2f}ms(max {mst['max_ms']:.1f})"
            mst["count"] = 0
            mst["total_ms"] = 0.0
            mst["max_ms"] = 0.0

        logger.info(
            f"Reef Simulation Status "
            f"TPS={self.current_tps:.1f}, "
            f"Tick={stats.tick}, "
            f"Urchins={stats.total_urchins}, "
            f"Corals={stats.healthy_corals}/{stats.degraded_corals}/{stats.dead_corals}, "
            f"Harvested={stats.harvested_urchins}"
            f"{perf_log}"
        )

    # =========================================================================
    # Commands (thread-safe)
    # =========================================================================

    @property
    def state(self) -> str:
        if not self.running:
            return "stopped"
        if self.driver.finished:
            return "finished"
        return "paused" if self.paused else "running"

    def get_status(self) -> Dict[str, Any]:
        with self.lock:
            world = self.engine.world
            return {
                "state": self.state,
                "tick": world.tick,
                "running": self.running,
                "paused": self.paused,
                "finished": self.driver.finished,
                "ticks_per_second": self.current_tps,
                "urchins": len(world.urchins),
                "harvesters": len(world.harvesters),
                "corals": len(world.corals),
                "run_id": self.engine.run_id,
                "seed": self.seed,
            }

    def reset(
        self,
        overrides: Optional[Mapping[str, Any]] = None,
        seed: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Re-seed the world, optionally with new parameters and seed.

        Raises:
            ConfigurationError: If the overrides are invalid (nothing changes)
        """
        with self.lock:
            params = self.engine.params
            if overrides:
                params = params.with_overrides(**overrides)
            if seed is not None:
                self.seed = seed
                self.engine.seed = seed
                self.engine.reset(params, rng=random.Random(seed))
            else:
                self.engine.reset(params)
            self.driver.reset()
        return self.get_status()

    def step(self, count: int = 1) -> List[TickReport]:
        """Manually compute up to ``count`` ticks (respects the tick limit).

        Raises:
            StepError: If a tick failed; earlier ticks of the batch stay applied
        """
        reports: List[TickReport] = []
        with self.lock:
            for _ in range(count):
                if self.driver.finished:
                    break
                reports.append(self.engine.step())
        return reports

    def get_params(self) -> Dict[str, Any]:
        with self.lock:
            return self.engine.params.to_dict()

    def update_params(self, overrides: Mapping[str, Any]) -> Dict[str, Any]:
        """Apply a partial parameter update from the next tick on.

        Raises:
            ConfigurationError: If the result is invalid (nothing changes)
        """
        with self.lock:
            params = self.engine.update_params(**overrides)
            logger.info("Parameters updated: %s", sorted(overrides))
            return params.to_dict()

    def resize_population(
        self,
        kind: PopulationKind,
        count: Optional[int] = None,
        delta: Optional[int] = None,
    ) -> Tuple[int, int]:
        """Set a population to ``count`` or change it by ``delta`` (floored at 0).

        Returns:
            (previous size, new size)
        """
        with self.lock:
            world = self.engine.world
            agents = world.urchins if kind is PopulationKind.URCHINS else world.harvesters
            previous = len(agents)
            target = count if count is not None else max(0, previous + (delta or 0))
            return previous, self.engine.update_population_count(kind, target)

    # =========================================================================
    # Async wrappers (run lock-taking work off the event loop thread)
    # =========================================================================

    async def _run_in_executor(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    async def get_status_async(self) -> Dict[str, Any]:
        return await self._run_in_executor(self.get_status)

    async def stop_async(self) -> None:
        """Async wrapper; stop() may wait for the loop thread to exit."""
        await self._run_in_executor(self.stop)

    async def reset_async(
        self,
        overrides: Optional[Mapping[str, Any]] = None,
        seed: Optional[int] = None,
    ) -> Dict[str, Any]:
        return await self._run_in_executor(self.reset, overrides, seed)

    async def step_async(self, count: int = 1) -> List[TickReport]:
        """Async wrapper to compute a batch of ticks without blocking the event loop."""
        return await self._run_in_executor(self.step, count)

    async def get_params_async(self) -> Dict[str, Any]:
        return await self._run_in_executor(self.get_params)

    async def update_params_async(self, overrides: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._run_in_executor(self.update_params, overrides)

    async def resize_population_async(
        self,
        kind: PopulationKind,
        count: Optional[int] = None,
        delta: Optional[int] = None,
    ) -> Tuple[int, int]:
        return await self._run_in_executor(self.resize_population, kind, count, delta)

    async def get_snapshot_bytes_async(self) -> bytes:
        return await self._run_in_executor(self.get_snapshot_bytes)

    async def get_stats_bytes_async(self) -> bytes:
        return await self._run_in_executor(self.get_stats_bytes)

    async def get_history_bytes_async(self) -> bytes:
        return await self._run_in_executor(self.get_history_bytes)

    # =========================================================================
    # Serialized views
    # =========================================================================

    def serialize(self, payload: Any) -> bytes:
        return orjson.dumps(payload)

    def get_snapshot_bytes(self) -> bytes:
        with self.lock:
            snapshot = self.engine.get_snapshot()
        return self.serialize(snapshot.to_dict())

    def get_stats_bytes(self) -> bytes:
        with self.lock:
            stats = self.engine.get_statistics()
        return self.serialize(stats.to_dict())

    def get_history_bytes(self) -> bytes:
        with self.lock:
            history = self.engine.get_history()
        return self.serialize(history.to_dict())
