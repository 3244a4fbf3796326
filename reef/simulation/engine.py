"""Reef simulation engine - the orchestrator of one world.

The engine owns the ``WorldState``, the parameters, the random number
generator, the systems and the statistics sampler. It exposes the
collaborator contract: ``reset()``, ``step()``, ``get_snapshot()``,
``get_statistics()``, ``get_history()`` and ``update_population_count()``.

Design Decisions:
-----------------
1. The engine is a COORDINATOR. Each sub-step of a tick lives in a system
   (``reef.systems``); the engine runs them through an ``EnginePipeline``.

2. ``step()`` is all-or-nothing. The world and the RNG state are saved
   before the pipeline runs and restored if any step raises, so callers
   never observe a half-computed tick.

3. Pacing is not the engine's business. Speed multipliers, tick limits and
   wall-clock throttling live in ``reef.driver.SimulationDriver``.

4. All randomness comes from ``self.rng``. Two engines built with the same
   seed and fed the same parameters produce identical trajectories.
"""

from __future__ import annotations

import copy
import logging
import random
import uuid
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from reef.config.parameters import SimulationParameters
from reef.entity_factory import create_harvester, create_initial_population, create_urchin
from reef.exceptions import ConfigurationError, StepError
from reef.simulation.pipeline import EnginePipeline, default_pipeline
from reef.simulation.system_registry import SystemRegistry
from reef.simulation.tick_context import TickContext, TickReport
from reef.statistics import HistoryBuffer, ReefStats, StatisticsSampler
from reef.systems.base import BaseSystem
from reef.systems.coral_recovery import CoralRecoverySystem
from reef.systems.grazing import GrazingSystem
from reef.systems.harvesting import HarvestingSystem
from reef.systems.lifecycle import StarvationSystem
from reef.systems.locomotion import HarvesterLocomotionSystem, UrchinLocomotionSystem
from reef.systems.reproduction import ReproductionSystem
from reef.update_phases import PHASE_DESCRIPTIONS, UpdatePhase
from reef.world import WorldSnapshot, WorldState

logger = logging.getLogger(__name__)


class PopulationKind(str, Enum):
    """Agent collections that can be resized live."""

    URCHINS = "urchins"
    HARVESTERS = "harvesters"


class SimulationEngine:
    """Headless engine for the sea urchin reef ecosystem.

    Architecture:
        SimulationEngine (coordinator)
        ├── WorldState (urchins, harvesters, corals, tick)
        ├── EnginePipeline (ordered tick steps)
        ├── SystemRegistry (locomotion, grazing, starvation, ...)
        └── StatisticsSampler (stats snapshot + history)

    Attributes:
        params: Parameters used by the next step
        rng: Random source for every stochastic decision
        world: The live world (read it through get_snapshot())
        pipeline: Steps executed by step()
        sampler: Statistics and history for this world
        last_report: TickReport of the most recent step, if any
    """

    def __init__(
        self,
        params: Optional[SimulationParameters] = None,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        pipeline: Optional[EnginePipeline] = None,
    ) -> None:
        """Initialize the engine with an empty world.

        Call reset() to seed corals, urchins and harvesters.

        Args:
            params: Initial parameters (defaults if omitted)
            rng: Random generator to draw from (takes precedence over seed)
            seed: Seed for a private random generator
            pipeline: Custom tick pipeline (defaults to the canonical order)
        """
        self.params = params or SimulationParameters()
        self.params.validate()

        if rng is not None:
            self.rng: random.Random = rng
            self.seed: Optional[int] = None
        else:
            self.rng = random.Random(seed)
            self.seed = seed

        self.run_id: str = str(uuid.uuid4())
        logger.info("SimulationEngine initialized with run_id=%s", self.run_id)

        self.world = WorldState()
        self.pipeline = pipeline or default_pipeline()
        self.sampler = StatisticsSampler(self.params)
        self.last_report: Optional[TickReport] = None

        # Lifetime counters since the last reset
        self.total_births = 0
        self.total_starved = 0

        # Systems, registered in execution order
        self.urchin_locomotion = UrchinLocomotionSystem(self)
        self.grazing_system = GrazingSystem(self)
        self.starvation_system = StarvationSystem(self)
        self.reproduction_system = ReproductionSystem(self)
        self.harvester_locomotion = HarvesterLocomotionSystem(self)
        self.harvesting_system = HarvestingSystem(self)
        self.coral_recovery_system = CoralRecoverySystem(self)

        self._system_registry = SystemRegistry()
        for system in (
            self.urchin_locomotion,
            self.grazing_system,
            self.starvation_system,
            self.reproduction_system,
            self.harvester_locomotion,
            self.harvesting_system,
            self.coral_recovery_system,
        ):
            self._system_registry.register(system)

        self._current_phase: Optional[UpdatePhase] = None

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def reset(
        self,
        params: Optional[SimulationParameters] = None,
        rng: Optional[random.Random] = None,
    ) -> WorldState:
        """Re-seed the world from the current (or given) parameters.

        Zeroes the tick counter and harvest accumulators, clears history and
        statistics, then refreshes statistics for the new world.

        Args:
            params: New parameters to adopt before seeding
            rng: Replacement random generator

        Returns:
            The freshly created WorldState (owned by the engine)
        """
        if params is not None:
            params.validate()
            self.params = params
        if rng is not None:
            self.rng = rng

        self.world = create_initial_population(self.params, self.rng)
        self.sampler.clear(self.params)
        self.sampler.refresh(self.world)
        self.last_report = None
        self.total_births = 0
        self.total_starved = 0

        logger.info(
            "World reset: %d corals, %d urchins, %d harvesters",
            len(self.world.corals),
            len(self.world.urchins),
            len(self.world.harvesters),
        )
        return self.world

    def step(self, params: Optional[SimulationParameters] = None) -> TickReport:
        """Advance the world by exactly one tick.

        Args:
            params: Parameters to adopt from this tick on

        Returns:
            TickReport with the tick's starvation, birth and harvest counts

        Raises:
            ConfigurationError: If the given parameters are invalid
            StepError: If a sub-step failed; the world is left as it was
        """
        previous_params = self.params
        if params is not None:
            params.validate()
            self.params = params

        world = self.world
        backup = world.clone()
        rng_state = self.rng.getstate()
        ctx = TickContext(tick=world.tick, urchins_before=len(world.urchins))

        try:
            self.pipeline.run(self, ctx)
        except Exception as exc:
            failed_phase = self._current_phase
            world.restore_from(backup)
            self.rng.setstate(rng_state)
            self.params = previous_params
            self._current_phase = None
            logger.exception(
                "Step failed at tick %d during %s; world rolled back",
                ctx.tick,
                failed_phase.name if failed_phase else "unknown phase",
            )
            raise StepError(f"Step failed at tick {ctx.tick}: {exc}", tick=ctx.tick) from exc

        self.total_births += ctx.newborns
        self.total_starved += ctx.starved

        report = ctx.to_report(len(world.urchins))
        self.last_report = report
        self.sampler.observe(world, self.params)
        return report

    def run(self, ticks: int, params: Optional[SimulationParameters] = None) -> List[TickReport]:
        """Call step() ``ticks`` times and return the reports."""
        if params is not None:
            params.validate()
            self.params = params
        return [self.step() for _ in range(ticks)]

    def update_params(self, **overrides: Any) -> SimulationParameters:
        """Replace some parameters; takes effect on the next step."""
        self.params = self.params.with_overrides(**overrides)
        return self.params

    # =========================================================================
    # Live population changes
    # =========================================================================

    def update_population_count(
        self, kind: Union[PopulationKind, str], new_count: int
    ) -> int:
        """Grow or shrink a mobile population outside the birth/death pipeline.

        Growing appends agents seeded like reset() would seed them. Shrinking
        removes randomly chosen urchins, or the last harvesters in the list
        (whose harvest tallies are kept in ``retired_harvest_count``).

        Args:
            kind: "urchins" or "harvesters"
            new_count: Desired population size

        Returns:
            The new population size

        Raises:
            ConfigurationError: On an unknown kind or a negative count
        """
        try:
            kind = PopulationKind(kind)
        except ValueError:
            raise ConfigurationError(f"Unknown population kind: {kind}") from None
        if isinstance(new_count, bool) or not isinstance(new_count, int) or new_count < 0:
            raise ConfigurationError(f"Population count must be a non-negative integer, got {new_count!r}")

        world = self.world
        if kind is PopulationKind.URCHINS:
            current = len(world.urchins)
            if new_count > current:
                world.urchins.extend(
                    create_urchin(world, self.params, self.rng) for _ in range(new_count - current)
                )
            elif new_count < current:
                doomed = set(self.rng.sample(range(current), current - new_count))
                world.urchins = [u for i, u in enumerate(world.urchins) if i not in doomed]
        else:
            current = len(world.harvesters)
            if new_count > current:
                world.harvesters.extend(
                    create_harvester(world, self.params, self.rng)
                    for _ in range(new_count - current)
                )
            elif new_count < current:
                retired = world.harvesters[new_count:]
                world.retired_harvest_count += sum(h.harvest_count for h in retired)
                del world.harvesters[new_count:]

        logger.info("Resized %s: %d -> %d", kind.value, current, new_count)
        self.sampler.refresh(world)
        return new_count

    # =========================================================================
    # Read-only views
    # =========================================================================

    @property
    def tick(self) -> int:
        return self.world.tick

    def get_snapshot(self) -> WorldSnapshot:
        """Frozen copy of the current world."""
        return self.world.snapshot()

    def get_statistics(self) -> ReefStats:
        """Summary of the most recently settled tick."""
        return self.sampler.stats

    def get_history(self) -> HistoryBuffer:
        """Copy of the sampled history."""
        return copy.deepcopy(self.sampler.history)

    # =========================================================================
    # Systems and diagnostics
    # =========================================================================

    def get_systems(self) -> List[BaseSystem]:
        """All systems in execution order."""
        return self._system_registry.get_all()

    def get_system(self, name: str) -> Optional[BaseSystem]:
        return self._system_registry.get(name)

    def set_system_enabled(self, name: str, enabled: bool) -> bool:
        """Enable or disable a system by name."""
        return self._system_registry.set_enabled(name, enabled)

    def get_current_phase(self) -> Optional[UpdatePhase]:
        """The phase being executed, or None between ticks."""
        return self._current_phase

    def get_phase_description(self, phase: Optional[UpdatePhase] = None) -> str:
        if phase is None:
            phase = self._current_phase
        if phase is None:
            return "Not in update loop"
        return PHASE_DESCRIPTIONS.get(phase, phase.name)

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            "run_id": self.run_id,
            "seed": self.seed,
            "tick": self.world.tick,
            "total_births": self.total_births,
            "total_starved": self.total_starved,
            "pipeline": self.pipeline.step_names,
            "systems": self._system_registry.get_debug_info(),
            "ids": self.world.ids.get_stats(),
        }
