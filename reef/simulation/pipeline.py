"""Engine pipeline: the ordered sub-steps of one tick.

``EnginePipeline`` is a list of named steps. ``SimulationEngine.step()``
runs it once per tick with a fresh ``TickContext``. The default pipeline is
the canonical reef order; tests and experiments may build their own.

Design Notes:
- Steps receive the engine AND a TickContext for explicit data flow
- Steps delegate the actual work to the engine's systems
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List

from reef.simulation.tick_context import TickContext
from reef.update_phases import UpdatePhase

if TYPE_CHECKING:
    from reef.simulation.engine import SimulationEngine


@dataclass
class PipelineStep:
    """A single step in the tick pipeline.

    Attributes:
        name: Identifier for the step (e.g. "grazing")
        phase: Update phase the step belongs to
        fn: Function that executes the step
    """

    name: str
    phase: UpdatePhase
    fn: Callable[["SimulationEngine", TickContext], None]


class EnginePipeline:
    """Ordered sequence of steps that define one tick."""

    def __init__(self, steps: List[PipelineStep]) -> None:
        self._steps = steps

    @property
    def steps(self) -> List[PipelineStep]:
        return self._steps

    @property
    def step_names(self) -> List[str]:
        return [step.name for step in self._steps]

    def run(self, engine: "SimulationEngine", ctx: TickContext) -> None:
        """Execute all steps in order against one TickContext."""
        for step in self._steps:
            engine._current_phase = step.phase
            step.fn(engine, ctx)
        engine._current_phase = None


# =============================================================================
# Default pipeline (canonical reef order)
# =============================================================================


def _step_urchin_move(engine: "SimulationEngine", ctx: TickContext) -> None:
    """URCHIN_MOVE: random walk, aging, energy decay."""
    engine.urchin_locomotion.update(ctx.tick)


def _step_grazing(engine: "SimulationEngine", ctx: TickContext) -> None:
    """GRAZING: urchin-coral contacts."""
    result = engine.grazing_system.update(ctx.tick)
    ctx.contacts = result.details.get("contacts", 0)


def _step_starvation(engine: "SimulationEngine", ctx: TickContext) -> None:
    """STARVATION: cull urchins with no energy."""
    result = engine.starvation_system.update(ctx.tick)
    ctx.starved = result.entities_removed


def _step_reproduction(engine: "SimulationEngine", ctx: TickContext) -> None:
    """REPRODUCTION: broadcast spawning."""
    result = engine.reproduction_system.update(ctx.tick)
    ctx.newborns = result.entities_spawned


def _step_harvester_move(engine: "SimulationEngine", ctx: TickContext) -> None:
    """HARVESTER_MOVE: random walk of harvesters."""
    engine.harvester_locomotion.update(ctx.tick)


def _step_harvest(engine: "SimulationEngine", ctx: TickContext) -> None:
    """HARVEST: harvesters take nearby adults."""
    result = engine.harvesting_system.update(ctx.tick)
    ctx.harvested = result.entities_removed


def _step_coral_recovery(engine: "SimulationEngine", ctx: TickContext) -> None:
    """CORAL_RECOVERY: healing under low density, algae growth."""
    result = engine.coral_recovery_system.update(ctx.tick)
    ctx.density = result.details.get("density", engine.world.urchin_density())


def _step_tick_advance(engine: "SimulationEngine", ctx: TickContext) -> None:
    """TICK_ADVANCE: increment the tick counter."""
    engine.world.tick += 1


def default_pipeline() -> EnginePipeline:
    """Build the canonical reef pipeline.

    Step Order:
        1. urchin_move
        2. grazing
        3. starvation
        4. reproduction
        5. harvester_move
        6. harvest
        7. coral_recovery
        8. tick_advance
    """
    return EnginePipeline(
        [
            PipelineStep("urchin_move", UpdatePhase.URCHIN_MOVE, _step_urchin_move),
            PipelineStep("grazing", UpdatePhase.GRAZING, _step_grazing),
            PipelineStep("starvation", UpdatePhase.STARVATION, _step_starvation),
            PipelineStep("reproduction", UpdatePhase.REPRODUCTION, _step_reproduction),
            PipelineStep("harvester_move", UpdatePhase.HARVESTER_MOVE, _step_harvester_move),
            PipelineStep("harvest", UpdatePhase.HARVEST, _step_harvest),
            PipelineStep("coral_recovery", UpdatePhase.CORAL_RECOVERY, _step_coral_recovery),
            PipelineStep("tick_advance", UpdatePhase.TICK_ADVANCE, _step_tick_advance),
        ]
    )
