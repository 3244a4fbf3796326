"""Simulation engine package.

- engine: SimulationEngine, the owner of one reef world
- pipeline: ordered tick steps
- system_registry: name-indexed registry of systems
- tick_context: per-tick scratch data and the TickReport it produces
"""

from reef.simulation.engine import PopulationKind, SimulationEngine
from reef.simulation.pipeline import EnginePipeline, PipelineStep, default_pipeline
from reef.simulation.system_registry import SystemRegistry
from reef.simulation.tick_context import TickContext, TickReport

__all__ = [
    "EnginePipeline",
    "PipelineStep",
    "PopulationKind",
    "SimulationEngine",
    "SystemRegistry",
    "TickContext",
    "TickReport",
    "default_pipeline",
]
