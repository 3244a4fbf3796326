"""Base class and protocol for simulation systems.

Each system owns one sub-step of the tick. Systems are constructed with
the engine, read the current world and parameters from it, and return a
``SystemResult`` describing what they did. The engine's pipeline copies the
interesting numbers into the per-tick context.

Design Principles:
- Each system has ONE responsibility
- Systems can be enabled/disabled without code changes
- Systems declare their phase for diagnostics
- Systems return results describing what they did
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

__all__ = [
    "SystemResult",
    "BaseSystem",
]

if TYPE_CHECKING:
    import random

    from reef.config.parameters import SimulationParameters
    from reef.simulation.engine import SimulationEngine
    from reef.update_phases import UpdatePhase
    from reef.world import WorldState


@dataclass
class SystemResult:
    """Result of a system update.

    Attributes:
        entities_affected: Number of entities that were modified
        entities_spawned: Number of new entities created
        entities_removed: Number of entities removed
        skipped: Whether the update was skipped (system disabled)
        details: System-specific details (e.g. {"contacts": 12})
    """

    entities_affected: int = 0
    entities_spawned: int = 0
    entities_removed: int = 0
    skipped: bool = False
    details: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def skipped_result() -> "SystemResult":
        """Create a result for when system update was skipped."""
        return SystemResult(skipped=True)


class BaseSystem(ABC):
    """Abstract base class for all simulation systems.

    Subclasses implement ``_do_update()``; ``update()`` handles the enabled
    flag and update counting.

    Example:
        @runs_in_phase(UpdatePhase.GRAZING)
        class GrazingSystem(BaseSystem):
            def __init__(self, engine: SimulationEngine):
                super().__init__(engine, "Grazing")

            def _do_update(self, tick: int) -> SystemResult:
                ...
    """

    # Class-level phase declaration (set by @runs_in_phase decorator)
    _phase: Optional["UpdatePhase"] = None

    def __init__(self, engine: "SimulationEngine", name: str) -> None:
        """Initialize the system.

        Args:
            engine: The simulation engine (provides world, parameters, RNG)
            name: Human-readable name for this system
        """
        self._engine = engine
        self._name = name
        self._enabled = True
        self._update_count = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value

    @property
    def engine(self) -> "SimulationEngine":
        return self._engine

    @property
    def world(self) -> "WorldState":
        return self._engine.world

    @property
    def params(self) -> "SimulationParameters":
        return self._engine.params

    @property
    def rng(self) -> "random.Random":
        return self._engine.rng

    @property
    def update_count(self) -> int:
        """Number of times update() has run."""
        return self._update_count

    def update(self, tick: int) -> SystemResult:
        """Perform the system's per-tick logic.

        Args:
            tick: Tick being computed (the counter before it advances)

        Returns:
            SystemResult describing what the system did
        """
        if not self._enabled:
            return SystemResult.skipped_result()

        result = self._do_update(tick)
        self._update_count += 1
        return result

    @abstractmethod
    def _do_update(self, tick: int) -> SystemResult:
        """Implement system-specific update logic."""

    @property
    def phase(self) -> Optional["UpdatePhase"]:
        """The update phase this system runs in."""
        return self._phase

    def get_debug_info(self) -> Dict[str, Any]:
        """Return debug information about this system's state."""
        return {
            "name": self._name,
            "enabled": self._enabled,
            "update_count": self._update_count,
            "phase": self._phase.name if self._phase else None,
        }
