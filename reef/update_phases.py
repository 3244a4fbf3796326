"""Update phase definitions for explicit execution ordering.

A reef tick runs eight phases in a fixed order. Systems declare the phase
they belong to with ``@runs_in_phase`` so the engine can report what it is
doing and tests can check the order.

    1. URCHIN_MOVE: Random walk, aging and energy decay of urchins
    2. GRAZING: Urchin-coral contacts
    3. STARVATION: Remove urchins with no energy left
    4. REPRODUCTION: Broadcast spawning among adults
    5. HARVESTER_MOVE: Random walk of harvesters
    6. HARVEST: Harvesters collect nearby adults
    7. CORAL_RECOVERY: Healing and algae growth
    8. TICK_ADVANCE: Increment the tick counter
"""

from enum import Enum, auto
from typing import Callable, Dict

__all__ = [
    "UpdatePhase",
    "PHASE_DESCRIPTIONS",
    "runs_in_phase",
]


class UpdatePhase(Enum):
    """Phases of a simulation tick, in execution order."""

    URCHIN_MOVE = auto()
    GRAZING = auto()
    STARVATION = auto()
    REPRODUCTION = auto()
    HARVESTER_MOVE = auto()
    HARVEST = auto()
    CORAL_RECOVERY = auto()
    TICK_ADVANCE = auto()


# Human-readable descriptions for debugging
PHASE_DESCRIPTIONS: Dict[UpdatePhase, str] = {
    UpdatePhase.URCHIN_MOVE: "Moving and aging urchins",
    UpdatePhase.GRAZING: "Urchins grazing corals",
    UpdatePhase.STARVATION: "Removing starved urchins",
    UpdatePhase.REPRODUCTION: "Broadcast spawning",
    UpdatePhase.HARVESTER_MOVE: "Moving harvesters",
    UpdatePhase.HARVEST: "Harvesting adult urchins",
    UpdatePhase.CORAL_RECOVERY: "Healing corals and growing algae",
    UpdatePhase.TICK_ADVANCE: "Advancing the tick counter",
}


def runs_in_phase(phase: UpdatePhase) -> Callable:
    """Decorator to declare which phase a system runs in.

    Example:
        @runs_in_phase(UpdatePhase.GRAZING)
        class GrazingSystem(BaseSystem):
            ...
    """

    def decorator(cls):
        cls._phase = phase
        return cls

    return decorator
