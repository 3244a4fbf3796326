"""Explicit per-tick state for pipeline steps.

A fresh ``TickContext`` is created at the start of every tick and passed
through all pipeline steps, so the numbers one step produces (deaths,
births, harvests) are visible to later steps and to the caller without
being stashed on the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class TickContext:
    """Counters gathered while one tick is computed.

    Attributes:
        tick: Tick being computed (counter value before advancing)
        urchins_before: Urchin count when the tick started
        contacts: Urchin-coral grazing contacts
        starved: Urchins culled for lack of energy
        newborns: Offspring appended by reproduction
        harvested: Urchins removed by harvesters
        density: Urchins per grid cell used for coral healing
    """

    tick: int = 0
    urchins_before: int = 0
    contacts: int = 0
    starved: int = 0
    newborns: int = 0
    harvested: int = 0
    density: float = 0.0

    def to_report(self, urchins_after: int) -> "TickReport":
        return TickReport(
            tick=self.tick + 1,
            urchins_before=self.urchins_before,
            urchins_after=urchins_after,
            starved=self.starved,
            newborns=self.newborns,
            harvested=self.harvested,
            contacts=self.contacts,
            density=self.density,
        )


@dataclass(frozen=True)
class TickReport:
    """What one completed tick did to the urchin population.

    ``urchins_after == urchins_before - starved - harvested + newborns``
    always holds.
    """

    tick: int
    urchins_before: int
    urchins_after: int
    starved: int
    newborns: int
    harvested: int
    contacts: int
    density: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tick": self.tick,
            "urchinsBefore": self.urchins_before,
            "urchinsAfter": self.urchins_after,
            "starved": self.starved,
            "newborns": self.newborns,
            "harvested": self.harvested,
            "contacts": self.contacts,
            "density": self.density,
        }
