"""Type-safe entity identifiers.

Urchin and harvester IDs are wrapped so the two populations can never be
confused in harvest bookkeeping or API payloads. IDs compare equal to
their raw int, so they remain convenient in tests and logs.

Usage:
------
    ids = IdGenerator()
    urchin = ids.next_urchin()        # UrchinId(1)
    harvester = ids.next_harvester()  # HarvesterId(1)
    print(urchin)                     # "Urchin#1"
    int(urchin)                       # 1

Coral identities are not generated here: a coral is named after its grid
cell (``"coral-{col}-{row}"``) and is created exactly once per reset.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class EntityId:
    """Base class for all entity IDs.

    Immutable, hashable, equal to the same type and to raw ints.
    """

    value: int
    _prefix: str = "Entity"  # Override in subclasses

    def __post_init__(self) -> None:
        """Validate the ID value."""
        if not isinstance(self.value, int):
            raise TypeError(f"ID value must be int, got {type(self.value).__name__}")
        if self.value < 0:
            raise ValueError(f"ID value must be non-negative, got {self.value}")

    def __str__(self) -> str:
        return f"{self._prefix}#{self.value}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.value})"

    def __eq__(self, other: Any) -> bool:
        """Compare to same type or raw int."""
        if isinstance(other, self.__class__):
            return self.value == other.value
        if isinstance(other, int) and not isinstance(other, bool):
            return self.value == other
        return NotImplemented

    def __hash__(self) -> int:
        """Hash based on value (same as raw int)."""
        return hash(self.value)

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True, eq=False)
class UrchinId(EntityId):
    """Type-safe identifier for sea urchins ("Urchin#42")."""

    value: int
    _prefix: str = "Urchin"


@dataclass(frozen=True, eq=False)
class HarvesterId(EntityId):
    """Type-safe identifier for harvesters ("Harvester#3")."""

    value: int
    _prefix: str = "Harvester"


class IdGenerator:
    """Generates unique IDs for mobile agents.

    Each agent type has its own counter. IDs are never reused within a
    simulation run; reset() creates a fresh generator.
    """

    def __init__(self) -> None:
        self._urchin_counter = 0
        self._harvester_counter = 0

    def next_urchin(self) -> UrchinId:
        """Generate the next urchin ID."""
        self._urchin_counter += 1
        return UrchinId(self._urchin_counter)

    def next_harvester(self) -> HarvesterId:
        """Generate the next harvester ID."""
        self._harvester_counter += 1
        return HarvesterId(self._harvester_counter)

    def get_stats(self) -> Dict[str, int]:
        """Get current counter values for debugging."""
        return {
            "urchin": self._urchin_counter,
            "harvester": self._harvester_counter,
        }
