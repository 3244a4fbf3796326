"""World state owned by the simulation engine.

``WorldState`` is the single mutable container for everything that evolves:
the three agent collections, the tick counter and the harvest accumulators.
Only ``SimulationEngine`` mutates it. Everyone else reads a
``WorldSnapshot``, a deep frozen copy taken between ticks.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from reef.config.display import CELL_SIZE, WORLD_HEIGHT, WORLD_WIDTH
from reef.entities import Coral, Harvester, Urchin
from reef.entity_ids import IdGenerator


@dataclass
class WorldState:
    """Mutable simulation state.

    Attributes:
        urchins: Living urchins in creation order
        harvesters: Harvesters in processing order (first come first served)
        corals: One coral per occupied cell, fixed at reset
        tick: Completed ticks since reset
        cumulative_harvested: Urchins harvested since reset
        retired_harvest_count: Harvest totals of harvesters removed by resize
        ids: ID source for new urchins and harvesters
        width, height, cell_size: World geometry
    """

    urchins: List[Urchin] = field(default_factory=list)
    harvesters: List[Harvester] = field(default_factory=list)
    corals: List[Coral] = field(default_factory=list)
    tick: int = 0
    cumulative_harvested: int = 0
    retired_harvest_count: int = 0
    ids: IdGenerator = field(default_factory=IdGenerator)
    width: float = WORLD_WIDTH
    height: float = WORLD_HEIGHT
    cell_size: float = CELL_SIZE

    @property
    def grid_width(self) -> int:
        return int(self.width // self.cell_size)

    @property
    def grid_height(self) -> int:
        return int(self.height // self.cell_size)

    @property
    def grid_cell_count(self) -> int:
        return self.grid_width * self.grid_height

    def urchin_density(self) -> float:
        """Urchins per grid cell."""
        cells = self.grid_cell_count
        return len(self.urchins) / cells if cells > 0 else 0.0

    def clone(self) -> "WorldState":
        """Copy used to roll back a failed tick.

        Entities hold only scalars and frozen ids; each one is copied
        shallowly.
        """
        cloned = copy.copy(self)
        cloned.urchins = [copy.copy(u) for u in self.urchins]
        cloned.harvesters = [copy.copy(h) for h in self.harvesters]
        cloned.corals = [copy.copy(c) for c in self.corals]
        cloned.ids = copy.copy(self.ids)
        return cloned

    def restore_from(self, other: "WorldState") -> None:
        """Overwrite this state in place with another state's contents.

        Keeps the object identity so references held by the engine's
        collaborators stay valid.
        """
        self.__dict__.update(other.__dict__)

    def snapshot(self) -> "WorldSnapshot":
        """Read-only deep copy for renderers and other collaborators."""
        return WorldSnapshot(
            urchins=tuple(copy.copy(u) for u in self.urchins),
            harvesters=tuple(copy.copy(h) for h in self.harvesters),
            corals=tuple(copy.copy(c) for c in self.corals),
            tick=self.tick,
            cumulative_harvested=self.cumulative_harvested,
            width=self.width,
            height=self.height,
            cell_size=self.cell_size,
        )


@dataclass(frozen=True)
class WorldSnapshot:
    """Frozen view of a settled tick.

    The entity objects are copies; mutating them has no effect on the
    running simulation.
    """

    urchins: Tuple[Urchin, ...]
    harvesters: Tuple[Harvester, ...]
    corals: Tuple[Coral, ...]
    tick: int
    cumulative_harvested: int
    width: float
    height: float
    cell_size: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tick": self.tick,
            "width": self.width,
            "height": self.height,
            "cellSize": self.cell_size,
            "cumulativeHarvested": self.cumulative_harvested,
            "urchins": [u.to_dict() for u in self.urchins],
            "harvesters": [h.to_dict() for h in self.harvesters],
            "corals": [c.to_dict() for c in self.corals],
        }
