"""Runtime simulation parameters.

``SimulationParameters`` is the flat configuration bag that collaborators
(HTTP API, CLI, tests) hand to the engine. It is frozen: changing a value
means building a new instance with ``with_overrides()``, which the engine
picks up on its next step.

Collaborators speak camelCase keys (``initialUrchins``, ``grazingRate``...);
``from_mapping()`` accepts those as well as the snake_case field names.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping

from reef.config.simulation import (
    DEFAULT_RECORDING_FREQUENCY,
    DEFAULT_SPEED_MULTIPLIER,
    DEFAULT_TICK_LIMIT,
    DEFAULT_TICK_RATE_MS,
    MAX_SPEED_MULTIPLIER,
)
from reef.config.urchins import MAX_MATURITY_TIME, MIN_MATURITY_TIME
from reef.exceptions import ConfigurationError

# camelCase key -> field name
_CAMEL_KEYS: Dict[str, str] = {
    "initialUrchins": "initial_urchins",
    "reproductionRate": "reproduction_rate",
    "grazingRate": "grazing_rate",
    "urchinSpeed": "urchin_speed",
    "spawnRadius": "spawn_radius",
    "minMaturityTime": "min_maturity_time",
    "maxMaturityTime": "max_maturity_time",
    "harvesterCount": "harvester_count",
    "harvestingRate": "harvesting_rate",
    "harvesterSpeed": "harvester_speed",
    "harvestRadius": "harvest_radius",
    "initialCoralCoverage": "initial_coral_coverage",
    "coralHealingRate": "coral_healing_rate",
    "coralDegradationThreshold": "coral_degradation_threshold",
    "algaeGrowthRate": "algae_growth_rate",
    "maxAlgaeDensity": "max_algae_density",
    "tickRate": "tick_rate",
    "speedMultiplier": "speed_multiplier",
    "tickLimit": "tick_limit",
    "enableTickLimit": "enable_tick_limit",
    "dataRecordingFrequency": "data_recording_frequency",
}
_FIELD_TO_CAMEL: Dict[str, str] = {v: k for k, v in _CAMEL_KEYS.items()}

# Fields that must hold whole numbers
_INT_FIELDS = frozenset(
    {
        "initial_urchins",
        "min_maturity_time",
        "max_maturity_time",
        "harvester_count",
        "speed_multiplier",
        "tick_limit",
        "data_recording_frequency",
    }
)


@dataclass(frozen=True)
class SimulationParameters:
    """Every tunable knob of the reef simulation.

    Attributes:
        initial_urchins: Urchins seeded by reset()
        reproduction_rate: Spawn probability per eligible adult per tick
        grazing_rate: Coral health removed per urchin contact per tick
        urchin_speed: Base urchin speed (velocity clamp is twice this)
        spawn_radius: Distance within which another adult licenses spawning
        min_maturity_time: Lower bound of per-individual maturity (ticks)
        max_maturity_time: Upper bound of per-individual maturity (ticks)
        harvester_count: Harvesters seeded by reset()
        harvesting_rate: Harvest probability is this times 0.1
        harvester_speed: Base harvester speed
        harvest_radius: Distance within which adults can be harvested
        initial_coral_coverage: Percent chance each grid cell holds a coral
        coral_healing_rate: Health regained per tick under low grazing pressure
        coral_degradation_threshold: Health below which a coral is degraded
        algae_growth_rate: Algae added per tick on degraded or dead corals
        max_algae_density: Algae cap per coral
        tick_rate: Milliseconds between driver ticks
        speed_multiplier: Engine steps per driver tick
        tick_limit: Steps after which the driver stops (when enabled)
        enable_tick_limit: Whether the driver honours tick_limit
        data_recording_frequency: History sampling stride in ticks
    """

    # Sea urchins
    initial_urchins: int = 30
    reproduction_rate: float = 0.05
    grazing_rate: float = 0.5
    urchin_speed: float = 0.5
    spawn_radius: float = 50.0
    min_maturity_time: int = MIN_MATURITY_TIME
    max_maturity_time: int = MAX_MATURITY_TIME

    # Harvesters
    harvester_count: int = 3
    harvesting_rate: float = 1.0
    harvester_speed: float = 1.0
    harvest_radius: float = 30.0

    # Corals
    initial_coral_coverage: float = 40.0
    coral_healing_rate: float = 0.02
    coral_degradation_threshold: float = 50.0

    # Algae
    algae_growth_rate: float = 0.03
    max_algae_density: float = 0.8

    # Scheduling
    tick_rate: float = DEFAULT_TICK_RATE_MS
    speed_multiplier: int = DEFAULT_SPEED_MULTIPLIER
    tick_limit: int = DEFAULT_TICK_LIMIT
    enable_tick_limit: bool = False
    data_recording_frequency: int = DEFAULT_RECORDING_FREQUENCY

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SimulationParameters":
        """Build parameters from a flat key/value mapping.

        Missing keys keep their defaults. The result is validated.
        """
        return cls().with_overrides(**_normalize_keys(data))

    def with_overrides(self, **overrides: Any) -> "SimulationParameters":
        """Return a validated copy with the given fields replaced.

        Accepts snake_case field names, camelCase keys, and ``maturity_time``
        (or ``maturityTime``) as shorthand for a fixed maturity.
        """
        changes = _normalize_keys(overrides)
        updated = replace(self, **changes)
        updated.validate()
        return updated

    def to_dict(self) -> Dict[str, Any]:
        """Flat camelCase mapping, the shape collaborators exchange."""
        return {_FIELD_TO_CAMEL[name]: value for name, value in asdict(self).items()}

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> None:
        """Reject values that would break the update rules.

        Raises:
            ConfigurationError: If any value is out of range
        """
        errors = []

        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "enable_tick_limit":
                if not isinstance(value, bool):
                    errors.append(f"{f.name} must be a boolean")
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(f"{f.name} must be a number, got {value!r}")
                continue
            if not math.isfinite(value):
                errors.append(f"{f.name} must be finite")
                continue
            if f.name in _INT_FIELDS and value != int(value):
                errors.append(f"{f.name} must be a whole number")
            if value < 0:
                errors.append(f"{f.name} must be non-negative, got {value}")

        if errors:
            raise ConfigurationError("; ".join(errors))

        if self.initial_coral_coverage > 100:
            errors.append("initial_coral_coverage must be at most 100")
        if self.min_maturity_time < 1:
            errors.append("min_maturity_time must be at least 1")
        if self.min_maturity_time > self.max_maturity_time:
            errors.append("min_maturity_time must not exceed max_maturity_time")
        if self.coral_degradation_threshold > 100:
            errors.append("coral_degradation_threshold must be at most 100")
        if self.tick_rate <= 0:
            errors.append("tick_rate must be positive")
        if not 1 <= self.speed_multiplier <= MAX_SPEED_MULTIPLIER:
            errors.append(f"speed_multiplier must be between 1 and {MAX_SPEED_MULTIPLIER}")
        if self.tick_limit < 1:
            errors.append("tick_limit must be at least 1")
        if self.data_recording_frequency < 1:
            errors.append("data_recording_frequency must be at least 1")

        if errors:
            raise ConfigurationError("; ".join(errors))

    @property
    def has_fixed_maturity(self) -> bool:
        return self.min_maturity_time == self.max_maturity_time


def _normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Translate camelCase keys and the maturity shorthand to field names."""
    valid = {f.name for f in fields(SimulationParameters)}
    normalized: Dict[str, Any] = {}

    for key, value in data.items():
        if key in ("maturityTime", "maturity_time"):
            normalized["min_maturity_time"] = value
            normalized["max_maturity_time"] = value
            continue
        name = _CAMEL_KEYS.get(key, key)
        if name not in valid:
            raise ConfigurationError(f"Unknown simulation parameter: {key}")
        normalized[name] = value

    # Integer fields arrive as floats from JSON sliders
    for name in _INT_FIELDS & normalized.keys():
        value = normalized[name]
        if isinstance(value, float) and value.is_integer():
            normalized[name] = int(value)

    return normalized
