"""Request and response models for the reef simulation API."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class ParametersPatch(BaseModel):
    """Partial parameter update in the flat camelCase shape.

    Only the keys present in the request are applied; range checks happen in
    ``SimulationParameters.validate()``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    # Urchins
    initial_urchins: Optional[int] = None
    reproduction_rate: Optional[float] = None
    grazing_rate: Optional[float] = None
    urchin_speed: Optional[float] = None
    spawn_radius: Optional[float] = None
    maturity_time: Optional[int] = None
    min_maturity_time: Optional[int] = None
    max_maturity_time: Optional[int] = None

    # Harvesters
    harvester_count: Optional[int] = None
    harvesting_rate: Optional[float] = None
    harvester_speed: Optional[float] = None
    harvest_radius: Optional[float] = None

    # Corals and algae
    initial_coral_coverage: Optional[float] = None
    coral_healing_rate: Optional[float] = None
    coral_degradation_threshold: Optional[float] = None
    algae_growth_rate: Optional[float] = None
    max_algae_density: Optional[float] = None

    # Scheduling
    tick_rate: Optional[float] = None
    speed_multiplier: Optional[int] = None
    tick_limit: Optional[int] = None
    enable_tick_limit: Optional[bool] = None
    data_recording_frequency: Optional[int] = None

    def overrides(self) -> Dict[str, Any]:
        """Field-name keyed mapping of the keys that were sent."""
        return self.model_dump(exclude_unset=True)


class PopulationRequest(BaseModel):
    """Resize a population to ``count`` or by ``delta`` (exactly one)."""

    count: Optional[int] = Field(default=None, ge=0)
    delta: Optional[int] = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "PopulationRequest":
        if (self.count is None) == (self.delta is None):
            raise ValueError("Provide exactly one of 'count' or 'delta'")
        return self


class StatusResponse(BaseModel):
    """Runner status returned by the lifecycle endpoints."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    state: str  # "stopped", "running", "paused" or "finished"
    tick: int
    running: bool
    paused: bool
    finished: bool
    ticks_per_second: float
    urchins: int
    harvesters: int
    corals: int
    run_id: str
    seed: Optional[int] = None
