"""Reef simulation exception hierarchy.

Centralised base classes so callers can catch simulation failures
narrowly instead of relying on bare ``except Exception`` blocks.
"""


class ReefError(Exception):
    """Root of all reef simulation domain exceptions."""


class ConfigurationError(ReefError, ValueError):
    """Invalid or missing configuration."""


class SimulationError(ReefError):
    """Errors during simulation execution (engine, systems, entities)."""


class StepError(SimulationError):
    """A tick failed part way through; the world was rolled back.

    Attributes:
        tick: The tick the world was at when the step started
    """

    def __init__(self, message: str, tick: int) -> None:
        super().__init__(message)
        self.tick = tick
