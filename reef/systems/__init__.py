"""Per-tick simulation systems, one per sub-step of the reef update."""

from reef.systems.base import BaseSystem, SystemResult
from reef.systems.coral_recovery import CoralRecoverySystem
from reef.systems.grazing import GrazingSystem
from reef.systems.harvesting import HarvestingSystem
from reef.systems.lifecycle import StarvationSystem
from reef.systems.locomotion import HarvesterLocomotionSystem, UrchinLocomotionSystem
from reef.systems.reproduction import ReproductionSystem

__all__ = [
    "BaseSystem",
    "SystemResult",
    "CoralRecoverySystem",
    "GrazingSystem",
    "HarvestingSystem",
    "StarvationSystem",
    "HarvesterLocomotionSystem",
    "UrchinLocomotionSystem",
    "ReproductionSystem",
]
