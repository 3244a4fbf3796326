"""System registration and management.

Keeps the engine's systems in execution order and lets callers switch
individual systems off at runtime (handy in tests and experiments).
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from reef.systems.base import BaseSystem

logger = logging.getLogger(__name__)


class SystemRegistry:
    """Registers and manages simulation systems.

    Example:
        registry = SystemRegistry()
        registry.register(grazing_system)
        registry.set_enabled("Grazing", False)
    """

    def __init__(self) -> None:
        self._systems: List["BaseSystem"] = []

    def register(self, system: "BaseSystem") -> None:
        """Register a system; systems run in registration order."""
        self._systems.append(system)
        logger.debug("Registered system: %s", system.name)

    def get(self, name: str) -> Optional["BaseSystem"]:
        """Get a system by name, or None."""
        for system in self._systems:
            if system.name == name:
                return system
        return None

    def get_all(self) -> List["BaseSystem"]:
        """All registered systems in execution order (a copy)."""
        return self._systems.copy()

    def set_enabled(self, name: str, enabled: bool) -> bool:
        """Enable or disable a system by name.

        Returns:
            True if the system was found and updated, False otherwise
        """
        system = self.get(name)
        if system is not None:
            system.enabled = enabled
            logger.debug("System %s enabled=%s", name, enabled)
            return True
        return False

    def get_debug_info(self) -> Dict[str, Any]:
        """Debug info from every registered system, keyed by name."""
        return {system.name: system.get_debug_info() for system in self._systems}

