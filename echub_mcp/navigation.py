"""Active-module navigation."""

from collections.abc import Callable

import structlog

from echub_mcp.enums import ModuleType

logger = structlog.get_logger()


class Navigator:
    """Holds which top-level module is showing and notifies listeners on change."""

    def __init__(self, initial: ModuleType = ModuleType.HOME) -> None:
        self.active_module = initial
        self._listeners: list[Callable[[ModuleType], None]] = []

    def subscribe(self, listener: Callable[[ModuleType], None]) -> None:
        self._listeners.append(listener)

    def set_active_module(self, module: ModuleType) -> None:
        if module == self.active_module:
            return
        logger.debug("Switching module", previous=self.active_module.value, module=module.value)
        self.active_module = module
        for listener in list(self._listeners):
            listener(module)
