"""Hand a task draft from the calendar to the task board's editor.

The board registers its edit entry point on an ``EditRequestChannel`` when
it mounts and removes it when it unmounts. The bridge switches navigation
to the Projects module and then waits a bounded time for that entry point;
if it never shows up the request is dropped quietly.
"""

import asyncio
from collections.abc import Callable

import structlog

from echub_mcp.enums import ModuleType
from echub_mcp.models.task import Task
from echub_mcp.navigation import Navigator

logger = structlog.get_logger()

EditHandler = Callable[[Task], None]


class EditRequestChannel:
    """Single-slot registration point for the task editor."""

    def __init__(self) -> None:
        self._handler: EditHandler | None = None
        self._waiters: list[asyncio.Future[EditHandler]] = []

    @property
    def handler(self) -> EditHandler | None:
        return self._handler

    def register(self, handler: EditHandler) -> None:
        self._handler = handler
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(handler)

    def unregister(self, handler: EditHandler) -> None:
        # A stale unmount must not clear a newer registration
        if self._handler == handler:
            self._handler = None

    async def wait_for_handler(self, timeout: float) -> EditHandler | None:
        """Return the registered handler, waiting at most ``timeout`` seconds."""
        if self._handler is not None:
            return self._handler
        waiter: asyncio.Future[EditHandler] = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            return await asyncio.wait_for(waiter, timeout)
        except asyncio.TimeoutError:
            return None
        finally:
            if waiter in self._waiters:
                self._waiters.remove(waiter)


class TaskEditBridge:
    """Route "edit this task" requests from other modules to the task board."""

    def __init__(self, navigator: Navigator, channel: EditRequestChannel, timeout: float = 0.1) -> None:
        self.navigator = navigator
        self.channel = channel
        self.timeout = timeout

    async def request_edit(self, task: Task) -> bool:
        """
        Open ``task`` in the task editor.

        Returns:
            True if the editor received the draft, False if it never mounted
        """
        self.navigator.set_active_module(ModuleType.PROJECTS)
        handler = await self.channel.wait_for_handler(self.timeout)
        if handler is None:
            logger.debug("Task editor not mounted, dropping edit request", task_id=task.id, timeout=self.timeout)
            return False
        handler(task)
        return True
