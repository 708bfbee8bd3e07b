"""Application wiring: one store, navigator, task board and calendar per process."""

from datetime import date

import structlog

from echub_mcp.bridge import EditRequestChannel, TaskEditBridge
from echub_mcp.config import HubSettings, load_settings
from echub_mcp.enums import ModuleType
from echub_mcp.fixtures import seed_activities, seed_projects, seed_tasks
from echub_mcp.navigation import Navigator
from echub_mcp.store import HubStore
from echub_mcp.views.board import TaskBoard
from echub_mcp.views.calendar import CalendarController

logger = structlog.get_logger()


class Hub:
    """Owns the collections and wires the views to them.

    The task board is mounted while the Projects module is active and
    unmounted when navigation leaves it, which is what the edit bridge
    waits on.
    """

    def __init__(self, settings: HubSettings | None = None, reference_date: date | None = None) -> None:
        self.settings = settings or HubSettings()
        self.store = HubStore(
            current_user=self.settings.current_user,
            tasks=seed_tasks() if self.settings.seed_fixtures else None,
            activities=seed_activities() if self.settings.seed_fixtures else None,
            delete_strategy=self.settings.delete_strategy,
            projects=seed_projects() if self.settings.seed_fixtures else None,
        )
        self.navigator = Navigator()
        self.edit_channel = EditRequestChannel()
        self.bridge = TaskEditBridge(self.navigator, self.edit_channel, timeout=self.settings.bridge_timeout)
        self.board = TaskBoard(
            self.store,
            placement=self.settings.subtask_placement,
            default_project=self.settings.default_project,
        )
        self.calendar = CalendarController(
            self.store,
            self.bridge,
            reference_date=reference_date,
            working_days=self.settings.working_days,
            default_project=self.settings.default_project,
        )
        self.navigator.subscribe(self._on_navigate)

    def _on_navigate(self, module: ModuleType) -> None:
        if module == ModuleType.PROJECTS:
            if not self.board.is_mounted:
                self.board.mount(self.edit_channel)
        elif self.board.is_mounted:
            self.board.unmount()


_hub: Hub | None = None


def get_hub() -> Hub:
    """Process-wide hub, built from the config file on first use."""
    global _hub
    if _hub is None:
        _hub = Hub(load_settings())
        logger.info("Hub initialised", tasks=len(_hub.store.list_tasks()))
    return _hub


def reset_hub(hub: Hub | None = None) -> Hub | None:
    """Replace (or drop) the process-wide hub; used by tests."""
    global _hub
    _hub = hub
    return _hub
