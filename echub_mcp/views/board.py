"""Task board view state: filter, expand/collapse, view mode and the editor draft."""

from datetime import date

import structlog
from pydantic import ValidationError

from echub_mcp.bridge import EditRequestChannel
from echub_mcp.enums import BoardViewMode, Priority, SubtaskPlacement, TaskStatus
from echub_mcp.errors import EcHubError, InvalidTaskError
from echub_mcp.models.board import KanbanColumn, ProjectProgress, TaskFilter, TaskNode
from echub_mcp.models.task import DEFAULT_PROJECT, Task
from echub_mcp.store import HubStore
from echub_mcp.utils.dates import to_date_key
from echub_mcp.views.hierarchy import project_hierarchy, project_kanban, project_progress

logger = structlog.get_logger()


class TaskBoard:
    """
    The Projects module's task list / Kanban view.

    Holds only display state; tasks are read from the store on every
    projection. While mounted, ``trigger_edit`` is registered on the edit
    channel so other modules can open the editor.
    """

    def __init__(
        self,
        store: HubStore,
        placement: SubtaskPlacement = SubtaskPlacement.NESTED,
        default_project: str = DEFAULT_PROJECT,
    ) -> None:
        self.store = store
        self.placement = placement
        self.default_project = default_project
        self.view_mode = BoardViewMode.LIST
        self.filter = TaskFilter(current_user=store.current_user.name)
        self.expanded: set[str] = set()
        self.editing: Task | None = None
        self._channel: EditRequestChannel | None = None

    # ---- mount lifecycle ----
    @property
    def is_mounted(self) -> bool:
        return self._channel is not None

    def mount(self, channel: EditRequestChannel) -> None:
        self._channel = channel
        channel.register(self.trigger_edit)
        logger.debug("Task board mounted")

    def unmount(self) -> None:
        if self._channel is not None:
            self._channel.unregister(self.trigger_edit)
            self._channel = None
        # Display state does not outlive the view
        self.expanded.clear()
        self.editing = None
        logger.debug("Task board unmounted")

    # ---- display state ----
    def set_view_mode(self, mode: BoardViewMode) -> None:
        self.view_mode = mode

    def set_filter(self, **changes: object) -> TaskFilter:
        self.filter = self.filter.model_copy(update=changes)
        return self.filter

    def toggle_expand(self, task_id: str) -> bool:
        """Flip one root's disclosure; returns the new state."""
        if task_id in self.expanded:
            self.expanded.discard(task_id)
            return False
        self.expanded.add(task_id)
        return True

    # ---- projections ----
    def tree(self) -> list[TaskNode]:
        return project_hierarchy(self.store.list_tasks(), self.filter, self.expanded)

    def kanban(self) -> list[KanbanColumn]:
        return project_kanban(self.store.list_tasks(), self.filter, self.expanded, self.placement)

    def progress(self, project: str) -> ProjectProgress:
        return project_progress(self.store.list_tasks(), project)

    # ---- editor ----
    def trigger_edit(self, task: Task) -> None:
        """Open the editor on an existing task or a pre-filled draft (empty id)."""
        self.editing = task.model_copy()
        logger.debug("Editor opened", task_id=task.id or None, due_date=task.due_date)

    def open_new(self, parent_id: str | None = None, project: str | None = None) -> Task:
        """Open the editor on a blank task, optionally as a subtask."""
        draft = Task(
            due_date=to_date_key(date.today()),
            assignee=self.store.current_user.name,
            project=project or self.filter.active_project or self.default_project,
            priority=Priority.MEDIUM,
            parent_id=parent_id,
        )
        self.trigger_edit(draft)
        return draft

    def update_draft(self, **fields: object) -> Task:
        if self.editing is None:
            raise EcHubError("No task is being edited")
        data = {**self.editing.model_dump(), **fields}
        try:
            self.editing = Task.model_validate(data)
        except ValidationError as e:
            raise InvalidTaskError(f"Invalid task draft: {e}") from e
        return self.editing

    def save_draft(self) -> Task:
        """
        Commit the editor.

        A draft with no id is added as a new task. A draft with an id updates
        that task in place, keeping its status and any field the form did
        not carry.
        """
        if self.editing is None:
            raise EcHubError("No task is being edited")
        draft = self.editing
        if draft.id:
            fields = draft.model_dump(exclude={"id", "status"})
            saved = self.store.update_task(draft.id, **fields)
        else:
            saved = self.store.add_task(
                draft.model_copy(update={"title": draft.title or "New task", "status": TaskStatus.TODO})
            )
        self.editing = None
        return saved

    def cancel_edit(self) -> None:
        self.editing = None
