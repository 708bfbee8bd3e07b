"""In-memory store owning the task, project and activity collections.

Views never hold tasks of their own; they read from here and every
mutation comes back here. Each mutation is written to the system log, and
deleted tasks go to the trash so they can be restored.
"""

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

import structlog
from pydantic import ValidationError

from echub_mcp.enums import DeleteStrategy, ModuleType, TaskStatus
from echub_mcp.errors import (
    DuplicateProjectError,
    DuplicateTaskError,
    EcHubError,
    InvalidTaskError,
    ProjectNotFoundError,
    TaskCycleError,
    TaskHasSubtasksError,
    TaskNotFoundError,
)
from echub_mcp.models.task import CrmActivity, CurrentUser, Project, SystemLogEntry, Task, TrashItem

logger = structlog.get_logger()

TASKS_COLLECTION = "tasks"


def new_id(prefix: str) -> str:
    return f"{prefix}{uuid4().hex[:10]}"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class HubStore:
    """Single owner of tasks, projects and CRM activities."""

    def __init__(
        self,
        current_user: CurrentUser | None = None,
        tasks: list[Task] | None = None,
        activities: list[CrmActivity] | None = None,
        delete_strategy: DeleteStrategy = DeleteStrategy.CASCADE_ONE,
        projects: list[Project] | None = None,
    ) -> None:
        self.current_user = current_user or CurrentUser()
        self.delete_strategy = delete_strategy
        self._tasks: list[Task] = list(tasks or [])
        self._activities: list[CrmActivity] = list(activities or [])
        self._projects: list[Project] = list(projects or [])
        self._logs: list[SystemLogEntry] = []
        self._trash: list[TrashItem] = []

    # ---- reads ----
    def list_tasks(self) -> list[Task]:
        return list(self._tasks)

    def list_activities(self) -> list[CrmActivity]:
        return list(self._activities)

    def list_projects(self) -> list[Project]:
        return list(self._projects)

    def project_names(self) -> list[str]:
        """Registered project names, then any name only found on tasks, in first-seen order."""
        names = [p.name for p in self._projects]
        names += [t.project for t in self._tasks]
        return list(dict.fromkeys(names))

    @property
    def logs(self) -> list[SystemLogEntry]:
        return list(self._logs)

    @property
    def trash(self) -> list[TrashItem]:
        return list(self._trash)

    def get_task(self, task_id: str) -> Task:
        return self._tasks[self._index_of(task_id)]

    def children_of(self, task_id: str) -> list[Task]:
        return [t for t in self._tasks if t.parent_id == task_id]

    def descendants_of(self, task_id: str) -> list[Task]:
        """All tasks below ``task_id``, breadth first."""
        found: list[Task] = []
        seen = {task_id}
        frontier = [task_id]
        while frontier:
            current = frontier.pop(0)
            for child in self.children_of(current):
                if child.id in seen:
                    continue
                seen.add(child.id)
                found.append(child)
                frontier.append(child.id)
        return found

    def _index_of(self, task_id: str) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        raise TaskNotFoundError(task_id)

    def _log(self, action: str, module: ModuleType) -> None:
        self._logs.append(
            SystemLogEntry(
                id=new_id("log"),
                timestamp=_now(),
                user=self.current_user.name,
                action=action,
                module=module.value.upper(),
            )
        )

    def _check_parent(self, task_id: str, parent_id: str | None) -> None:
        if parent_id is None:
            return
        if parent_id == task_id:
            raise TaskCycleError(task_id, parent_id)
        # Walk up from the new parent; meeting task_id means a loop
        seen: set[str] = set()
        current: str | None = parent_id
        while current is not None and current not in seen:
            if current == task_id:
                raise TaskCycleError(task_id, parent_id)
            seen.add(current)
            parent = next((t for t in self._tasks if t.id == current), None)
            current = parent.parent_id if parent else None

    # ---- task mutations ----
    def add_task(self, task: Task) -> Task:
        """Add a task, generating an id when the draft has none."""
        if not task.id:
            task = task.model_copy(update={"id": new_id("t")})
        if any(t.id == task.id for t in self._tasks):
            raise DuplicateTaskError(task.id)
        self._check_parent(task.id, task.parent_id)
        self._tasks.append(task)
        logger.info("Task added", task_id=task.id, parent_id=task.parent_id, due_date=task.due_date)
        self._log(f"Created task: {task.title}", ModuleType.PROJECTS)
        return task

    def update_task(self, task_id: str, **fields: Any) -> Task:
        """
        Update a task in place.

        Fields not passed keep their current value, the id never changes and
        the task keeps its position, so no reader ever sees it missing.

        Raises:
            TaskNotFoundError: If no such task
            TaskCycleError: If the new parent would create a loop
            InvalidTaskError: If the merged fields do not form a valid task
        """
        updated = self._replace(task_id, fields)
        logger.info("Task updated", task_id=task_id, fields=sorted(fields))
        self._log(f"Updated task: {updated.title}", ModuleType.PROJECTS)
        return updated

    def _replace(self, task_id: str, fields: dict[str, Any]) -> Task:
        index = self._index_of(task_id)
        fields.pop("id", None)
        if "parent_id" in fields:
            self._check_parent(task_id, fields["parent_id"] or None)
        try:
            updated = Task.model_validate({**self._tasks[index].model_dump(), **fields, "id": task_id})
        except ValidationError as e:
            logger.warning("Task update rejected", task_id=task_id, fields=sorted(fields))
            raise InvalidTaskError(f"Invalid update for task '{task_id}': {e}") from e
        self._tasks[index] = updated
        return updated

    def update_task_status(self, task_id: str, status: TaskStatus) -> Task:
        task = self._replace(task_id, {"status": status})
        logger.info("Task status changed", task_id=task_id, status=status.value)
        self._log(f"Task status changed to {status.value}", ModuleType.PROJECTS)
        return task

    def delete_task(self, task_id: str, strategy: DeleteStrategy | None = None) -> list[str]:
        """
        Delete a task and, depending on strategy, its descendants.

        ``CASCADE_ONE`` removes direct children only; grandchildren stay with
        a ``parent_id`` that no longer resolves.

        Returns:
            Ids removed, the task itself first

        Raises:
            TaskNotFoundError: If no such task
            TaskHasSubtasksError: Under ``REJECT_IF_HAS_DESCENDANTS`` when children exist
        """
        strategy = strategy or self.delete_strategy
        target = self.get_task(task_id)

        if strategy == DeleteStrategy.CASCADE_ONE:
            doomed = [target] + self.children_of(task_id)
        elif strategy == DeleteStrategy.CASCADE_DEEP:
            doomed = [target] + self.descendants_of(task_id)
        else:
            descendants = self.descendants_of(task_id)
            if descendants:
                logger.warning("Delete rejected, task has subtasks", task_id=task_id, count=len(descendants))
                raise TaskHasSubtasksError(task_id, [t.id for t in descendants])
            doomed = [target]

        doomed_ids = {t.id for t in doomed}
        self._tasks = [t for t in self._tasks if t.id not in doomed_ids]
        for task in doomed:
            self._trash.append(
                TrashItem(
                    id=new_id("trash"),
                    original_id=task.id,
                    collection=TASKS_COLLECTION,
                    data=task.model_dump(mode="json"),
                    deleted_at=_now(),
                    deleted_by=self.current_user.name,
                    display_title=task.title,
                )
            )
            self._log(f"Moved to trash: {task.title} (task)", ModuleType.PROJECTS)

        removed = [t.id for t in doomed]
        logger.info("Task deleted", task_id=task_id, strategy=strategy.value, removed=removed)
        return removed

    def restore_task(self, original_id: str) -> Task:
        """Put the most recently trashed copy of a task back."""
        for i in range(len(self._trash) - 1, -1, -1):
            item = self._trash[i]
            if item.collection == TASKS_COLLECTION and item.original_id == original_id:
                break
        else:
            raise EcHubError(f"Task '{original_id}' is not in the trash")
        if any(t.id == original_id for t in self._tasks):
            raise DuplicateTaskError(original_id)
        task = Task.model_validate(item.data)
        del self._trash[i]
        self._tasks.append(task)
        logger.info("Task restored", task_id=original_id)
        self._log(f"Restored from trash: {item.display_title}", ModuleType.SETTINGS)
        return task

    # ---- projects ----
    def add_project(self, project: Project) -> Project:
        """Register a project, generating an id when it has none. Names are unique."""
        if not project.id:
            project = project.model_copy(update={"id": new_id("p")})
        if any(p.name == project.name for p in self._projects):
            raise DuplicateProjectError(project.name)
        self._projects.append(project)
        logger.info("Project added", project_id=project.id, name=project.name, access=project.access.value)
        self._log(f"Created project: {project.name}", ModuleType.PROJECTS)
        return project

    def update_project(self, project_id: str, **fields: Any) -> Project:
        """
        Update a project in place.

        Tasks refer to projects by name, so a rename is carried over to
        every task filed under the old name.
        """
        index = next((i for i, p in enumerate(self._projects) if p.id == project_id), None)
        if index is None:
            raise ProjectNotFoundError(project_id)
        current = self._projects[index]
        fields.pop("id", None)
        new_name = (fields.get("name") or "").strip()
        if new_name and new_name != current.name and any(p.name == new_name for p in self._projects):
            raise DuplicateProjectError(new_name)
        try:
            updated = Project.model_validate({**current.model_dump(), **fields, "id": project_id})
        except ValidationError as e:
            raise EcHubError(f"Invalid update for project '{project_id}': {e}") from e
        self._projects[index] = updated
        if updated.name != current.name:
            self._tasks = [
                t.model_copy(update={"project": updated.name}) if t.project == current.name else t
                for t in self._tasks
            ]
        logger.info("Project updated", project_id=project_id, fields=sorted(fields))
        self._log(f"Updated project: {updated.name}", ModuleType.PROJECTS)
        return updated

    # ---- activities ----
    def add_activity(self, activity: CrmActivity) -> CrmActivity:
        self._activities.append(activity)
        logger.info("Activity added", activity_id=activity.id, date=activity.date, type=activity.type.value)
        self._log(f"Created activity: {activity.subject}", ModuleType.CRM)
        return activity
