"""Task board projection models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from echub_mcp.enums import TaskStatus
from echub_mcp.models.task import Task


class TaskFilter(BaseModel):
    """Context filter applied uniformly to roots and subtasks."""

    search: str = ""
    active_project: str | None = None
    mine_only: bool = False
    current_user: str | None = None


class TaskNode(BaseModel):
    """A root task with its filter-matching subtasks.

    ``children`` is always the full matching list; renderers show it only
    when ``expanded`` is true. ``has_children`` drives the disclosure toggle.
    """

    task: Task
    children: list[Task] = Field(default_factory=list)
    expanded: bool = False

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    @property
    def visible_children(self) -> list[Task]:
        return self.children if self.expanded else []


class KanbanColumn(BaseModel):
    """One status column of the board."""

    status: TaskStatus
    cards: list[TaskNode] = Field(default_factory=list)
    # Subtasks placed here by their own status (own-column placement only)
    loose_subtasks: list[Task] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.cards)


class ProjectProgress(BaseModel):
    """Completion summary for one project."""

    project: str
    total: int = 0
    completed: int = 0

    @property
    def percent(self) -> int:
        return 0 if self.total == 0 else round(self.completed / self.total * 100)
