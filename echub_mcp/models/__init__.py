"""Pydantic models for EC HUB MCP."""

from echub_mcp.models.board import KanbanColumn, ProjectProgress, TaskFilter, TaskNode
from echub_mcp.models.calendar import ActivityDraft, DateCell, MonthGrid, WeekGrid
from echub_mcp.models.inputs import (
    AddActivityInput,
    AddProjectInput,
    AddTaskInput,
    CalendarNavigateInput,
    CalendarViewInput,
    DeleteTaskInput,
    ListTasksInput,
    ProjectProgressInput,
    QuickAddInput,
    RescheduleInput,
    RestoreTaskInput,
    SetStatusInput,
    SystemLogInput,
    ToggleExpandInput,
    UpdateTaskInput,
    WorkingDayInput,
)
from echub_mcp.models.task import CrmActivity, CurrentUser, Project, SystemLogEntry, Task, TrashItem

__all__ = [
    # Entity models
    "Task",
    "CrmActivity",
    "Project",
    "CurrentUser",
    "SystemLogEntry",
    "TrashItem",
    # Derived view models
    "DateCell",
    "MonthGrid",
    "WeekGrid",
    "ActivityDraft",
    "TaskFilter",
    "TaskNode",
    "KanbanColumn",
    "ProjectProgress",
    # Tool input models
    "CalendarViewInput",
    "CalendarNavigateInput",
    "WorkingDayInput",
    "QuickAddInput",
    "RescheduleInput",
    "ListTasksInput",
    "AddTaskInput",
    "UpdateTaskInput",
    "SetStatusInput",
    "DeleteTaskInput",
    "RestoreTaskInput",
    "ToggleExpandInput",
    "AddActivityInput",
    "ProjectProgressInput",
    "AddProjectInput",
    "SystemLogInput",
]
