"""
MCP Server for the EC HUB planner.

This server exposes the EC HUB calendar and task board: month and week
calendar grids with working-day filtering and quick-add, a parent/subtask
task tree with list and Kanban projections, and the task and CRM activity
store behind them.
"""

# Re-export the edit bridge
from echub_mcp.bridge import EditRequestChannel, TaskEditBridge

# Re-export enums
from echub_mcp.enums import (
    ActivityStatus,
    ActivityType,
    BoardViewMode,
    CalendarFilter,
    CalendarViewMode,
    CellKind,
    DeleteStrategy,
    ModuleType,
    Priority,
    ProjectAccess,
    QuickAddKind,
    ResponseFormat,
    SubtaskPlacement,
    TaskStatus,
)
from echub_mcp.errors import (
    ConfigError,
    DuplicateProjectError,
    DuplicateTaskError,
    EcHubError,
    InvalidDateError,
    InvalidTaskError,
    ProjectNotFoundError,
    TaskCycleError,
    TaskHasSubtasksError,
    TaskNotFoundError,
)
from echub_mcp.hub import Hub, get_hub, reset_hub

# Re-export models
from echub_mcp.models import (
    ActivityDraft,
    AddActivityInput,
    AddProjectInput,
    AddTaskInput,
    CalendarNavigateInput,
    CalendarViewInput,
    CrmActivity,
    CurrentUser,
    DateCell,
    DeleteTaskInput,
    KanbanColumn,
    ListTasksInput,
    MonthGrid,
    Project,
    ProjectProgress,
    ProjectProgressInput,
    QuickAddInput,
    RescheduleInput,
    RestoreTaskInput,
    SetStatusInput,
    SystemLogEntry,
    SystemLogInput,
    Task,
    TaskFilter,
    TaskNode,
    ToggleExpandInput,
    TrashItem,
    UpdateTaskInput,
    WeekGrid,
    WorkingDayInput,
)
from echub_mcp.navigation import Navigator

# Re-export MCP server instance
from echub_mcp.server import mcp
from echub_mcp.store import HubStore

# Re-export tools
from echub_mcp.tools import (
    echub_activity_add,
    echub_calendar_navigate,
    echub_calendar_quick_add,
    echub_calendar_reschedule,
    echub_calendar_view,
    echub_calendar_working_day,
    echub_project_add,
    echub_project_progress,
    echub_system_log,
    echub_task_add,
    echub_task_delete,
    echub_task_restore,
    echub_task_status,
    echub_task_toggle_expand,
    echub_task_update,
    echub_tasks_kanban,
    echub_tasks_list,
)
from echub_mcp.utils import filter_by_substring, is_today, parse_date_key, sort_by_key, to_date_key
from echub_mcp.views.board import TaskBoard
from echub_mcp.views.calendar import CalendarController
from echub_mcp.views.grid import build_month_grid, build_week_grid, week_headers
from echub_mcp.views.hierarchy import project_hierarchy, project_kanban

__all__ = [
    # Enums
    "ActivityStatus",
    "ActivityType",
    "BoardViewMode",
    "CalendarFilter",
    "CalendarViewMode",
    "CellKind",
    "DeleteStrategy",
    "ModuleType",
    "Priority",
    "ProjectAccess",
    "QuickAddKind",
    "ResponseFormat",
    "SubtaskPlacement",
    "TaskStatus",
    # Errors
    "EcHubError",
    "InvalidDateError",
    "TaskNotFoundError",
    "TaskHasSubtasksError",
    "TaskCycleError",
    "DuplicateTaskError",
    "ConfigError",
    "InvalidTaskError",
    "DuplicateProjectError",
    "ProjectNotFoundError",
    # Entity and view models
    "Task",
    "CrmActivity",
    "CurrentUser",
    "SystemLogEntry",
    "TrashItem",
    "Project",
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
    "AddProjectInput",
    "ProjectProgressInput",
    "SystemLogInput",
    # Core
    "to_date_key",
    "parse_date_key",
    "is_today",
    "filter_by_substring",
    "sort_by_key",
    "build_month_grid",
    "build_week_grid",
    "week_headers",
    "project_hierarchy",
    "project_kanban",
    "HubStore",
    "Navigator",
    "EditRequestChannel",
    "TaskEditBridge",
    "TaskBoard",
    "CalendarController",
    "Hub",
    "get_hub",
    "reset_hub",
    # Calendar tools
    "echub_calendar_view",
    "echub_calendar_navigate",
    "echub_calendar_working_day",
    "echub_calendar_quick_add",
    "echub_calendar_reschedule",
    # Task tools
    "echub_tasks_list",
    "echub_tasks_kanban",
    "echub_task_add",
    "echub_task_update",
    "echub_task_status",
    "echub_task_delete",
    "echub_task_restore",
    "echub_task_toggle_expand",
    "echub_activity_add",
    "echub_project_add",
    "echub_project_progress",
    "echub_system_log",
    # MCP server instance
    "mcp",
]
