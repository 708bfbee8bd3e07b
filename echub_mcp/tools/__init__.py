"""MCP tool definitions for EC HUB."""

# Import all tools to register them with the MCP server
from echub_mcp.tools.calendar import (
    echub_calendar_navigate,
    echub_calendar_quick_add,
    echub_calendar_reschedule,
    echub_calendar_view,
    echub_calendar_working_day,
)
from echub_mcp.tools.tasks import (
    echub_activity_add,
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

__all__ = [
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
]
