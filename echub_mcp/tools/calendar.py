"""Calendar MCP tool definitions for EC HUB."""

import json

from mcp.types import ToolAnnotations

from echub_mcp.enums import ModuleType, QuickAddKind, ResponseFormat
from echub_mcp.errors import EcHubError
from echub_mcp.hub import get_hub
from echub_mcp.models.inputs import (
    CalendarNavigateInput,
    CalendarViewInput,
    QuickAddInput,
    RescheduleInput,
    WorkingDayInput,
)
from echub_mcp.server import mcp
from echub_mcp.utils.formatters import _format_calendar_markdown, _format_task_concise, _format_task_markdown

WEEKDAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def _render_calendar(response_format: ResponseFormat) -> str:
    cal = get_hub().calendar
    cells = cal.visible_cells()
    tasks_by_day = cal.bucket_tasks()
    activities_by_day = cal.bucket_activities()

    if response_format == ResponseFormat.JSON:
        return json.dumps(
            {
                "title": cal.title(),
                "view_mode": cal.view_mode.value,
                "reference_date": cal.reference_date.isoformat(),
                "working_days": sorted(cal.working_days),
                "headers": cal.headers(),
                "columns": cal.column_count(),
                "cells": [
                    {
                        "kind": c.kind.value,
                        "key": c.key,
                        "tasks": [t.model_dump(mode="json") for t in tasks_by_day.get(c.key, [])],
                        "activities": [a.model_dump(mode="json") for a in activities_by_day.get(c.key, [])],
                    }
                    for c in cells
                ],
            },
            indent=2,
        )

    if response_format == ResponseFormat.CONCISE:
        lines = [f"{cal.title()} | {cal.view_mode.value}"]
        for c in cells:
            if c.is_blank:
                continue
            items = tasks_by_day.get(c.key, [])
            acts = activities_by_day.get(c.key, [])
            if items or acts:
                lines.append(f"{c.key}: {len(items)} task(s), {len(acts)} activity(ies)")
        return "\n".join(lines)

    return _format_calendar_markdown(cal.title(), cal.headers(), cells, tasks_by_day, activities_by_day)


@mcp.tool(
    name="echub_calendar_view",
    annotations=ToolAnnotations(
        title="View Calendar",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def echub_calendar_view(params: CalendarViewInput) -> str:
    """
    Show the month or week calendar with tasks and CRM activities per day.

    USE THIS WHEN:
    - Seeing what is due on which day
    - Switching between month and week view, or jumping to a date
    - Showing only your own tasks ('mine')

    DO NOT USE WHEN:
    - You want a task list grouped by parent → use echub_tasks_list
    - You want to step to the next/previous period → use echub_calendar_navigate

    Args:
        params: CalendarViewInput with optional view_mode, reference_date, view_filter

    Returns:
        Calendar grid (markdown table, concise day summary, or JSON)

    Examples:
        - This month: params with no values
        - Week of Nov 15 2023: params with view_mode="week", reference_date="2023-11-15"
    """
    try:
        hub = get_hub()
        hub.navigator.set_active_module(ModuleType.CALENDAR)
        cal = hub.calendar
        if params.view_mode is not None:
            cal.set_view_mode(params.view_mode)
        if params.reference_date is not None:
            cal.go_to(params.reference_date)
        if params.view_filter is not None:
            cal.set_view_filter(params.view_filter)
    except EcHubError as e:
        return f"Error: {e}"
    return _render_calendar(params.response_format)


@mcp.tool(
    name="echub_calendar_navigate",
    annotations=ToolAnnotations(
        title="Navigate Calendar",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def echub_calendar_navigate(params: CalendarNavigateInput) -> str:
    """
    Move the calendar back or forward.

    In month view the offset counts months (always landing on the 1st); in
    week view it counts weeks.

    Args:
        params: CalendarNavigateInput with offset (negative goes back)

    Returns:
        The calendar for the new period in markdown

    Examples:
        - Next month/week: params with offset=1
        - Previous: params with offset=-1
    """
    try:
        hub = get_hub()
    except EcHubError as e:
        return f"Error: {e}"
    hub.navigator.set_active_module(ModuleType.CALENDAR)
    hub.calendar.change_date(params.offset)
    return _render_calendar(ResponseFormat.MARKDOWN)


@mcp.tool(
    name="echub_calendar_working_day",
    annotations=ToolAnnotations(
        title="Toggle Working Day",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def echub_calendar_working_day(params: WorkingDayInput) -> str:
    """
    Show or hide a weekday column in week view.

    The last remaining working day cannot be removed.

    Args:
        params: WorkingDayInput with day (0=Sunday..6=Saturday)

    Returns:
        The resulting working days
    """
    try:
        cal = get_hub().calendar
    except EcHubError as e:
        return f"Error: {e}"
    changed = cal.toggle_working_day(params.day)
    names = [WEEKDAY_NAMES[d] for d in sorted(cal.working_days)]
    if not changed:
        return f"Error: {WEEKDAY_NAMES[params.day]} is the only working day and cannot be removed."
    state = "shown" if params.day in cal.working_days else "hidden"
    return f"{WEEKDAY_NAMES[params.day]} {state}. Working days: {', '.join(names)}"


@mcp.tool(
    name="echub_calendar_quick_add",
    annotations=ToolAnnotations(
        title="Quick Add From Calendar",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def echub_calendar_quick_add(params: QuickAddInput) -> str:
    """
    Create a task or CRM activity on a calendar day.

    A task draft (status todo, priority medium, due on that day) is opened in
    the task editor; with a title it is saved straight away, otherwise it
    stays open. An activity (default type call, status planned) is saved
    immediately.

    Args:
        params: QuickAddInput with kind, date, optional title and activity_type

    Returns:
        The created task/activity, or the open draft

    Examples:
        - Task: params with kind="task", date="2023-11-15", title="Call supplier"
        - Meeting: params with kind="activity", date="2023-11-15", title="Kick-off", activity_type="meeting"
    """
    try:
        hub = get_hub()
        cal = hub.calendar
        await cal.quick_add(params.kind, params.date)
        if params.kind == QuickAddKind.ACTIVITY:
            activity = cal.submit_activity(subject=params.title, activity_type=params.activity_type)
            return f"Activity created successfully.\n{activity.id}: {activity.subject} ({activity.type.value}, {activity.date})"

        board = hub.board
        if board.editing is None:
            return "Error: Task editor is not available; nothing was created."
        if not params.title:
            return f"Task draft opened in the editor.\n{_format_task_markdown(board.editing)}"
        board.update_draft(title=params.title)
        task = board.save_draft()
    except EcHubError as e:
        return f"Error: {e}"
    return f"Task created successfully.\n{_format_task_concise(task)}"


@mcp.tool(
    name="echub_calendar_reschedule",
    annotations=ToolAnnotations(
        title="Reschedule Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def echub_calendar_reschedule(params: RescheduleInput) -> str:
    """
    Move a task to another day (the calendar's drag and drop).

    Args:
        params: RescheduleInput with task_id and date

    Returns:
        Confirmation with the task's new due date
    """
    try:
        task = get_hub().calendar.reschedule_task(params.task_id, params.date)
    except EcHubError as e:
        return f"Error: {e}"
    return f"Task {task.id} due {task.due_date}.\n{_format_task_concise(task)}"

