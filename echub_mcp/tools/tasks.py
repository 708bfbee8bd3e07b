"""Task board MCP tool definitions for EC HUB."""

import json

from mcp.types import ToolAnnotations

from echub_mcp.enums import ModuleType, ResponseFormat
from echub_mcp.errors import EcHubError
from echub_mcp.hub import get_hub
from echub_mcp.models.board import TaskNode
from echub_mcp.models.inputs import (
    AddActivityInput,
    AddProjectInput,
    AddTaskInput,
    DeleteTaskInput,
    ListTasksInput,
    ProjectProgressInput,
    RestoreTaskInput,
    SetStatusInput,
    SystemLogInput,
    ToggleExpandInput,
    UpdateTaskInput,
)
from echub_mcp.models.task import CrmActivity, Project, Task
from echub_mcp.server import mcp
from echub_mcp.store import new_id
from echub_mcp.utils.formatters import (
    _format_kanban_markdown,
    _format_progress_markdown,
    _format_task_concise,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tree_markdown,
)
from echub_mcp.views.board import TaskBoard
from echub_mcp.views.hierarchy import project_kanban


def _open_board(params: ListTasksInput) -> TaskBoard:
    """Bring the board on screen and apply the request's filter to it."""
    hub = get_hub()
    hub.navigator.set_active_module(ModuleType.PROJECTS)
    hub.board.set_filter(search=params.search, active_project=params.project, mine_only=params.mine_only)
    return hub.board


def _node_json(node: TaskNode) -> dict:
    """A root card as JSON; subtasks are listed only while the root is expanded."""
    return {
        **node.task.model_dump(mode="json"),
        "expanded": node.expanded,
        "subtask_count": len(node.children),
        "subtasks": [s.model_dump(mode="json") for s in node.visible_children],
    }


@mcp.tool(
    name="echub_tasks_list",
    annotations=ToolAnnotations(
        title="List Tasks",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def echub_tasks_list(params: ListTasksInput) -> str:
    """
    List top-level tasks with their subtasks.

    Subtasks are shown under their parent only when the parent is expanded
    (see echub_task_toggle_expand) and only if they match the filter too.

    USE THIS WHEN:
    - Searching tasks by text, project or "mine"
    - Seeing a task's subtasks

    DO NOT USE WHEN:
    - You want tasks grouped by status → use echub_tasks_kanban
    - You want tasks by day → use echub_calendar_view

    Args:
        params: ListTasksInput with search, project, mine_only, response_format

    Returns:
        Task tree (markdown), one line per task (concise), or JSON

    Examples:
        - Everything: params with no values
        - One project: params with project="Warehouse"
        - Text search: params with search="drawings"
    """
    try:
        board = _open_board(params)
    except EcHubError as e:
        return f"Error: {e}"
    nodes = board.tree()

    if params.response_format == ResponseFormat.JSON:
        return json.dumps({"count": len(nodes), "tasks": [_node_json(n) for n in nodes]}, indent=2)

    if params.response_format == ResponseFormat.CONCISE:
        flat: list[Task] = []
        for n in nodes:
            flat.append(n.task)
            flat.extend(n.visible_children)
        return _format_tasks_concise(flat, params.project or params.search or None)

    title = "Tasks"
    if params.project:
        title = f"Tasks in {params.project}"
    elif params.mine_only:
        title = "My tasks"
    if params.search:
        title += f" matching '{params.search}'"
    return _format_tree_markdown(nodes, title)


@mcp.tool(
    name="echub_tasks_kanban",
    annotations=ToolAnnotations(
        title="Task Board",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def echub_tasks_kanban(params: ListTasksInput) -> str:
    """
    Show top-level tasks in status columns (todo, in progress, review, done).

    By default subtasks ride under their parent card whatever their own
    status; placement="own_column" also lists them in their own status column.

    Args:
        params: ListTasksInput with filter fields, optional placement and response_format

    Returns:
        Board columns (markdown) or JSON
    """
    try:
        board = _open_board(params)
    except EcHubError as e:
        return f"Error: {e}"
    placement = params.placement or board.placement
    columns = project_kanban(board.store.list_tasks(), board.filter, board.expanded, placement)

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(
            {
                "placement": placement.value,
                "columns": [
                    {
                        "status": c.status.value,
                        "count": c.count,
                        "cards": [_node_json(n) for n in c.cards],
                        "loose_subtasks": [s.model_dump(mode="json") for s in c.loose_subtasks],
                    }
                    for c in columns
                ],
            },
            indent=2,
        )
    return _format_kanban_markdown(columns)


@mcp.tool(
    name="echub_task_add",
    annotations=ToolAnnotations(
        title="Add Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def echub_task_add(params: AddTaskInput) -> str:
    """
    Create a task or, with parent_id, a subtask.

    Args:
        params: AddTaskInput with title, due_date and optional attributes

    Returns:
        Confirmation with the new task ID

    Examples:
        - params with title="Order cables", due_date="2023-11-20", project="Warehouse"
        - Subtask: params with title="Get quote", due_date="2023-11-18", parent_id="t1"
    """
    try:
        hub = get_hub()
        task = Task(
            title=params.title,
            description=params.description,
            assignee=params.assignee or hub.store.current_user.name,
            observer=params.observer,
            due_date=params.due_date,
            priority=params.priority,
            project=params.project or hub.settings.default_project,
            parent_id=params.parent_id,
        )
        task = hub.store.add_task(task)
    except EcHubError as e:
        return f"Error: {e}"
    return f"Task created successfully.\n{_format_task_concise(task)}"


@mcp.tool(
    name="echub_task_update",
    annotations=ToolAnnotations(
        title="Edit Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def echub_task_update(params: UpdateTaskInput) -> str:
    """
    Edit a task in place. Only the fields you pass change; the ID, status and
    everything else are kept. A null value counts as not passed.

    Args:
        params: UpdateTaskInput with task_id and the fields to change

    Returns:
        The updated task

    Examples:
        - Rename: params with task_id="t2", title="Review drawings rev C"
        - Detach from parent: params with task_id="t1-2", parent_id=""
    """
    fields = {
        k: v for k, v in params.model_dump(exclude={"task_id"}, exclude_unset=True).items() if v is not None
    }
    if not fields:
        return "Error: No fields to update."
    try:
        task = get_hub().store.update_task(params.task_id, **fields)
    except EcHubError as e:
        return f"Error: {e}"
    return f"Task updated.\n{_format_task_markdown(task)}"


@mcp.tool(
    name="echub_task_status",
    annotations=ToolAnnotations(
        title="Set Task Status",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def echub_task_status(params: SetStatusInput) -> str:
    """
    Move a task to another status column.

    Args:
        params: SetStatusInput with task_id and status

    Returns:
        Confirmation message
    """
    try:
        task = get_hub().store.update_task_status(params.task_id, params.status)
    except EcHubError as e:
        return f"Error: {e}"
    return f"Task {task.id} is now {task.status.value}."


@mcp.tool(
    name="echub_task_delete",
    annotations=ToolAnnotations(
        title="Delete Task",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def echub_task_delete(params: DeleteTaskInput) -> str:
    """
    Move a task to the trash.

    With the default cascade_one strategy its direct subtasks go too, but
    deeper descendants are left in place pointing at a parent that no
    longer exists. Use cascade_deep to remove the whole branch, or
    reject_if_has_descendants to refuse when subtasks exist.

    Args:
        params: DeleteTaskInput with task_id and optional strategy

    Returns:
        IDs moved to the trash
    """
    try:
        removed = get_hub().store.delete_task(params.task_id, params.strategy)
    except EcHubError as e:
        return f"Error: {e}"
    return f"Moved {len(removed)} task(s) to trash: {', '.join(removed)}"


@mcp.tool(
    name="echub_task_restore",
    annotations=ToolAnnotations(
        title="Restore Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def echub_task_restore(params: RestoreTaskInput) -> str:
    """
    Bring a deleted task back from the trash under its old ID.

    Args:
        params: RestoreTaskInput with the task's former ID

    Returns:
        The restored task
    """
    try:
        task = get_hub().store.restore_task(params.task_id)
    except EcHubError as e:
        return f"Error: {e}"
    return f"Task restored.\n{_format_task_concise(task)}"


@mcp.tool(
    name="echub_task_toggle_expand",
    annotations=ToolAnnotations(
        title="Expand/Collapse Subtasks",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def echub_task_toggle_expand(params: ToggleExpandInput) -> str:
    """
    Show or hide a task's subtasks in the list and board views.

    Args:
        params: ToggleExpandInput with the root task_id

    Returns:
        The new state
    """
    try:
        hub = get_hub()
        hub.navigator.set_active_module(ModuleType.PROJECTS)
        hub.store.get_task(params.task_id)
    except EcHubError as e:
        return f"Error: {e}"
    expanded = hub.board.toggle_expand(params.task_id)
    return f"Task {params.task_id} {'expanded' if expanded else 'collapsed'}."


@mcp.tool(
    name="echub_activity_add",
    annotations=ToolAnnotations(
        title="Add CRM Activity",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def echub_activity_add(params: AddActivityInput) -> str:
    """
    Log a call, meeting or email against a deal, company or contact.

    Args:
        params: AddActivityInput with subject, date and optional type/status/related_entity_id

    Returns:
        Confirmation with the new activity ID
    """
    activity = CrmActivity(
        id=new_id("act"),
        type=params.type,
        subject=params.subject,
        date=params.date,
        status=params.status,
        related_entity_id=params.related_entity_id,
    )
    try:
        get_hub().store.add_activity(activity)
    except EcHubError as e:
        return f"Error: {e}"
    return f"Activity created successfully.\n{activity.id}: {activity.subject} ({activity.type.value}, {activity.date})"


@mcp.tool(
    name="echub_project_add",
    annotations=ToolAnnotations(
        title="Add Project",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def echub_project_add(params: AddProjectInput) -> str:
    """
    Register a new project. Tasks are filed under it by name.

    Args:
        params: AddProjectInput with name and optional access/allowed_users

    Returns:
        Confirmation with the new project ID

    Examples:
        - params with name="Bridge repair"
        - Private: params with name="Internal audit", access="private", allowed_users=["u1"]
    """
    try:
        project = get_hub().store.add_project(
            Project(name=params.name, access=params.access, allowed_users=params.allowed_users)
        )
    except EcHubError as e:
        return f"Error: {e}"
    return f"Project created successfully.\n{project.id}: {project.name} ({project.access.value})"


@mcp.tool(
    name="echub_project_progress",
    annotations=ToolAnnotations(
        title="Project Progress",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def echub_project_progress(params: ProjectProgressInput) -> str:
    """
    Completion per project: done tasks over all tasks, subtasks included.

    Every registered project is listed, including ones with no tasks yet,
    followed by any project name that only appears on tasks.

    Args:
        params: ProjectProgressInput with optional project and response_format

    Returns:
        Progress lines (markdown) or JSON
    """
    try:
        board = get_hub().board
    except EcHubError as e:
        return f"Error: {e}"
    projects = [params.project] if params.project else board.store.project_names()
    progress = [board.progress(p) for p in projects]

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(
            [{**p.model_dump(), "percent": p.percent} for p in progress],
            indent=2,
        )
    return _format_progress_markdown(progress)


@mcp.tool(
    name="echub_system_log",
    annotations=ToolAnnotations(
        title="System Log",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def echub_system_log(params: SystemLogInput) -> str:
    """
    Show the most recent audit entries, newest first.

    Args:
        params: SystemLogInput with limit

    Returns:
        One line per entry
    """
    try:
        entries = get_hub().store.logs[-params.limit :]
    except EcHubError as e:
        return f"Error: {e}"
    if not entries:
        return "No log entries."
    return "\n".join(f"{e.timestamp} [{e.module}] {e.user}: {e.action}" for e in reversed(entries))
