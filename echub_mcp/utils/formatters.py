"""Formatting utilities for tool output."""

from echub_mcp.models.board import KanbanColumn, ProjectProgress, TaskNode
from echub_mcp.models.calendar import DateCell
from echub_mcp.models.task import CrmActivity, Task
from echub_mcp.utils.dates import is_today

STATUS_LABELS = {
    "todo": "To do",
    "in_progress": "In progress",
    "review": "Review",
    "done": "Done",
}


def _format_task_concise(task: Task) -> str:
    """
    Format a single task in concise format.

    Output: "t5: Title (high, due:2023-11-15, proj:Warehouse)"
    """
    title = task.title[:50] if task.title else "Untitled"
    meta = [task.priority.value, f"due:{task.due_date}", f"proj:{task.project}"]
    if task.status.value == "done":
        meta.insert(0, "done")
    return f"{task.id or '?'}: {title} ({', '.join(meta)})"


def _format_tasks_concise(tasks: list[Task], title: str | None = None) -> str:
    if not tasks:
        return "0 tasks"
    header = f"{len(tasks)} task(s)"
    if title:
        header = f"{header} | {title}"
    return "\n".join([header] + [_format_task_concise(t) for t in tasks])


def _format_task_markdown(task: Task, level: int = 3) -> str:
    """Format a single task as markdown."""
    check = "x" if task.status.value == "done" else " "
    lines = [f"{'#' * level} [{check}] [{task.id or 'draft'}] {task.title or 'Untitled'}"]

    details = [
        f"**Status**: {STATUS_LABELS.get(task.status.value, task.status.value)}",
        f"**Priority**: {task.priority.value.capitalize()}",
        f"**Due**: {task.due_date}",
        f"**Project**: {task.project}",
    ]
    if task.assignee:
        details.append(f"**Assignee**: {task.assignee}")
    if task.observer:
        details.append(f"**Observer**: {task.observer}")
    if task.parent_id:
        details.append(f"**Parent**: {task.parent_id}")
    lines.append(" | ".join(details))

    if task.description:
        lines.append(task.description)
    return "\n".join(lines)


def _format_tree_markdown(nodes: list[TaskNode], title: str = "Tasks") -> str:
    """Format the list view; collapsed roots show a subtask count instead of the subtasks."""
    if not nodes:
        return f"# {title}\n\nNo tasks found."

    lines = [f"# {title}", f"*{len(nodes)} task(s)*", ""]
    for node in nodes:
        marker = ""
        if node.has_children:
            marker = "▾ " if node.expanded else "▸ "
        lines.append(f"{marker}{_format_task_markdown(node.task)}")
        if node.has_children and not node.expanded:
            lines.append(f"*{len(node.children)} subtask(s) hidden*")
        for child in node.visible_children:
            lines.append("  - " + _format_task_concise(child))
        lines.append("")
    return "\n".join(lines)


def _format_kanban_markdown(columns: list[KanbanColumn]) -> str:
    lines = ["# Board", ""]
    for column in columns:
        lines.append(f"## {STATUS_LABELS.get(column.status.value, column.status.value)} ({column.count})")
        if not column.cards and not column.loose_subtasks:
            lines.append("_empty_")
        for node in column.cards:
            lines.append("- " + _format_task_concise(node.task))
            if node.has_children and not node.expanded:
                lines.append(f"  - _{len(node.children)} subtask(s)_")
            for child in node.visible_children:
                lines.append("  - ↳ " + _format_task_concise(child))
        for subtask in column.loose_subtasks:
            lines.append(f"- ↳ {_format_task_concise(subtask)} (subtask of {subtask.parent_id})")
        lines.append("")
    return "\n".join(lines)


def _format_calendar_markdown(
    title: str,
    headers: list[str],
    cells: list[DateCell],
    tasks_by_day: dict[str, list[Task]],
    activities_by_day: dict[str, list[CrmActivity]],
) -> str:
    """Render grid cells as a markdown table, one row per week."""
    width = len(headers)
    lines = [f"# {title}", "", "| " + " | ".join(headers) + " |", "|" + "---|" * width]

    row: list[str] = []
    for cell in cells:
        if cell.is_blank or cell.date is None:
            row.append(" ")
        else:
            label = f"**{cell.date.day}**" if not is_today(cell.key) else f"**[{cell.date.day}]**"
            items = [t.title for t in tasks_by_day.get(cell.key, [])]
            items += [f"⚡ {a.subject}" for a in activities_by_day.get(cell.key, [])]
            row.append("<br>".join([label] + items))
        if len(row) == width:
            lines.append("| " + " | ".join(row) + " |")
            row = []
    if row:
        row += [" "] * (width - len(row))
        lines.append("| " + " | ".join(row) + " |")
    return "\n".join(lines)


def _format_progress_markdown(progress: list[ProjectProgress]) -> str:
    if not progress:
        return "# Projects\n\nNo projects found."
    lines = ["# Projects", ""]
    for p in progress:
        lines.append(f"- **{p.project}**: {p.completed}/{p.total} done ({p.percent}%)")
    return "\n".join(lines)
