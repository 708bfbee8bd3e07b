"""Project a flat task list into the parent/subtask shapes the board renders.

Only one level is projected: roots are tasks with no ``parent_id`` and
their children are the tasks pointing at them. The same filter decides both,
so a subtask shows under its root only when it matches on its own.
"""

from collections.abc import Collection, Iterable

from echub_mcp.enums import SubtaskPlacement, TaskStatus
from echub_mcp.models.board import KanbanColumn, ProjectProgress, TaskFilter, TaskNode
from echub_mcp.models.task import Task
from echub_mcp.utils.listing import filter_by_substring

SEARCH_FIELDS = ("title", "description", "assignee")


def apply_filter(tasks: Iterable[Task], task_filter: TaskFilter) -> list[Task]:
    """Tasks matching search text, active project and the "mine" switch."""
    matched = filter_by_substring(tasks, task_filter.search, SEARCH_FIELDS)
    if task_filter.active_project:
        matched = [t for t in matched if t.project == task_filter.active_project]
    elif task_filter.mine_only:
        matched = [t for t in matched if t.assignee == task_filter.current_user]
    return matched


def project_hierarchy(
    tasks: Iterable[Task],
    task_filter: TaskFilter | None = None,
    expanded: Collection[str] = (),
) -> list[TaskNode]:
    """
    Build the list view: filtered roots, each with its filtered children.

    Args:
        tasks: Full flat collection
        task_filter: Context filter (defaults to match-all)
        expanded: Ids of roots whose children are disclosed

    Returns:
        One TaskNode per matching root, in collection order
    """
    matched = apply_filter(tasks, task_filter or TaskFilter())
    by_parent: dict[str, list[Task]] = {}
    for task in matched:
        if task.parent_id is not None:
            by_parent.setdefault(task.parent_id, []).append(task)

    return [
        TaskNode(task=task, children=by_parent.get(task.id, []), expanded=task.id in expanded)
        for task in matched
        if task.parent_id is None
    ]


def project_kanban(
    tasks: Iterable[Task],
    task_filter: TaskFilter | None = None,
    expanded: Collection[str] = (),
    placement: SubtaskPlacement = SubtaskPlacement.NESTED,
) -> list[KanbanColumn]:
    """
    Bucket roots into one column per status.

    With ``NESTED`` placement subtasks only ride along under their root card,
    whatever their own status. ``OWN_COLUMN`` additionally lists each subtask
    whose root is showing in the column of its own status.
    """
    nodes = project_hierarchy(tasks, task_filter, expanded)
    columns = {status: KanbanColumn(status=status) for status in TaskStatus}
    for node in nodes:
        columns[node.task.status].cards.append(node)
        if placement == SubtaskPlacement.OWN_COLUMN:
            for child in node.children:
                columns[child.status].loose_subtasks.append(child)
    return list(columns.values())


def project_progress(tasks: Iterable[Task], project: str) -> ProjectProgress:
    """Done/total counts for one project, subtasks included."""
    in_project = [t for t in tasks if t.project == project]
    done = sum(1 for t in in_project if t.status == TaskStatus.DONE)
    return ProjectProgress(project=project, total=len(in_project), completed=done)
