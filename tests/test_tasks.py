"""Tests for the task store, hierarchy projection, task board and list helpers."""

import pytest

from echub_mcp import (
    DeleteStrategy,
    DuplicateTaskError,
    EcHubError,
    SubtaskPlacement,
    Task,
    TaskCycleError,
    TaskFilter,
    TaskHasSubtasksError,
    TaskNotFoundError,
    TaskStatus,
    filter_by_substring,
    project_hierarchy,
    project_kanban,
    sort_by_key,
)
from echub_mcp.enums import ProjectAccess
from echub_mcp.errors import DuplicateProjectError, InvalidTaskError, ProjectNotFoundError
from echub_mcp.models.task import CrmActivity, Project
from echub_mcp.views.board import TaskBoard
from echub_mcp.views.hierarchy import apply_filter, project_progress


def _ids(tasks):
    return [t.id for t in tasks]


# ============================================================================
# Store: Delete Strategies
# ============================================================================


class TestDeleteTask:
    """Tests for HubStore.delete_task."""

    def test_cascade_one_leaves_grandchild_orphaned(self, store):
        removed = store.delete_task("t1")
        assert removed == ["t1", "t1-1"]
        assert _ids(store.list_tasks()) == ["t1-1-1", "t2"]
        orphan = store.get_task("t1-1-1")
        assert orphan.parent_id == "t1-1"
        with pytest.raises(TaskNotFoundError):
            store.get_task("t1-1")

    def test_cascade_one_is_the_default(self, store):
        assert store.delete_strategy == DeleteStrategy.CASCADE_ONE

    def test_cascade_deep_removes_branch(self, store):
        removed = store.delete_task("t1", DeleteStrategy.CASCADE_DEEP)
        assert removed == ["t1", "t1-1", "t1-1-1"]
        assert _ids(store.list_tasks()) == ["t2"]

    def test_reject_if_has_descendants(self, store):
        with pytest.raises(TaskHasSubtasksError) as exc_info:
            store.delete_task("t1", DeleteStrategy.REJECT_IF_HAS_DESCENDANTS)
        assert exc_info.value.descendant_ids == ["t1-1", "t1-1-1"]
        assert len(store.list_tasks()) == 4
        assert store.trash == []

    def test_reject_allows_leaf(self, store):
        assert store.delete_task("t2", DeleteStrategy.REJECT_IF_HAS_DESCENDANTS) == ["t2"]

    def test_delete_missing_task(self, store):
        with pytest.raises(TaskNotFoundError, match="nope"):
            store.delete_task("nope")

    def test_deleted_tasks_go_to_trash(self, store):
        store.delete_task("t1")
        trash = store.trash
        assert [t.original_id for t in trash] == ["t1", "t1-1"]
        assert trash[0].collection == "tasks"
        assert trash[0].deleted_by == "Admin"
        assert trash[0].display_title == "Parent"
        assert trash[0].data["due_date"] == "2023-11-15"

    def test_descendants_of(self, store):
        assert _ids(store.descendants_of("t1")) == ["t1-1", "t1-1-1"]
        assert store.descendants_of("t2") == []


# ============================================================================
# Store: Add, Update, Restore
# ============================================================================


class TestStoreMutations:
    """Tests for add_task, update_task, update_task_status and restore_task."""

    def test_add_generates_id(self, store):
        task = store.add_task(Task(title="New", due_date="2023-11-21"))
        assert task.id.startswith("t")
        assert len(task.id) > 1
        assert store.get_task(task.id).title == "New"

    def test_add_duplicate_id(self, store):
        with pytest.raises(DuplicateTaskError):
            store.add_task(Task(id="t2", title="Again", due_date="2023-11-21"))

    def test_update_in_place_keeps_position_and_fields(self, store):
        before = _ids(store.list_tasks())
        updated = store.update_task("t1-1", title="Renamed")
        assert _ids(store.list_tasks()) == before
        assert updated.title == "Renamed"
        assert updated.parent_id == "t1"
        assert updated.due_date == "2023-11-16"
        assert updated.project == "Warehouse"

    def test_update_keeps_unknown_fields(self):
        from echub_mcp.store import HubStore

        store = HubStore(tasks=[Task(id="x", title="X", due_date="2023-11-01", crm_deal="d7")])
        updated = store.update_task("x", title="Y")
        assert updated.model_extra["crm_deal"] == "d7"

    def test_update_never_changes_id(self, store):
        updated = store.update_task("t2", id="zzz", title="Still t2")
        assert updated.id == "t2"
        with pytest.raises(TaskNotFoundError):
            store.get_task("zzz")

    def test_update_validates_date(self, store):
        with pytest.raises(ValueError):
            store.update_task("t2", due_date="2023-02-30")
        assert store.get_task("t2").due_date == "2023-11-20"

    def test_invalid_update_raises_hub_error(self, store):
        with pytest.raises(InvalidTaskError) as exc_info:
            store.update_task("t2", title=None)
        assert isinstance(exc_info.value, EcHubError)
        assert store.get_task("t2").title == "Other root"

    def test_update_empty_parent_detaches(self, store):
        assert store.update_task("t1-1", parent_id="").parent_id is None

    def test_update_missing_task(self, store):
        with pytest.raises(TaskNotFoundError) as exc_info:
            store.update_task("nope", title="x")
        assert str(exc_info.value) == "Task 'nope' not found"
        assert isinstance(exc_info.value, KeyError)

    def test_self_parent_rejected(self, store):
        with pytest.raises(TaskCycleError):
            store.update_task("t2", parent_id="t2")

    def test_cycle_through_descendant_rejected(self, store):
        with pytest.raises(TaskCycleError):
            store.update_task("t1", parent_id="t1-1-1")
        assert store.get_task("t1").parent_id is None

    def test_status_change_keeps_other_fields(self, store):
        task = store.update_task_status("t1-1", TaskStatus.DONE)
        assert task.status == TaskStatus.DONE
        assert task.title == "Child"
        assert task.parent_id == "t1"

    def test_status_change_logged_once(self, store):
        store.update_task_status("t2", TaskStatus.REVIEW)
        assert [e.action for e in store.logs] == ["Task status changed to review"]

    def test_mutations_are_logged(self, store):
        store.add_task(Task(id="t9", title="Logged", due_date="2023-11-21"))
        store.add_activity(CrmActivity(id="a1", subject="Call", date="2023-11-21"))
        logs = store.logs
        assert logs[0].action == "Created task: Logged"
        assert logs[0].module == "PROJECTS"
        assert logs[0].user == "Admin"
        assert logs[1].module == "CRM"

    def test_restore(self, store):
        store.delete_task("t2")
        restored = store.restore_task("t2")
        assert restored.title == "Other root"
        assert store.get_task("t2").project == "Office"
        assert store.trash == []

    def test_restore_not_in_trash(self, store):
        with pytest.raises(EcHubError, match="not in the trash"):
            store.restore_task("t2")

    def test_restore_when_id_is_live_again(self, store):
        store.delete_task("t2")
        store.add_task(Task(id="t2", title="Replacement", due_date="2023-11-22"))
        with pytest.raises(DuplicateTaskError):
            store.restore_task("t2")


# ============================================================================
# Hierarchy Projection
# ============================================================================


FILTERS = [
    TaskFilter(),
    TaskFilter(search="child"),
    TaskFilter(search="parent"),
    TaskFilter(search="ivan"),
    TaskFilter(mine_only=True, current_user="Admin"),
    TaskFilter(mine_only=True, current_user="Ivan"),
    TaskFilter(active_project="Warehouse"),
    TaskFilter(active_project="Warehouse", mine_only=True, current_user="Ivan"),
]


class TestProjectHierarchy:
    """Tests for project_hierarchy and project_kanban."""

    def test_roots_and_direct_children(self, nested_tasks):
        nodes = project_hierarchy(nested_tasks)
        assert [n.task.id for n in nodes] == ["t1", "t2"]
        assert _ids(nodes[0].children) == ["t1-1"]
        assert nodes[1].children == []
        assert not nodes[1].has_children

    def test_grandchildren_not_projected(self, nested_tasks):
        shown = set()
        for node in project_hierarchy(nested_tasks, expanded={"t1"}):
            shown.add(node.task.id)
            shown.update(_ids(node.visible_children))
        assert "t1-1-1" not in shown

    def test_children_hidden_until_expanded(self, nested_tasks):
        collapsed = project_hierarchy(nested_tasks)[0]
        assert collapsed.visible_children == []
        assert collapsed.has_children
        expanded = project_hierarchy(nested_tasks, expanded={"t1"})[0]
        assert _ids(expanded.visible_children) == ["t1-1"]

    def test_filter_hides_root_and_its_children(self, nested_tasks):
        # Only the child matches; its root does not, so nothing is shown
        assert project_hierarchy(nested_tasks, TaskFilter(search="child")) == []

    def test_filter_applies_to_children(self, nested_tasks):
        nodes = project_hierarchy(nested_tasks, TaskFilter(search="parent"))
        assert [n.task.id for n in nodes] == ["t1"]
        assert nodes[0].children == []

    def test_active_project_wins_over_mine(self, nested_tasks):
        f = TaskFilter(active_project="Warehouse", mine_only=True, current_user="Ivan")
        assert [n.task.id for n in project_hierarchy(nested_tasks, f)] == ["t1"]

    def test_mine_only(self, nested_tasks):
        f = TaskFilter(mine_only=True, current_user="Ivan")
        assert [n.task.id for n in project_hierarchy(nested_tasks, f)] == ["t2"]

    @pytest.mark.parametrize("task_filter", FILTERS)
    def test_every_shown_task_matches_filter(self, nested_tasks, task_filter):
        matching = set(_ids(apply_filter(nested_tasks, task_filter)))
        nodes = project_hierarchy(nested_tasks, task_filter, expanded={"t1", "t2"})
        for node in nodes:
            assert node.task.parent_id is None
            assert node.task.id in matching
            for child in node.visible_children:
                assert child.id in matching
                assert child.parent_id == node.task.id

        # And the other way round: every matching root and every matching
        # child of a shown, expanded root is present
        shown_roots = {n.task.id: n for n in nodes}
        for task in nested_tasks:
            if task.id not in matching:
                continue
            if task.parent_id is None:
                assert task.id in shown_roots
            elif task.parent_id in shown_roots:
                assert task.id in _ids(shown_roots[task.parent_id].visible_children)

    def test_matching_child_shown_under_expanded_root(self, nested_tasks):
        nodes = project_hierarchy(nested_tasks, TaskFilter(search="Admin"), expanded={"t1"})
        assert [n.task.id for n in nodes] == ["t1"]
        assert _ids(nodes[0].visible_children) == ["t1-1"]

    def test_input_not_mutated(self, nested_tasks):
        snapshot = [t.model_dump() for t in nested_tasks]
        project_hierarchy(nested_tasks, TaskFilter(search="a"), expanded={"t1"})
        assert [t.model_dump() for t in nested_tasks] == snapshot

    def test_kanban_nested(self, nested_tasks):
        tasks = [
            t.model_copy(update={"status": TaskStatus.DONE}) if t.id == "t1-1" else t for t in nested_tasks
        ]
        columns = project_kanban(tasks)
        assert [c.status for c in columns] == list(TaskStatus)
        by_status = {c.status: c for c in columns}
        assert [n.task.id for n in by_status[TaskStatus.TODO].cards] == ["t1", "t2"]
        assert by_status[TaskStatus.DONE].cards == []
        assert by_status[TaskStatus.DONE].loose_subtasks == []
        assert _ids(by_status[TaskStatus.TODO].cards[0].children) == ["t1-1"]

    def test_kanban_own_column(self, nested_tasks):
        tasks = [
            t.model_copy(update={"status": TaskStatus.DONE}) if t.id == "t1-1" else t for t in nested_tasks
        ]
        columns = {c.status: c for c in project_kanban(tasks, placement=SubtaskPlacement.OWN_COLUMN)}
        assert _ids(columns[TaskStatus.DONE].loose_subtasks) == ["t1-1"]
        assert columns[TaskStatus.DONE].count == 0

    def test_project_progress(self, nested_tasks):
        tasks = [
            t.model_copy(update={"status": TaskStatus.DONE}) if t.id == "t1-1" else t for t in nested_tasks
        ]
        progress = project_progress(tasks, "Warehouse")
        assert (progress.total, progress.completed, progress.percent) == (3, 1, 33)
        assert project_progress(tasks, "Nothing").percent == 0



# ============================================================================
# Store: Projects
# ============================================================================


class TestProjects:
    """Tests for the project registry in HubStore."""

    def test_project_names_from_tasks_only(self, store):
        assert store.list_projects() == []
        assert store.project_names() == ["Warehouse", "Office"]

    def test_add_project_without_tasks(self, store):
        project = store.add_project(Project(name="  Bridge repair "))
        assert project.id.startswith("p")
        assert project.name == "Bridge repair"
        assert project.access == ProjectAccess.PUBLIC
        assert store.list_projects() == [project]
        # Registered projects come first, task-only names follow
        assert store.project_names() == ["Bridge repair", "Warehouse", "Office"]

    def test_add_project_logged(self, store):
        store.add_project(Project(name="Bridge repair"))
        entry = store.logs[-1]
        assert entry.action == "Created project: Bridge repair"
        assert entry.module == "PROJECTS"

    def test_duplicate_project_name(self, store):
        store.add_project(Project(name="Office"))
        with pytest.raises(DuplicateProjectError):
            store.add_project(Project(name="Office"))

    def test_empty_project_name(self):
        with pytest.raises(ValueError):
            Project(name="   ")

    def test_update_project_renames_tasks(self, store):
        project = store.add_project(Project(id="p1", name="Warehouse"))
        updated = store.update_project(project.id, name="Warehouse B", access=ProjectAccess.PRIVATE)
        assert updated.id == "p1"
        assert updated.access == ProjectAccess.PRIVATE
        assert {t.project for t in store.list_tasks() if t.id.startswith("t1")} == {"Warehouse B"}
        assert store.get_task("t2").project == "Office"
        assert store.logs[-1].action == "Updated project: Warehouse B"

    def test_update_project_name_clash(self, store):
        store.add_project(Project(id="p1", name="Warehouse"))
        store.add_project(Project(id="p2", name="Office"))
        with pytest.raises(DuplicateProjectError):
            store.update_project("p1", name="Office")

    def test_update_missing_project(self, store):
        with pytest.raises(ProjectNotFoundError):
            store.update_project("nope", name="x")


# ============================================================================
# Task Board
# ============================================================================


class TestTaskBoard:
    """Tests for TaskBoard display state and the editor draft."""

    def test_toggle_expand(self, store):
        board = TaskBoard(store)
        assert board.toggle_expand("t1") is True
        assert board.tree()[0].expanded
        assert board.toggle_expand("t1") is False
        assert not board.tree()[0].expanded

    def test_tree_reads_store_every_time(self, store):
        board = TaskBoard(store)
        store.add_task(Task(id="t3", title="Fresh", due_date="2023-11-22"))
        assert [n.task.id for n in board.tree()] == ["t1", "t2", "t3"]

    def test_default_filter_uses_current_user(self, store):
        board = TaskBoard(store)
        board.set_filter(mine_only=True)
        assert [n.task.id for n in board.tree()] == ["t1"]

    def test_save_existing_keeps_status_and_position(self, store):
        store.update_task_status("t2", TaskStatus.REVIEW)
        board = TaskBoard(store)
        board.trigger_edit(store.get_task("t2"))
        board.update_draft(title="Renamed", status=TaskStatus.TODO)
        saved = board.save_draft()
        assert saved.title == "Renamed"
        assert saved.status == TaskStatus.REVIEW
        assert _ids(store.list_tasks()) == ["t1", "t1-1", "t1-1-1", "t2"]
        assert board.editing is None

    def test_save_new_subtask(self, store):
        board = TaskBoard(store)
        board.open_new(parent_id="t1")
        saved = board.save_draft()
        assert saved.id
        assert saved.title == "New task"
        assert saved.parent_id == "t1"
        assert saved.project == "General"
        assert saved.status == TaskStatus.TODO

    def test_open_new_uses_active_project(self, store):
        board = TaskBoard(store)
        board.set_filter(active_project="Office")
        assert board.open_new().project == "Office"

    def test_update_draft_without_editor(self, store):
        with pytest.raises(EcHubError):
            TaskBoard(store).update_draft(title="x")

    def test_save_without_editor(self, store):
        with pytest.raises(EcHubError):
            TaskBoard(store).save_draft()

    def test_unmount_clears_display_state(self, store):
        from echub_mcp import EditRequestChannel

        channel = EditRequestChannel()
        board = TaskBoard(store)
        board.mount(channel)
        assert channel.handler == board.trigger_edit
        board.toggle_expand("t1")
        board.open_new()
        board.unmount()
        assert channel.handler is None
        assert board.expanded == set()
        assert board.editing is None
        assert not board.is_mounted


# ============================================================================
# List Helpers
# ============================================================================


class TestListHelpers:
    """Tests for filter_by_substring and sort_by_key."""

    ROWS = [
        {"name": "Beta", "amount": 10},
        {"name": "alpha", "amount": 9},
        {"name": "Gamma"},
        {"name": "beta two", "amount": 10},
    ]

    def test_filter_case_insensitive(self):
        assert [r["name"] for r in filter_by_substring(self.ROWS, "BETA", ["name"])] == ["Beta", "beta two"]

    def test_filter_empty_query_returns_all(self):
        result = filter_by_substring(self.ROWS, "", ["name"])
        assert result == self.ROWS
        assert result is not self.ROWS

    def test_filter_on_models_and_enums(self, nested_tasks):
        assert _ids(filter_by_substring(nested_tasks, "ware", ["project"])) == ["t1", "t1-1", "t1-1-1"]
        assert len(filter_by_substring(nested_tasks, "todo", ["status"])) == 4

    def test_filter_query_not_trimmed(self):
        assert [r["name"] for r in filter_by_substring(self.ROWS, " ", ["name"])] == ["beta two"]

    def test_filter_missing_field_never_matches(self):
        assert filter_by_substring(self.ROWS, "1", ["missing"]) == []

    def test_sort_numbers_numerically(self):
        result = sort_by_key(self.ROWS, "amount")
        assert [r["name"] for r in result] == ["alpha", "Beta", "beta two", "Gamma"]

    def test_sort_is_stable_both_directions(self):
        desc = sort_by_key(self.ROWS, "amount", "desc")
        assert [r["name"] for r in desc] == ["Gamma", "Beta", "beta two", "alpha"]

    def test_sort_missing_as_empty_string(self):
        rows = [{"k": "b"}, {}, {"k": "a"}]
        assert sort_by_key(rows, "k") == [{}, {"k": "a"}, {"k": "b"}]

    def test_sort_does_not_mutate(self):
        rows = list(self.ROWS)
        sort_by_key(rows, "name", "desc")
        assert rows == self.ROWS

    def test_sort_bad_direction(self):
        with pytest.raises(ValueError):
            sort_by_key(self.ROWS, "name", "up")
