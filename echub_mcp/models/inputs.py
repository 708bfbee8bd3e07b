"""Input models for EC HUB MCP tools."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from echub_mcp.enums import (
    ActivityStatus,
    ActivityType,
    CalendarFilter,
    CalendarViewMode,
    DeleteStrategy,
    Priority,
    ProjectAccess,
    QuickAddKind,
    ResponseFormat,
    SubtaskPlacement,
    TaskStatus,
)
from echub_mcp.utils.dates import parse_date_key


def _date_key(v: str | None) -> str | None:
    if v is None:
        return None
    parse_date_key(v)
    return v


# ============================================================================
# Calendar Tool Input Models
# ============================================================================


class CalendarViewInput(BaseModel):
    """Input model for rendering the calendar."""

    model_config = ConfigDict(str_strip_whitespace=True)

    view_mode: CalendarViewMode | None = Field(
        default=None, description="'month' or 'week'; omit to keep the current mode"
    )
    reference_date: str | None = Field(
        default=None, description="Jump to the period containing this date (YYYY-MM-DD)"
    )
    view_filter: CalendarFilter | None = Field(
        default=None, description="'all' tasks or only 'mine'; omit to keep the current filter"
    )
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown', 'concise' or 'json'",
    )

    @field_validator("reference_date")
    @classmethod
    def validate_reference_date(cls, v: str | None) -> str | None:
        return _date_key(v)


class CalendarNavigateInput(BaseModel):
    """Input model for stepping the calendar back or forward."""

    offset: int = Field(..., description="Periods to move: months in month view, weeks in week view", ge=-120, le=120)


class WorkingDayInput(BaseModel):
    """Input model for toggling a working day."""

    day: int = Field(..., description="Weekday to toggle, 0=Sunday..6=Saturday", ge=0, le=6)


class QuickAddInput(BaseModel):
    """Input model for creating a task or activity from a calendar day."""

    model_config = ConfigDict(str_strip_whitespace=True)

    kind: QuickAddKind = Field(..., description="'task' or 'activity'")
    date: str = Field(..., description="Day the item is for (YYYY-MM-DD)")
    title: str | None = Field(
        default=None,
        description="Task title or activity subject; when omitted a task draft is left open in the editor",
        max_length=500,
    )
    activity_type: ActivityType | None = Field(default=None, description="Activity type (default: call)")

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        parse_date_key(v)
        return v


class RescheduleInput(BaseModel):
    """Input model for moving a task to another day."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: str = Field(..., description="Task ID to move", min_length=1)
    date: str = Field(..., description="New due date (YYYY-MM-DD)")

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        parse_date_key(v)
        return v


# ============================================================================
# Task Tool Input Models
# ============================================================================


class ListTasksInput(BaseModel):
    """Input model for the task list and Kanban views."""

    model_config = ConfigDict(str_strip_whitespace=True)

    search: str = Field(default="", description="Case-insensitive text matched against title, description, assignee")
    project: str | None = Field(default=None, description="Only tasks of this project")
    mine_only: bool = Field(default=False, description="Only tasks assigned to the current user (ignored with project)")
    placement: SubtaskPlacement | None = Field(
        default=None, description="Kanban only: 'nested' under parent or 'own_column'"
    )
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown', 'concise' or 'json'",
    )


class AddTaskInput(BaseModel):
    """Input model for adding a new task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., description="Task title (required)", min_length=1, max_length=500)
    description: str = Field(default="", description="Longer description", max_length=5000)
    assignee: str | None = Field(default=None, description="Assignee name (default: current user)")
    observer: str | None = Field(default=None, description="Observer name")
    due_date: str = Field(..., description="Due date (YYYY-MM-DD)")
    priority: Priority = Field(default=Priority.MEDIUM, description="high, medium or low")
    project: str | None = Field(default=None, description="Project name (default from config)")
    parent_id: str | None = Field(default=None, description="Parent task ID to create a subtask")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, v: str) -> str:
        parse_date_key(v)
        return v


class UpdateTaskInput(BaseModel):
    """Input model for editing a task; only the fields given are changed."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: str = Field(..., description="Task ID to edit", min_length=1)
    title: str | None = Field(default=None, description="New title", min_length=1, max_length=500)
    description: str | None = Field(default=None, description="New description")
    assignee: str | None = Field(default=None, description="New assignee")
    observer: str | None = Field(default=None, description="New observer")
    due_date: str | None = Field(default=None, description="New due date (YYYY-MM-DD)")
    priority: Priority | None = Field(default=None, description="New priority")
    project: str | None = Field(default=None, description="New project")
    parent_id: str | None = Field(default=None, description="New parent task ID; empty string detaches")

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, v: str | None) -> str | None:
        return _date_key(v)


class SetStatusInput(BaseModel):
    """Input model for changing a task's status."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: str = Field(..., description="Task ID", min_length=1)
    status: TaskStatus = Field(..., description="todo, in_progress, review or done")


class DeleteTaskInput(BaseModel):
    """Input model for deleting a task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: str = Field(..., description="Task ID to delete", min_length=1)
    strategy: DeleteStrategy | None = Field(
        default=None,
        description="cascade_one (children only), cascade_deep, or reject_if_has_descendants; default from config",
    )


class RestoreTaskInput(BaseModel):
    """Input model for restoring a task from the trash."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: str = Field(..., description="ID the task had before deletion", min_length=1)


class ToggleExpandInput(BaseModel):
    """Input model for expanding or collapsing a task's subtasks."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: str = Field(..., description="Root task ID", min_length=1)


class AddActivityInput(BaseModel):
    """Input model for logging a CRM activity."""

    model_config = ConfigDict(str_strip_whitespace=True)

    subject: str = Field(..., description="Activity subject", min_length=1, max_length=500)
    type: ActivityType = Field(default=ActivityType.CALL, description="call, meeting or email")
    date: str = Field(..., description="Date (YYYY-MM-DD)")
    status: ActivityStatus = Field(default=ActivityStatus.PLANNED, description="planned or done")
    related_entity_id: str = Field(default="", description="Deal, company or contact ID")

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        parse_date_key(v)
        return v


class ProjectProgressInput(BaseModel):
    """Input model for project completion summaries."""

    model_config = ConfigDict(str_strip_whitespace=True)

    project: str | None = Field(default=None, description="Project name; omit for every project")
    response_format: ResponseFormat = Field(default=ResponseFormat.MARKDOWN, description="Output format")


class AddProjectInput(BaseModel):
    """Input model for registering a project."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., description="Project name (unique)", min_length=1, max_length=200)
    access: ProjectAccess = Field(default=ProjectAccess.PUBLIC, description="public, private or custom")
    allowed_users: list[str] = Field(
        default_factory=list, description="User IDs that may see a private or custom project"
    )


class SystemLogInput(BaseModel):
    """Input model for reading the audit log."""

    limit: int = Field(default=20, description="Most recent entries to return", ge=1, le=500)
