"""Core entity models for EC HUB MCP."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from echub_mcp.enums import ActivityStatus, ActivityType, Priority, ProjectAccess, TaskStatus
from echub_mcp.utils.dates import parse_date_key

DEFAULT_PROJECT = "General"


def _check_date_key(v: str) -> str:
    parse_date_key(v)
    return v.strip()


class Task(BaseModel):
    """A task; ``parent_id`` makes it a subtask of another task.

    Unknown fields are kept so that an in-place update never drops data the
    edit payload did not mention.
    """

    model_config = ConfigDict(extra="allow")

    id: str = ""
    title: str = ""
    description: str = ""
    assignee: str = ""
    observer: str | None = None
    due_date: str
    status: TaskStatus = TaskStatus.TODO
    priority: Priority = Priority.MEDIUM
    project: str = DEFAULT_PROJECT
    parent_id: str | None = None

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, v: str) -> str:
        return _check_date_key(v)

    @field_validator("parent_id")
    @classmethod
    def validate_parent_id(cls, v: str | None) -> str | None:
        # An empty string from a form means "no parent"
        return v or None

    @property
    def is_subtask(self) -> bool:
        return self.parent_id is not None


class Project(BaseModel):
    """A named project tasks are filed under; tasks refer to it by name."""

    id: str = ""
    name: str
    access: ProjectAccess = ProjectAccess.PUBLIC
    allowed_users: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Project name cannot be empty")
        return v.strip()


class CrmActivity(BaseModel):
    """A planned or completed CRM touchpoint."""

    id: str
    type: ActivityType = ActivityType.CALL
    subject: str = ""
    date: str
    status: ActivityStatus = ActivityStatus.PLANNED
    related_entity_id: str = ""

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        return _check_date_key(v)


class CurrentUser(BaseModel):
    """The signed-in user, used only to stamp authorship fields."""

    id: str = "u1"
    name: str = "Admin"
    role: str = "ADMIN"


class SystemLogEntry(BaseModel):
    """One audit line written for every store mutation."""

    id: str
    timestamp: str
    user: str
    action: str
    module: str


class TrashItem(BaseModel):
    """A deleted record kept for restore."""

    id: str
    original_id: str
    collection: str
    data: dict[str, Any] = Field(default_factory=dict)
    deleted_at: str
    deleted_by: str
    display_title: str = ""
