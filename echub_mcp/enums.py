"""Enums for EC HUB MCP."""

from enum import Enum


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    CONCISE = "concise"  # Minimal output for chaining
    MARKDOWN = "markdown"  # Human-readable (default)
    JSON = "json"  # Machine-readable with all fields


class TaskStatus(str, Enum):
    """Task status; declaration order is the Kanban column order."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    DONE = "done"


class Priority(str, Enum):
    """Task priority levels."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ActivityType(str, Enum):
    """CRM activity kinds."""

    CALL = "call"
    MEETING = "meeting"
    EMAIL = "email"


class ActivityStatus(str, Enum):
    """CRM activity status."""

    PLANNED = "planned"
    DONE = "done"


class ModuleType(str, Enum):
    """Top-level application modules the navigator can switch to."""

    HOME = "home"
    CRM = "crm"
    PROJECTS = "projects"
    CALENDAR = "calendar"
    DOCUMENTS = "documents"
    KNOWLEDGE = "knowledge"
    SETTINGS = "settings"


class CalendarViewMode(str, Enum):
    """Calendar grid mode."""

    MONTH = "month"
    WEEK = "week"


class CalendarFilter(str, Enum):
    """Whose tasks the calendar shows."""

    ALL = "all"
    MINE = "mine"


class QuickAddKind(str, Enum):
    """What a calendar day-cell quick-add creates."""

    TASK = "task"
    ACTIVITY = "activity"


class BoardViewMode(str, Enum):
    """Task board rendering mode."""

    LIST = "list"
    KANBAN = "kanban"


class CellKind(str, Enum):
    """Calendar grid cell kind."""

    BLANK = "blank"
    DAY = "day"


class DeleteStrategy(str, Enum):
    """How deleting a task treats its descendants."""

    CASCADE_ONE = "cascade_one"  # direct children only; grandchildren are orphaned
    CASCADE_DEEP = "cascade_deep"
    REJECT_IF_HAS_DESCENDANTS = "reject_if_has_descendants"


class SubtaskPlacement(str, Enum):
    """Where subtasks show up on the Kanban board."""

    NESTED = "nested"  # under the parent card, regardless of own status
    OWN_COLUMN = "own_column"


class ProjectAccess(str, Enum):
    """Who can see a project's tasks."""

    PUBLIC = "public"
    PRIVATE = "private"
    CUSTOM = "custom"
