"""Exceptions raised by the EC HUB core.

MCP tools catch ``EcHubError`` and turn it into an ``Error: ...`` string;
everything below the tool layer raises.
"""


class EcHubError(Exception):
    """Base class for all EC HUB errors."""


class InvalidDateError(EcHubError, ValueError):
    """A value could not be read as a calendar date."""

    def __init__(self, value: object) -> None:
        super().__init__(f"invalid date: {value!r}")
        self.value = value


class TaskNotFoundError(EcHubError, KeyError):
    """No task with the given id exists in the store."""

    def __init__(self, task_id: str) -> None:
        super().__init__(task_id)
        self.task_id = task_id

    def __str__(self) -> str:
        return f"Task '{self.task_id}' not found"


class TaskHasSubtasksError(EcHubError):
    """Delete refused because the task still has descendants."""

    def __init__(self, task_id: str, descendant_ids: list[str]) -> None:
        super().__init__(f"Task '{task_id}' has {len(descendant_ids)} subtask(s); delete them first")
        self.task_id = task_id
        self.descendant_ids = descendant_ids


class ConfigError(EcHubError):
    """Configuration file could not be read or validated."""


class DuplicateTaskError(EcHubError):
    """A task with this id is already in the store."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task '{task_id}' already exists")
        self.task_id = task_id


class TaskCycleError(EcHubError):
    """Setting this parent would make a task its own ancestor."""

    def __init__(self, task_id: str, parent_id: str) -> None:
        super().__init__(f"Task '{task_id}' cannot be a subtask of '{parent_id}': that would create a cycle")
        self.task_id = task_id
        self.parent_id = parent_id


class InvalidTaskError(EcHubError, ValueError):
    """An update would leave a task with invalid field values."""


class DuplicateProjectError(EcHubError):
    """A project with this name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Project '{name}' already exists")
        self.name = name


class ProjectNotFoundError(EcHubError, KeyError):
    """No project with the given id exists in the store."""

    def __init__(self, project_id: str) -> None:
        super().__init__(project_id)
        self.project_id = project_id

    def __str__(self) -> str:
        return f"Project '{self.project_id}' not found"
