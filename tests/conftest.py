"""Pytest configuration and fixtures for echub-mcp tests."""

from datetime import date

import pytest

from echub_mcp.config import HubSettings
from echub_mcp.hub import Hub, reset_hub
from echub_mcp.models.task import CurrentUser, Task
from echub_mcp.store import HubStore


@pytest.fixture
def settings():
    """Default settings without seed data."""
    return HubSettings(seed_fixtures=False, current_user=CurrentUser(id="u1", name="Admin", role="ADMIN"))


@pytest.fixture
def nested_tasks():
    """t1 -> t1-1 -> t1-1-1, plus an unrelated root t2."""
    return [
        Task(id="t1", title="Parent", due_date="2023-11-15", assignee="Admin", project="Warehouse"),
        Task(id="t1-1", title="Child", due_date="2023-11-16", assignee="Admin", project="Warehouse", parent_id="t1"),
        Task(
            id="t1-1-1",
            title="Grandchild",
            due_date="2023-11-17",
            assignee="Ivan",
            project="Warehouse",
            parent_id="t1-1",
        ),
        Task(id="t2", title="Other root", due_date="2023-11-20", assignee="Ivan", project="Office"),
    ]


@pytest.fixture
def store(nested_tasks):
    """Store holding the nested tasks."""
    return HubStore(current_user=CurrentUser(name="Admin"), tasks=nested_tasks)


@pytest.fixture
def hub(settings, nested_tasks):
    """Process-wide hub used by the MCP tools, pinned to November 2023."""
    instance = Hub(settings, reference_date=date(2023, 11, 15))
    for task in nested_tasks:
        instance.store.add_task(task)
    reset_hub(instance)
    yield instance
    reset_hub(None)
