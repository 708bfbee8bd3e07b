"""Static seed data loaded into a fresh store."""

from echub_mcp.enums import ActivityStatus, ActivityType, Priority, ProjectAccess, TaskStatus
from echub_mcp.models.task import CrmActivity, Project, Task

SEED_PROJECTS = [
    Project(id="p1", name="Warehouse"),
    Project(id="p2", name="Office fit-out"),
    Project(id="p3", name="Internal", access=ProjectAccess.PRIVATE, allowed_users=["u1"]),
    Project(id="p4", name="General"),
]

SEED_TASKS = [
    Task(
        id="t1",
        title="Prepare estimate for warehouse project",
        description="Collect supplier quotes and build the cost sheet",
        assignee="Admin",
        due_date="2023-11-15",
        status=TaskStatus.IN_PROGRESS,
        priority=Priority.HIGH,
        project="Warehouse",
    ),
    Task(
        id="t1-1",
        title="Request steel quotes",
        description="At least three suppliers",
        assignee="Admin",
        due_date="2023-11-13",
        status=TaskStatus.DONE,
        priority=Priority.MEDIUM,
        project="Warehouse",
        parent_id="t1",
    ),
    Task(
        id="t1-2",
        title="Check concrete prices",
        assignee="Ivan Petrov",
        due_date="2023-11-14",
        status=TaskStatus.TODO,
        priority=Priority.LOW,
        project="Warehouse",
        parent_id="t1",
    ),
    Task(
        id="t2",
        title="Review DWG drawings",
        description="Structural section, revision B",
        assignee="Ivan Petrov",
        observer="Admin",
        due_date="2023-11-20",
        status=TaskStatus.REVIEW,
        priority=Priority.MEDIUM,
        project="Office fit-out",
    ),
    Task(
        id="t3",
        title="Update knowledge base article on onboarding",
        assignee="Admin",
        due_date="2023-11-30",
        status=TaskStatus.TODO,
        priority=Priority.LOW,
        project="General",
    ),
]

SEED_ACTIVITIES = [
    CrmActivity(
        id="act1",
        type=ActivityType.CALL,
        subject="Follow up on warehouse estimate",
        date="2023-11-16",
        status=ActivityStatus.PLANNED,
        related_entity_id="d1",
    ),
    CrmActivity(
        id="act2",
        type=ActivityType.MEETING,
        subject="Site visit",
        date="2023-11-08",
        status=ActivityStatus.DONE,
        related_entity_id="c1",
    ),
]


def seed_tasks() -> list[Task]:
    return [t.model_copy() for t in SEED_TASKS]


def seed_projects() -> list[Project]:
    return [p.model_copy(deep=True) for p in SEED_PROJECTS]


def seed_activities() -> list[CrmActivity]:
    return [a.model_copy() for a in SEED_ACTIVITIES]
