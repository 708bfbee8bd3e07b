"""Calendar view controller.

Holds the reference date, view mode, working days, the single open
quick-add popover and the create-activity draft. It never edits the task or
activity collections itself: drafts go to the task editor through the
bridge and finished activities go to the store.
"""

from collections.abc import Iterable
from datetime import date, datetime

import structlog

from echub_mcp.bridge import TaskEditBridge
from echub_mcp.enums import ActivityType, CalendarFilter, CalendarViewMode, Priority, QuickAddKind, TaskStatus
from echub_mcp.errors import EcHubError
from echub_mcp.models.calendar import ActivityDraft, DateCell
from echub_mcp.models.task import DEFAULT_PROJECT, CrmActivity, Task
from echub_mcp.store import HubStore, new_id
from echub_mcp.utils.dates import add_days, add_months, as_local_date, parse_date_key
from echub_mcp.views.grid import build_month_grid, build_week_grid, month_title, week_headers

logger = structlog.get_logger()

ALL_DAYS = frozenset(range(7))
MONTH_HEADERS = week_headers(ALL_DAYS)


class CalendarController:
    """State machine behind the month/week calendar."""

    def __init__(
        self,
        store: HubStore,
        bridge: TaskEditBridge,
        reference_date: date | datetime | str | None = None,
        working_days: Iterable[int] = ALL_DAYS,
        default_project: str = DEFAULT_PROJECT,
    ) -> None:
        self.store = store
        self.bridge = bridge
        self.default_project = default_project
        self.reference_date = as_local_date(reference_date or date.today())
        self.view_mode = CalendarViewMode.MONTH
        self.view_filter = CalendarFilter.ALL
        self.working_days: set[int] = set(working_days)
        if not self.working_days:
            raise ValueError("working_days cannot be empty")
        self.open_popover_key: str | None = None
        self.activity_draft: ActivityDraft | None = None

    # ---- navigation ----
    def change_date(self, offset: int) -> date:
        """Step back or forward by months (month view) or weeks (week view)."""
        if self.view_mode == CalendarViewMode.MONTH:
            self.reference_date = add_months(self.reference_date, offset)
        else:
            self.reference_date = add_days(self.reference_date, offset * 7)
        return self.reference_date

    def go_to(self, value: date | datetime | str) -> date:
        self.reference_date = as_local_date(value)
        return self.reference_date

    def set_view_mode(self, mode: CalendarViewMode) -> None:
        self.view_mode = mode

    def set_view_filter(self, view_filter: CalendarFilter) -> None:
        self.view_filter = view_filter

    def toggle_working_day(self, day: int) -> bool:
        """
        Add or remove a weekday (0=Sunday..6=Saturday).

        Returns:
            True if the set changed; removing the last working day is refused
        """
        if not 0 <= day <= 6:
            raise ValueError(f"day must be in 0..6 (0=Sunday), got {day}")
        if day in self.working_days:
            if len(self.working_days) == 1:
                logger.warning("Refusing to remove the last working day", day=day)
                return False
            self.working_days.discard(day)
        else:
            self.working_days.add(day)
        return True

    # ---- popover ----
    def open_popover(self, key: str) -> None:
        parse_date_key(key)
        self.open_popover_key = key

    def close_popover(self) -> None:
        self.open_popover_key = None

    def toggle_popover(self, key: str) -> None:
        if self.open_popover_key == key:
            self.close_popover()
        else:
            self.open_popover(key)

    # ---- rendering ----
    def visible_cells(self) -> list[DateCell]:
        if self.view_mode == CalendarViewMode.MONTH:
            return build_month_grid(self.reference_date).cells
        return build_week_grid(self.reference_date, self.working_days).cells

    def headers(self) -> list[str]:
        if self.view_mode == CalendarViewMode.MONTH:
            return list(MONTH_HEADERS)
        return week_headers(self.working_days)

    def column_count(self) -> int:
        return len(self.headers())

    def title(self) -> str:
        return month_title(self.reference_date)

    def bucket_tasks(self, tasks: Iterable[Task] | None = None) -> dict[str, list[Task]]:
        """Group tasks by due date key, honouring the all/mine filter. Done tasks are kept."""
        if tasks is None:
            tasks = self.store.list_tasks()
        me = self.store.current_user.name
        buckets: dict[str, list[Task]] = {}
        for task in tasks:
            if self.view_filter == CalendarFilter.MINE and task.assignee != me:
                continue
            buckets.setdefault(task.due_date, []).append(task)
        return buckets

    def bucket_activities(self, activities: Iterable[CrmActivity] | None = None) -> dict[str, list[CrmActivity]]:
        if activities is None:
            activities = self.store.list_activities()
        buckets: dict[str, list[CrmActivity]] = {}
        for activity in activities:
            buckets.setdefault(activity.date, []).append(activity)
        return buckets

    # ---- quick add ----
    def task_draft(self, key: str) -> Task:
        return Task(
            id="",
            due_date=key,
            status=TaskStatus.TODO,
            priority=Priority.MEDIUM,
            assignee=self.store.current_user.name,
            project=self.default_project,
        )

    async def quick_add(self, kind: QuickAddKind, key: str) -> Task | ActivityDraft:
        """
        Start creating something on a day cell.

        TASK sends a draft to the task editor; ACTIVITY opens the
        create-activity form. Either way the popover closes.
        """
        parse_date_key(key)
        self.close_popover()
        if kind == QuickAddKind.TASK:
            draft = self.task_draft(key)
            await self.bridge.request_edit(draft)
            return draft
        self.activity_draft = ActivityDraft(date=key)
        return self.activity_draft

    def submit_activity(
        self,
        subject: str | None = None,
        activity_type: ActivityType | None = None,
        activity_date: str | None = None,
    ) -> CrmActivity:
        """Turn the open activity draft into a CrmActivity and hand it to the store."""
        if self.activity_draft is None:
            raise EcHubError("No activity draft is open")
        draft = self.activity_draft
        activity = CrmActivity(
            id=new_id("act"),
            type=activity_type or draft.type,
            subject=subject or draft.subject or "New activity",
            date=activity_date or draft.date,
            status=draft.status,
        )
        self.store.add_activity(activity)
        self.activity_draft = None
        return activity

    def cancel_activity(self) -> None:
        self.activity_draft = None

    def reschedule_task(self, task_id: str, key: str) -> Task:
        """Drop a task on another day; no store write when the day is unchanged."""
        parse_date_key(key)
        task = self.store.get_task(task_id)
        if task.due_date == key:
            return task
        return self.store.update_task(task_id, due_date=key)
