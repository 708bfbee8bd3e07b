"""Derived calendar models: grid cells and drafts.

None of these are stored; they are rebuilt from the reference date and the
task/activity collections on every render.
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

from echub_mcp.enums import ActivityStatus, ActivityType, CellKind


class DateCell(BaseModel):
    """One calendar grid cell. Blank cells are month-view filler and carry no date."""

    kind: CellKind
    key: str
    date: dt.date | None = None

    @property
    def is_blank(self) -> bool:
        return self.kind == CellKind.BLANK


class MonthGrid(BaseModel):
    """Monday-first month grid: ``blanks`` filler cells, then one cell per day."""

    year: int
    month: int
    blanks: int = Field(ge=0, le=6)
    days: list[DateCell] = Field(default_factory=list)

    @property
    def cells(self) -> list[DateCell]:
        filler = [DateCell(kind=CellKind.BLANK, key=f"blank-{i}") for i in range(self.blanks)]
        return filler + self.days

    @property
    def column_count(self) -> int:
        return 7


class WeekGrid(BaseModel):
    """The Monday..Sunday week around a reference date.

    ``all_days`` is the unfiltered week; ``cells`` and ``headers`` are the
    working-day subset, aligned index for index.
    """

    all_days: list[DateCell]
    cells: list[DateCell]
    headers: list[str]

    @property
    def column_count(self) -> int:
        return len(self.cells)


class ActivityDraft(BaseModel):
    """Pre-filled create-activity form opened from a calendar day cell."""

    date: str
    type: ActivityType = ActivityType.CALL
    status: ActivityStatus = ActivityStatus.PLANNED
    subject: str = ""
