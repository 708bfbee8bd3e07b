"""Month and week grid construction for the calendar view.

Grids are Monday-first. Working days use 0=Sunday..6=Saturday indices, so
every weekday test here goes through ``js_weekday``.
"""

from collections.abc import Iterable
from datetime import date, datetime

from echub_mcp.enums import CellKind
from echub_mcp.models.calendar import DateCell, MonthGrid, WeekGrid
from echub_mcp.utils.dates import add_days, as_local_date, days_in_month, js_weekday, to_date_key

# Indexed by 0=Sunday weekday numbering; MONDAY_FIRST is the display order
DAY_NAMES_SHORT = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
MONDAY_FIRST = [1, 2, 3, 4, 5, 6, 0]
MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def _day_cell(day: date) -> DateCell:
    key = to_date_key(day)
    return DateCell(kind=CellKind.DAY, key=key, date=day)


def month_offset(first_of_month: date) -> int:
    """Number of leading blanks so day 1 lands under its Monday-first column."""
    weekday = js_weekday(first_of_month)
    return 6 if weekday == 0 else weekday - 1


def build_month_grid(reference: date | datetime | str) -> MonthGrid:
    """
    Build the Monday-first grid for the month containing ``reference``.

    Args:
        reference: Any day in the month (date, datetime or date key)

    Returns:
        MonthGrid with ``blanks`` leading filler cells and one day cell per day
    """
    ref = as_local_date(reference)
    first = date(ref.year, ref.month, 1)
    days = [_day_cell(date(ref.year, ref.month, n)) for n in range(1, days_in_month(ref.year, ref.month) + 1)]
    return MonthGrid(year=ref.year, month=ref.month, blanks=month_offset(first), days=days)


def week_start(reference: date | datetime | str) -> date:
    """The Monday on or before ``reference``."""
    ref = as_local_date(reference)
    weekday = js_weekday(ref)
    return add_days(ref, -weekday + (-6 if weekday == 0 else 1))


def week_headers(working_days: Iterable[int]) -> list[str]:
    """Monday-first day labels restricted to ``working_days``."""
    wanted = set(working_days)
    return [DAY_NAMES_SHORT[d] for d in MONDAY_FIRST if d in wanted]


def build_week_grid(reference: date | datetime | str, working_days: Iterable[int]) -> WeekGrid:
    """
    Build the Monday..Sunday week containing ``reference``.

    The seven unfiltered days are kept in ``all_days``; ``cells`` holds only
    the working days, and ``headers[i]`` always labels ``cells[i]``.

    Args:
        reference: Any day in the week
        working_days: Weekday indices, 0=Sunday..6=Saturday

    Returns:
        WeekGrid
    """
    wanted = set(working_days)
    monday = week_start(reference)
    all_days = [_day_cell(add_days(monday, i)) for i in range(7)]
    cells = [c for c in all_days if c.date is not None and js_weekday(c.date) in wanted]
    headers = [DAY_NAMES_SHORT[js_weekday(c.date)] for c in cells if c.date is not None]
    return WeekGrid(all_days=all_days, cells=cells, headers=headers)


def month_title(reference: date | datetime | str) -> str:
    """Header caption, e.g. "November 2023"."""
    ref = as_local_date(reference)
    return f"{MONTH_NAMES[ref.month - 1]} {ref.year}"
