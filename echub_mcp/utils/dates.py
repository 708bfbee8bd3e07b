"""Local calendar-date helpers.

Every date the calendar and the task board exchange is a ``YYYY-MM-DD`` key
for the *local* calendar day. Aware datetimes are converted to the host's
local zone before the day is read, so a moment that is "midnight local
time" never slides to the previous day the way a UTC serialisation would.
"""

import calendar
from datetime import date, datetime, timedelta

from echub_mcp.errors import InvalidDateError

DATE_KEY_FORMAT = "%Y-%m-%d"


def to_date_key(value: date | datetime) -> str:
    """
    Return the local ``YYYY-MM-DD`` key for a date or datetime.

    Args:
        value: ``date``, naive ``datetime`` (read as local wall-clock) or
            aware ``datetime`` (converted to local time first)

    Returns:
        Date key string

    Raises:
        InvalidDateError: If value is not a date or datetime
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None and value.utcoffset() is not None:
            value = value.astimezone()
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    raise InvalidDateError(value)


def parse_date_key(key: str) -> date:
    """Parse a ``YYYY-MM-DD`` key back into a date."""
    if not isinstance(key, str):
        raise InvalidDateError(key)
    try:
        return datetime.strptime(key.strip(), DATE_KEY_FORMAT).date()
    except ValueError as e:
        raise InvalidDateError(key) from e


def as_local_date(value: date | datetime | str) -> date:
    """Coerce a date, datetime or date key to a local calendar date."""
    if isinstance(value, str):
        return parse_date_key(value)
    return parse_date_key(to_date_key(value))


def js_weekday(day: date) -> int:
    """Weekday with 0=Sunday .. 6=Saturday numbering, as stored in working-day sets."""
    return (day.weekday() + 1) % 7


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(day: date, offset: int) -> date:
    """Shift by whole months; the result is always the 1st so short months never roll over."""
    index = day.year * 12 + (day.month - 1) + offset
    return date(index // 12, index % 12 + 1, 1)


def add_days(day: date, offset: int) -> date:
    return day + timedelta(days=offset)


def today_key() -> str:
    return to_date_key(datetime.now())


def is_today(key: str) -> bool:
    return key == today_key()
