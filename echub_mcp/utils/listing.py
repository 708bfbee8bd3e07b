"""Generic list filtering and sorting shared by the CRM, task and document views."""

from collections.abc import Iterable, Sequence
from typing import Any, TypeVar

T = TypeVar("T")


def _field_value(item: Any, field: str) -> Any:
    if isinstance(item, dict):
        return item.get(field)
    return getattr(item, field, None)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if hasattr(value, "value") and isinstance(value.value, str):
        return value.value  # str enums
    return str(value)


def filter_by_substring(items: Iterable[T], query: str | None, fields: Sequence[str]) -> list[T]:
    """
    Keep items where any of ``fields`` contains ``query``, case-insensitively.

    Args:
        items: Models, dicts or plain objects
        query: Substring to look for, used as given; empty or None matches everything
        fields: Names of the string fields to search

    Returns:
        New list, input order preserved
    """
    needle = (query or "").lower()
    if not needle:
        return list(items)
    return [item for item in items if any(needle in _as_text(_field_value(item, f)).lower() for f in fields)]


def _sort_key(value: Any) -> tuple[int, Any]:
    # Numbers sort among themselves ahead of text so 9 < 10 holds
    if isinstance(value, bool):
        return (1, str(value))
    if isinstance(value, (int, float)):
        return (0, value)
    return (1, _as_text(value))


def sort_by_key(items: Iterable[T], key: str, direction: str = "asc") -> list[T]:
    """
    Stable sort by one field; missing values sort as the empty string.

    Args:
        items: Models, dicts or plain objects (not mutated)
        key: Field name
        direction: "asc" or "desc"

    Returns:
        New sorted list
    """
    if direction not in ("asc", "desc"):
        raise ValueError(f"direction must be 'asc' or 'desc', got {direction!r}")
    return sorted(items, key=lambda item: _sort_key(_field_value(item, key)), reverse=direction == "desc")
