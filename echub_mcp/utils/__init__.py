"""Utility functions for EC HUB MCP."""

from echub_mcp.utils.dates import is_today, parse_date_key, to_date_key
from echub_mcp.utils.listing import filter_by_substring, sort_by_key

__all__ = [
    "to_date_key",
    "parse_date_key",
    "is_today",
    "filter_by_substring",
    "sort_by_key",
]
