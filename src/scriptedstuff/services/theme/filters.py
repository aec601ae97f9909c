"""Custom Jinja2 filters for ScriptedStuff templates."""

import datetime
from typing import Any

from jinja2 import Environment

from scriptedstuff.models.content import parse_timestamp


def format_date(value: Any, fmt: str | None = None) -> str:
    """Format a date or timestamp string, e.g. "January 5, 2024"."""
    if value is None:
        return ""
    if isinstance(value, str):
        parsed = parse_timestamp(value)
        if parsed is None:
            return value
        value = parsed
    if not isinstance(value, datetime.date):
        return str(value)
    if fmt:
        return value.strftime(fmt)
    return f"{value:%B} {value.day}, {value.year}"


def register_filters(env: Environment) -> None:
    """Register all custom filters on a Jinja2 environment."""
    env.filters["format_date"] = format_date
