"""Turn raw frontmatter values into concrete post metadata."""

import datetime
from typing import Any

from scriptedstuff.models.content import PostMetadata

TRUTHY_STRINGS = frozenset({"true", "yes", "on", "1"})


def _text(value: Any) -> str:
    """Return a stripped string for scalar values, empty for anything else."""
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return ""
    return str(value).strip()


def normalize_date(value: Any, now: datetime.datetime) -> str:
    """Return the date as an ISO-8601 string, defaulting to ``now``."""
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime.datetime):
        return value.isoformat()
    if isinstance(value, datetime.date):
        return value.isoformat()
    text = _text(value)
    if text:
        return text
    return now.isoformat()


def normalize_tags(value: Any) -> list[str]:
    """Return tags as a list of strings."""
    if isinstance(value, str):
        value = value.strip()
        return [value] if value else []
    if isinstance(value, (list, tuple)):
        return [str(tag).strip() for tag in value if tag is not None and str(tag).strip()]
    return []


def normalize_draft(value: Any) -> bool:
    """Return the draft flag as a bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_STRINGS
    if isinstance(value, int):
        return value == 1
    return False


def build_metadata(
    slug: str,
    data: dict[str, Any],
    now: datetime.datetime | None = None,
) -> PostMetadata:
    """
    Build post metadata from a raw frontmatter mapping.

    Every field falls back to a fixed default, so this never fails for a
    mapping. The slug always comes from the caller and never from ``data``.

    Args:
        slug: Directory name of the post unit
        data: Parsed frontmatter mapping (possibly empty)
        now: Timestamp used when the date is missing (defaults to current UTC time)

    Returns:
        PostMetadata with all defaults applied
    """
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)

    return PostMetadata(
        slug=slug,
        title=_text(data.get("title")) or slug,
        date=normalize_date(data.get("date"), now),
        tags=normalize_tags(data.get("tags")),
        description=_text(data.get("description")),
        draft=normalize_draft(data.get("draft")),
    )
