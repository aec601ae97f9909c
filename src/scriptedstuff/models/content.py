"""Pydantic models for content (posts, site config)."""

import datetime
from email.utils import parsedate_to_datetime

from pydantic import BaseModel, Field


def parse_timestamp(value: str) -> datetime.datetime | None:
    """Parse a timestamp string into an aware datetime.

    Accepts ISO-8601 dates and datetimes as well as RFC 2822 strings.
    Naive values are taken to be UTC. Returns None when nothing matches.
    """
    text = value.strip()
    if not text:
        return None

    try:
        parsed = datetime.datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError):
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed


class PostMetadata(BaseModel):
    """Listing-level metadata for a blog post."""

    slug: str
    title: str
    date: str
    tags: list[str] = Field(default_factory=list)
    description: str = ""
    draft: bool = False

    @property
    def published_at(self) -> datetime.datetime | None:
        """Return the publication timestamp, or None if it cannot be parsed."""
        return parse_timestamp(self.date)

    @property
    def url(self) -> str:
        """Return the URL path for this post."""
        return f"/posts/{self.slug}"


class Post(PostMetadata):
    """A blog post with its body."""

    content: str = ""  # Raw markdown
    html: str = ""  # Rendered HTML


class SiteConfig(BaseModel):
    """Site-wide values exposed to templates."""

    title: str = "ScriptedStuff"
    description: str = ""
    url: str = ""
