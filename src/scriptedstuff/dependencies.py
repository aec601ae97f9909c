"""FastAPI dependency injection utilities."""

from typing import Annotated

from fastapi import Depends

from scriptedstuff.config import Settings, get_settings
from scriptedstuff.services.content import ContentStore
from scriptedstuff.services.markdown import MarkdownService, get_markdown_service

# Type alias for settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_markdown() -> MarkdownService:
    """Return the shared markdown service."""
    return get_markdown_service()


MarkdownDep = Annotated[MarkdownService, Depends(get_markdown)]


def get_content_store(settings: SettingsDep, markdown_service: MarkdownDep) -> ContentStore:
    """Build a content store for the configured content root."""
    return ContentStore(
        settings.resolved_content_path,
        markdown_service=markdown_service,
        include_drafts=settings.is_development,
        resolve_drafts=settings.serve_unlisted_drafts,
    )


ContentStoreDep = Annotated[ContentStore, Depends(get_content_store)]
