"""Shared fixtures for content store tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from scriptedstuff.services.content import ContentStore
from scriptedstuff.services.markdown import MarkdownService

WritePost = Callable[..., Path]


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """Create an empty content root."""
    root = tmp_path / "posts"
    root.mkdir()
    return root


@pytest.fixture
def write_post(content_root: Path) -> WritePost:
    """Return a helper that writes a post unit and returns its content file."""

    def _write(slug: str, text: str, filename: str = "index.md") -> Path:
        unit_dir = content_root / slug
        unit_dir.mkdir(parents=True, exist_ok=True)
        path = unit_dir / filename
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def markdown_service() -> MarkdownService:
    """Create a markdown service instance."""
    return MarkdownService()


@pytest.fixture
def store(content_root: Path, markdown_service: MarkdownService) -> ContentStore:
    """Content store in production mode."""
    return ContentStore(content_root, markdown_service=markdown_service)
