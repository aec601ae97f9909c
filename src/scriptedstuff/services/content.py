"""File-backed content store for blog posts.

Each post lives in its own directory under the content root. The directory
name is the post's slug, and the post body is read from ``index.md`` or, if
that is missing, ``<slug>.md`` inside it.
"""

import datetime
import logging
from pathlib import Path

from scriptedstuff.exceptions import FrontMatterError, InvalidSlugError
from scriptedstuff.models.content import Post, PostMetadata
from scriptedstuff.services.markdown import MarkdownService
from scriptedstuff.services.metadata import build_metadata

logger = logging.getLogger("scriptedstuff.content")

MARKDOWN_EXTENSION = ".md"
INDEX_STEM = "index"

# File types that may be served from a post directory
ALLOWED_ASSET_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp", ".svg", ".avif", ".mp4", ".webm", ".pdf"}

_EPOCH = datetime.datetime.min.replace(tzinfo=datetime.timezone.utc)


def validate_slug(slug: str) -> str:
    """Return the slug unchanged, or raise InvalidSlugError if it could escape the content root."""
    if not slug or slug in (".", "..") or slug.startswith("."):
        raise InvalidSlugError(slug)
    if any(ch in slug for ch in ("/", "\\", "\x00")):
        raise InvalidSlugError(slug)
    return slug


def find_content_file(unit_dir: Path) -> Path | None:
    """Locate the markdown file of a post directory: index.md first, then <dirname>.md."""
    candidates = (
        unit_dir / f"{INDEX_STEM}{MARKDOWN_EXTENSION}",
        unit_dir / f"{unit_dir.name}{MARKDOWN_EXTENSION}",
    )
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def sort_newest_first(posts: list[PostMetadata]) -> list[PostMetadata]:
    """Sort posts by publication time, newest first; unparseable dates go last."""

    def _key(post: PostMetadata) -> tuple[bool, datetime.datetime]:
        published = post.published_at
        if published is None:
            logger.warning("Unparseable date %r on post %s, sorting it last", post.date, post.slug)
            return (False, _EPOCH)
        return (True, published)

    return sorted(posts, key=_key, reverse=True)


class ContentStore:
    """Reads posts from a directory tree on every call."""

    def __init__(
        self,
        root: Path,
        markdown_service: MarkdownService | None = None,
        include_drafts: bool = False,
        resolve_drafts: bool = True,
    ) -> None:
        """
        Args:
            root: Directory containing one subdirectory per post
            markdown_service: Frontmatter parser (a default instance is created if omitted)
            include_drafts: List draft posts (development mode)
            resolve_drafts: Allow drafts to be fetched by slug even when they are not listed
        """
        self.root = root
        self.markdown_service = markdown_service or MarkdownService()
        self.include_drafts = include_drafts
        self.resolve_drafts = resolve_drafts

    def _read_unit(self, slug: str, path: Path) -> tuple[PostMetadata, str]:
        """Read a content file and return its metadata and body."""
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise FrontMatterError(str(path), f"not valid UTF-8: {e}") from e
        data, body = self.markdown_service.parse_frontmatter(text, str(path))
        return build_metadata(slug, data), body

    def list_visible_posts(self) -> list[PostMetadata]:
        """
        List metadata of all visible posts, newest first.

        Directories without a content file are not posts and are skipped.
        Drafts are only listed when the store includes drafts. A post whose
        header cannot be parsed is logged and left out.
        """
        if not self.root.is_dir():
            logger.warning("Content root %s does not exist", self.root)
            return []

        posts: list[PostMetadata] = []
        for entry in sorted(self.root.iterdir()):
            if not entry.is_dir() or entry.name.startswith("."):
                continue

            path = find_content_file(entry)
            if path is None:
                logger.debug("Skipping %s: no content file", entry.name)
                continue

            try:
                metadata, _body = self._read_unit(entry.name, path)
            except FrontMatterError:
                logger.exception("Skipping post %s", entry.name)
                continue

            if metadata.draft and not self.include_drafts:
                continue

            posts.append(metadata)

        return sort_newest_first(posts)

    def resolve_post(self, slug: str) -> Post | None:
        """
        Resolve a single post by slug.

        Returns:
            The Post, or None if no post with that slug exists

        Raises:
            InvalidSlugError: If the slug contains path separators or dot segments
            FrontMatterError: If the post's header cannot be parsed
        """
        validate_slug(slug)

        unit_dir = self.root / slug
        if not unit_dir.is_dir():
            return None

        path = find_content_file(unit_dir)
        if path is None:
            return None

        metadata, body = self._read_unit(slug, path)

        if metadata.draft and not (self.resolve_drafts or self.include_drafts):
            return None

        return Post(**metadata.model_dump(), content=body)

    def resolve_asset(self, slug: str, asset_path: str) -> Path | None:
        """
        Locate a file stored alongside a post, such as an image.

        Returns:
            Path to the file, or None if it does not exist or is not servable
        """
        validate_slug(slug)

        unit_dir = (self.root / slug).resolve()
        candidate = (unit_dir / asset_path).resolve()

        if not candidate.is_relative_to(unit_dir):
            return None
        if candidate.suffix.lower() not in ALLOWED_ASSET_EXTENSIONS:
            return None
        if not candidate.is_file():
            return None
        return candidate
