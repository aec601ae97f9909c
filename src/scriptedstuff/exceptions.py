"""Errors raised while reading post content."""


class ContentError(Exception):
    """Base class for content store errors."""


class FrontMatterError(ContentError):
    """A content file has a metadata header that cannot be parsed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid frontmatter in {path}: {reason}")


class InvalidSlugError(ContentError, ValueError):
    """A post identifier would escape the content root."""

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f"Invalid post slug: {slug!r}")
