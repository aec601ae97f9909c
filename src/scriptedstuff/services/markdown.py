"""Markdown parsing and rendering service."""

import re
from typing import Any

import markdown
import yaml
from markdown.extensions.codehilite import CodeHiliteExtension
from markdown.extensions.fenced_code import FencedCodeExtension
from markdown.extensions.toc import TocExtension
from pygments.formatters import HtmlFormatter

from scriptedstuff.exceptions import FrontMatterError
from scriptedstuff.models.content import Post
from scriptedstuff.services.url_rewriter import rewrite_image_urls


class LabeledFormatter(HtmlFormatter):
    """Displays language labels on code blocks using Pygments' filename feature."""

    def __init__(self, **options: Any) -> None:
        lang_str = options.pop("lang_str", "")
        lang = lang_str.replace("language-", "") if lang_str else ""
        if lang and lang != "text":
            options["filename"] = lang
        super().__init__(**options)


class HeaderLoader(yaml.SafeLoader):
    """SafeLoader that leaves dates as the strings they were written as."""


# Dates are parsed later, so a typo like 2024-02-30 is an unparseable date, not a bad header
HeaderLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class MarkdownService:
    """Service for parsing frontmatter and rendering markdown content."""

    FRONTMATTER_PATTERN = re.compile(
        r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)",
        re.DOTALL | re.MULTILINE,
    )

    def __init__(self, pygments_style: str = "github-dark") -> None:
        self.pygments_style = pygments_style
        self._md: markdown.Markdown | None = None

    def _get_markdown_instance(self) -> markdown.Markdown:
        """Get or create the markdown instance with extensions."""
        if self._md is None:
            self._md = markdown.Markdown(
                extensions=[
                    "extra",  # Tables, footnotes, attr_list, etc.
                    FencedCodeExtension(),
                    CodeHiliteExtension(
                        css_class="highlight",
                        linenums=False,
                        guess_lang=False,
                        pygments_formatter=LabeledFormatter,
                    ),
                    TocExtension(permalink="#"),
                    "smarty",  # Smart quotes
                ],
                output_format="html",
            )
        return self._md

    def parse_frontmatter(self, content: str, path: str = "<string>") -> tuple[dict[str, Any], str]:
        """
        Split YAML frontmatter from markdown content.

        Args:
            content: Raw file content with optional frontmatter
            path: Source path, used in error messages

        Returns:
            Tuple of (raw frontmatter mapping, body). The body is everything
            after the closing delimiter line, unchanged.

        Raises:
            FrontMatterError: If the header is not valid YAML or not a mapping. Dates are
                returned as strings.
        """
        match = self.FRONTMATTER_PATTERN.match(content)

        if not match:
            return {}, content

        yaml_content = match.group(1)
        body = content[match.end() :]

        try:
            data = yaml.load(yaml_content, Loader=HeaderLoader)
        except (yaml.YAMLError, ValueError) as e:
            # ValueError comes from explicit tags such as !!timestamp 2024-02-30
            raise FrontMatterError(path, str(e)) from e

        if data is None:
            return {}, body
        if not isinstance(data, dict):
            raise FrontMatterError(path, f"expected a mapping, got {type(data).__name__}")

        return data, body

    def render_markdown(self, content: str) -> str:
        """
        Render markdown content to HTML.

        Args:
            content: Markdown content (without frontmatter)

        Returns:
            Rendered HTML string
        """
        md = self._get_markdown_instance()
        md.reset()
        return md.convert(content)

    def render_post(self, post: Post) -> Post:
        """Return a copy of the post with its body rendered to HTML."""
        html = self.render_markdown(post.content)
        html = rewrite_image_urls(html, post.url)
        return post.model_copy(update={"html": html})

    def get_pygments_css(self) -> str:
        """Generate Pygments CSS for the configured style."""
        formatter = HtmlFormatter(style=self.pygments_style)
        return formatter.get_style_defs(".highlight")


# Global service instance
_markdown_service: MarkdownService | None = None


def get_markdown_service(pygments_style: str | None = None) -> MarkdownService:
    """Get the global markdown service instance."""
    global _markdown_service
    if _markdown_service is None:
        if pygments_style is None:
            from scriptedstuff.config import get_settings

            pygments_style = get_settings().pygments_style
        _markdown_service = MarkdownService(pygments_style=pygments_style)
    return _markdown_service


def reset_markdown_service() -> None:
    """Reset the global markdown service. Useful for testing or config changes."""
    global _markdown_service
    _markdown_service = None
