"""URL rewriting for relative image paths in post bodies."""

import posixpath
from html.parser import HTMLParser
from pathlib import PurePosixPath
from urllib.parse import unquote


class ImageSrcCollector(HTMLParser):
    """Collects src attribute values from img tags in HTML."""

    def __init__(self) -> None:
        super().__init__()
        self.sources: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag == "img":
            for name, value in attrs:
                if name == "src" and value:
                    self.sources.append(value)


def _stays_inside_unit(resolved: str) -> bool:
    """Check that a relative path does not climb out of the post directory."""
    # URL-decode first to catch encoded traversal attempts (%2e%2e -> ..)
    decoded = unquote(resolved)
    normalized = posixpath.normpath(decoded)

    parts = PurePosixPath(normalized).parts
    if not parts or normalized.startswith("/"):
        return False

    return ".." not in parts


def rewrite_image_urls(html: str, post_url: str) -> str:
    """
    Rewrite relative image URLs to absolute paths under the post URL.

    Images stored next to a post's markdown file (``![](diagram.png)``) are
    served from ``/posts/<slug>/diagram.png``.

    Args:
        html: Rendered HTML content
        post_url: URL path of the post (e.g., "/posts/hello-world")

    Returns:
        HTML with rewritten image URLs
    """
    collector = ImageSrcCollector()
    collector.feed(html)

    if not collector.sources:
        return html  # Fast path: no images

    base = post_url.rstrip("/")
    replacements: dict[str, str] = {}
    for src in collector.sources:
        # Skip absolute URLs, fragments and inline data
        if src.startswith(("http://", "https://", "//", "/", "#", "data:", "mailto:")):
            continue

        resolved = posixpath.normpath(src)
        if _stays_inside_unit(resolved):
            replacements[src] = f"{base}/{resolved}"

    if not replacements:
        return html

    # Apply replacements (both quote styles)
    for old, new in replacements.items():
        html = html.replace(f'src="{old}"', f'src="{new}"')
        html = html.replace(f"src='{old}'", f"src='{new}'")

    return html
