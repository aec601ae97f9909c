"""Static export of the blog to a directory of HTML files."""

import logging
import shutil
from pathlib import Path

from scriptedstuff.services.content import ALLOWED_ASSET_EXTENSIONS, ContentStore
from scriptedstuff.services.markdown import MarkdownService
from scriptedstuff.services.theme import ThemeEngine

logger = logging.getLogger("scriptedstuff.export")


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _copy_post_assets(unit_dir: Path, target_dir: Path) -> int:
    """Copy images and other servable files stored next to a post."""
    count = 0
    for source in sorted(unit_dir.rglob("*")):
        if not source.is_file() or source.suffix.lower() not in ALLOWED_ASSET_EXTENSIONS:
            continue
        relative = source.relative_to(unit_dir)
        if any(part.startswith(".") for part in relative.parts):
            continue
        destination = target_dir / relative
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, destination)
        count += 1
    return count


def _copy_theme_static(theme_engine: ThemeEngine, output: Path) -> None:
    """Copy theme static files, letting the active theme override the default."""
    target = output / "static" / theme_engine.theme_name
    for theme in dict.fromkeys(["default", theme_engine.theme_name]):
        source = theme_engine.themes_path / theme / "static"
        if source.is_dir():
            shutil.copytree(source, target, dirs_exist_ok=True)


def export_site(
    store: ContentStore,
    markdown_service: MarkdownService,
    theme_engine: ThemeEngine,
    output: Path,
) -> list[str]:
    """
    Render every listed post and the index pages into ``output``.

    Only posts that appear in the listing are exported, so drafts are left
    out unless the store includes them.

    Returns:
        Slugs of the exported posts, in listing order
    """
    posts = store.list_visible_posts()

    _write(output / "index.html", theme_engine.render_home(posts))
    _write(output / "posts" / "index.html", theme_engine.render_posts(posts))
    _write(output / "404.html", theme_engine.render_404())
    _write(output / "pygments.css", markdown_service.get_pygments_css())
    _copy_theme_static(theme_engine, output)

    exported: list[str] = []
    for metadata in posts:
        post = store.resolve_post(metadata.slug)
        if post is None:
            logger.warning("Post %s disappeared during export", metadata.slug)
            continue

        post = markdown_service.render_post(post)
        post_dir = output / "posts" / post.slug
        _write(post_dir / "index.html", theme_engine.render_post(post))
        assets = _copy_post_assets(store.root / post.slug, post_dir)
        logger.debug("Exported %s (%d assets)", post.slug, assets)
        exported.append(post.slug)

    logger.info("Exported %d posts to %s", len(exported), output)
    return exported
