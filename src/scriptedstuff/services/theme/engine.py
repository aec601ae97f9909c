"""Theme engine for Jinja2 template rendering."""

from pathlib import Path
from typing import Any

from jinja2 import Environment, TemplateNotFound

from scriptedstuff.models.content import Post, PostMetadata, SiteConfig
from scriptedstuff.services.theme.filters import register_filters
from scriptedstuff.services.theme.loader import ThemeLoader


class ThemeEngine:
    """Engine for rendering Jinja2 templates with theme support."""

    def __init__(
        self,
        site: SiteConfig,
        themes_path: Path | None = None,
        theme_name: str = "default",
        static_prefix: str = "/static",
    ) -> None:
        self.site = site
        self.theme_name = theme_name
        self.static_prefix = static_prefix.rstrip("/")

        # Default to the bundled themes directory
        if themes_path is None:
            from scriptedstuff.config import get_settings

            themes_path = Path(get_settings().resolved_themes_path)
        self.themes_path = themes_path

        self.loader = ThemeLoader(themes_path, current_theme=theme_name)
        self.env = Environment(
            loader=self.loader,
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

        register_filters(self.env)

    def render(self, template_name: str, **context: Any) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of the template (e.g., "post.html")
            **context: Additional template context

        Returns:
            Rendered HTML string
        """
        template = self.env.get_template(template_name)

        full_context: dict[str, Any] = {
            "site": self.site,
            "theme_name": self.theme_name,
            "static_url": f"{self.static_prefix}/{self.theme_name}",
            "pygments_css_url": "/pygments.css",
            **context,
        }

        return template.render(**full_context)

    def build_canonical_url(self, path: str) -> str | None:
        """Build an absolute canonical URL from site.url and a path.

        Returns ``None`` when ``site.url`` is not configured so templates
        can conditionally render the tag.
        """
        base = self.site.url.rstrip("/") if self.site.url else ""
        if not base:
            return None
        return f"{base}{path}"

    def render_home(self, posts: list[PostMetadata]) -> str:
        """Render the home page with the latest posts."""
        return self.render(
            "index.html",
            page_title=self.site.title,
            posts=posts,
            canonical_url=self.build_canonical_url("/"),
        )

    def render_posts(self, posts: list[PostMetadata]) -> str:
        """Render the "All Posts" listing."""
        return self.render(
            "posts.html",
            page_title=f"All Posts | {self.site.title}",
            posts=posts,
            canonical_url=self.build_canonical_url("/posts"),
        )

    def render_post(self, post: Post) -> str:
        """Render a single post page."""
        return self.render(
            "post.html",
            page_title=f"{post.title} | {self.site.title}",
            description=post.description,
            post=post,
            canonical_url=self.build_canonical_url(post.url),
        )

    def render_404(self, title: str = "Page Not Found") -> str:
        """Render the 404 page with the given heading."""
        try:
            return self.render("404.html", page_title=title)
        except TemplateNotFound:
            # Fallback if no 404 template
            return "<h1>404 - Page Not Found</h1>"


# Global theme engine instance
_theme_engine: ThemeEngine | None = None


def get_theme_engine() -> ThemeEngine:
    """Get or create the global theme engine instance."""
    global _theme_engine
    if _theme_engine is None:
        from scriptedstuff.config import get_settings

        settings = get_settings()
        site = SiteConfig(
            title=settings.site_title,
            description=settings.site_description,
            url=settings.site_url,
        )
        _theme_engine = ThemeEngine(
            site,
            themes_path=Path(settings.resolved_themes_path),
            theme_name=settings.theme_name,
        )
    return _theme_engine


def reset_theme_engine() -> None:
    """Reset the global theme engine. Useful for testing or config changes."""
    global _theme_engine
    _theme_engine = None
