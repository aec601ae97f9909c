"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_themes_path() -> str:
    """Return the themes directory shipped at the repository root."""
    return str((Path(__file__).parent.parent.parent / "themes").resolve())


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Directory holding one subdirectory per post
    content_path: str = "content/posts"

    # Execution context; "development" lists draft posts
    environment: str = "production"

    # Drafts stay reachable by slug even though they are not listed
    serve_unlisted_drafts: bool = True

    # Site
    site_title: str = "ScriptedStuff"
    site_description: str = "A blog about scripting, automation, homelab projects, and tech wizardry."
    site_url: str = ""

    # Theme path - defaults to themes/ relative to package, can be overridden
    themes_path: str = ""
    theme_name: str = "default"
    pygments_style: str = "github-dark"

    # Debug mode
    debug: bool = False

    @property
    def is_development(self) -> bool:
        """Check if the app runs in development mode."""
        return self.environment.strip().lower() == "development"

    @property
    def resolved_content_path(self) -> Path:
        """Return the content root as a Path."""
        return Path(self.content_path).expanduser()

    @property
    def resolved_themes_path(self) -> str:
        """Return themes path, using computed default if not set."""
        if self.themes_path:
            return self.themes_path
        return _default_themes_path()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
