"""Tests for configuration module."""

from pathlib import Path

from scriptedstuff.config import Settings


def test_settings_defaults():
    """Test that settings have sensible defaults."""
    settings = Settings(
        _env_file=None,  # Don't load .env file
    )
    assert settings.content_path == "content/posts"
    assert settings.debug is False
    assert settings.is_development is False
    assert settings.serve_unlisted_drafts is True


def test_development_environment():
    settings = Settings(environment="development", _env_file=None)
    assert settings.is_development is True

    settings = Settings(environment=" Development ", _env_file=None)
    assert settings.is_development is True

    settings = Settings(environment="production", _env_file=None)
    assert settings.is_development is False


def test_environment_variables(monkeypatch):
    """Settings are read from environment variables."""
    monkeypatch.setenv("CONTENT_PATH", "/srv/blog/posts")
    monkeypatch.setenv("ENVIRONMENT", "development")

    settings = Settings(_env_file=None)

    assert settings.resolved_content_path == Path("/srv/blog/posts")
    assert settings.is_development is True


def test_themes_path_override():
    settings = Settings(themes_path="/custom/themes", _env_file=None)
    assert settings.resolved_themes_path == "/custom/themes"


def test_default_themes_path(monkeypatch):
    """Without an override the bundled themes directory is used."""
    monkeypatch.delenv("THEMES_PATH", raising=False)
    settings = Settings(_env_file=None)

    themes = Path(settings.resolved_themes_path)
    assert themes == (Path(__file__).parent.parent / "themes").resolve()
    assert (themes / "default" / "base.html").is_file()
