"""Jinja2 template loader with theme fallback."""

from collections.abc import Callable
from pathlib import Path

from jinja2 import BaseLoader, Environment, TemplateNotFound


class ThemeLoader(BaseLoader):
    """
    Template loader that looks in the active theme, then the default theme.

    Themes only need to override the templates they change.
    """

    def __init__(self, themes_path: Path, current_theme: str = "default", default_theme: str = "default") -> None:
        self.themes_path = themes_path
        self.current_theme = current_theme
        self.default_theme = default_theme

    def _candidates(self, template: str) -> list[Path]:
        themes = [self.current_theme]
        if self.current_theme != self.default_theme:
            themes.append(self.default_theme)
        return [self.themes_path / theme / template for theme in themes]

    def get_source(self, environment: Environment, template: str) -> tuple[str, str | None, Callable[[], bool]]:
        """Load a template from the current theme or the default theme."""
        for path in self._candidates(template):
            if path.is_file():
                mtime = path.stat().st_mtime

                def uptodate(path: Path = path, mtime: float = mtime) -> bool:
                    try:
                        return path.stat().st_mtime == mtime
                    except OSError:
                        return False

                return path.read_text(encoding="utf-8"), str(path), uptodate

        raise TemplateNotFound(template)
