"""Theme engine for Jinja2 template rendering."""

from scriptedstuff.services.theme.engine import (
    ThemeEngine,
    get_theme_engine,
    reset_theme_engine,
)

__all__ = ["ThemeEngine", "get_theme_engine", "reset_theme_engine"]
