"""Tests for the command line entry point."""

import os
from pathlib import Path

import pytest

from scriptedstuff import cli
from scriptedstuff.config import get_settings
from scriptedstuff.services.markdown import reset_markdown_service
from scriptedstuff.services.theme import reset_theme_engine

THEMES_PATH = Path(__file__).parent.parent / "themes"


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    monkeypatch.setenv("THEMES_PATH", str(THEMES_PATH))
    monkeypatch.delenv("CONTENT_PATH", raising=False)
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    get_settings.cache_clear()
    reset_theme_engine()
    reset_markdown_service()
    yield
    get_settings.cache_clear()
    reset_theme_engine()
    reset_markdown_service()


def test_build_command(write_post, content_root, tmp_path, capsys):
    write_post("hello", "---\ntitle: Hello\ndate: 2024-01-01\n---\nHi\n")
    output = tmp_path / "site"

    exit_code = cli.main(["--content", str(content_root), "build", "--output", str(output)])

    assert exit_code == 0
    assert (output / "posts" / "hello" / "index.html").is_file()
    assert "Exported 1 posts" in capsys.readouterr().out


def test_build_with_drafts(write_post, content_root, tmp_path):
    write_post("wip", "---\ntitle: WIP\ndraft: true\n---\nHi\n")
    output = tmp_path / "site"

    cli.main(["--content", str(content_root), "--drafts", "build", "--output", str(output)])

    assert (output / "posts" / "wip" / "index.html").is_file()


def test_flags_do_not_touch_environment(content_root, tmp_path):
    cli.main(["--content", str(content_root), "--drafts", "build", "--output", str(tmp_path / "site")])

    assert "CONTENT_PATH" not in os.environ
    assert "ENVIRONMENT" not in os.environ


def test_build_settings_prefers_flags(monkeypatch):
    monkeypatch.setenv("CONTENT_PATH", "/from/env")
    args = cli._build_parser().parse_args(["--content", "/from/flag", "--drafts", "build"])

    settings = cli.build_settings(args)

    assert settings.content_path == "/from/flag"
    assert settings.is_development is True


def test_build_settings_falls_back_to_environment(monkeypatch):
    monkeypatch.setenv("CONTENT_PATH", "/from/env")
    args = cli._build_parser().parse_args(["build"])

    settings = cli.build_settings(args)

    assert settings.content_path == "/from/env"
    assert settings.is_development is False


def test_serve_binds_app_to_flags(monkeypatch, content_root):
    calls = {}

    def fake_run(app, host, port):
        calls.update(app=app, host=host, port=port)

    monkeypatch.setattr("uvicorn.run", fake_run)

    exit_code = cli.main(["--content", str(content_root), "serve", "--port", "9000"])

    assert exit_code == 0
    assert calls["port"] == 9000
    assert calls["app"].state.settings.content_path == str(content_root)


def test_requires_command():
    with pytest.raises(SystemExit):
        cli.main([])
