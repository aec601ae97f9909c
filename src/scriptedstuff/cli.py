"""Command line entry point: run the dev server or export a static site."""

import argparse
import logging
import sys
from pathlib import Path

from scriptedstuff.config import Settings


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scriptedstuff", description="File-backed markdown blog.")
    parser.add_argument("--content", help="Content root (overrides CONTENT_PATH).")
    parser.add_argument("--drafts", action="store_true", help="Include draft posts (development mode).")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the web server.")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    build = subparsers.add_parser("build", help="Export the site as static HTML.")
    build.add_argument("--output", default="out", help="Output directory (default: out).")
    build.add_argument("--clean", action="store_true", help="Remove the output directory first.")

    return parser


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    import uvicorn

    from scriptedstuff.main import create_app

    uvicorn.run(create_app(settings), host=args.host, port=args.port)
    return 0


def cmd_build(args: argparse.Namespace, settings: Settings) -> int:
    import shutil

    from scriptedstuff.models.content import SiteConfig
    from scriptedstuff.services.content import ContentStore
    from scriptedstuff.services.export import export_site
    from scriptedstuff.services.markdown import MarkdownService
    from scriptedstuff.services.theme import ThemeEngine

    output = Path(args.output)
    if args.clean and output.exists():
        shutil.rmtree(output)

    markdown_service = MarkdownService(pygments_style=settings.pygments_style)
    store = ContentStore(
        settings.resolved_content_path,
        markdown_service=markdown_service,
        include_drafts=settings.is_development,
        resolve_drafts=settings.serve_unlisted_drafts,
    )
    theme_engine = ThemeEngine(
        SiteConfig(title=settings.site_title, description=settings.site_description, url=settings.site_url),
        themes_path=Path(settings.resolved_themes_path),
        theme_name=settings.theme_name,
    )
    exported = export_site(store, markdown_service, theme_engine, output)
    print(f"Exported {len(exported)} posts to {output}")
    return 0


def build_settings(args: argparse.Namespace) -> Settings:
    """Load settings from the environment, with command line flags taking precedence."""
    overrides: dict[str, str] = {}
    if args.content:
        overrides["content_path"] = args.content
    if args.drafts:
        overrides["environment"] = "development"
    return Settings(**overrides)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    settings = build_settings(args)

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "serve":
        return cmd_serve(args, settings)
    return cmd_build(args, settings)


if __name__ == "__main__":
    sys.exit(main())
