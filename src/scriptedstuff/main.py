"""FastAPI application entry point."""

import logging
import re
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse, Response
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from scriptedstuff.config import Settings, get_settings
from scriptedstuff.dependencies import ContentStoreDep, MarkdownDep
from scriptedstuff.routers import posts
from scriptedstuff.services.markdown import reset_markdown_service
from scriptedstuff.services.theme import get_theme_engine, reset_theme_engine

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if get_settings().debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("scriptedstuff")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    settings: Settings = app.state.settings

    # Startup
    logger.info("Starting ScriptedStuff")
    logger.info("Content root: %s", settings.resolved_content_path)
    if settings.is_development:
        logger.info("Development mode: draft posts are listed")
    if settings.debug:
        logger.debug("Debug mode enabled")
        logger.debug("Themes path: %s", settings.resolved_themes_path)

    get_theme_engine()
    logger.info("Theme engine initialized")

    yield

    # Shutdown
    logger.info("Shutting down ScriptedStuff")
    reset_theme_engine()
    reset_markdown_service()


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to bind the app to. Defaults to the cached
            environment settings.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="ScriptedStuff",
        description="A file-backed blog serving markdown posts from a content directory",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    # Custom exception handler for HTTP exceptions
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions with appropriate response format."""
        accept = request.headers.get("accept", "")
        if "text/html" in accept and exc.status_code == 404:
            title = "Post Not Found" if exc.detail == posts.POST_NOT_FOUND else "Page Not Found"
            html = get_theme_engine().render_404(title)
            return HTMLResponse(content=html, status_code=404)

        # Return JSON for API requests
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception("Unhandled exception: %s", exc)

        if settings.debug:
            return JSONResponse(
                status_code=500,
                content={"detail": str(exc), "type": type(exc).__name__},
            )

        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    # Health check endpoint
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint for container orchestration."""
        return {"status": "healthy"}

    # Home page - welcome text and latest posts
    @app.get("/", response_class=HTMLResponse)
    async def index(store: ContentStoreDep) -> HTMLResponse:
        """Render the home page."""
        all_posts = await run_in_threadpool(store.list_visible_posts)
        html = get_theme_engine().render_home(all_posts)
        return HTMLResponse(content=html)

    # Dynamic Pygments CSS - generates syntax highlighting styles from settings
    @app.get("/pygments.css")
    async def serve_pygments_css(markdown_service: MarkdownDep) -> Response:
        """Serve generated Pygments CSS for the configured style."""
        css = markdown_service.get_pygments_css()
        return Response(
            content=css,
            media_type="text/css",
            headers={"Cache-Control": "public, max-age=86400"},
        )

    # Theme static files - serve from theme directories with fallback
    VALID_THEME_NAME = re.compile(r"^[a-zA-Z0-9_-]+$")

    @app.get("/static/{theme_name}/{file_path:path}")
    async def serve_theme_static(theme_name: str, file_path: str) -> Response:
        """Serve static files from theme directories with fallback to default."""
        # Security: validate theme name and file path to prevent path traversal
        if not VALID_THEME_NAME.match(theme_name):
            raise HTTPException(status_code=400, detail="Invalid theme name")
        if ".." in file_path or file_path.startswith("/"):
            raise HTTPException(status_code=400, detail="Invalid file path")

        themes_dir = Path(settings.resolved_themes_path)

        # Try requested theme first
        file = themes_dir / theme_name / "static" / file_path
        if file.exists() and file.is_file():
            return FileResponse(file, headers={"Cache-Control": "public, max-age=86400"})

        # Fall back to default theme
        fallback = themes_dir / "default" / "static" / file_path
        if fallback.exists() and fallback.is_file():
            return FileResponse(fallback, headers={"Cache-Control": "public, max-age=86400"})

        raise HTTPException(status_code=404, detail="Static file not found")

    app.include_router(posts.router)

    return app


# Create the application instance
app = create_app()
