"""Routes for blog posts."""

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse, HTMLResponse
from starlette.concurrency import run_in_threadpool

from scriptedstuff.dependencies import ContentStoreDep, MarkdownDep
from scriptedstuff.exceptions import InvalidSlugError
from scriptedstuff.services.theme import get_theme_engine

router = APIRouter(prefix="/posts", tags=["posts"])

POST_NOT_FOUND = "Post not found"


@router.get("", response_class=HTMLResponse)
async def list_posts(store: ContentStoreDep) -> HTMLResponse:
    """List all visible posts, newest first."""
    posts = await run_in_threadpool(store.list_visible_posts)

    theme_engine = get_theme_engine()
    html = theme_engine.render_posts(posts)

    return HTMLResponse(content=html)


@router.get("/{slug}", response_class=HTMLResponse)
async def get_post(slug: str, store: ContentStoreDep, markdown_service: MarkdownDep) -> HTMLResponse:
    """Get a single post by slug."""
    try:
        post = await run_in_threadpool(store.resolve_post, slug)
    except InvalidSlugError as e:
        raise HTTPException(status_code=400, detail="Invalid post slug") from e

    if post is None:
        raise HTTPException(status_code=404, detail=POST_NOT_FOUND)

    post = markdown_service.render_post(post)

    theme_engine = get_theme_engine()
    html = theme_engine.render_post(post)

    return HTMLResponse(content=html)


@router.get("/{slug}/{asset_path:path}")
async def get_post_asset(slug: str, asset_path: str, store: ContentStoreDep) -> FileResponse:
    """Serve an image or other file stored next to a post."""
    try:
        path = await run_in_threadpool(store.resolve_asset, slug, asset_path)
    except InvalidSlugError as e:
        raise HTTPException(status_code=400, detail="Invalid post slug") from e

    if path is None:
        raise HTTPException(status_code=404, detail="File not found")

    return FileResponse(path, headers={"Cache-Control": "public, max-age=86400"})
