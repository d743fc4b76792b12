"""FastAPI application and route handlers."""

import sys
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import BackgroundTasks, Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from .config import settings
from .exceptions import PresskitError, StorageError, SummarizationError, UpstreamError
from .fetcher import ContentFetcher, create_http_client
from .middleware import add_request_id
from .pages import PageService
from .providers import create_summarizer
from .render import STATIC_DIR, render_home, render_page
from .storage import create_kv_store

VERSION = "1.0.0"


def configure_logging() -> None:
    """Configure logging - should be called at startup, not import time."""
    logger.remove()
    logger.add(
        sys.stdout if settings.is_lambda_environment else sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=settings.log_level,
        serialize=False,
    )
    if settings.log_file:
        logger.add(
            settings.log_file,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
            level=settings.log_level,
        )


def get_limiter() -> Limiter:
    """Get or create rate limiter."""
    return Limiter(
        key_func=get_remote_address,
        storage_uri=settings.redis_url or "memory://",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    configure_logging()

    store = create_kv_store()
    http_client = create_http_client()
    summarizer = create_summarizer()

    await store.startup()

    app.state.page_service = PageService(
        store=store,
        fetcher=ContentFetcher(http_client),
        summarizer=summarizer,
    )
    logger.info("Application started successfully")

    yield

    await store.shutdown()
    await http_client.aclose()
    app.state.page_service = None
    logger.info("Application shutdown complete")


app = FastAPI(
    title="Presskit",
    version=VERSION,
    description="Markdown pages from a git repository, rendered and summarized",
    lifespan=lifespan,
)

app.middleware("http")(add_request_id)
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

limiter = get_limiter()
app.state.limiter = limiter  # Required by slowapi
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]


@app.exception_handler(UpstreamError)
async def upstream_exception_handler(request: Request, exc: UpstreamError) -> PlainTextResponse:
    """Pass source-control API errors through with their status and reason."""
    logger.warning(f"Upstream error: {exc}")
    return PlainTextResponse(exc.reason, status_code=exc.status_code)


@app.exception_handler(PresskitError)
async def presskit_exception_handler(request: Request, exc: PresskitError) -> JSONResponse:
    """Handle domain-specific errors."""
    logger.error(f"Presskit error: {exc}")

    if isinstance(exc, StorageError | SummarizationError):
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "type": exc.__class__.__name__},
    )


def get_page_service(request: Request) -> PageService:
    """Get page service singleton from app state."""
    service: PageService | None = getattr(request.app.state, "page_service", None)
    if service is None:
        raise RuntimeError("Service not initialized")
    return service


@app.get("/", response_class=HTMLResponse, tags=["pages"])
async def home_endpoint(
    service: Annotated[PageService, Depends(get_page_service)],
) -> HTMLResponse:
    """Render the home page."""
    home = await service.home_content()
    return HTMLResponse(render_home(home, await service.nav()))


@app.get("/health", tags=["health"])
async def health_endpoint(
    response: Response,
    service: Annotated[PageService, Depends(get_page_service)],
) -> dict[str, Any]:
    """Check health status of all components."""
    components = await service.health_check()
    all_healthy = all(components.values())

    if not all_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "healthy" if all_healthy else "unhealthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "services": components,
        "version": VERSION,
    }


@app.get("/tree", tags=["tree"])
async def get_tree_endpoint(
    service: Annotated[PageService, Depends(get_page_service)],
) -> dict[str, Any]:
    """Return the cached repository tree."""
    tree = await service.get_tree()
    if tree is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    return tree


@app.post("/tree", response_class=PlainTextResponse, tags=["tree"])
@limiter.limit(settings.tree_rate_limit)
async def refresh_tree_endpoint(
    request: Request,
    service: Annotated[PageService, Depends(get_page_service)],
) -> PlainTextResponse:
    """Fetch the repository tree from the source-control API and cache it."""
    await service.refresh_tree()
    return PlainTextResponse("OK")


# Translate request path into file URL, including slashes
@app.get("/{path:path}", response_class=HTMLResponse, tags=["pages"])
async def page_endpoint(
    path: str,
    background_tasks: BackgroundTasks,
    service: Annotated[PageService, Depends(get_page_service)],
) -> HTMLResponse:
    """Render a content page, summarizing and caching it after a miss."""
    content, cached = await service.get_page(path)
    if not cached:
        background_tasks.add_task(service.summarize_and_cache, path, content)

    html = render_page(content, await service.nav())
    return HTMLResponse(html, status_code=content.status_code)


app.openapi_tags = [
    {"name": "pages", "description": "Rendered content pages"},
    {"name": "tree", "description": "Repository tree cache"},
    {"name": "health", "description": "Health checks"},
]