"""
ASGI Entry Point for Container Deployment
=========================================
Wraps the Shiny `app` with Starlette to provide:
1. A /health endpoint for container health checks.
2. GZip middleware for the Plotly-heavy responses.
3. Lifecycle event logging.

Run with: gunicorn -k uvicorn.workers.UvicornWorker asgi:app
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.gzip import GZipMiddleware
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route

from app import app as shiny_app
from config import CONFIG
from logger import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from starlette.requests import Request

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: Starlette) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events."""
    logger.info("🚀 Starting %s (ASGI Wrapper)...", CONFIG.get("ui.page_title"))
    yield
    logger.info("👋 Shutting down application...")


async def health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


# Routes: health check first, then Shiny app at root
routes = [
    Route("/health", endpoint=health, methods=["GET"]),
    Mount("/", app=shiny_app, name="shiny"),
]

middleware = [
    Middleware(GZipMiddleware, minimum_size=500),  # Compress responses > 500 bytes
]

app = Starlette(
    routes=routes,
    middleware=middleware,
    lifespan=lifespan,
)

# Development server
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "asgi:app",
        host="0.0.0.0",
        port=7860,
        reload=True,
        log_level="info",
    )
