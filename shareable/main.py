"""
Shareable render service FastAPI application entry point.
Renders web pages to fixed-size PNG social previews using Playwright and
caches the results on disk.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .routes import health_routes, library_routes, render_routes
from .services.cache_service import get_cache_store
from .utils.debug import configure_logging, print_step
from .utils.security import allowed_origins

ENDPOINTS = [
    "GET  /                 - Service status",
    "GET  /health           - Health check",
    "GET  /library.js       - Client library",
    "GET  /library.min.js   - Client library (minified)",
    "GET  /render?url=...   - Render a page as a PNG preview",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the cache directory before serving requests."""
    get_cache_store().init()
    print_step("Shareable Service Startup", {
        "port": settings.PORT,
        "allowed_hosts": allowed_origins() or "all hosts allowed",
        "endpoints": ENDPOINTS
    }, "output")
    yield
    print_step("Shareable Service Shutdown", None, "info")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application for the render service.

    Returns:
        Configured FastAPI application
    """
    configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.VERSION,
        description="Renders web pages to Open Graph and Twitter preview images",
        debug=settings.DEBUG,
        lifespan=lifespan
    )

    print_step("CORS Configuration", {"origins": settings.ALL_CORS_ORIGINS}, "input")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALL_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["Content-Type"],
    )

    @app.get("/")
    def read_root():
        return {"status": "Shareable render service is online", "service": "shareable"}

    app.include_router(library_routes.router)
    app.include_router(render_routes.router)
    app.include_router(health_routes.router)

    print_step("FastAPI App Initialization", "Routes and CORS middleware configured", "output")
    return app


# Create the app instance
app = create_app()
