"""FastAPI application serving catalog documents and user-data assets."""
from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware

from app.routes.catalog import router as catalog_router
from src.catalog.index import CatalogIndex
from src.config.settings import Settings, settings as default_settings

VERSION = "1.0.0"


class CrossOriginHeadersMiddleware(BaseHTTPMiddleware):
    """Add permissive cross-origin headers to all responses."""

    def __init__(self, app, allow_origin: str = "*", allow_headers: tuple[str, ...] = ()):
        super().__init__(app)
        self.allow_origin = allow_origin
        self.allow_headers = ", ".join(allow_headers)

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["Access-Control-Allow-Origin"] = self.allow_origin
        if self.allow_headers:
            response.headers["Access-Control-Allow-Headers"] = self.allow_headers
        return response


def create_app(
    index: CatalogIndex,
    user_data_path: str | Path,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the application for one catalog index.

    Catalog routes are matched first; every other path is a static file
    under user_data_path.
    """
    settings = settings or default_settings
    static_files = StaticFiles(directory=str(user_data_path))

    app = FastAPI(
        title="Catalog Resource Server",
        description="Localized device and extension catalogs plus their assets.",
        version=VERSION,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.catalog_index = index
    app.state.settings = settings
    app.state.static_files = static_files

    app.add_middleware(
        CrossOriginHeadersMiddleware,
        allow_origin=settings.cors.allow_origin,
        allow_headers=settings.cors.allow_headers,
    )

    # Mount catalog router
    app.include_router(catalog_router)

    # Mount static files
    app.mount("/", static_files, name="static")

    return app
