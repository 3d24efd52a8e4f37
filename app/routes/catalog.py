"""Catalog document routes."""
from __future__ import annotations

import stat

import anyio.to_thread
from fastapi import APIRouter, Request
from fastapi.responses import Response
from fastapi.staticfiles import StaticFiles

from src.catalog.router import route

router = APIRouter(tags=["Catalog"])


@router.api_route(
    "/{catalog_type}/{locale_file}",
    methods=["GET", "HEAD"],
    summary="Localized catalog",
    description="Return the precomputed catalog document, e.g. /devices/en.json.",
)
async def get_catalog(catalog_type: str, locale_file: str, request: Request) -> Response:
    """Serve a catalog cell, falling back to a static file at the same path."""
    result = route(
        request.app.state.catalog_index,
        catalog_type,
        locale_file,
        request.app.state.settings.server.locale_suffix_length,
    )
    if result.found:
        return Response(content=result.body, media_type="application/json")

    # Two-segment asset paths share this route with catalog documents
    static: StaticFiles = request.app.state.static_files
    full_path, stat_result = await anyio.to_thread.run_sync(
        static.lookup_path, f"{catalog_type}/{locale_file}"
    )
    if stat_result is not None and stat.S_ISREG(stat_result.st_mode):
        return static.file_response(full_path, stat_result, request.scope)

    return Response(status_code=result.status)
