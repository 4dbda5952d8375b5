"""Static site routes: the entry document and allow-listed assets."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import Response

from docsite.config import AppConfig
from docsite.errors import NotFound
from docsite.utils.files import is_servable, resolve_entry_document, resolve_safe_path
from docsite.web.static import head_asset, serve_asset

LOGGER = logging.getLogger(__name__)

router = APIRouter()

_ANY_METHOD = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/{requested:path}", methods=_ANY_METHOD, include_in_schema=False)
async def static_asset(request: Request, requested: str) -> Response:
    if request.method not in ("GET", "HEAD"):
        raise NotFound()

    config: AppConfig = request.app.state.config
    if not requested.strip("/"):
        requested = config.entry_document

    safe_path = resolve_safe_path(config.root_dir, requested)
    safe_path = await resolve_entry_document(safe_path, config.entry_document)
    # The feedback log may sit under an allowed directory; it is never public.
    private = (config.resolved_feedback_path,)
    if not is_servable(safe_path, config.allowed_dirs, config.public_files, private):
        LOGGER.debug("Refusing non allow-listed path %s", safe_path.relative)
        raise NotFound()
    if request.method == "HEAD":
        return await head_asset(safe_path)
    return await serve_asset(safe_path)
