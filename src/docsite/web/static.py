"""Streaming of static site assets."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import AsyncIterator

import aiofiles
from aiofiles.threadpool.binary import AsyncBufferedReader
from fastapi.responses import Response, StreamingResponse

from docsite.errors import NotFound, ServerError
from docsite.models import SafePath

LOGGER = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
DEFAULT_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
    ".json": "application/json; charset=utf-8",
    ".txt": "text/plain; charset=utf-8",
    ".svg": "image/svg+xml",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".ico": "image/x-icon",
    ".woff2": "font/woff2",
}

# ENOENT-class failures: the path is simply not a readable file.
_MISSING_ERRORS = (FileNotFoundError, NotADirectoryError, IsADirectoryError)


def content_type_for(path: Path) -> str:
    return CONTENT_TYPES.get(Path(path).suffix.lower(), DEFAULT_CONTENT_TYPE)


async def open_asset(safe_path: SafePath) -> AsyncBufferedReader:
    """Open ``safe_path`` for reading, classifying the failure if it can't be.

    No earlier existence check is trusted: a file can vanish between the
    check and this open, so the error raised here decides 404 versus 500.
    """
    try:
        return await aiofiles.open(safe_path.path, "rb")
    except _MISSING_ERRORS as exc:
        raise NotFound() from exc
    except OSError as exc:
        LOGGER.error("Unable to open %s: %s", safe_path.path, exc)
        raise ServerError() from exc


async def iter_chunks(handle: AsyncBufferedReader, path: Path) -> AsyncIterator[bytes]:
    try:
        while True:
            chunk = await handle.read(CHUNK_SIZE)
            if not chunk:
                break
            yield chunk
    except OSError:
        # Headers are already on the wire; all we can do is abort the body.
        LOGGER.exception("Read failed while streaming %s", path)
        raise
    finally:
        await handle.close()


async def serve_asset(safe_path: SafePath) -> StreamingResponse:
    handle = await open_asset(safe_path)
    return StreamingResponse(
        iter_chunks(handle, safe_path.path),
        media_type=content_type_for(safe_path.path),
    )


async def head_asset(safe_path: SafePath) -> Response:
    """Answer a HEAD request with the headers a GET would carry."""
    handle = await open_asset(safe_path)
    try:
        size = os.fstat(handle.fileno()).st_size
    finally:
        await handle.close()
    return Response(
        headers={"content-length": str(size)},
        media_type=content_type_for(safe_path.path),
    )
