"""FastAPI application serving the documentation site and its JSON API."""

from __future__ import annotations

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, List

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from docsite import __version__
from docsite.config import AppConfig
from docsite.errors import DocSiteError, MalformedInput, PayloadTooLarge
from docsite.feedback import FeedbackLog, build_entry
from docsite.index.search import DocumentIndex
from docsite.web.frontend import router as frontend_router

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


async def _read_body(request: Request, limit: int) -> bytes:
    """Collect the request body, giving up as soon as it exceeds ``limit``."""
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLarge()

    received = bytearray()
    async for chunk in request.stream():
        received.extend(chunk)
        if len(received) > limit:
            raise PayloadTooLarge()
    return bytes(received)


def _parse_json(body: bytes) -> Any:
    if not body.strip():
        return {}
    try:
        return json.loads(body)
    except ValueError as exc:
        raise MalformedInput() from exc


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/search")
async def search_documents(request: Request, q: str | None = None) -> dict[str, List[dict]]:
    index: DocumentIndex = request.app.state.index
    matches = index.query(q or "")
    return {"results": [match.to_payload() for match in matches]}


@router.post("/feedback")
async def submit_feedback(request: Request) -> dict[str, bool]:
    config: AppConfig = request.app.state.config
    feedback: FeedbackLog = request.app.state.feedback

    payload = _parse_json(await _read_body(request, config.max_body_bytes))
    client_ip = request.client.host if request.client else None
    await feedback.append(build_entry(payload, client_ip))
    return {"ok": True}


async def _docsite_error_handler(request: Request, exc: DocSiteError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unmatched routes and methods surface here; keep the same envelope.
    message = "Not found" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled error serving %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Server error"})


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build the application for ``config`` (defaults to the environment)."""
    config = config if config is not None else AppConfig.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
        await asyncio.to_thread(app.state.index.load, config.resolved_docs_path)
        LOGGER.info("Serving %s", config.root_dir)
        yield

    app = FastAPI(title="DocSite", version=__version__, lifespan=lifespan)
    app.state.config = config
    app.state.index = DocumentIndex()
    app.state.feedback = FeedbackLog(config.resolved_feedback_path)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(DocSiteError, _docsite_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)

    app.include_router(router)
    # Catch-all static route goes last so API paths win.
    app.include_router(frontend_router)
    return app
