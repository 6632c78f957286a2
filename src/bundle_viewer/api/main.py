"""FastAPI application serving key listing and per-key data views."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from bundle_viewer.api.keys import decode_key
from bundle_viewer.config import ViewerConfig
from bundle_viewer.errors import KeyNotFoundError, ViewerError
from bundle_viewer.obs.log import get_logger
from bundle_viewer.store.catalog import list_keys
from bundle_viewer.store.document_store import DocumentStore
from bundle_viewer.views.shapes import project

DATA_PREFIX = "/api/data/"

logger = get_logger("api")


def _first_values(request: Request) -> dict[str, str]:
    params: dict[str, str] = {}
    for name, value in request.query_params.multi_items():
        params.setdefault(name, value)
    return params


def _raw_key_segment(request: Request) -> str | bytes:
    raw_path: bytes | None = request.scope.get("raw_path")
    if not raw_path:
        path = request.url.path
        return path[len(DATA_PREFIX) :] if path.startswith(DATA_PREFIX) else path
    raw_path = raw_path.split(b"?", 1)[0]
    prefix = DATA_PREFIX.encode()
    return raw_path[len(prefix) :] if raw_path.startswith(prefix) else raw_path


def create_app(store: DocumentStore, config: ViewerConfig | None = None) -> FastAPI:
    """Build the viewer app around `store`; an unloaded store answers with 500s."""

    config = config or ViewerConfig()
    app = FastAPI(title="Support Bundle Viewer", version="0.1.0")
    app.state.store = store

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Any) -> Any:
        start = time.perf_counter()
        response = await call_next(request)
        if request.url.path.startswith("/api/"):
            logger.info(
                "request_complete",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "latency_ms": round((time.perf_counter() - start) * 1000.0, 3),
                },
            )
        return response

    @app.exception_handler(ViewerError)
    async def handle_viewer_error(request: Request, exc: ViewerError) -> JSONResponse:
        return JSONResponse(status_code=exc.http_status, content={"error": exc.message})

    @app.get("/api/health")
    def health() -> dict[str, Any]:
        return {"status": "ok", "loaded": store.is_loaded(), "key_count": len(store)}

    @app.get("/api/keys")
    def keys(q: str | None = None) -> JSONResponse:
        with store.read() as document:
            return JSONResponse(content=list_keys(document, q))

    # `key` is only used for routing; the literal key comes from the raw path.
    @app.get("/api/data/{key:path}")
    def data(key: str, request: Request) -> JSONResponse:
        literal_key = decode_key(_raw_key_segment(request))
        logger.info("processing request for key", extra={"key": literal_key})

        params = _first_values(request)
        with store.read() as document:
            if literal_key not in document:
                raise KeyNotFoundError(literal_key)
            payload = project(literal_key, document[literal_key], params)
            return JSONResponse(content=payload)

    frontend = Path(config.frontend_dir)
    if frontend.is_dir():
        app.mount("/", StaticFiles(directory=frontend, html=True), name="frontend")
    else:
        logger.warning("frontend directory missing, static assets disabled", extra={"path": str(frontend)})

    return app
