"""indexserve HTTP server.

Serves the configured root directory: regular files go to the file transfer
collaborator, directories get a generated listing page, missing paths 404.

Every request is access-logged with its rooted path and client address
before it is routed.
"""

from __future__ import annotations

import logging
import os
import socket
from urllib.parse import unquote_to_bytes

try:
    import uvicorn
    from fastapi import FastAPI, Request
    from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
except ImportError as _exc:
    raise ImportError(
        "Server dependencies (fastapi, uvicorn, jinja2) are required "
        "but not installed. Reinstall with: pip install --upgrade indexserve"
    ) from _exc

from indexserve.config import Settings
from indexserve.errors import ReadError, RenderError, StartupError, StatError
from indexserve.listing import read_listing
from indexserve.renderer import render_listing
from indexserve.resolver import EntryKind, classify, display_text, relativize, to_filesystem
from indexserve.transfer import FileTransfer, StaticFileTransfer, not_found

logger = logging.getLogger(__name__)

INTERNAL_ERROR_TEXT = "Internal Server Error"


def request_path(request: Request) -> str:
    """Decoded request path, taken from the raw bytes when the server has them.

    Percent-escapes decode to bytes first, so names that are not valid UTF-8
    map back to the same surrogate-escaped names ``os`` returns.
    """
    raw = request.scope.get("raw_path")
    if raw:
        return os.fsdecode(unquote_to_bytes(raw.split(b"?", 1)[0]))
    return request.scope["path"]


def _client_address(request: Request) -> str:
    if request.client is None:
        return "-"
    return f"{request.client.host}:{request.client.port}"


def _wants_json(request: Request) -> bool:
    accept = request.headers.get("accept", "")
    return "application/json" in accept and "text/html" not in accept


def _internal_error() -> PlainTextResponse:
    return PlainTextResponse(INTERNAL_ERROR_TEXT, status_code=500)


def create_app(settings: Settings, transfer: FileTransfer | None = None) -> FastAPI:
    """Build the FastAPI application serving ``settings.root``."""
    root = settings.root_dir
    if transfer is None:
        transfer = StaticFileTransfer(root)

    # No docs/openapi routes: every path belongs to the served tree.
    app = FastAPI(
        title="indexserve",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.middleware("http")
    async def access_log_middleware(request: Request, call_next):
        rooted = relativize(to_filesystem(request_path(request), root), root)
        logger.info("%s %s", display_text(rooted), _client_address(request))
        return await call_next(request)

    @app.api_route("/{url_path:path}", methods=["GET", "HEAD"])
    async def serve(request: Request) -> Response:
        try:
            resolution = classify(request_path(request), root)
        except StatError as exc:
            logger.error("%s", display_text(str(exc)))
            return _internal_error()

        if resolution.kind is EntryKind.NOT_FOUND:
            return not_found()

        if resolution.kind is EntryKind.FILE:
            return await transfer.send(request, resolution.path)

        try:
            listing = read_listing(
                resolution.path, root, sort_entries=settings.sort_entries
            )
        except ReadError as exc:
            logger.error("%s", display_text(str(exc)))
            return _internal_error()

        if _wants_json(request):
            return JSONResponse(listing.model_dump(mode="json"))

        try:
            page = render_listing(listing)
        except RenderError as exc:
            logger.error("%s", display_text(str(exc)), exc_info=exc.cause)
            return _internal_error()
        return HTMLResponse(page)

    return app


def _bind_socket(host: str, port: int) -> socket.socket:
    """Bind the listening socket before uvicorn starts."""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError as exc:
        sock.close()
        raise StartupError(f"cannot listen on {host}:{port}: {exc}") from exc
    sock.set_inheritable(True)
    return sock


def run_server(settings: Settings) -> None:
    """Run the server until interrupted.

    Raises:
        StartupError: the listening socket could not be bound.
    """
    app = create_app(settings)
    sock = _bind_socket(settings.host, settings.port)

    display_host = "localhost" if settings.host in ("0.0.0.0", "::") else settings.host
    print(f"Serving {settings.root_dir} at address: http://{display_host}:{settings.port}")

    config = uvicorn.Config(
        app,
        log_config=None,
        log_level=settings.log_level.lower(),
        access_log=False,
    )
    server = uvicorn.Server(config)
    server.run(sockets=[sock])
