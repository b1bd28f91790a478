# File transfer — the collaborator that streams regular files.
# Created: 2026-10-19
#
# The router only decides *that* a path is a file; content type, ETag and
# Last-Modified handling, range requests and streaming belong here.

from __future__ import annotations

import logging
import os
from typing import Protocol

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)

NOT_FOUND_TEXT = "404 page not found"


def not_found() -> PlainTextResponse:
    return PlainTextResponse(NOT_FOUND_TEXT, status_code=404)


class FileTransfer(Protocol):
    """Protocol for serving a resolved regular file."""

    async def send(self, request: Request, path: str) -> Response:
        """Build the response for the file at absolute *path*."""
        ...


class StaticFileTransfer:
    """FileTransfer backed by Starlette's ``StaticFiles``.

    Files ``StaticFiles`` refuses (special files, symlinks leading outside
    the root) get the same plain-text 404 as missing paths.
    """

    def __init__(self, root: str):
        self.root = root
        self._static = StaticFiles(directory=root)

    async def send(self, request: Request, path: str) -> Response:
        relative = os.path.relpath(path, self.root)
        try:
            return await self._static.get_response(relative, request.scope)
        except HTTPException as exc:
            if exc.status_code != 404:
                raise
            logger.debug("Refused to serve %r", path)
            return not_found()
