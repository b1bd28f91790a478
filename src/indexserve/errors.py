# Error taxonomy for indexserve.
# Created: 2026-10-19
#
# A missing path is not an error here: the resolver reports it as
# EntryKind.NOT_FOUND and the router answers 404.

from __future__ import annotations

__all__ = [
    "IndexServeError",
    "StatError",
    "ReadError",
    "RenderError",
    "StartupError",
]


class IndexServeError(Exception):
    """Base class for all indexserve errors."""


class _PathError(IndexServeError):
    """An error tied to a filesystem path, keeping the underlying cause."""

    reason = "failed"

    def __init__(self, path: str, cause: BaseException | None = None):
        self.path = path
        self.cause = cause
        detail = f"{self.reason}: {path}"
        if cause is not None:
            detail = f"{detail} ({cause})"
        super().__init__(detail)


class StatError(_PathError):
    """stat() failed for a reason other than the path not existing."""

    reason = "stat failed"


class ReadError(_PathError):
    """Directory enumeration failed after the directory was found."""

    reason = "cannot read directory"


class RenderError(_PathError):
    """The listing template could not be rendered."""

    reason = "cannot render listing"


class StartupError(IndexServeError):
    """The server could not start (bad root, port unavailable)."""
