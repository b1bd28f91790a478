# Path resolver — URL path to filesystem path, and back to a rooted path.
# Created: 2026-10-19
#
# relativize() is shared by the access log and the listing links so both
# produce the same form the router later resolves.

from __future__ import annotations

import enum
import logging
import os
import posixpath
import stat
from dataclasses import dataclass
from urllib.parse import quote

from indexserve.errors import StatError

logger = logging.getLogger(__name__)

__all__ = [
    "EntryKind",
    "Resolution",
    "clean",
    "to_filesystem",
    "relativize",
    "classify",
    "display_text",
    "url_quote",
]


class EntryKind(enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Resolution:
    """Outcome of classifying a request path."""

    kind: EntryKind
    path: str

    @property
    def exists(self) -> bool:
        return self.kind is not EntryKind.NOT_FOUND


def clean(path: str) -> str:
    """Lexically normalize a slash-separated path.

    Resolves ``.`` and ``..``, collapses repeated slashes and drops trailing
    ones.  A rooted path never climbs above ``/``.  Empty input gives ``"."``.
    """
    if not path:
        return "."
    cleaned = posixpath.normpath(path)
    # POSIX keeps a leading "//" as implementation-defined; URLs don't.
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def to_filesystem(url_path: str, root: str) -> str:
    """Map a URL path onto an absolute path under *root*."""
    rooted = clean("/" + url_path)
    parts = [p for p in rooted.split("/") if p]
    return os.path.join(root, *parts)


def relativize(path: str, root: str) -> str:
    """Return *path* as a rooted URL path relative to *root*.

    >>> relativize("/srv/www/docs/", "/srv/www")
    '/docs'
    """
    path = os.path.abspath(path)
    root = os.path.abspath(root)
    prefix = root.rstrip(os.sep)
    if path == root:
        rest = ""
    elif path.startswith(prefix + os.sep):
        rest = path[len(prefix):]
    else:
        rest = path
    return clean("/" + rest.replace(os.sep, "/"))


def classify(url_path: str, root: str) -> Resolution:
    """Resolve *url_path* under *root* and stat it once.

    Raises:
        StatError: stat failed for any reason other than the path missing.
    """
    target = to_filesystem(url_path, root)
    try:
        st = os.stat(target)
    except (FileNotFoundError, NotADirectoryError):
        return Resolution(EntryKind.NOT_FOUND, target)
    except ValueError:
        # embedded NUL byte; nothing on disk can have that name
        return Resolution(EntryKind.NOT_FOUND, target)
    except OSError as exc:
        raise StatError(target, exc) from exc

    if stat.S_ISDIR(st.st_mode):
        return Resolution(EntryKind.DIRECTORY, target)
    return Resolution(EntryKind.FILE, target)


def display_text(path: str) -> str:
    """Printable form of a filesystem name or path.

    Bytes that are not valid UTF-8 (surrogate-escaped by ``os``) become
    U+FFFD so the text can be written into HTML, JSON and logs.
    """
    return os.fsencode(path).decode("utf-8", "replace")


def url_quote(path: str) -> str:
    """Percent-encode a rooted path from its filesystem bytes, keeping ``/``."""
    return quote(os.fsencode(path), safe="/")
