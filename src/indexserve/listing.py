# Directory listing model — filtered, partitioned children of one directory.
# Created: 2026-10-19

from __future__ import annotations

import logging
import os
from datetime import UTC, datetime

from pydantic import BaseModel, field_serializer

from indexserve.errors import ReadError
from indexserve.resolver import clean, display_text, relativize, url_quote

logger = logging.getLogger(__name__)


class FileEntry(BaseModel):
    """A single file or directory entry."""

    name: str
    is_dir: bool = False
    size: int = 0
    modified: datetime | None = None

    @property
    def display_name(self) -> str:
        return display_text(self.name)

    @field_serializer("name")
    def _serialize_name(self, name: str) -> str:
        return display_text(name)

    @classmethod
    def from_dir_entry(cls, entry: os.DirEntry) -> FileEntry:
        try:
            st = entry.stat()
        except OSError:
            # dangling symlink: report the link itself
            st = entry.stat(follow_symlinks=False)
        is_dir = entry.is_dir()
        return cls(
            name=entry.name,
            is_dir=is_dir,
            size=0 if is_dir else st.st_size,
            modified=datetime.fromtimestamp(st.st_mtime, tz=UTC),
        )


class Listing(BaseModel):
    """Directory listing view model."""

    root: str
    dir: str
    directories: list[FileEntry] = []
    files: list[FileEntry] = []

    @property
    def rooted_dir(self) -> str:
        return relativize(self.dir, self.root)

    @property
    def display_dir(self) -> str:
        return display_text(self.rooted_dir)

    def href(self, entry: FileEntry) -> str:
        """Rooted link target for *entry*."""
        return clean(f"{self.rooted_dir}/{entry.name}")

    def url(self, entry: FileEntry) -> str:
        """Percent-encoded href for *entry*, built from its filesystem bytes."""
        return url_quote(self.href(entry))

    @field_serializer("root", "dir")
    def _serialize_path(self, path: str) -> str:
        return display_text(path)


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def read_listing(directory: str, root: str, *, sort_entries: bool = False) -> Listing:
    """Enumerate *directory* into a Listing.

    Hidden entries are dropped before classification.  Entries keep the
    order ``os.scandir`` yields them in unless *sort_entries* is set.

    Raises:
        ReadError: the directory could not be enumerated.
    """
    try:
        with os.scandir(directory) as it:
            entries = [FileEntry.from_dir_entry(e) for e in it if not is_hidden(e.name)]
    except OSError as exc:
        raise ReadError(directory, exc) from exc

    if sort_entries:
        entries.sort(key=lambda e: e.name)

    directories = [e for e in entries if e.is_dir]
    files = [e for e in entries if not e.is_dir]
    logger.debug(
        "Listed %s: %d directories, %d files", directory, len(directories), len(files)
    )
    return Listing(root=root, dir=directory, directories=directories, files=files)
