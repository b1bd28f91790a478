# indexserve — static file server with generated directory listings.
# Created: 2026-10-19

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("indexserve")
except PackageNotFoundError:
    __version__ = "0.0.0"
