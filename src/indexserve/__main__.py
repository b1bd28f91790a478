"""indexserve entry point.

With no arguments, serves the current working directory on port 3000 on all
interfaces.  Flags and ``INDEXSERVE_*`` environment variables override the
defaults.
"""

import argparse
import logging
import sys

from pydantic import ValidationError

from indexserve import __version__
from indexserve.config import Settings
from indexserve.errors import StartupError
from indexserve.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="indexserve",
        description="Serve a directory over HTTP with generated index pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  indexserve                         Serve the current directory on :3000
  indexserve --port 8080             Serve on another port
  indexserve --root ~/public --sort  Serve ~/public with name-sorted listings
""",
    )
    parser.add_argument("--host", type=str, default=None, help="Interface to bind (default: 0.0.0.0)")
    parser.add_argument("--port", "-p", type=int, default=None, help="Port (default: 3000)")
    parser.add_argument("--root", type=str, default=None, help="Directory to serve (default: cwd)")
    parser.add_argument(
        "--sort",
        action="store_true",
        default=None,
        help="Sort listings by name instead of directory order",
    )
    parser.add_argument("--log-level", type=str, default=None, help="Log level (default: INFO)")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(level="INFO")

    try:
        settings = Settings.load(
            host=args.host,
            port=args.port,
            root=args.root,
            sort_entries=args.sort,
            log_level=args.log_level,
        )
    except ValidationError as exc:
        logger.error("Invalid configuration:\n%s", exc)
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)

    from indexserve.server import run_server

    try:
        run_server(settings)
    except StartupError as exc:
        logger.error("Startup failed: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
