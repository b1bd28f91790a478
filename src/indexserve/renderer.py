# Listing renderer — Jinja2 HTML page for a directory Listing.
# Created: 2026-10-19

from __future__ import annotations

import logging
from pathlib import Path

from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError

from indexserve.errors import RenderError
from indexserve.listing import Listing

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
LISTING_TEMPLATE = "index.html"


def human_size(num_bytes: int) -> str:
    """Format a byte count the way listings show it."""
    if num_bytes < 1024:
        return f"{num_bytes} B"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.1f} KB"
    if num_bytes < 1024 * 1024 * 1024:
        return f"{num_bytes / (1024 * 1024):.1f} MB"
    return f"{num_bytes / (1024 * 1024 * 1024):.1f} GB"


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["filesize"] = human_size


def render_listing(listing: Listing) -> str:
    """Render *listing* to a complete HTML document.

    The page is rendered to a string in full, so a failure never leaves a
    partially written response behind.

    Raises:
        RenderError: the template failed to load or render.
    """
    try:
        template = templates.get_template(LISTING_TEMPLATE)
        return template.render(listing=listing)
    except (TemplateError, UnicodeError) as exc:
        raise RenderError(listing.dir, exc) from exc
