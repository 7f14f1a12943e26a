"""Favorite command handler for the quotescroll CLI."""

import logging
import sys

from ...exceptions import ValidationError
from ..utils.common import get_app_cli

logger = logging.getLogger(__name__)


def handle_favorite(args):
    """Toggle the favorite flag of a stored highlight."""
    app = get_app_cli(args)
    try:
        highlight = app.toggle_favorite(args.id)
    except ValidationError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        app.close()

    if highlight is None:
        logger.error("Highlight %s not found.", args.id)
        print(f"Error: No highlight with ID {args.id}.")
        sys.exit(1)

    state = "added to" if highlight.is_favorite else "removed from"
    print(f"Highlight {highlight.id} {state} favorites.")
