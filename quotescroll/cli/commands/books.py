"""Books command handler for the quotescroll CLI."""

import logging
import sys

from ..utils.common import get_app_cli
from ..utils.formatters import format_books_json, format_books_text

logger = logging.getLogger(__name__)


def handle_books(args):
    """Handle the 'books' command to list books with their highlight counts."""
    logger.info("Starting 'books' command.")

    try:
        app = get_app_cli(args)
        try:
            books = app.get_books_with_counts()
        finally:
            app.close()
    except Exception as e:
        logger.error("Error listing books: %s", e, exc_info=True)
        print(f"Error listing books: {e}")
        sys.exit(1)

    if not books:
        print("No books found in the database.")
        return

    if args.format == "json":
        print(format_books_json(books))
    else:
        print(format_books_text(books))
