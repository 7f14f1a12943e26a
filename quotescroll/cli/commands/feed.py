"""Feed command handler for the quotescroll CLI."""

import logging
import sys

from ...config import get_config_value
from ...models import FeedFilters
from ..utils.common import get_app_cli, pick
from ..utils.formatters import format_feed_json, format_feed_text

logger = logging.getLogger(__name__)


def build_filters(args) -> FeedFilters:
    """Turn command line options into feed filters, with config defaults for unset flags."""
    return FeedFilters(
        book_id=args.book_id,
        search_query=args.search or None,
        show_deleted=pick(args.show_deleted, get_config_value("show_deleted", False)),
        show_favorites_only=args.favorites,
        randomize=pick(args.random, get_config_value("randomize", False)),
        show_sample_quotes=pick(args.samples, get_config_value("show_sample_quotes", True)),
    )


def handle_feed(args):
    """Handle the 'feed' command."""
    logger.info("Starting 'feed' command.")

    filters = build_filters(args)
    logger.debug("Feed filters: %s", filters)
    limit = args.limit if args.limit is not None and args.limit >= 0 else None

    try:
        app = get_app_cli(args)
        try:
            highlights = app.get_feed(filters, limit=limit)

            if args.format == "json":
                print(format_feed_json(highlights))
            else:
                books = {book.user_book_id: book for book in app.get_books()}
                print(format_feed_text(highlights, books))
        finally:
            app.close()
    except Exception as e:
        logger.error("Error building feed: %s", e, exc_info=True)
        print(f"Error building feed: {e}")
        sys.exit(1)
