"""Command-line argument parsers for quotescroll."""

import argparse

from .. import __version__


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        description="Keep a local copy of your Readwise highlights and read them as a feed.", prog="quotescroll"
    )

    # Global options
    _setup_global_options(parser)

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    # Add all command subparsers
    _setup_sync_command(subparsers)
    _setup_feed_command(subparsers)
    _setup_books_command(subparsers)
    _setup_favorite_command(subparsers)
    _setup_status_command(subparsers)
    _setup_config_command(subparsers)
    _setup_reset_db_command(subparsers)
    _setup_version_command(subparsers)

    return parser


def _setup_global_options(parser):
    """Set up global options for the CLI."""
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}", help="Show program's version number and exit."
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set the logging level (default: WARNING).",
    )
    parser.add_argument(
        "--log-file", type=str, default=None, help="Log output to a specified file in addition to the console."
    )


def _add_db_path_option(parser):
    parser.add_argument(
        "--db-path",
        type=str,
        help="Path to the SQLite database (default: from config or data directory).",
    )


def _setup_sync_command(subparsers):
    """Set up the sync command and its options."""
    from .commands.sync import handle_sync

    parser_sync = subparsers.add_parser("sync", help="Import highlights from Readwise into the local database")
    parser_sync.add_argument(
        "--api-token", "-t", type=str, help="Readwise API token (or use the READWISE_API_TOKEN environment variable)."
    )
    _add_db_path_option(parser_sync)
    parser_sync.add_argument(
        "--include-deleted",
        action="store_true",
        default=None,
        help="Also import highlights discarded in Readwise (default: from config).",
    )
    parser_sync.add_argument(
        "--updated-after", type=str, help="Only import data updated after this ISO 8601 timestamp."
    )
    mode_group = parser_sync.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--incremental", "-i", action="store_true", help="Only import changes since the last successful sync."
    )
    mode_group.add_argument(
        "--resume", "-r", action="store_true", help="Continue an interrupted sync with its original options."
    )
    parser_sync.set_defaults(func=handle_sync)


def _setup_feed_command(subparsers):
    """Set up the feed command and its options."""
    from .commands.feed import handle_feed

    parser_feed = subparsers.add_parser("feed", help="Show the highlight feed")
    _add_db_path_option(parser_feed)
    parser_feed.add_argument("--book-id", type=int, help="Only show highlights from this book")
    parser_feed.add_argument("--search", "-s", type=str, help="Search in highlight text and notes")
    parser_feed.add_argument("--favorites", action="store_true", help="Only show favorite highlights")
    parser_feed.add_argument(
        "--show-deleted",
        action="store_true",
        default=None,
        help="Include highlights discarded in Readwise (default: from config)",
    )
    parser_feed.add_argument(
        "--random", action="store_true", default=None, help="Shuffle the feed instead of newest first"
    )
    parser_feed.add_argument(
        "--samples",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Pad a sparse feed with sample quotes (default: from config)",
    )
    parser_feed.add_argument("--limit", "-n", type=int, default=20, help="Maximum number of highlights (default: 20)")
    parser_feed.add_argument(
        "--format", type=str, choices=["text", "json"], default="text", help="Output format (default: text)"
    )
    parser_feed.set_defaults(func=handle_feed)


def _setup_books_command(subparsers):
    """Set up the books command."""
    from .commands.books import handle_books

    parser_books = subparsers.add_parser("books", help="List all books with highlight counts")
    _add_db_path_option(parser_books)
    parser_books.add_argument(
        "--format", type=str, choices=["text", "json"], default="text", help="Output format (default: text)"
    )
    parser_books.set_defaults(func=handle_books)


def _setup_favorite_command(subparsers):
    """Set up the favorite command."""
    from .commands.favorite import handle_favorite

    parser_favorite = subparsers.add_parser("favorite", help="Toggle the favorite flag of a highlight")
    parser_favorite.add_argument("id", type=int, help="Highlight ID")
    _add_db_path_option(parser_favorite)
    parser_favorite.set_defaults(func=handle_favorite)


def _setup_status_command(subparsers):
    """Set up the status command."""
    from .commands.status import handle_status

    parser_status = subparsers.add_parser("status", help="Show the state of the last sync")
    _add_db_path_option(parser_status)
    parser_status.set_defaults(func=handle_status)


def _setup_config_command(subparsers):
    """Set up the config command and its subcommands."""
    from .commands.config import handle_configure

    parser_config = subparsers.add_parser("config", help="Configure the application")
    config_subparsers = parser_config.add_subparsers(dest="config_command", help="Configuration commands")

    # Config show subcommand
    parser_config_show = config_subparsers.add_parser("show", help="Show current configuration")
    parser_config_show.set_defaults(func=handle_configure)

    # Config token subcommand
    parser_config_token = config_subparsers.add_parser("token", help="Set the Readwise API token")
    parser_config_token.add_argument(
        "token", nargs="?", type=str, help="The Readwise API token (omit for interactive prompt)"
    )
    parser_config_token.set_defaults(func=handle_configure)

    # Config clear-token subcommand
    parser_config_clear = config_subparsers.add_parser("clear-token", help="Forget the stored Readwise API token")
    parser_config_clear.set_defaults(func=handle_configure)

    # Config set subcommand
    parser_config_set = config_subparsers.add_parser("set", help="Set a configuration value")
    parser_config_set.add_argument("key", type=str, help="Configuration key to set")
    parser_config_set.add_argument("value", type=str, help="Value to set")
    parser_config_set.set_defaults(func=handle_configure)

    # Config paths subcommand
    parser_config_paths = config_subparsers.add_parser("paths", help="Show configuration and data paths")
    parser_config_paths.set_defaults(func=handle_configure)

    parser_config.set_defaults(func=handle_configure)


def _setup_reset_db_command(subparsers):
    """Set up the reset-db command."""
    from .commands.reset_db import handle_reset_db

    parser_reset = subparsers.add_parser("reset-db", help="Delete all locally stored books, highlights and sync state")
    _add_db_path_option(parser_reset)
    parser_reset.add_argument("--force", "-f", action="store_true", help="Skip confirmation prompt")
    parser_reset.set_defaults(func=handle_reset_db)


def _setup_version_command(subparsers):
    """Set up the version command."""
    from .commands.version import handle_version

    parser_version = subparsers.add_parser("version", help="Show version information")
    parser_version.set_defaults(func=handle_version)
