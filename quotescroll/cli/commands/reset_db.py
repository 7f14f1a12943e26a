"""Reset database command handler for the quotescroll CLI."""

import logging
import sys
from pathlib import Path

from ...database import HighlightStore
from ..utils.common import get_db_path_cli

logger = logging.getLogger(__name__)


def handle_reset_db(args):
    """Handle the 'reset-db' command.

    Deletes all imported books, highlights, favorites and sync progress.
    Requires explicit confirmation from the user unless the --force flag is used.
    """
    logger.info("Starting 'reset-db' command.")

    db_path = Path(get_db_path_cli(args))
    if not db_path.exists():
        print(f"No database file found at {db_path}. Nothing to reset.")
        return

    store = HighlightStore(db_path)
    try:
        if not args.force:
            stats = {"books": len(store.get_all_books()), "highlights": store.get_highlight_count()}

            print("\n" + "=" * 80)
            print("WARNING: You are about to reset the local highlight database.")
            print("Favorites are only stored locally and will be lost.")
            print("=" * 80 + "\n")

            print("The following data will be deleted:")
            print(f"- {stats['books']} books")
            print(f"- {stats['highlights']} highlights")
            print("- Sync progress")
            print("\nThis action cannot be undone.")

            confirmation = input('\nType "RESET" to confirm database reset: ')
            if confirmation != "RESET":
                print("Database reset cancelled.")
                return
        else:
            logger.info("Forced database reset requested. Skipping confirmation.")

        store.clear_all_data()
        print("\nDatabase reset successfully. Run 'quotescroll sync' to import your highlights again.")
    except Exception as e:
        logger.error("Error resetting database: %s", e, exc_info=True)
        print(f"Error resetting database: {e}")
        sys.exit(1)
    finally:
        store.close()
