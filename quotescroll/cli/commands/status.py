"""Status command handler for the quotescroll CLI."""

from ..utils.common import get_app_cli
from ..utils.formatters import format_import_status


def handle_status(args):
    """Show the stored progress of the last sync."""
    app = get_app_cli(args)
    try:
        progress = app.get_import_progress()
        highlight_count = app.store.get_highlight_count()
    finally:
        app.close()

    print(format_import_status(progress))
    print(f"Highlights stored locally: {highlight_count}")
