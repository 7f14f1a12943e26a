"""Sync command handler for the quotescroll CLI."""

import logging
import sys

from ...config import get_config_value
from ...core import QuoteScroll
from ...exceptions import NoImportToResumeError, QuoteScrollError
from ...models import ImportProgress, ImportStatus
from ...sync import ImportListener
from ..utils.common import get_db_path_cli, get_readwise_token_cli, pick
from ..utils.formatters import format_progress_line, format_sync_summary

logger = logging.getLogger(__name__)


class ConsoleProgressListener(ImportListener):
    """Prints a line per imported page."""

    def on_progress(self, progress: ImportProgress) -> None:
        if progress.status == ImportStatus.LOADING:
            print(format_progress_line(progress))

    def on_ready(self) -> None:
        print("First page imported, the feed is ready.")


def handle_sync(args):
    """Handle the 'sync' command."""
    logger.info("Starting 'sync' command.")

    readwise_token = get_readwise_token_cli(args)
    if not readwise_token:
        logger.critical("Readwise API token not provided.")
        print("Error: Readwise API token not found. Set it with 'quotescroll config token' or --api-token.")
        sys.exit(1)

    if args.resume and (args.include_deleted is not None or args.updated_after):
        print("Error: --resume keeps the options of the interrupted sync; drop --include-deleted and --updated-after.")
        sys.exit(1)

    app = QuoteScroll(readwise_token=readwise_token, db_path=get_db_path_cli(args))
    try:
        app.validate_setup()

        listeners = [ConsoleProgressListener()]
        if args.resume:
            progress = app.resume_sync(listeners=listeners)
        else:
            progress = app.sync(
                include_deleted=pick(args.include_deleted, get_config_value("include_deleted", False)),
                updated_after=args.updated_after,
                incremental=args.incremental,
                listeners=listeners,
            )
    except NoImportToResumeError:
        print("There is no interrupted sync to resume. Run 'quotescroll sync' to start a new one.")
        sys.exit(1)
    except QuoteScrollError as e:
        logger.error("Sync failed: %s", e)
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        app.close()

    print(format_sync_summary(progress))
    if progress.status == ImportStatus.ERROR:
        sys.exit(1)
