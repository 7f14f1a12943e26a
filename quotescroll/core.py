"""Core functionality for the quotescroll application."""

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

from .database import DEFAULT_DB_PATH, HighlightStore
from .exceptions import ValidationError
from .feed import get_sorted_highlights
from .models import Book, FeedFilters, Highlight, ImportProgress, ImportStatus
from .readwise import ReadwiseAPIClient
from .sync import ImportListener, ImportManager

logger = logging.getLogger(__name__)


class QuoteScroll:
    """Main application class: keeps a local copy of Readwise highlights and serves the feed."""

    def __init__(self, readwise_token: str, db_path: Path | str | None = None):
        """Initialize the application."""
        self.db_path = db_path if db_path else DEFAULT_DB_PATH
        logger.info("Using database at: %s", self.db_path)

        self.readwise_client = ReadwiseAPIClient(readwise_token)
        self.store = HighlightStore(self.db_path)
        self.import_manager = ImportManager(self.store, self.readwise_client)

    def validate_setup(self) -> None:
        """Check that a Readwise token is present and accepted.

        Raises:
            ValidationError: If the token is missing or rejected
        """
        logger.info("Validating setup...")
        if not self.readwise_client.api_token:
            raise ValidationError("Readwise API token is not set.")

        if not self.readwise_client.validate_token():
            raise ValidationError("Invalid Readwise API token.")

        logger.info("Setup validation successful.")

    def sync(
        self,
        include_deleted: bool = False,
        updated_after: str | None = None,
        incremental: bool = False,
        listeners: Iterable[ImportListener] = (),
    ) -> ImportProgress:
        """Import the Readwise export into the local store.

        With `incremental`, only data updated since the last successful sync is
        fetched; an explicit `updated_after` takes precedence.
        """
        if incremental and not updated_after:
            updated_after = self._last_successful_sync()
            if updated_after:
                logger.info("Incremental sync of changes since %s.", updated_after)
            else:
                logger.info("No previous successful sync, running a full import.")

        with self._listening(listeners):
            return self.import_manager.start_import(include_deleted=include_deleted, updated_after=updated_after)

    def resume_sync(self, listeners: Iterable[ImportListener] = ()) -> ImportProgress:
        """Continue an interrupted sync from its stored page cursor.

        Raises:
            NoImportToResumeError: If there is nothing to resume
        """
        with self._listening(listeners):
            return self.import_manager.resume_import()

    def get_feed(self, filters: FeedFilters | None = None, limit: int | None = None) -> list[Highlight]:
        """Build the highlight feed from everything stored locally."""
        filters = filters or FeedFilters()
        highlights = get_sorted_highlights(
            self.store.get_all_highlights(), filters, add_samples=filters.show_sample_quotes
        )
        if limit is not None:
            highlights = highlights[:limit]
        logger.debug("Feed built with %d highlights.", len(highlights))
        return highlights

    def get_books(self) -> list[Book]:
        return self.store.get_all_books()

    def get_books_with_counts(self) -> list[dict]:
        return self.store.get_books_with_counts()

    def toggle_favorite(self, highlight_id: int) -> Highlight | None:
        """Flip the favorite flag of a stored highlight.

        Raises:
            ValidationError: If the id belongs to a sample highlight
        """
        if highlight_id <= 0:
            raise ValidationError("Sample highlights can't be favorited.")
        return self.store.toggle_favorite(highlight_id)

    def get_import_progress(self) -> ImportProgress | None:
        return self.store.get_import_progress()

    def close(self) -> None:
        """Close the database connection."""
        if self.store:
            self.store.close()

    def _last_successful_sync(self) -> str | None:
        progress = self.store.get_import_progress()
        if progress is None or progress.status != ImportStatus.SUCCESS or progress.last_sync_timestamp is None:
            return None
        return progress.last_sync_timestamp.isoformat()

    @contextmanager
    def _listening(self, listeners: Iterable[ImportListener]) -> Iterator[None]:
        """Subscribe listeners to the import manager for the duration of a `with` block."""
        listeners = list(listeners)
        for listener in listeners:
            self.import_manager.subscribe(listener)
        try:
            yield
        finally:
            for listener in listeners:
                self.import_manager.unsubscribe(listener)
