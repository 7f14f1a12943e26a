"""Paginated import of the Readwise export into the local store."""

import logging
import threading
import time
from collections.abc import Iterable
from datetime import datetime, timezone

from ..database import HighlightStore
from ..exceptions import ImportAlreadyRunningError, NoImportToResumeError, RateLimitError, ReadwiseAPIError
from ..models import ImportProgress, ImportRun, ImportStatus
from ..readwise import ReadwiseAPIClient
from .merger import deduplicate_highlights
from .normalizer import normalize_export_results

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Import failed"


class ImportListener:
    """Receives import events. Override the hooks you need; the defaults do nothing."""

    def on_progress(self, progress: ImportProgress) -> None:
        """Called after every page, and once more with the terminal record."""

    def on_ready(self) -> None:
        """Called once per run, right after the first page has been stored."""

    def on_error(self, message: str) -> None:
        """Called when the run aborts, with a user-facing message."""


class ImportManager:
    """Drives fetch, normalize, merge and persist cycles over the export pages.

    Only one run can be active per instance; a second `start_import` while a
    run is in progress raises `ImportAlreadyRunningError` instead of racing on
    the same store.
    """

    PAGE_DELAY = 0.5  # seconds between pages, to go easy on the API

    def __init__(
        self,
        store: HighlightStore,
        client: ReadwiseAPIClient,
        listeners: Iterable[ImportListener] = (),
        page_delay: float = PAGE_DELAY,
    ):
        self.store = store
        self.client = client
        self.page_delay = page_delay
        self._listeners: list[ImportListener] = list(listeners)
        self._lock = threading.Lock()
        self._is_running = False

    @property
    def is_running(self) -> bool:
        return self._is_running

    def subscribe(self, listener: ImportListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: ImportListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def start_import(
        self,
        include_deleted: bool = False,
        updated_after: str | None = None,
        start_cursor: str | None = None,
    ) -> ImportProgress:
        """Import every export page into the local store.

        Failures never propagate: they end the run with an `error` progress
        record, which is persisted, reported to listeners and returned.

        Args:
            include_deleted: Also import highlights discarded in Readwise
            updated_after: Only import data updated after this ISO timestamp
            start_cursor: Page cursor to start from instead of the first page

        Returns:
            The terminal progress record (status success or error)

        Raises:
            ImportAlreadyRunningError: If this manager is already importing
        """
        run = ImportRun(
            include_deleted=include_deleted,
            updated_after=updated_after,
            started_at=datetime.now(timezone.utc),
        )
        return self._start(start_cursor, run)

    def resume_import(self) -> ImportProgress:
        """Continue an interrupted import from the stored page cursor.

        The resumed run reuses the interrupted run's options and start time,
        and its page and book counters carry on from the pages stored before
        the interruption. A book whose highlights span the interruption point
        is counted once on each side.

        Raises:
            NoImportToResumeError: If no stored progress has a next page cursor
            ImportAlreadyRunningError: If this manager is already importing
        """
        progress = self.store.get_import_progress()
        if progress is None or not progress.next_page_cursor:
            raise NoImportToResumeError("No import to resume")

        run = progress.run
        if run.started_at is None:
            # Record written before run options were stored
            run = run.model_copy(update={"started_at": datetime.now(timezone.utc)})

        logger.info(
            "Resuming import from page cursor %s after %d pages.", progress.next_page_cursor, run.completed_pages
        )
        return self._start(progress.next_page_cursor, run)

    def _start(self, start_cursor: str | None, run: ImportRun) -> ImportProgress:
        with self._lock:
            if self._is_running:
                raise ImportAlreadyRunningError("Import already in progress")
            self._is_running = True

        logger.info(
            "Starting import (include_deleted=%s, updated_after=%s, start_cursor=%s).",
            run.include_deleted,
            run.updated_after,
            start_cursor,
        )
        try:
            return self._run(start_cursor, run)
        finally:
            self._is_running = False

    def _run(self, page_cursor: str | None, run: ImportRun) -> ImportProgress:
        page_count = run.completed_pages
        total_highlights = 0
        seen_book_ids: set[int] = set()
        first_page_loaded = False

        try:
            while True:
                page_count += 1
                logger.info("Fetching export page %d...", page_count)
                response = self.client.fetch_export_page(
                    page_cursor=page_cursor,
                    updated_after=run.updated_after,
                    include_deleted=run.include_deleted,
                )

                data = normalize_export_results(response)

                # Merge against everything stored so far, not just this page
                merged = deduplicate_highlights(self.store.get_all_highlights(), data.highlights)
                incoming_ids = {highlight.id for highlight in data.highlights}
                page_highlights = [highlight for highlight in merged if highlight.id in incoming_ids]
                self.store.save_page(data.books, page_highlights)

                total_highlights = len(merged)
                seen_book_ids.update(book.user_book_id for book in data.books)
                total_books = run.completed_books + len(seen_book_ids)

                progress = ImportProgress(
                    status=ImportStatus.LOADING,
                    current_page=page_count,
                    total_highlights=total_highlights,
                    total_books=total_books,
                    next_page_cursor=response.next_page_cursor,
                    last_sync_timestamp=datetime.now(timezone.utc),
                    run=run.model_copy(update={"completed_pages": page_count, "completed_books": total_books}),
                )
                self._record(progress)
                logger.info(
                    "Page %d stored: %d books, %d highlights (%d highlights total).",
                    page_count,
                    len(data.books),
                    len(data.highlights),
                    total_highlights,
                )

                if not first_page_loaded:
                    first_page_loaded = True
                    self._notify("on_ready")

                page_cursor = response.next_page_cursor
                if not page_cursor:
                    break

                logger.debug("Sleeping for %.2f seconds before next page.", self.page_delay)
                time.sleep(self.page_delay)

            # Stamped with the start time so an incremental sync also catches edits made during this run
            final_progress = ImportProgress(
                status=ImportStatus.SUCCESS,
                current_page=page_count,
                total_highlights=total_highlights,
                total_books=run.completed_books + len(seen_book_ids),
                next_page_cursor=None,
                last_sync_timestamp=run.started_at,
                run=run,
            )
            self._record(final_progress)
        except Exception as e:
            logger.error("Import failed on page %d.", page_count, exc_info=True)
            completed = run.model_copy(
                update={
                    "completed_pages": page_count - 1,
                    "completed_books": run.completed_books + len(seen_book_ids),
                }
            )
            return self._fail(e, page_cursor, completed)

        logger.info(
            "Import finished: %d pages, %d books, %d highlights.",
            page_count,
            final_progress.total_books,
            total_highlights,
        )
        return final_progress

    def _fail(self, error: Exception, failed_cursor: str | None, run: ImportRun) -> ImportProgress:
        """Record and report a failed run, keeping the failed page cursor and run options for resuming."""
        if isinstance(error, RateLimitError):
            message = f"Rate limited. Please wait {error.retry_after} seconds and try again."
        elif isinstance(error, ReadwiseAPIError):
            message = error.message or GENERIC_ERROR_MESSAGE
        else:
            message = str(error) or GENERIC_ERROR_MESSAGE

        progress = ImportProgress(
            status=ImportStatus.ERROR,
            current_page=0,
            total_highlights=0,
            total_books=0,
            error=message,
            next_page_cursor=failed_cursor,
            run=run,
        )
        try:
            self._record(progress)
        except Exception:
            # Store is unusable; listeners still hear about the failure
            logger.error("Failed to persist error progress.", exc_info=True)
            self._notify("on_progress", progress)
        self._notify("on_error", message)
        return progress

    def _record(self, progress: ImportProgress) -> None:
        self.store.set_import_progress(progress)
        self._notify("on_progress", progress)

    def _notify(self, hook: str, *args) -> None:
        for listener in list(self._listeners):
            try:
                getattr(listener, hook)(*args)
            except Exception:
                logger.error("Import listener %r failed in %s.", listener, hook, exc_info=True)
