import json
import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from pathlib import Path
from typing import Any

import sqlite_utils
from sqlite_utils.db import NotFoundError

from ..exceptions import ValidationError
from ..models import Book, Highlight, ImportProgress

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.cwd() / "data" / "quotescroll.db"
IMPORT_PROGRESS_KEY = "import_progress"


def _book_to_row(book: Book) -> dict[str, Any]:
    return book.model_dump(mode="json")


def _highlight_to_row(highlight: Highlight) -> dict[str, Any]:
    row = highlight.model_dump(mode="json")
    row["is_favorite"] = int(highlight.is_favorite)
    row["is_deleted"] = int(highlight.is_deleted)
    return row


def _decode_tags(row: dict[str, Any]) -> dict[str, Any]:
    tags = row.get("tags")
    if isinstance(tags, str):
        row["tags"] = json.loads(tags) if tags else []
    elif tags is None:
        row["tags"] = []
    return row


def _row_to_book(row: dict[str, Any]) -> Book:
    return Book.model_validate(_decode_tags(dict(row)))


def _row_to_highlight(row: dict[str, Any]) -> Highlight:
    return Highlight.model_validate(_decode_tags(dict(row)))


class HighlightStore:
    """Local persistent store for books, highlights and import metadata, backed by SQLite."""

    def __init__(self, db_path: Path | str = DEFAULT_DB_PATH):
        """Open (or create) the database and ensure the schema is up to date."""
        # Ensure db_path is a Path object
        self.db_path = Path(db_path) if isinstance(db_path, str) else db_path

        # Special handling for in-memory database (doesn't need directory creation)
        if str(self.db_path) != ":memory:":
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            logger.info("Initializing HighlightStore with database at: %s", self.db_path)
            self.db = sqlite_utils.Database(self.db_path)
        else:
            logger.info("Initializing HighlightStore with in-memory database.")
            self.db = sqlite_utils.Database(memory=True)
        self._initialize_db()
        # Apply migrations after ensuring tables exist
        self._apply_migrations()

    def _initialize_db(self) -> None:
        """Create database tables and indexes if they don't exist."""
        created_tables = []
        if "books" not in self.db.table_names():
            logger.debug("Creating 'books' table.")
            self.db["books"].create(
                {
                    "user_book_id": int,
                    "title": str,
                    "author": str,
                    "category": str,
                    "source": str,
                    "num_highlights": int,
                    "last_highlight_at": str,
                    "updated": str,
                    "cover_image_url": str,
                    "highlights_url": str,
                    "source_url": str,
                    "asin": str,
                    "tags": str,
                    "document_note": str,
                    "summary": str,
                    "readwise_url": str,
                },
                pk="user_book_id",
                if_not_exists=True,
            )
            created_tables.append("books")

        if "highlights" not in self.db.table_names():
            logger.debug("Creating 'highlights' table.")
            self.db["highlights"].create(
                {
                    "id": int,
                    "user_book_id": int,
                    "text": str,
                    "note": str,
                    "location": int,
                    "location_type": str,
                    "highlighted_at": str,
                    "created_at": str,
                    "updated": str,
                    "url": str,
                    "color": str,
                    "tags": str,
                    "is_favorite": int,
                    "is_deleted": int,
                    "readwise_url": str,
                },
                pk="id",
                if_not_exists=True,
            )
            created_tables.append("highlights")

        if "metadata" not in self.db.table_names():
            logger.debug("Creating 'metadata' table.")
            self.db["metadata"].create({"key": str, "value": str}, pk="key", if_not_exists=True)
            created_tables.append("metadata")

        if created_tables:
            logger.info("Created database tables: %s", ", ".join(created_tables))

        self._ensure_indexes()

    def _ensure_indexes(self) -> None:
        """Create the secondary indexes used by book, favorite and feed queries."""
        self.db["books"].create_index(["category"], if_not_exists=True)
        self.db["books"].create_index(["updated"], if_not_exists=True)
        for column in ("user_book_id", "highlighted_at", "is_favorite", "is_deleted"):
            self.db["highlights"].create_index([column], if_not_exists=True)
        logger.debug("Ensured all required indexes exist")

    # --- Books ---

    def save_books(self, books: Iterable[Book]) -> int:
        """Insert or overwrite books, keyed by user_book_id."""
        rows = [_book_to_row(book) for book in books]
        if rows:
            self.db["books"].upsert_all(rows, pk="user_book_id")
        logger.debug("Saved %d books.", len(rows))
        return len(rows)

    def get_book(self, book_id: int) -> Book | None:
        try:
            return _row_to_book(self.db["books"].get(book_id))
        except NotFoundError:
            logger.debug("Book with ID %s not found", book_id)
            return None

    def get_all_books(self) -> list[Book]:
        return [_row_to_book(row) for row in self.db["books"].rows_where(order_by="title")]

    def get_books_with_counts(self) -> list[dict[str, Any]]:
        """Get all books with the number of locally stored, non-deleted highlights.

        Returns:
            List of dicts with user_book_id, title, author, category and highlight_count
        """
        query = """
        SELECT b.user_book_id, b.title, b.author, b.category,
               COUNT(h.id) AS highlight_count
        FROM books b
        LEFT JOIN highlights h ON h.user_book_id = b.user_book_id AND h.is_deleted = 0
        GROUP BY b.user_book_id
        ORDER BY b.title
        """
        books = list(self.db.query(query))
        logger.debug("Retrieved %d books with highlight counts", len(books))
        return books

    # --- Highlights ---

    def save_highlights(self, highlights: Iterable[Highlight]) -> int:
        """Insert or overwrite highlights, keyed by id.

        Raises:
            ValidationError: If a sample highlight (or any non-positive id) is passed
        """
        highlights = list(highlights)
        for highlight in highlights:
            if highlight.is_sample or highlight.id <= 0:
                raise ValidationError(f"Refusing to store sample highlight with id {highlight.id}")

        rows = [_highlight_to_row(highlight) for highlight in highlights]
        if rows:
            self.db["highlights"].upsert_all(rows, pk="id")
        logger.debug("Saved %d highlights.", len(rows))
        return len(rows)

    def save_page(self, books: Iterable[Book], highlights: Iterable[Highlight]) -> None:
        """Persist one import page: books first, then highlights.

        The two writes are not atomic. A crash in between leaves the page
        partially applied, which the next import repairs since merging is idempotent.
        """
        self.save_books(books)
        self.save_highlights(highlights)

    def get_highlight(self, highlight_id: int) -> Highlight | None:
        try:
            return _row_to_highlight(self.db["highlights"].get(highlight_id))
        except NotFoundError:
            logger.debug("Highlight with ID %s not found", highlight_id)
            return None

    def get_all_highlights(self) -> list[Highlight]:
        return [_row_to_highlight(row) for row in self.db["highlights"].rows]

    def get_highlights_by_book(self, book_id: int) -> list[Highlight]:
        return [_row_to_highlight(row) for row in self.db["highlights"].rows_where("user_book_id = ?", [book_id])]

    def get_favorite_highlights(self) -> list[Highlight]:
        return [_row_to_highlight(row) for row in self.db["highlights"].rows_where("is_favorite = 1")]

    def get_highlight_count(self) -> int:
        return self.db["highlights"].count

    def set_favorite(self, highlight_id: int, is_favorite: bool) -> Highlight | None:
        """Set the favorite flag of a stored highlight.

        Returns:
            The updated highlight, or None if no highlight has that id
        """
        if self.get_highlight(highlight_id) is None:
            return None
        self.db["highlights"].update(highlight_id, {"is_favorite": int(is_favorite)})
        logger.info("Highlight %s favorite set to %s", highlight_id, is_favorite)
        return self.get_highlight(highlight_id)

    def toggle_favorite(self, highlight_id: int) -> Highlight | None:
        """Flip the favorite flag of a stored highlight.

        Returns:
            The updated highlight, or None if no highlight has that id
        """
        highlight = self.get_highlight(highlight_id)
        if highlight is None:
            return None
        return self.set_favorite(highlight_id, not highlight.is_favorite)

    # --- Metadata ---

    def set_metadata(self, key: str, value: Any) -> None:
        self.db["metadata"].upsert({"key": key, "value": json.dumps(value, default=str)}, pk="key")

    def get_metadata(self, key: str) -> Any:
        try:
            row = self.db["metadata"].get(key)
        except NotFoundError:
            return None
        return json.loads(row["value"])

    def get_import_progress(self) -> ImportProgress | None:
        value = self.get_metadata(IMPORT_PROGRESS_KEY)
        return ImportProgress.model_validate(value) if value is not None else None

    def set_import_progress(self, progress: ImportProgress) -> None:
        self.set_metadata(IMPORT_PROGRESS_KEY, progress.model_dump(mode="json"))

    def clear_all_data(self) -> None:
        """Delete all books, highlights and metadata, keeping the schema."""
        for table in ("books", "highlights", "metadata"):
            self.db[table].delete_where()
        logger.info("Cleared all data from %s", self.db_path)

    # --- Migration Handling ---

    def _apply_migrations(self) -> None:
        """Apply any pending database migrations."""
        logger.debug("Checking for and applying database migrations...")
        if "_migrations" not in self.db.table_names():
            logger.info("Creating '_migrations' table for tracking schema changes.")
            self.db.create_table(
                "_migrations", {"id": int, "name": str, "applied_at": str}, pk="id", if_not_exists=True
            )

        # (id, name, operation); add future schema changes here
        migrations: list[tuple[int, str, Callable[[], None]]] = []

        applied_migration_ids = {row["id"] for row in self.db["_migrations"].rows}
        applied_count = 0

        for mig_id, mig_name, mig_operation in migrations:
            if mig_id in applied_migration_ids:
                continue
            logger.info("Applying migration ID %d: '%s'...", mig_id, mig_name)
            try:
                mig_operation()
            except Exception as e:
                logger.error("Failed to apply migration ID %d: '%s'. Error: %s", mig_id, mig_name, e, exc_info=True)
                raise RuntimeError(f"Migration {mig_id} ('{mig_name}') failed.") from e
            self.db["_migrations"].insert(
                {"id": mig_id, "name": mig_name, "applied_at": datetime.now().isoformat()}, pk="id"
            )
            applied_count += 1

        if applied_count > 0:
            logger.info("Applied %d new database migrations.", applied_count)
        else:
            logger.debug("No new database migrations to apply.")

    def close(self) -> None:
        """Close the database connection."""
        if self.db:
            logger.info("Closing database connection to: %s", self.db_path)
            self.db.close()
            self.db = None
