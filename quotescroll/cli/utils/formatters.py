"""Output formatting utilities for CLI commands."""

import json
from datetime import datetime

from ...models import Book, Highlight, ImportProgress, ImportStatus

# Constants for UI display formatting
BOOK_TITLE_MAX_LENGTH = 37
BOOK_TITLE_TRUNCATE_LENGTH = 34
BOOK_AUTHOR_MAX_LENGTH = 27
BOOK_AUTHOR_TRUNCATE_LENGTH = 24
TABLE_WIDTH = 90
SEPARATOR_WIDTH = 80


def _format_datetime(value: datetime | None) -> str:
    if value is None:
        return "Unknown"
    return value.strftime("%Y-%m-%d %H:%M:%S")


def format_progress_line(progress: ImportProgress) -> str:
    """One line per imported page."""
    return (
        f"Page {progress.current_page}: {progress.total_highlights} highlights "
        f"from {progress.total_books} books so far"
    )


def format_sync_summary(progress: ImportProgress) -> str:
    """Format the result of a sync run for display."""
    output = ["\n--- Sync Summary ---"]
    if progress.status == ImportStatus.SUCCESS:
        output.append(f"Pages Imported: {progress.current_page}")
        output.append(f"Books: {progress.total_books}")
        output.append(f"Highlights: {progress.total_highlights}")
        output.append("Sync completed successfully!")
    else:
        output.append(f"Sync failed: {progress.error}")
        if progress.next_page_cursor:
            output.append("Run 'quotescroll sync --resume' to continue from the failed page.")
    return "\n".join(output)


def format_import_status(progress: ImportProgress | None) -> str:
    """Format the stored progress of the last sync."""
    if progress is None:
        return "No sync has been run yet."

    output = ["\n--- Last Sync ---"]
    output.append(f"Status: {progress.status.value}")
    output.append(f"Pages: {progress.current_page}")
    output.append(f"Books: {progress.total_books}")
    output.append(f"Highlights: {progress.total_highlights}")
    output.append(f"Last Sync: {_format_datetime(progress.last_sync_timestamp)}")
    if progress.error:
        output.append(f"Error: {progress.error}")
    if progress.next_page_cursor:
        output.append(f"Resumable from cursor: {progress.next_page_cursor}")
    return "\n".join(output)


def format_feed_text(highlights: list[Highlight], books: dict[int, Book]) -> str:
    """Format feed highlights in text format, one card per highlight."""
    if not highlights:
        return "No highlights to show. Run 'quotescroll sync' to import your Readwise highlights."

    output = ["=" * SEPARATOR_WIDTH]
    for h in highlights:
        book = books.get(h.user_book_id)
        title = book.title if book else "Unknown Title"
        author = (book.author if book else None) or "Unknown Author"

        flags = []
        if h.is_sample:
            flags.append("sample")
        if h.is_favorite:
            flags.append("favorite")
        if h.is_deleted:
            flags.append("deleted")

        output.append(h.text)
        if h.note:
            output.append(f"Note: {h.note}")
        output.append(f"-- {title}, {author}")
        output.append(f"ID: {h.id}  Date: {_format_datetime(h.highlighted_at or h.created_at)}")
        if flags:
            output.append(f"[{', '.join(flags)}]")
        output.append("-" * SEPARATOR_WIDTH)

    return "\n".join(output)


def format_feed_json(highlights: list[Highlight]) -> str:
    """Format feed highlights as JSON."""
    items = []
    for h in highlights:
        item = h.model_dump(mode="json")
        item["is_sample"] = h.is_sample
        items.append(item)
    return json.dumps({"count": len(items), "highlights": items}, indent=2)


def format_books_text(books: list[dict]) -> str:
    """Format books list as text."""
    output = ["\n--- Books in Database ---"]
    output.append(f"{'ID':<10} {'Title':<40} {'Author':<30} {'Highlights':<10}")
    output.append("-" * TABLE_WIDTH)

    for book in books:
        title = book.get("title") or "Unknown"
        if len(title) > BOOK_TITLE_MAX_LENGTH:
            title = title[:BOOK_TITLE_TRUNCATE_LENGTH] + "..."

        author = book.get("author") or "Unknown"
        if len(author) > BOOK_AUTHOR_MAX_LENGTH:
            author = author[:BOOK_AUTHOR_TRUNCATE_LENGTH] + "..."

        count = book.get("highlight_count", 0)

        output.append(f"{book.get('user_book_id', ''):<10} {title:<40} {author:<30} {count:<10}")

    output.append("-" * TABLE_WIDTH)
    output.append(f"Total: {len(books)} books, {sum(book.get('highlight_count', 0) for book in books)} highlights")

    return "\n".join(output)


def format_books_json(books: list[dict]) -> str:
    """Format books list as JSON."""
    return json.dumps({"count": len(books), "books": books}, indent=2, default=str)
