"""Conversion of Readwise export pages into the local Book/Highlight schema."""

import logging
from dataclasses import dataclass, field

from ..models import Book, Highlight
from ..readwise.models import ReadwiseBookResult, ReadwiseExportHighlight, ReadwiseExportResponse, ReadwiseTag

logger = logging.getLogger(__name__)


@dataclass
class NormalizedData:
    """Books and highlights extracted from one export page."""

    books: list[Book] = field(default_factory=list)
    highlights: list[Highlight] = field(default_factory=list)


def _tag_names(tags: list[ReadwiseTag] | None) -> list[str]:
    return [tag.name for tag in tags or []]


def normalize_book(book_result: ReadwiseBookResult) -> Book:
    """Map a remote book record onto the local Book model."""
    return Book(
        user_book_id=book_result.user_book_id,
        title=book_result.title,
        author=book_result.author,
        category=book_result.category,
        source=book_result.source,
        num_highlights=book_result.num_highlights or 0,
        last_highlight_at=book_result.last_highlight_at,
        updated=book_result.updated,
        cover_image_url=book_result.cover_image_url,
        highlights_url=book_result.highlights_url,
        source_url=book_result.source_url,
        asin=book_result.asin,
        tags=_tag_names(book_result.tags),
        document_note=book_result.document_note,
        summary=book_result.summary,
        readwise_url=book_result.readwise_url,
    )


def normalize_highlight(highlight: ReadwiseExportHighlight, book_id: int) -> Highlight:
    """Map a remote highlight onto the local Highlight model, stamped with its book id."""
    return Highlight(
        id=highlight.id,
        user_book_id=book_id,
        text=highlight.text,
        note=highlight.note,
        location=highlight.location,
        location_type=highlight.location_type,
        highlighted_at=highlight.highlighted_at,
        created_at=highlight.highlighted_at or highlight.updated,
        updated=highlight.updated,
        url=highlight.url,
        color=highlight.color,
        tags=_tag_names(highlight.tags),
        is_favorite=bool(highlight.is_favorite),
        is_deleted=bool(highlight.is_discard),
        readwise_url=highlight.readwise_url,
    )


def normalize_export_results(response: ReadwiseExportResponse) -> NormalizedData:
    """Flatten an export page into books and highlights.

    Books without highlights are dropped entirely: Readwise returns such "shell"
    books and storing them would only add empty entries to the book list.
    """
    data = NormalizedData()

    for book_result in response.results:
        if not book_result.highlights:
            logger.debug("Skipping book '%s' (id %d): no highlights.", book_result.title, book_result.user_book_id)
            continue

        data.books.append(normalize_book(book_result))
        data.highlights.extend(
            normalize_highlight(highlight, book_result.user_book_id) for highlight in book_result.highlights
        )

    logger.debug("Normalized page: %d books, %d highlights.", len(data.books), len(data.highlights))
    return data
