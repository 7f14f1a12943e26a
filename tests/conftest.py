"""Shared fixtures for the quotescroll test suite."""

from datetime import datetime, timezone

import pytest

from quotescroll.database import HighlightStore
from quotescroll.models import Book, Highlight


@pytest.fixture
def make_highlight():
    """Factory for local Highlight records with sensible defaults."""

    def _make(highlight_id: int, **overrides) -> Highlight:
        fields = {
            "id": highlight_id,
            "user_book_id": 1,
            "text": f"Highlight {highlight_id}",
            "highlighted_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        }
        fields.update(overrides)
        return Highlight(**fields)

    return _make


@pytest.fixture
def make_book():
    """Factory for local Book records."""

    def _make(book_id: int, **overrides) -> Book:
        fields = {"user_book_id": book_id, "title": f"Book {book_id}", "author": "Some Author", "category": "books"}
        fields.update(overrides)
        return Book(**fields)

    return _make


@pytest.fixture
def export_highlight():
    """Factory for highlight dicts as nested in a Readwise export payload."""

    def _make(highlight_id: int, **overrides) -> dict:
        payload = {
            "id": highlight_id,
            "text": f"Remote highlight {highlight_id}",
            "note": "",
            "location": 100 + highlight_id,
            "location_type": "location",
            "highlighted_at": "2024-03-01T10:00:00Z",
            "updated": "2024-03-02T10:00:00Z",
            "url": None,
            "color": "yellow",
            "tags": [],
            "is_favorite": False,
            "is_discard": False,
            "readwise_url": f"https://readwise.io/open/{highlight_id}",
        }
        payload.update(overrides)
        return payload

    return _make


@pytest.fixture
def export_book():
    """Factory for book dicts of a Readwise export `results` array."""

    def _make(book_id: int, highlights: list | None, **overrides) -> dict:
        payload = {
            "user_book_id": book_id,
            "title": f"Remote Book {book_id}",
            "author": "Remote Author",
            "category": "books",
            "source": "kindle",
            "num_highlights": len(highlights or []),
            "updated": "2024-03-02T10:00:00Z",
            "cover_image_url": None,
            "tags": [{"id": 1, "name": "favorites"}],
            "highlights": highlights,
        }
        payload.update(overrides)
        return payload

    return _make


@pytest.fixture
def store():
    """In-memory highlight store, closed after the test."""
    highlight_store = HighlightStore(":memory:")
    yield highlight_store
    if highlight_store.db is not None:
        highlight_store.close()
