"""Core data models for the quotescroll application."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class Book(BaseModel):
    """A source document (book, article, tweet thread...) that owns highlights."""

    user_book_id: int = Field(description="Readwise id of the book, stable across syncs")
    title: str = Field(description="The title of the book")
    author: str | None = Field(default=None, description="The author of the book")
    category: str | None = Field(default=None, description="Readwise category, e.g. 'books' or 'articles'")
    source: str | None = Field(default=None, description="Where the book came from, e.g. 'kindle'")
    num_highlights: int = Field(default=0, description="Highlight count reported by Readwise")
    last_highlight_at: datetime | None = None
    updated: datetime | None = None
    cover_image_url: str | None = None
    highlights_url: str | None = None
    source_url: str | None = None
    asin: str | None = None
    tags: list[str] = Field(default_factory=list)
    document_note: str | None = None
    summary: str | None = None
    readwise_url: str | None = None


class Highlight(BaseModel):
    """A single highlighted passage, with its note, tags and local flags."""

    id: int = Field(description="Readwise id of the highlight, the merge key")
    user_book_id: int = Field(description="Id of the owning book (not enforced referentially)")
    text: str = Field(description="The highlighted text")
    note: str | None = Field(default=None, description="Personal note attached to the highlight")
    location: int | None = None
    location_type: str | None = None
    highlighted_at: datetime | None = None
    created_at: datetime | None = Field(default=None, description="highlighted_at if known, else updated")
    updated: datetime | None = None
    url: str | None = None
    color: str | None = None
    tags: list[str] = Field(default_factory=list)
    is_favorite: bool = Field(default=False, description="Locally owned, survives re-imports")
    is_deleted: bool = Field(default=False, description="Mirrors the Readwise discard flag")
    readwise_url: str | None = None

    @property
    def is_sample(self) -> bool:
        return False


class SampleHighlight(Highlight):
    """Synthetic filler highlight shown when the real feed is sparse.

    Never persisted. Ids are always negative so they can't collide with Readwise ids.
    """

    @field_validator("id", "user_book_id")
    @classmethod
    def must_be_negative(cls, value: int) -> int:
        if value >= 0:
            raise ValueError("sample highlight ids must be negative")
        return value

    @property
    def is_sample(self) -> bool:
        return True


class ImportStatus(str, Enum):
    """State of the import run."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class ImportRun(BaseModel):
    """Options and bookkeeping of one import run, kept so an interrupted run can be resumed as itself."""

    include_deleted: bool = False
    updated_after: str | None = None
    started_at: datetime | None = None
    completed_pages: int = Field(default=0, description="Pages stored before the next page cursor")
    completed_books: int = Field(default=0, description="Distinct books stored before the next page cursor")


class ImportProgress(BaseModel):
    """Progress record of the current or last import run."""

    status: ImportStatus = ImportStatus.IDLE
    current_page: int = 0
    total_highlights: int = 0
    total_books: int = 0
    error: str | None = None
    next_page_cursor: str | None = None
    last_sync_timestamp: datetime | None = None
    run: ImportRun = Field(default_factory=ImportRun)


class FeedFilters(BaseModel):
    """Filtering and presentation options for the highlight feed."""

    book_id: int | None = None
    search_query: str | None = None
    show_deleted: bool = False
    show_favorites_only: bool = False
    randomize: bool = False
    show_sample_quotes: bool = False
