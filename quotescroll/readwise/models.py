from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReadwiseTag(BaseModel):
    """A tag attached to a book or highlight in Readwise."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(description="The tag name")


class ReadwiseExportHighlight(BaseModel):
    """A highlight as nested inside a book of the Readwise export API."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="The Readwise highlight id")
    text: str = Field(description="The text content of the highlight")
    note: str | None = Field(default=None, description="Note attached to the highlight")
    location: int | None = Field(default=None, description="Location of the highlight within the source")
    location_type: str | None = Field(default=None, description="The type of location (e.g., 'location', 'page')")
    highlighted_at: datetime | None = Field(default=None, description="When the passage was highlighted")
    updated: datetime | None = Field(default=None, description="When Readwise last updated the highlight")
    url: str | None = None
    color: str | None = None
    book_id: int | None = None
    tags: list[ReadwiseTag] | None = None
    is_favorite: bool | None = None
    is_discard: bool | None = None
    readwise_url: str | None = None


class ReadwiseBookResult(BaseModel):
    """A book with its nested highlights, one entry of the export `results` array."""

    model_config = ConfigDict(extra="ignore")

    user_book_id: int = Field(description="The Readwise book id")
    title: str = Field(description="The title of the book")
    author: str | None = None
    category: str | None = None
    source: str | None = None
    num_highlights: int | None = None
    last_highlight_at: datetime | None = None
    updated: datetime | None = None
    cover_image_url: str | None = None
    highlights_url: str | None = None
    source_url: str | None = None
    asin: str | None = None
    tags: list[ReadwiseTag] | None = None
    document_note: str | None = None
    summary: str | None = None
    readwise_url: str | None = None
    highlights: list[ReadwiseExportHighlight] | None = None

    @field_validator("highlights", mode="before")
    @classmethod
    def drop_non_list_highlights(cls, value: Any) -> Any:
        """Treat a non-array `highlights` value as absent so the book gets skipped."""
        return value if isinstance(value, list) else None


class ReadwiseExportResponse(BaseModel):
    """One page of the Readwise export API."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    count: int | None = None
    next_page_cursor: str | None = Field(default=None, alias="nextPageCursor")
    results: list[ReadwiseBookResult] = Field(default_factory=list)

    @field_validator("next_page_cursor", mode="before")
    @classmethod
    def cursor_as_string(cls, value: Any) -> Any:
        """Readwise sends numeric cursors; keep them opaque strings."""
        if value is None or value == "":
            return None
        return str(value)
