"""Filtering and ordering of the highlight feed."""

import logging
import random
from datetime import datetime, timezone

from ..models import FeedFilters, Highlight
from .samples import DEFAULT_TARGET_COUNT, generate_sample_highlights

logger = logging.getLogger(__name__)


def _timestamp(value: datetime | None) -> float | None:
    if value is None:
        return None
    if value.tzinfo is None:
        # Naive timestamps are taken as UTC
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


def _recency_key(highlight: Highlight) -> tuple[bool, float, int]:
    ts = _timestamp(highlight.highlighted_at or highlight.created_at)
    return (ts is not None, ts or 0.0, highlight.id)


def sort_highlights(
    highlights: list[Highlight], randomize: bool = False, rng: random.Random | None = None
) -> list[Highlight]:
    """Order highlights for presentation.

    Newest first by `highlighted_at`, falling back to `created_at`; undated
    highlights go last. Ties are broken by id, larger id first, which makes the
    order total. With `randomize`, the sorted list is then shuffled uniformly
    and the recency order is discarded.

    Args:
        highlights: Highlights to order (not modified)
        randomize: Return a random permutation instead of the recency order
        rng: Random generator to shuffle with, defaults to the module-level one

    Returns:
        A new list
    """
    ordered = sorted(highlights, key=_recency_key, reverse=True)
    if randomize:
        (rng or random).shuffle(ordered)
    return ordered


def get_sorted_highlights(
    highlights: list[Highlight], filters: FeedFilters | None = None, add_samples: bool = False
) -> list[Highlight]:
    """Build the feed: pad with samples, apply the filters, then sort or shuffle."""
    filters = filters or FeedFilters()
    feed = list(highlights)

    if add_samples and len(feed) < DEFAULT_TARGET_COUNT:
        samples = generate_sample_highlights(feed, DEFAULT_TARGET_COUNT)
        logger.debug("Adding %d sample highlights to a feed of %d.", len(samples), len(feed))
        feed.extend(samples)

    # Sample highlights carry negative book ids, so a real book filter excludes them
    if filters.book_id is not None and filters.book_id > 0:
        feed = [h for h in feed if h.user_book_id == filters.book_id]

    if not filters.show_deleted:
        feed = [h for h in feed if not h.is_deleted]

    if filters.show_favorites_only:
        feed = [h for h in feed if h.is_favorite]

    if filters.search_query:
        query = filters.search_query.lower()
        feed = [h for h in feed if query in h.text.lower() or (h.note and query in h.note.lower())]

    return sort_highlights(feed, randomize=filters.randomize)
