"""Sample quotes used to fill up a sparse feed."""

from datetime import datetime, timezone
from typing import NamedTuple

from ..models import Highlight, SampleHighlight

DEFAULT_TARGET_COUNT = 50
SAMPLE_TAGS = ("sample", "inspiration")


class BookQuote(NamedTuple):
    text: str
    author: str
    book_title: str


SAMPLE_QUOTES: tuple[BookQuote, ...] = (
    BookQuote(
        "It is only with the heart that one can see rightly; what is essential is invisible to the eye.",
        "Antoine de Saint-Exupéry",
        "The Little Prince",
    ),
    BookQuote(
        "The only way to do great work is to love what you do.",
        "Steve Jobs",
        "Steve Jobs by Walter Isaacson",
    ),
    BookQuote("Be yourself; everyone else is already taken.", "Oscar Wilde", "Oscar Wilde's Wit and Wisdom"),
    BookQuote(
        "In the midst of winter, I found there was, within me, an invincible summer.",
        "Albert Camus",
        "Return to Tipasa",
    ),
    BookQuote("The journey of a thousand miles begins with one step.", "Lao Tzu", "Tao Te Ching"),
    BookQuote("What we think, we become.", "Buddha", "Dhammapada"),
    BookQuote(
        "Life is what happens when you're busy making other plans.",
        "John Lennon",
        "Beautiful Boy (Darling Boy)",
    ),
    BookQuote("The mind is everything. What you think you become.", "Marcus Aurelius", "Meditations"),
    BookQuote(
        "The best time to plant a tree was 20 years ago. The second best time is now.",
        "Chinese Proverb",
        "Ancient Wisdom",
    ),
    BookQuote(
        "Happiness is not something ready made. It comes from your own actions.",
        "Dalai Lama",
        "The Art of Happiness",
    ),
)


def generate_sample_highlights(
    existing_highlights: list[Highlight], target_count: int = DEFAULT_TARGET_COUNT
) -> list[SampleHighlight]:
    """Generate sample highlights to pad the feed up to `target_count` items.

    Real highlights are never dropped to make room, and at most one sample per
    built-in quote is generated. The i-th sample gets id and book id `-(i + 1)`.
    """
    if len(existing_highlights) >= target_count:
        return []

    now = datetime.now(timezone.utc)
    samples_to_add = min(len(SAMPLE_QUOTES), target_count - len(existing_highlights))

    samples = []
    for i, quote in enumerate(SAMPLE_QUOTES[:samples_to_add]):
        samples.append(
            SampleHighlight(
                id=-(i + 1),
                user_book_id=-(i + 1),
                text=quote.text,
                note=(
                    f'Sample quote from "{quote.book_title}" by {quote.author}. '
                    "This is not your highlight - connect your Readwise account to see your own highlights!"
                ),
                location=0,
                location_type="page",
                highlighted_at=now,
                created_at=now,
                updated=now,
                tags=list(SAMPLE_TAGS),
            )
        )
    return samples


def is_sample_highlight(highlight: Highlight) -> bool:
    """Check whether a highlight is synthetic filler rather than the user's own."""
    return highlight.is_sample
