from .ordering import get_sorted_highlights, sort_highlights
from .samples import SAMPLE_QUOTES, generate_sample_highlights, is_sample_highlight

__all__ = [
    "SAMPLE_QUOTES",
    "generate_sample_highlights",
    "get_sorted_highlights",
    "is_sample_highlight",
    "sort_highlights",
]
