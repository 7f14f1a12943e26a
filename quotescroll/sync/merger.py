"""Merging of freshly imported highlights into the locally stored set."""

import logging
from collections.abc import Iterable

from ..models import Highlight

logger = logging.getLogger(__name__)

# Fields owned by the user on this device. Readwise is authoritative for everything else.
LOCALLY_OWNED_FIELDS = ("is_favorite",)


def deduplicate_highlights(existing: Iterable[Highlight], incoming: Iterable[Highlight]) -> list[Highlight]:
    """Merge incoming highlights into existing ones, keyed by highlight id.

    An incoming record replaces the existing record with the same id, except for
    the locally owned fields, which keep their existing value. Ids only present
    on one side are kept as they are.

    Args:
        existing: Highlights already stored locally
        incoming: Highlights from the current import page

    Returns:
        One record per id from either input, in first-seen order
    """
    merged: dict[int, Highlight] = {highlight.id: highlight for highlight in existing}
    replaced = 0

    for highlight in incoming:
        current = merged.get(highlight.id)
        if current is None:
            merged[highlight.id] = highlight
            continue

        local_values = {name: getattr(current, name) for name in LOCALLY_OWNED_FIELDS}
        merged[highlight.id] = highlight.model_copy(update=local_values)
        replaced += 1

    logger.debug("Merged highlights: %d total, %d updated in place.", len(merged), replaced)
    return list(merged.values())
