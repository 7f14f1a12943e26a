from .import_manager import ImportListener, ImportManager
from .merger import LOCALLY_OWNED_FIELDS, deduplicate_highlights
from .normalizer import NormalizedData, normalize_book, normalize_export_results, normalize_highlight

__all__ = [
    "LOCALLY_OWNED_FIELDS",
    "ImportListener",
    "ImportManager",
    "NormalizedData",
    "deduplicate_highlights",
    "normalize_book",
    "normalize_export_results",
    "normalize_highlight",
]
