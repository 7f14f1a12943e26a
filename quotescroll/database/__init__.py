"""Database module for quotescroll."""

from quotescroll.database.store import DEFAULT_DB_PATH, HighlightStore

__all__ = ["DEFAULT_DB_PATH", "HighlightStore"]
