"""Local archive of daily issues."""

from .dates import format_long_date, parse_display_date, sort_by_date_desc
from .storage import ArchiveStorage, JsonFileStorage, MemoryStorage
from .store import DEFAULT_CAPACITY, SEED_ISSUES, ArchiveStore

__all__ = [
    "ArchiveStore",
    "ArchiveStorage",
    "DEFAULT_CAPACITY",
    "JsonFileStorage",
    "MemoryStorage",
    "SEED_ISSUES",
    "format_long_date",
    "parse_display_date",
    "sort_by_date_desc",
]
