"""이벤트 저널 Core"""

from .journal import (
    DEFAULT_MAX_ENTRIES,
    Journal,
    JournalCategory,
    JournalEntry,
    format_entry_time,
)

__all__ = [
    "DEFAULT_MAX_ENTRIES",
    "Journal",
    "JournalCategory",
    "JournalEntry",
    "format_entry_time",
]
