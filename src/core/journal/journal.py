"""Event Journal: 최신순, 상한 있는 append-only 로그"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 100
DEFAULT_LAST_N = 10


class JournalCategory(str, Enum):
    SYSTEM = "system"
    LOCATION = "location"
    ITEM = "item"
    COMBAT = "combat"
    QUEST = "quest"
    ERROR = "error"


@dataclass(frozen=True)
class JournalEntry:
    entry_id: str
    text: str
    timestamp_ms: int
    category: JournalCategory


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


class Journal:
    """상한 N개의 최신순 저널. 초과 시 가장 오래된 항목부터 버린다."""

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock_ms: Optional[Callable[[], int]] = None,
    ):
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1: {max_entries}")
        self._max_entries = max_entries
        self._clock_ms = clock_ms or _wall_clock_ms
        self._entries: list[JournalEntry] = []  # [0] = 최신

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def entries(self) -> list[JournalEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def append(
        self,
        text: str,
        category: Union[JournalCategory, str] = JournalCategory.SYSTEM,
    ) -> JournalEntry:
        entry = JournalEntry(
            entry_id=f"entry_{uuid.uuid4().hex[:12]}",
            text=text,
            timestamp_ms=self._clock_ms(),
            category=JournalCategory(category),
        )
        self._entries.insert(0, entry)

        overflow = len(self._entries) - self._max_entries
        if overflow > 0:
            del self._entries[self._max_entries:]
            logger.debug("Journal evicted %d oldest entries", overflow)
        return entry

    def clear(self) -> None:
        self._entries = []

    def remove(self, entry_id: str) -> bool:
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.entry_id != entry_id]
        return len(self._entries) < before

    def last_n(self, count: int = DEFAULT_LAST_N) -> list[JournalEntry]:
        if count <= 0:
            return []
        return self._entries[:count]

    def by_category(self, category: Union[JournalCategory, str]) -> list[JournalEntry]:
        wanted = JournalCategory(category)
        return [e for e in self._entries if e.category == wanted]


def format_entry_time(timestamp_ms: int) -> str:
    """"HH:MM" (로컬 시간)"""
    dt = datetime.fromtimestamp(timestamp_ms / 1000)
    return f"{dt.hour:02d}:{dt.minute:02d}"
