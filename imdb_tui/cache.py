# cache.py
from typing import Dict, Optional, Set

from loguru import logger

from .models import Work


class DetailCache:
    """Detail records keyed by identifier, filled lazily for the process lifetime.

    Entries are written once and never evicted. The pending set tracks
    identifiers whose fetch has been issued but not resolved yet, so the
    same record is never requested twice at once.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Work] = {}
        self._pending: Set[str] = set()

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, identifier: str) -> Optional[Work]:
        return self._entries.get(identifier)

    def put(self, identifier: str, work: Work) -> None:
        """Stores a fetched record; a second put for the same identifier is ignored."""
        self._pending.discard(identifier)
        if identifier in self._entries:
            return
        self._entries[identifier] = work
        logger.debug("Cached details", identifier=identifier, size=len(self._entries))

    def mark_pending(self, identifier: str) -> None:
        self._pending.add(identifier)

    def is_pending(self, identifier: str) -> bool:
        return identifier in self._pending

    def discard_pending(self, identifier: str) -> None:
        self._pending.discard(identifier)

    def needs_fetch(self, identifier: str) -> bool:
        return identifier not in self._entries and identifier not in self._pending
