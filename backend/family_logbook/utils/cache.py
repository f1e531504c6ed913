import threading
from typing import Dict, List, Optional, Tuple

Key = Tuple[str, str]


class ResolvedPageCache:
    """
    Process-local cache of resolved pages keyed by (logbook_id, page_type).

    Every key carries a generation that ``invalidate`` bumps. Readers take
    the generation before querying and pass it back to ``set``; a fill
    whose generation is out of date is discarded, so a read that raced a
    write never lands in the cache.
    """

    def __init__(self):
        self._entries: Dict[Key, tuple] = {}
        self._generations: Dict[Key, int] = {}
        self._lock = threading.Lock()

    def get(self, logbook_id: str, page_type: str) -> Optional[List]:
        with self._lock:
            entry = self._entries.get((logbook_id, page_type))
        return list(entry) if entry is not None else None

    def generation(self, logbook_id: str, page_type: str) -> int:
        with self._lock:
            return self._generations.get((logbook_id, page_type), 0)

    def set(self, logbook_id: str, page_type: str, sections, *, generation: int) -> bool:
        key = (logbook_id, page_type)
        with self._lock:
            if self._generations.get(key, 0) != generation:
                return False
            self._entries[key] = tuple(sections)
            return True

    def invalidate(self, logbook_id: str, page_type: str) -> None:
        key = (logbook_id, page_type)
        with self._lock:
            self._generations[key] = self._generations.get(key, 0) + 1
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._generations.clear()
