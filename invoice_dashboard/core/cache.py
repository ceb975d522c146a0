# invoice_dashboard/core/cache.py

import logging
import threading
from collections import OrderedDict
from functools import lru_cache
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, str]  # (path, query string)


class PageCache:
    """
    In-process store of rendered pages.

    Entries are keyed by (path, query string); revalidating a path drops
    every cached variant of it so the next request renders from the database.
    Holds at most `maxsize` pages, evicting the least recently used.
    """

    def __init__(self, maxsize: int = 128):
        self.maxsize = maxsize
        self._entries: "OrderedDict[CacheKey, str]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: CacheKey) -> Optional[str]:
        with self._lock:
            content = self._entries.get(key)
            if content is not None:
                self._entries.move_to_end(key)
            return content

    def set(self, key: CacheKey, content: str) -> None:
        with self._lock:
            self._entries[key] = content
            self._entries.move_to_end(key)
            while len(self._entries) > self.maxsize:
                self._entries.popitem(last=False)

    def revalidate_path(self, path: str) -> None:
        with self._lock:
            stale = [key for key in self._entries if key[0] == path]
            for key in stale:
                del self._entries[key]
        logger.info("Revalidated %s (%d cached page(s) dropped)", path, len(stale))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


@lru_cache
def get_page_cache() -> PageCache:
    return PageCache()
