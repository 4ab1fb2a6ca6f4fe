from __future__ import annotations

import logging
import threading
from typing import Iterable, List

from .datamodels import NewsItem

logger = logging.getLogger("news_admin")


class NewsCache:
    """Ordered in-memory mirror of the remote news collection.

    Only the board mutates it. Each mutation holds the lock for its whole
    read-modify-write so responses from worker threads can land in any order.
    """

    def __init__(self) -> None:
        self._items: List[NewsItem] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def items(self) -> List[NewsItem]:
        """Copy of the stored order."""
        with self._lock:
            return list(self._items)

    def rendered(self) -> List[NewsItem]:
        """Copy of the stored order, reversed for display."""
        with self._lock:
            return self._items[::-1]

    def replace_all(self, items: Iterable[NewsItem]) -> None:
        with self._lock:
            self._items = list(items)
            logger.debug("Cache loaded with %d items", len(self._items))

    def append(self, item: NewsItem) -> None:
        with self._lock:
            self._items.append(item)

    def replace_matching(self, original_title: str, new_item: NewsItem) -> int:
        with self._lock:
            count = 0
            for i, item in enumerate(self._items):
                if item.title == original_title:
                    self._items[i] = new_item
                    count += 1
        logger.debug("Replaced %d item(s) titled %r", count, original_title)
        return count

    def remove_matching(self, title: str) -> int:
        with self._lock:
            before = len(self._items)
            self._items = [item for item in self._items if item.title != title]
            count = before - len(self._items)
        logger.debug("Removed %d item(s) titled %r", count, title)
        return count

    def reverse(self) -> None:
        with self._lock:
            self._items.reverse()
