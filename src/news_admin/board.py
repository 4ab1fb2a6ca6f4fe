from __future__ import annotations

import itertools
import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from .cache import NewsCache
from .config import REVERSAL_DELAY
from .datamodels import NewsItem, newest_first
from .errors import CreateError, DeleteError, FetchError, UpdateError, ValidationError
from .gateway import NewsGateway
from .sessions import CreateSession, EditSession

logger = logging.getLogger("news_admin")

# notify(message, severity) with severity "success" or "error"
Notifier = Callable[[str, str], None]
# schedule(delay, callback) -> handle with a stop() method
Scheduler = Callable[[float, Callable[[], None]], Any]


class NewsBoard:
    """Owns the news cache and the two draft sessions.

    Gateway-touching operations (``load``, ``create``, ``update``,
    ``delete``) block on the network and are meant to run in a worker
    thread. They never raise: every outcome ends in a notification, and the
    cache is only touched after the gateway reports success.
    """

    def __init__(
        self,
        gateway: NewsGateway,
        notify: Notifier,
        schedule: Scheduler,
        on_change: Optional[Callable[[], None]] = None,
        reversal_delay: float = REVERSAL_DELAY,
        reverse_after_create: bool = True,
    ):
        self.gateway = gateway
        self.cache = NewsCache()
        self.create_session = CreateSession()
        self.edit_session = EditSession()
        self.loading = True
        self.reversal_delay = reversal_delay
        self.reverse_after_create = reverse_after_create
        self._notify = notify
        self._schedule = schedule
        self._on_change = on_change
        self._reversal_ids = itertools.count(1)
        self._pending_reversals: Dict[int, Any] = {}
        self._timers_lock = threading.Lock()
        self._closed = False

    # --- read path ---
    def rendered(self) -> List[NewsItem]:
        return self.cache.rendered()

    @property
    def pending_reversals(self) -> int:
        with self._timers_lock:
            return len(self._pending_reversals)

    # --- dialogs ---
    def open_create(self) -> None:
        self.create_session.open()

    def close_create(self) -> None:
        self.create_session.close()

    def open_edit(self, item: NewsItem) -> None:
        self.edit_session.open(item)

    def close_edit(self) -> None:
        self.edit_session.close()

    # --- remote operations ---
    def load(self) -> None:
        try:
            items = self.gateway.list_all()
        except FetchError as e:
            logger.error("Fetching news failed: %s", e)
            if e.status is not None:
                self._notify("Failed to fetch news.", "error")
            else:
                self._notify("Error fetching news.", "error")
        else:
            self.cache.replace_all(newest_first(items))
            logger.info("Loaded %d news items", len(items))
        finally:
            self.loading = False
            self._changed()

    def create(self) -> bool:
        try:
            draft = self.create_session.snapshot()
        except ValidationError as e:
            self._notify(str(e), "error")
            return False

        try:
            item = self.gateway.create(draft)
        except CreateError as e:
            logger.error("Creating news %r failed: %s", draft.title, e)
            self._notify("Error creating news.", "error")
            return False

        self.cache.append(item)
        self._notify("News created successfully!", "success")
        self.create_session.close()
        if self.reverse_after_create:
            self._schedule_reversal()
        self._changed()
        return True

    def update(self) -> bool:
        try:
            original_title, draft = self.edit_session.snapshot()
        except ValidationError as e:
            self._notify(str(e), "error")
            return False

        if draft.title != original_title:
            logger.warning(
                "Title edited from %r to %r; the store is addressed by the old title",
                original_title,
                draft.title,
            )
        try:
            self.gateway.update(original_title, draft)
        except UpdateError as e:
            logger.error("Updating news %r failed: %s", original_title, e)
            self._notify("Error updating news.", "error")
            return False

        self.cache.replace_matching(original_title, draft)
        self._notify("News updated successfully!", "success")
        self.edit_session.close()
        self._changed()
        return True

    def delete(self, title: str) -> bool:
        try:
            self.gateway.delete(title)
        except DeleteError as e:
            logger.error("Deleting news %r failed: %s", title, e)
            self._notify("Error deleting news.", "error")
            return False

        self._notify("News deleted successfully!", "success")
        self.cache.remove_matching(title)
        self._changed()
        return True

    # --- post-create reversal ---
    def _schedule_reversal(self) -> None:
        key = next(self._reversal_ids)
        with self._timers_lock:
            if self._closed:
                return
            self._pending_reversals[key] = None
        handle = self._schedule(self.reversal_delay, lambda: self._reverse(key))
        with self._timers_lock:
            # The timer may already have fired and removed its key.
            if key in self._pending_reversals:
                self._pending_reversals[key] = handle
        logger.debug("Scheduled reversal #%d in %.1fs", key, self.reversal_delay)

    def _reverse(self, key: int) -> None:
        with self._timers_lock:
            if self._closed:
                return
            self._pending_reversals.pop(key, None)
        self.cache.reverse()
        logger.debug("Reversal #%d applied", key)
        self._changed()

    def close(self) -> None:
        """Cancel outstanding reversals; the board mutates nothing afterwards."""
        with self._timers_lock:
            self._closed = True
            handles = list(self._pending_reversals.values())
            self._pending_reversals.clear()
        for handle in handles:
            if handle is not None:
                handle.stop()
        logger.debug("Board closed, %d pending reversal(s) cancelled", len(handles))

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()
