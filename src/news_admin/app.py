from __future__ import annotations

import logging
import threading
from functools import partial
from typing import Any, Callable, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.command import Hit, Hits, Provider
from textual.containers import HorizontalScroll
from textual.timer import Timer
from textual.worker import Worker, WorkerState
from textual.widgets import Header, LoadingIndicator

from .board import NewsBoard
from .config import DEFAULTS, UI_DEFAULTS
from .datamodels import NewsItem
from .gateway import NewsGateway
from .messages import CacheChanged
from .screens import CreateNewsScreen, EditNewsScreen
from .widgets import EmptyState, NewsCard, StatusBar

logger = logging.getLogger("news_admin")

REMOTE_WORKERS = {"news_loader", "news_create", "news_update", "news_delete"}


class NewsProvider(Provider):
    async def search(self, query: str) -> Hits:
        """Search loaded news by title to edit or delete it."""
        matcher = self.matcher(query)

        for item in self.app.board.rendered():
            for verb, callback in (
                ("Edit", self.app.open_edit),
                ("Delete", self.app.delete_news),
            ):
                command = f"{verb} {item.title}"
                score = matcher.match(command)
                if score > 0:
                    yield Hit(score, matcher.highlight(command), partial(callback, item))


class NewsAdminApp(App):
    TITLE = "News Admin"
    SUB_TITLE = "Manage news announcements"

    CSS_PATH = "app.css"

    COMMANDS = App.COMMANDS | {NewsProvider}

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("n", "new_news", "New News"),
        Binding("ctrl+p", "command_palette", "Commands"),
    ]

    def __init__(
        self,
        config: Optional[dict[str, Any]] = None,
        gateway: Optional[NewsGateway] = None,
        theme: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self.config = {**DEFAULTS, **(config or {})}
        self._theme_name = theme or self.config.get("theme") or "dracula"
        if gateway is None:
            gateway = NewsGateway(self.config["api_url"], self.config["http_timeout"])
        self.board = NewsBoard(
            gateway,
            notify=self._notify_operator,
            schedule=self._schedule,
            on_change=lambda: self.post_message(CacheChanged()),
            reversal_delay=float(self.config["reversal_delay"]),
            reverse_after_create=bool(self.config["reverse_after_create"]),
        )

    def compose(self) -> ComposeResult:
        yield Header()
        yield HorizontalScroll(id="news-cards")
        yield StatusBar()

    def on_mount(self) -> None:
        if self._theme_name in self.available_themes:
            self.theme = self._theme_name
        else:
            logger.warning("Theme '%s' not found, keeping default.", self._theme_name)

        # Keep handles on the main screen's widgets; dialogs sit on top of it.
        self.cards = self.query_one("#news-cards", HorizontalScroll)
        self.status_bar = self.query_one(StatusBar)

        keybindings_text = self.config.get("ui", {}).get(
            "statusbar_keybindings", UI_DEFAULTS["statusbar_keybindings"]
        )
        self.status_bar.set_keybindings(keybindings_text.format(color="$accent"))

        self._render_cards()
        self.run_worker(self.board.load, name="news_loader", thread=True)

    def on_unmount(self) -> None:
        self.board.close()

    # --- board callbacks (may run in worker threads) ---
    def _notify_operator(self, message: str, severity: str) -> None:
        self.notify(
            message,
            severity="error" if severity == "error" else "information",
        )

    def _schedule(self, delay: float, callback: Callable[[], None]) -> Timer:
        if threading.current_thread() is threading.main_thread():
            return self.set_timer(delay, callback)
        return self.call_from_thread(self.set_timer, delay, callback)

    # --- rendering ---
    def on_cache_changed(self, message: CacheChanged) -> None:
        self._render_cards()

    def _render_cards(self) -> None:
        self.cards.remove_children()

        if self.board.loading:
            self.status_bar.loading_status = "Loading..."
            self.cards.mount(LoadingIndicator())
            return

        items = self.board.rendered()
        self.status_bar.show_board(len(items), self.board.pending_reversals)
        if items:
            self.cards.mount_all([NewsCard(item) for item in items])
        else:
            self.cards.mount(EmptyState())

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        name = getattr(event.worker, "name", None)
        if name not in REMOTE_WORKERS:
            return
        if event.state is WorkerState.ERROR:
            logger.error("Worker %s failed: %s", name, event.worker.error)
            return
        if event.state is not WorkerState.SUCCESS or not event.worker.result:
            return
        if name == "news_create" and isinstance(self.screen, CreateNewsScreen):
            self.screen.dismiss(True)
        elif name == "news_update" and isinstance(self.screen, EditNewsScreen):
            self.screen.dismiss(True)

    # --- create ---
    def action_new_news(self) -> None:
        if isinstance(self.screen, CreateNewsScreen):
            return
        self.board.open_create()
        self.push_screen(CreateNewsScreen(self.board.create_session), self._on_create_closed)

    def _on_create_closed(self, _: Optional[bool]) -> None:
        self.board.close_create()

    def submit_create(self) -> None:
        self.run_worker(self.board.create, name="news_create", thread=True)

    # --- edit ---
    def on_news_card_edit_requested(self, message: NewsCard.EditRequested) -> None:
        self.open_edit(message.item)

    def open_edit(self, item: NewsItem) -> None:
        self.board.open_edit(item)
        self.push_screen(EditNewsScreen(self.board.edit_session), self._on_edit_closed)

    def _on_edit_closed(self, _: Optional[bool]) -> None:
        self.board.close_edit()

    def submit_update(self) -> None:
        self.run_worker(self.board.update, name="news_update", thread=True)

    # --- delete ---
    def on_news_card_delete_requested(self, message: NewsCard.DeleteRequested) -> None:
        self.delete_news(message.item)

    def delete_news(self, item: NewsItem) -> None:
        self.run_worker(
            partial(self.board.delete, item.title), name="news_delete", thread=True
        )
