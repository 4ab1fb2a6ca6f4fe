from __future__ import annotations

import os

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.reactive import reactive
from textual.widgets import Button, Static

from .config import DEFAULT_IMAGE_PATH, PLACEHOLDER_IMAGE_URL
from .datamodels import NewsItem


def resolve_image(item: NewsItem, default_path: str = DEFAULT_IMAGE_PATH) -> str:
    """Image shown on a card: the item's own, the bundled logo, or the placeholder."""
    if item.image_url:
        return item.image_url
    if os.path.isfile(default_path):
        return default_path
    return PLACEHOLDER_IMAGE_URL


# --- UI Widgets ---
class NewsCard(Vertical):
    class EditRequested(Message):
        def __init__(self, item: NewsItem):
            self.item = item
            super().__init__()

    class DeleteRequested(Message):
        def __init__(self, item: NewsItem):
            self.item = item
            super().__init__()

    def __init__(self, item: NewsItem):
        super().__init__(classes="news-card")
        self.item = item

    def compose(self) -> ComposeResult:
        yield Static(
            Text(os.path.basename(resolve_image(self.item)), style="dim italic"),
            classes="card-image",
        )
        yield Static(Text(self.item.title, style="bold"), classes="card-title")
        yield Static(Text(self.item.content), classes="card-text")
        with Horizontal(classes="card-buttons"):
            yield Button("Edit", variant="primary", classes="edit-button")
            yield Button("Delete", variant="error", classes="delete-button")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.has_class("edit-button"):
            self.post_message(self.EditRequested(self.item))
        elif event.button.has_class("delete-button"):
            self.post_message(self.DeleteRequested(self.item))


class EmptyState(Static):
    def __init__(self, message: str = "No news available"):
        super().__init__(Text(message, style="italic"), classes="empty-state")


class StatusBar(Static):
    """One-line summary of the board under the cards, followed by key hints."""

    loading_status = reactive("")
    item_count = reactive(0)
    pending_reorders = reactive(0)
    keybinding_hint = reactive("")

    def on_mount(self) -> None:
        self.update_display()

    def set_keybindings(self, hint: str) -> None:
        self.keybinding_hint = hint

    def show_board(self, item_count: int, pending_reorders: int) -> None:
        self.loading_status = ""
        self.item_count = item_count
        self.pending_reorders = pending_reorders

    def summary(self) -> str:
        if self.loading_status:
            return self.loading_status
        noun = "item" if self.item_count == 1 else "items"
        text = f"{self.item_count} news {noun}"
        if self.pending_reorders:
            text += f", reordering pending ({self.pending_reorders})"
        return text

    def update_display(self) -> None:
        parts = [self.summary()]
        if self.keybinding_hint:
            parts.append(self.keybinding_hint)
        self.update(" | ".join(parts))

    def watch_loading_status(self) -> None:
        self.update_display()

    def watch_item_count(self) -> None:
        self.update_display()

    def watch_pending_reorders(self) -> None:
        self.update_display()

    def watch_keybinding_hint(self) -> None:
        self.update_display()
