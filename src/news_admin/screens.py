from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, TextArea

from .sessions import CreateSession, EditSession


# --- Create dialog ---
class CreateNewsScreen(ModalScreen[bool]):
    """Dialog bound to the board's create draft; typing writes straight into it."""

    BINDINGS = [
        Binding("escape", "close", "Close"),
    ]

    def __init__(self, session: CreateSession):
        super().__init__()
        self.session = session

    def compose(self) -> ComposeResult:
        draft = self.session.draft
        with Vertical(id="create-dialog", classes="dialog"):
            yield Label("Create News", classes="dialog-title")
            yield Input(value=draft.title, placeholder="Title", id="create-title")
            yield TextArea(draft.content, id="create-content")
            yield Input(
                value=draft.image_url,
                placeholder="Image URL (optional)",
                id="create-image",
            )
            with Horizontal(classes="dialog-buttons"):
                yield Button("Close", id="create-close")
                yield Button("Create News", variant="primary", id="create-submit")

    def on_mount(self) -> None:
        self.query_one("#create-title", Input).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "create-title":
            self.session.draft.title = event.value
        elif event.input.id == "create-image":
            self.session.draft.image_url = event.value

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self.session.draft.content = event.text_area.text

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "create-close":
            self.action_close()
        elif event.button.id == "create-submit":
            self.app.submit_create()

    def action_close(self) -> None:
        self.dismiss(False)


# --- Edit dialog ---
class EditNewsScreen(ModalScreen[bool]):
    BINDINGS = [
        Binding("escape", "close", "Close"),
    ]

    def __init__(self, session: EditSession):
        super().__init__()
        self.session = session

    def compose(self) -> ComposeResult:
        draft = self.session.draft
        with Vertical(id="edit-dialog", classes="dialog"):
            yield Label("Edit News", classes="dialog-title")
            yield Input(value=draft.title if draft else "", id="edit-title")
            yield TextArea(draft.content if draft else "", id="edit-content")
            with Horizontal(classes="dialog-buttons"):
                yield Button("Close", id="edit-close")
                yield Button("Update News", variant="primary", id="edit-submit")

    def on_mount(self) -> None:
        self.query_one("#edit-content", TextArea).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "edit-title" and self.session.draft is not None:
            self.session.draft.title = event.value

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.session.draft is not None:
            self.session.draft.content = event.text_area.text

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "edit-close":
            self.action_close()
        elif event.button.id == "edit-submit":
            self.app.submit_update()

    def action_close(self) -> None:
        self.dismiss(False)
