"""
Modal screens for the snippet panel.
"""

import logging
from typing import Optional

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Grid
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, TextArea

from snipbox.models.snippets import Snippet

logger = logging.getLogger(__name__)


class DeleteConfirmScreen(ModalScreen[bool]):
    """Modal screen for delete confirmation."""

    CSS = """
    DeleteConfirmScreen {
        align: center middle;
    }

    #dialog {
        grid-size: 2;
        grid-gutter: 1 2;
        grid-rows: 1fr 3;
        padding: 0 2;
        width: 60;
        height: 11;
        border: thick $background 80%;
        background: $surface;
    }

    #question {
        column-span: 2;
        height: 3;
        content-align: center middle;
        text-style: bold;
    }

    Button {
        width: 100%;
    }
    """

    BINDINGS = [
        ("y", "confirm_delete", "Yes"),
        ("n", "cancel", "No"),
        ("escape", "cancel", "Cancel"),
    ]

    def __init__(self, snippet: Snippet):
        super().__init__()
        self.snippet = snippet

    def compose(self) -> ComposeResult:
        with Grid(id="dialog"):
            yield Label(
                f'Delete snippet "{escape(self.snippet.display_title)}"?\n'
                f"This cannot be undone.\n\n"
                f"[dim]Press [bold]y[/bold] to delete, [bold]n[/bold] to cancel[/dim]",
                id="question",
            )
            yield Button("Cancel (n)", variant="primary", id="cancel")
            yield Button("Delete (y)", variant="error", id="delete")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "delete")

    def action_confirm_delete(self) -> None:
        logger.info(f"Delete confirmed for {self.snippet.id}")
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


class AddSnippetModal(ModalScreen[Optional[dict]]):
    """Modal asking for a new snippet's title and code."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
        Binding("ctrl+s", "submit", "Add", show=True),
    ]

    DEFAULT_CSS = """
    AddSnippetModal {
        align: center middle;
    }

    AddSnippetModal #add-container {
        width: 70%;
        height: auto;
        max-height: 80%;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }

    AddSnippetModal #add-heading {
        text-style: bold;
        margin-bottom: 1;
    }

    AddSnippetModal #add-code {
        height: 10;
        margin-bottom: 1;
    }

    AddSnippetModal #add-buttons {
        height: 3;
    }

    AddSnippetModal Button {
        margin-right: 1;
    }
    """

    def compose(self) -> ComposeResult:
        with Container(id="add-container"):
            yield Label("New snippet", id="add-heading")
            yield Input(placeholder="Snippet title", id="add-title")
            yield Label("Code:")
            yield TextArea(id="add-code")
            with Container(id="add-buttons"):
                yield Button("Add", variant="primary", id="btn-add")
                yield Button("Cancel", id="btn-cancel")

    def on_mount(self) -> None:
        self.query_one("#add-title", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "btn-add":
            self.action_submit()
        elif event.button.id == "btn-cancel":
            self.action_cancel()

    def action_submit(self) -> None:
        title = self.query_one("#add-title", Input).value
        if not title.strip():
            self.notify("Snippet title required", severity="warning")
            return
        code = self.query_one("#add-code", TextArea).text
        self.dismiss({"title": title, "code": code})

    def action_cancel(self) -> None:
        self.dismiss(None)


class EditTitleModal(ModalScreen[Optional[str]]):
    """Modal for renaming a snippet."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    DEFAULT_CSS = """
    EditTitleModal {
        align: center middle;
    }

    EditTitleModal #title-container {
        width: 60;
        height: auto;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }
    """

    def __init__(self, current_title: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.current_title = current_title

    def compose(self) -> ComposeResult:
        with Container(id="title-container"):
            yield Label("Edit snippet title:")
            yield Input(value=self.current_title, id="title-input")

    def on_mount(self) -> None:
        self.query_one("#title-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value)

    def action_cancel(self) -> None:
        self.dismiss(None)
