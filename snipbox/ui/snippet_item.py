"""List entry for one snippet: title, copy button and an expandable editor."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Button, Static, TextArea

from snipbox.models.snippets import Snippet


class SnippetTitle(Static, can_focus=True):
    """Clickable title that expands or collapses its item."""

    BINDINGS = [
        Binding("enter", "toggle", "Expand", show=False),
        Binding("space", "toggle", "Expand", show=False),
    ]

    def on_click(self) -> None:
        self.action_toggle()

    def action_toggle(self) -> None:
        item = self.parent.parent if self.parent else None
        if isinstance(item, SnippetItem):
            item.toggle_expanded()


class SnippetItem(Vertical):
    """One snippet in the panel list."""

    DEFAULT_CSS = """
    SnippetItem {
        height: auto;
        border: round $panel-lighten-2;
        padding: 0 1;
        margin-bottom: 1;
    }

    SnippetItem .snippet-row {
        height: auto;
    }

    SnippetItem SnippetTitle {
        width: 1fr;
        padding: 1 0 0 0;
        text-style: bold;
    }

    SnippetItem SnippetTitle:focus {
        color: $accent;
    }

    SnippetItem .snippet-code {
        display: none;
        height: 8;
    }

    SnippetItem .snippet-actions {
        display: none;
        height: 3;
    }

    SnippetItem.expanded .snippet-code {
        display: block;
    }

    SnippetItem.expanded .snippet-actions {
        display: block;
    }

    SnippetItem .snippet-actions Button {
        min-width: 8;
        margin-right: 1;
    }

    SnippetItem .char-count {
        padding: 1 0 0 1;
        color: $text-muted;
    }
    """

    class ActionRequested(Message):
        """Posted when one of the item's buttons is pressed."""

        def __init__(self, action: str, snippet_id: str, code: str | None = None) -> None:
            super().__init__()
            self.action = action  # copy | save | edit | delete
            self.snippet_id = snippet_id
            self.code = code

    def __init__(self, snippet: Snippet, expanded: bool = False, **kwargs):
        super().__init__(**kwargs)
        self.snippet = snippet
        if expanded:
            self.add_class("expanded")

    @property
    def expanded(self) -> bool:
        return self.has_class("expanded")

    def compose(self) -> ComposeResult:
        with Horizontal(classes="snippet-row"):
            yield SnippetTitle(self.snippet.display_title, markup=False)
            yield Button("Copy", id="copy")
        yield TextArea(self.snippet.code, classes="snippet-code")
        with Horizontal(classes="snippet-actions"):
            yield Button("Save", id="save", variant="primary")
            yield Button("Edit", id="edit")
            yield Button("Delete", id="delete", variant="error")
            yield Static(f"Chars: {len(self.snippet.code)}", classes="char-count")

    def toggle_expanded(self) -> None:
        self.toggle_class("expanded")

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self.query_one(".char-count", Static).update(f"Chars: {len(event.text_area.text)}")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        code = None
        if event.button.id == "save":
            code = self.query_one(".snippet-code", TextArea).text
        self.post_message(self.ActionRequested(event.button.id, self.snippet.id, code))
