"""
Snippet panel - Textual app showing the collection beside a search box.

Layout: toolbar (Add / Refresh), list search, the snippet list and a footer
holding the panel width. Ctrl+K opens the command palette over everything;
Ctrl+B hides or shows the panel.
"""

import logging
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import Button, Footer, Header, Input, Label, Static

from snipbox.config.constants import MAX_WIDTH, MIN_WIDTH
from snipbox.models.snippets import Snippet
from snipbox.services.actions import (
    AddSnippet,
    CopySnippet,
    DeleteSnippet,
    Effect,
    OpenPalette,
    PromptNewSnippet,
    RefreshSnippets,
    SaveCode,
    SaveTitle,
    SetWidth,
    ShowToast,
)
from snipbox.services.clipboard import SystemClipboard
from snipbox.services.collection_ops import search_snippets
from snipbox.services.panel_controller import PanelController, create_panel_controller

from .command_palette.palette_screen import CommandPaletteScreen
from .modals import AddSnippetModal, DeleteConfirmScreen, EditTitleModal
from .snippet_item import SnippetItem

logger = logging.getLogger(__name__)

EMPTY_LIST_MESSAGE = "No snippets match - try a different search or refresh snippets."


class SnippetPanelApp(App):
    """Snippet toolbox panel."""

    TITLE = "snipbox"

    CSS = """
    #panel {
        height: 1fr;
        border-right: solid $primary;
    }

    #toolbar, #search-row, #panel-footer {
        height: 3;
    }

    #toolbar Button {
        margin-right: 1;
    }

    #search {
        width: 1fr;
    }

    #snippet-list {
        height: 1fr;
        padding: 0 1;
    }

    #empty-message {
        color: $text-muted;
        padding: 1;
    }

    #panel-footer Label {
        padding: 1 1 0 0;
    }

    #width-input {
        width: 12;
    }
    """

    BINDINGS = [
        Binding("ctrl+k", "open_palette", "Palette"),
        Binding("ctrl+b", "toggle_panel", "Panel"),
        Binding("ctrl+shift+p", "toggle_panel", "Panel", show=False),
        Binding("ctrl+n", "add_snippet", "Add"),
        Binding("ctrl+r", "refresh_snippets", "Refresh"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        controller: PanelController | None = None,
        store_path: Path | None = None,
        source_location: str | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._expanded: set[str] = set()
        self._filter = ""
        if controller is None:
            controller = create_panel_controller(
                store_path=store_path,
                source_location=source_location,
                clipboard=SystemClipboard(fallback=self.copy_to_clipboard),
            )
        controller.confirm_delete = self._confirm_delete
        controller.on_collection_update = self._on_collection_update
        self.controller = controller

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="panel"):
            with Horizontal(id="toolbar"):
                yield Button("Add", id="btn-add", variant="primary")
                yield Button("Refresh", id="btn-refresh")
            with Horizontal(id="search-row"):
                yield Input(placeholder="Search title or code...", id="search")
            yield VerticalScroll(id="snippet-list")
            with Horizontal(id="panel-footer"):
                yield Label(f"Width ({MIN_WIDTH}-{MAX_WIDTH}):")
                yield Input(id="width-input", type="integer")
        yield Footer()

    async def on_mount(self) -> None:
        await self.controller.load()
        self._apply_width(self.controller.width)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    async def _on_collection_update(self, snippets: list[Snippet]) -> None:
        await self._render_list(snippets)

    async def _render_list(self, snippets: list[Snippet] | None = None) -> None:
        if snippets is None:
            snippets = self.controller.snippets
        for item in self.query(SnippetItem):
            if item.expanded:
                self._expanded.add(item.snippet.id)
            else:
                self._expanded.discard(item.snippet.id)

        container = self.query_one("#snippet-list", VerticalScroll)
        await container.remove_children()

        visible = search_snippets(snippets, self._filter)
        if not visible:
            await container.mount(Static(EMPTY_LIST_MESSAGE, id="empty-message"))
            return
        await container.mount_all(
            SnippetItem(s, expanded=s.id in self._expanded) for s in visible
        )

    def _apply_width(self, width: int | None) -> None:
        if width is None:
            return
        self.query_one("#panel", Vertical).styles.width = width
        width_input = self.query_one("#width-input", Input)
        if width_input.value != str(width):
            width_input.value = str(width)

    def _run_effects(self, effects: list[Effect] | None) -> None:
        for effect in effects or []:
            if isinstance(effect, ShowToast):
                self.notify(effect.message, severity=effect.severity)
            elif isinstance(effect, PromptNewSnippet):
                self.action_add_snippet()

    async def _dispatch(self, action) -> None:
        effects = await self.controller.dispatch(action)
        self._run_effects(effects)

    def _dispatch_in_worker(self, action) -> None:
        # Workers keep the message loop free for modals opened mid-operation
        self.run_worker(self._dispatch(action), group="snippet-actions")

    # ------------------------------------------------------------------
    # Delete confirmation
    # ------------------------------------------------------------------

    async def _confirm_delete(self, snippet: Snippet) -> bool:
        return bool(await self.push_screen_wait(DeleteConfirmScreen(snippet)))

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-add":
            self.action_add_snippet()
        elif event.button.id == "btn-refresh":
            self.action_refresh_snippets()

    async def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search":
            self._filter = event.value
            await self._render_list()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "width-input":
            return
        try:
            requested = int(event.value)
        except ValueError:
            self.notify("Width must be a number", severity="warning")
            return
        self.run_worker(self._set_width(requested), group="snippet-actions")

    async def _set_width(self, width: int) -> None:
        effects = await self.controller.dispatch(SetWidth(width))
        self._run_effects(effects)
        self._apply_width(self.controller.width)

    def on_snippet_item_action_requested(self, event: SnippetItem.ActionRequested) -> None:
        snippet_id = event.snippet_id
        if event.action == "copy":
            self._dispatch_in_worker(CopySnippet(snippet_id))
        elif event.action == "save":
            self._dispatch_in_worker(SaveCode(snippet_id, event.code or ""))
        elif event.action == "delete":
            self._dispatch_in_worker(DeleteSnippet(snippet_id))
        elif event.action == "edit":
            self._edit_title(snippet_id)

    def _edit_title(self, snippet_id: str) -> None:
        snippet = self.controller.get(snippet_id)
        if snippet is None:
            return

        def handle_title(title: str | None) -> None:
            if title is not None:
                self._expanded.add(snippet_id)
                self._dispatch_in_worker(SaveTitle(snippet_id, title))

        self.push_screen(EditTitleModal(snippet.title), handle_title)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_add_snippet(self) -> None:
        def handle_new(result: dict | None) -> None:
            if result:
                self._dispatch_in_worker(AddSnippet(result["title"], result.get("code", "")))

        self.push_screen(AddSnippetModal(), handle_new)

    def action_refresh_snippets(self) -> None:
        self._dispatch_in_worker(RefreshSnippets())

    async def action_open_palette(self) -> None:
        if self.controller.palette.is_open:
            return
        await self.controller.dispatch(OpenPalette())
        self.push_screen(CommandPaletteScreen(self.controller), self._run_effects)

    def action_toggle_panel(self) -> None:
        panel = self.query_one("#panel", Vertical)
        panel.display = not panel.display


def run_panel(store_path: Path | None = None, source_location: str | None = None) -> None:
    """Run the snippet panel."""
    from snipbox.utils.logging_utils import setup_tui_logging

    setup_tui_logging(__name__)
    logger.info("Starting snippet panel")
    app = SnippetPanelApp(store_path=store_path, source_location=source_location)
    app.run()
