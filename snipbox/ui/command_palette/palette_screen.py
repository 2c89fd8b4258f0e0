"""
Command Palette Screen - modal overlay over the snippet panel.

Keyboard-driven search across the palette commands and every snippet.
All state lives in the controller's PalettePresenter; this screen only
forwards keys and renders.
"""

import asyncio
import logging

from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, ListItem, ListView, Static

from snipbox.services.actions import Activate, ClosePalette, Effect, Navigate, Search
from snipbox.services.panel_controller import PanelController

from .palette_presenter import PaletteCandidate, PaletteState, ResultType

logger = logging.getLogger(__name__)


class PaletteResultWidget(ListItem):
    """Widget for a single palette result."""

    DEFAULT_CSS = """
    PaletteResultWidget {
        height: 2;
        padding: 0 1;
    }
    """

    def __init__(self, result: PaletteCandidate, **kwargs):
        super().__init__(**kwargs)
        self.result = result

    def compose(self) -> ComposeResult:
        title = self.result.title
        hint = self.result.hint or ("command" if self.result.type == ResultType.COMMAND else "")

        # Truncate long titles
        if len(title) > 50:
            title = title[:47] + "..."

        yield Static(f"{self.result.icon} {title}  [dim]{hint}[/dim]", markup=True)


class CommandPaletteScreen(ModalScreen[list]):
    """
    Command palette modal overlay.

    Dismisses with the list of effects produced by the activated entry, or
    an empty list when closed without activating anything.
    """

    CSS = """
    CommandPaletteScreen {
        align: center top;
        padding-top: 3;
    }

    #palette-container {
        width: 80;
        height: auto;
        max-height: 30;
        background: $surface;
        border: solid $primary;
    }

    #palette-input {
        width: 100%;
        height: 3;
        border: none;
        border-bottom: solid $primary-darken-1;
        background: $surface-darken-1;
        padding: 0 1;
    }

    #palette-results {
        height: auto;
        max-height: 20;
        min-height: 3;
        padding: 0;
    }

    #palette-hints {
        height: 1;
        background: $surface-darken-1;
        color: $text-muted;
        padding: 0 1;
    }

    ListItem.--highlight {
        background: $accent;
    }
    """

    BINDINGS = [
        Binding("escape", "close", "Cancel", show=False),
        Binding("ctrl+k", "close", "Close", show=False),
        Binding("enter", "select", "Select", show=False),
        Binding("up", "cursor_up", "Up", show=False),
        Binding("down", "cursor_down", "Down", show=False),
        Binding("ctrl+n", "cursor_down", "Down", show=False),
        Binding("ctrl+p", "cursor_up", "Up", show=False),
    ]

    def __init__(self, controller: PanelController, **kwargs):
        super().__init__(**kwargs)
        self.controller = controller
        self._rendered: list[PaletteCandidate] | None = None
        self._render_lock = asyncio.Lock()

    @property
    def state(self) -> PaletteState:
        return self.controller.palette.state

    def compose(self) -> ComposeResult:
        with Vertical(id="palette-container"):
            yield Input(
                placeholder="Search commands and snippets...",
                id="palette-input",
            )
            yield ListView(id="palette-results")
            yield Static(
                "↑↓ Navigate │ Enter Select │ Esc Close",
                id="palette-hints",
            )

    async def on_mount(self) -> None:
        palette = self.controller.palette
        palette.on_state_update = self._on_palette_update
        if not palette.is_open:
            palette.open()
        self.query_one("#palette-input", Input).focus()
        await self._render_results()

    def on_unmount(self) -> None:
        self._detach()

    def _detach(self) -> None:
        palette = self.controller.palette
        if palette.on_state_update == self._on_palette_update:
            palette.on_state_update = None

    def _on_palette_update(self, state: PaletteState) -> None:
        """Follow presenter changes, including refreshes finished by a worker."""
        if state.results is self._rendered:
            self._sync_highlight()
        else:
            self.call_later(self._render_results)

    async def _render_results(self) -> None:
        """Render the current results unless they are already shown."""
        async with self._render_lock:
            state = self.state
            results_view = self.query_one("#palette-results", ListView)
            if state.results is not self._rendered:
                self._rendered = state.results
                await results_view.clear()
                if not state.results:
                    await results_view.append(ListItem(Static("[dim]No results found[/dim]")))
                    return
                for result in state.results:
                    await results_view.append(PaletteResultWidget(result))

            if state.selected_index is not None:
                results_view.index = state.selected_index

    def _sync_highlight(self) -> None:
        index = self.state.selected_index
        if index is not None:
            self.query_one("#palette-results", ListView).index = index

    async def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "palette-input":
            return
        await self.controller.dispatch(Search(event.value))
        await self._render_results()

    async def action_cursor_up(self) -> None:
        await self.controller.dispatch(Navigate(-1))
        self._sync_highlight()

    async def action_cursor_down(self) -> None:
        await self.controller.dispatch(Navigate(1))
        self._sync_highlight()

    async def action_select(self) -> None:
        """Activate the selected entry."""
        palette = self.controller.palette
        if not palette.is_open or palette.get_selected_result() is None:
            return
        self._detach()
        effects: list[Effect] = await self.controller.dispatch(Activate())
        self.dismiss(effects)

    async def action_close(self) -> None:
        self._detach()
        await self.controller.dispatch(ClosePalette())
        self.dismiss([])

    async def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Mouse click on a result."""
        if event.list_view.index is not None:
            self.controller.palette.select_index(event.list_view.index)
        await self.action_select()

    async def on_key(self, event: events.Key) -> None:
        # Input captures these keys before bindings see them
        if event.key == "enter":
            event.stop()
            await self.action_select()
        elif event.key in ("up", "ctrl+p"):
            event.stop()
            await self.action_cursor_up()
        elif event.key in ("down", "ctrl+n"):
            event.stop()
            await self.action_cursor_down()

    async def on_click(self, event: events.Click) -> None:
        """Close when clicking outside the palette."""
        container = self.query_one("#palette-container")
        if not container.region.contains(event.screen_x, event.screen_y):
            await self.action_close()
