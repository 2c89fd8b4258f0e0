"""
Controller for the snippet panel.

Owns the in-memory collection and the palette presenter, and is the only
place that writes the store. Every mutating operation re-reads the persisted
collection, applies a pure transform and writes the whole collection back.

Mutations are serialised through one asyncio.Lock, so within a process a
delete issued during a refresh waits for the refresh's write instead of being
clobbered by it. Separate processes sharing a store file still race with
last-write-wins.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import Protocol

from snipbox.config.settings import get_http_timeout, get_source_location, get_store_path
from snipbox.exceptions import SourceUnavailableError, StoreWriteError, ValidationError
from snipbox.models.snippets import Snippet, find_snippet
from snipbox.services import collection_ops
from snipbox.services.actions import (
    Action,
    Activate,
    AddSnippet,
    ClosePalette,
    CopySnippet,
    DeleteSnippet,
    Effect,
    Navigate,
    OpenPalette,
    PromptNewSnippet,
    RefreshSnippets,
    SaveCode,
    SaveTitle,
    Search,
    SetWidth,
    ShowToast,
    TogglePalette,
)
from snipbox.services.clipboard import SystemClipboard
from snipbox.services.reconcile import merge_candidates
from snipbox.services.snippet_repository import SnippetRepository
from snipbox.services.snippet_source import SnippetSource, make_source
from snipbox.storage import JsonFileStore
from snipbox.ui.command_palette.palette_commands import ADD_COMMAND_ID, REFRESH_COMMAND_ID
from snipbox.ui.command_palette.palette_presenter import PalettePresenter, PaletteState

logger = logging.getLogger(__name__)

ConfirmDelete = Callable[[Snippet], Awaitable[bool]]


class Clipboard(Protocol):
    """Anything that can put text on a clipboard and report success."""

    def write(self, text: str) -> bool: ...


class PanelController:
    """Drives persistence, reconciliation and the palette for one panel."""

    def __init__(
        self,
        repository: SnippetRepository,
        source: SnippetSource,
        clipboard: Clipboard,
        confirm_delete: ConfirmDelete | None = None,
        on_collection_update: Callable[[list[Snippet]], Awaitable[None]] | None = None,
        on_palette_update: Callable[[PaletteState], None] | None = None,
    ):
        """Initialize the controller.

        Args:
            repository: Access to the persisted collection and width
            source: External snippet list used by refresh
            clipboard: Target for copy operations
            confirm_delete: Asked before every delete; deletes are refused
                when it is missing
            on_collection_update: Called after the in-memory collection changes
            on_palette_update: Called whenever the palette state changes
        """
        self.repository = repository
        self.source = source
        self.clipboard = clipboard
        self.confirm_delete = confirm_delete
        self.on_collection_update = on_collection_update

        self._snippets: list[Snippet] = []
        self._width: int | None = None
        self._write_lock = asyncio.Lock()
        self.palette = PalettePresenter(
            get_snippets=lambda: self._snippets,
            on_state_update=on_palette_update,
        )

    @property
    def snippets(self) -> list[Snippet]:
        return list(self._snippets)

    @property
    def width(self) -> int | None:
        return self._width

    def get(self, snippet_id: str) -> Snippet | None:
        return find_snippet(self._snippets, snippet_id)

    async def _set_snippets(self, snippets: Sequence[Snippet]) -> None:
        self._snippets = list(snippets)
        self.palette.refresh_results()
        if self.on_collection_update:
            await self.on_collection_update(self.snippets)

    async def load(self) -> None:
        """Load the persisted collection and width preference."""
        snippets = await self.repository.load_snippets()
        self._width = await self.repository.load_width()
        logger.info(f"Loaded {len(snippets)} snippets")
        await self._set_snippets(snippets)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def dispatch(self, action: Action) -> list[Effect]:
        """Apply one action and return the effects the host should run."""
        logger.debug(f"dispatch {action!r}")

        if isinstance(action, AddSnippet):
            return await self.add(action.title, action.code)
        if isinstance(action, RefreshSnippets):
            return await self.refresh()
        if isinstance(action, SaveTitle):
            return await self.save_title(action.snippet_id, action.title)
        if isinstance(action, SaveCode):
            return await self.save_code(action.snippet_id, action.code)
        if isinstance(action, DeleteSnippet):
            return await self.delete(action.snippet_id)
        if isinstance(action, CopySnippet):
            return self.copy(action.snippet_id)
        if isinstance(action, SetWidth):
            return await self.set_width(action.width)
        if isinstance(action, OpenPalette):
            self.palette.open()
        elif isinstance(action, ClosePalette):
            self.palette.close()
        elif isinstance(action, TogglePalette):
            self.palette.toggle()
        elif isinstance(action, Search):
            self.palette.search(action.query)
        elif isinstance(action, Navigate):
            self.palette.move_selection(action.delta)
        elif isinstance(action, Activate):
            return await self.activate()
        else:
            raise TypeError(f"Unknown action: {action!r}")
        return []

    # ------------------------------------------------------------------
    # Mutating operations
    # ------------------------------------------------------------------

    async def add(self, title: str, code: str = "") -> list[Effect]:
        """Add a local snippet. An empty title aborts silently."""
        async with self._write_lock:
            latest = await self.repository.load_snippets()
            try:
                updated = collection_ops.add_snippet(latest, title, code)
            except ValidationError:
                logger.debug("Add aborted: empty title")
                return []
            try:
                await self.repository.save_snippets(updated)
            except StoreWriteError as e:
                logger.error(f"Failed to save new snippet: {e}")
                return [ShowToast("Local save failed", "error")]
            await self._set_snippets(updated)
        return [ShowToast("Added local snippet")]

    async def save_title(self, snippet_id: str, title: str) -> list[Effect]:
        """Rename a snippet. An empty title aborts silently."""
        async with self._write_lock:
            current = self.get(snippet_id)
            latest = await self.repository.load_snippets()
            current = current or find_snippet(latest, snippet_id)
            if current is None:
                return [ShowToast("Snippet not found", "warning")]
            try:
                updated = collection_ops.update_title(latest, current, title)
            except ValidationError:
                logger.debug(f"Rename of {snippet_id} aborted: empty title")
                return []
            try:
                await self.repository.save_snippets(updated)
            except StoreWriteError as e:
                logger.warning(f"Persist title failed: {e}")
                return [ShowToast("Local save failed", "error")]
            await self._set_snippets(updated)
        return [ShowToast("Title updated")]

    async def save_code(self, snippet_id: str, code: str) -> list[Effect]:
        """Replace a snippet's code and mark it locally edited."""
        async with self._write_lock:
            current = self.get(snippet_id)
            latest = await self.repository.load_snippets()
            current = current or find_snippet(latest, snippet_id)
            if current is None:
                return [ShowToast("Snippet not found", "warning")]
            updated = collection_ops.update_code(latest, current, code)
            try:
                await self.repository.save_snippets(updated)
            except StoreWriteError as e:
                logger.warning(f"Persist code failed: {e}")
                return [ShowToast("Local save failed", "error")]
            await self._set_snippets(updated)
        return [ShowToast("Saved locally")]

    async def delete(self, snippet_id: str) -> list[Effect]:
        """Delete after confirmation. Unknown ids change nothing."""
        snippet = self.get(snippet_id)
        if snippet is None:
            logger.debug(f"Delete of unknown snippet {snippet_id} ignored")
            return []
        if self.confirm_delete is None or not await self.confirm_delete(snippet):
            return []

        async with self._write_lock:
            latest = await self.repository.load_snippets()
            updated = collection_ops.remove_snippet(latest, snippet_id)
            try:
                await self.repository.save_snippets(updated)
            except StoreWriteError as e:
                logger.warning(f"Remove from storage failed: {e}")
                return [ShowToast("Delete failed", "error")]
            await self._set_snippets(updated)
        return [ShowToast("Deleted")]

    async def refresh(self) -> list[Effect]:
        """Fetch the external list, merge it and persist the result.

        On any source failure the collection is left untouched.
        """
        try:
            candidates = await self.source.fetch()
        except SourceUnavailableError as e:
            logger.error(f"Snippet source load failed: {e}")
            return [ShowToast("Failed to load snippets", "error")]

        async with self._write_lock:
            latest = await self.repository.load_snippets()
            try:
                result = merge_candidates(
                    latest,
                    candidates,
                    source_tag=self.source.tag,
                    source=self.source.identity,
                )
            except SourceUnavailableError as e:
                logger.error(f"Snippet source returned unusable data: {e}")
                return [ShowToast("Failed to load snippets", "error")]
            try:
                await self.repository.save_snippets(result.snippets)
            except StoreWriteError as e:
                logger.error(f"Failed to save merged snippets: {e}")
                return [ShowToast("Failed to persist merged snippets", "error")]
            await self._set_snippets(result.snippets)

        logger.info(f"Refresh added {result.added}, skipped {result.skipped}")
        return [ShowToast(f"Merged {len(result.snippets)} snippets (local + bundled)")]

    async def set_width(self, width: int) -> list[Effect]:
        """Clamp and persist the panel width."""
        async with self._write_lock:
            try:
                self._width = await self.repository.save_width(width)
            except StoreWriteError as e:
                logger.warning(f"Failed to save width: {e}")
                return [ShowToast("Failed to save width", "error")]
        return []

    # ------------------------------------------------------------------
    # Clipboard & palette
    # ------------------------------------------------------------------

    def copy(self, snippet_id: str, success_message: str = "Copied!") -> list[Effect]:
        snippet = self.get(snippet_id)
        if snippet is None:
            return [ShowToast("Snippet not found", "warning")]
        if self.clipboard.write(snippet.code or ""):
            return [ShowToast(success_message)]
        return [ShowToast("Copy failed", "error")]

    async def activate(self) -> list[Effect]:
        """Run the palette selection. The palette is closed afterwards."""
        selected = self.palette.execute_selected()
        if selected is None:
            return []

        if selected["action"] == "command":
            if selected["command_id"] == ADD_COMMAND_ID:
                return [PromptNewSnippet()]
            if selected["command_id"] == REFRESH_COMMAND_ID:
                return await self.refresh()
            logger.warning(f"Unhandled palette command {selected['command_id']}")
            return []

        return self.copy(selected["snippet_id"], success_message="Copied snippet")


def create_panel_controller(
    store_path: Path | None = None,
    source_location: str | None = None,
    clipboard: Clipboard | None = None,
    **kwargs,
) -> PanelController:
    """Build a controller wired to the configured store file and source."""
    store = JsonFileStore(store_path or get_store_path())
    source = make_source(source_location or get_source_location(), timeout=get_http_timeout())
    return PanelController(
        repository=SnippetRepository(store),
        source=source,
        clipboard=clipboard or SystemClipboard(),
        **kwargs,
    )
