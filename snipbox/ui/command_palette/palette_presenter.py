"""
Presenter for the command palette.

Handles candidate building, filtering, bounded selection and action dispatch.
The filter is a linear, stable, case-insensitive substring match on title or
hint, so results always appear in the order `build_candidates` produced them.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from snipbox.config.constants import (
    HINT_BUNDLED,
    HINT_LOCAL,
    PALETTE_RESULT_LIMIT,
)
from snipbox.models.snippets import Snippet

from .palette_commands import CommandRegistry, get_command_registry

logger = logging.getLogger(__name__)


class ResultType(Enum):
    """Types of results in the palette."""

    COMMAND = "command"
    SNIPPET = "snippet"


@dataclass(frozen=True)
class PaletteCandidate:
    """A single entry the palette can show."""

    id: str  # Command id or snippet id
    type: ResultType
    title: str  # Primary display text
    hint: str  # Secondary text, also matched by the filter

    @property
    def icon(self) -> str:
        return "▶" if self.type == ResultType.COMMAND else "📄"


@dataclass
class PaletteState:
    """Current state of the palette.

    `selected_index` is None when there is nothing to select.
    """

    is_open: bool = False
    query: str = ""
    results: list[PaletteCandidate] = field(default_factory=list)
    selected_index: int | None = None


def snippet_hint(snippet: Snippet) -> str:
    if snippet.source:
        return HINT_BUNDLED
    if snippet.local_edited:
        return HINT_LOCAL
    return ""


def build_candidates(
    snippets: Sequence[Snippet], registry: CommandRegistry | None = None
) -> list[PaletteCandidate]:
    """Commands first, then one entry per snippet in collection order."""
    registry = registry or get_command_registry()
    commands = [
        PaletteCandidate(id=cmd.id, type=ResultType.COMMAND, title=cmd.name, hint=cmd.description)
        for cmd in registry.get_all()
    ]
    refs = [
        PaletteCandidate(
            id=s.id,
            type=ResultType.SNIPPET,
            title=s.display_title,
            hint=snippet_hint(s),
        )
        for s in snippets
    ]
    return commands + refs


def filter_candidates(
    candidates: Sequence[PaletteCandidate],
    query: str,
    limit: int = PALETTE_RESULT_LIMIT,
) -> list[PaletteCandidate]:
    """Keep candidates whose title or hint contains the query."""
    q = (query or "").strip().lower()
    if not q:
        return list(candidates[:limit])
    matched = [c for c in candidates if q in (c.title or "").lower() or q in (c.hint or "").lower()]
    return matched[:limit]


class PalettePresenter:
    """
    Handles command palette business logic.

    States: closed -> open (query "", every candidate) -> open with each
    query edit -> closed on activation, explicit close or toggle.
    """

    def __init__(
        self,
        get_snippets: Callable[[], Sequence[Snippet]],
        on_state_update: Callable[[PaletteState], None] | None = None,
        registry: CommandRegistry | None = None,
    ):
        self.get_snippets = get_snippets
        self.on_state_update = on_state_update
        self._registry = registry or get_command_registry()
        self._state = PaletteState()

    @property
    def state(self) -> PaletteState:
        """Get current state."""
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state.is_open

    def _notify_update(self) -> None:
        """Notify listeners of state change."""
        if self.on_state_update:
            self.on_state_update(self._state)

    def _recompute(self) -> None:
        candidates = build_candidates(self.get_snippets(), self._registry)
        self._state.results = filter_candidates(candidates, self._state.query)
        self._state.selected_index = 0 if self._state.results else None

    def open(self) -> None:
        """Open with an empty query showing every candidate."""
        self._state.is_open = True
        self._state.query = ""
        self._recompute()
        self._notify_update()

    def close(self) -> None:
        if not self._state.is_open:
            return
        self._state = PaletteState()
        self._notify_update()

    def toggle(self) -> None:
        if self._state.is_open:
            self.close()
        else:
            self.open()

    def search(self, query: str) -> None:
        """Recompute results for a new query and reset the selection."""
        if not self._state.is_open:
            logger.debug("Ignoring palette query while closed")
            return
        self._state.query = query
        self._recompute()
        self._notify_update()

    def refresh_results(self) -> None:
        """Recompute for the current query after the collection changed."""
        if not self._state.is_open:
            return
        self._recompute()
        self._notify_update()

    def move_selection(self, delta: int) -> None:
        """Move selection up or down, clamped to the result list."""
        if not self._state.results:
            return

        current = self._state.selected_index or 0
        new_index = max(0, min(current + delta, len(self._state.results) - 1))
        self._state.selected_index = new_index
        self._notify_update()

    def select_index(self, index: int) -> None:
        """Select a row directly (mouse click)."""
        if 0 <= index < len(self._state.results):
            self._state.selected_index = index
            self._notify_update()

    def get_selected_result(self) -> PaletteCandidate | None:
        """Get the currently selected result."""
        index = self._state.selected_index
        if index is None or not (0 <= index < len(self._state.results)):
            return None
        return self._state.results[index]

    def execute_selected(self) -> dict[str, Any] | None:
        """
        Close the palette and describe what the selection asks for.

        Returns action info for the caller to handle, or None if nothing is
        selected (the palette then stays open).
        """
        result = self.get_selected_result()
        if not result:
            return None

        self.close()

        if result.type == ResultType.COMMAND:
            return {"action": "command", "command_id": result.id}
        return {"action": "copy_snippet", "snippet_id": result.id}
