"""
Command Palette - quick search over commands and snippets.

Provides:
- CommandPaletteScreen: Modal overlay for the panel
- PalettePresenter: query, ranking and navigation state
- CommandRegistry: Registry of palette commands
"""

from .palette_commands import CommandRegistry, PaletteCommand
from .palette_presenter import (
    PaletteCandidate,
    PalettePresenter,
    PaletteState,
    ResultType,
    build_candidates,
    filter_candidates,
)

__all__ = [
    "CommandRegistry",
    "PaletteCandidate",
    "PaletteCommand",
    "PalettePresenter",
    "PaletteState",
    "ResultType",
    "build_candidates",
    "filter_candidates",
]
