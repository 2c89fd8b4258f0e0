"""Commands the panel controller consumes and effects it hands back.

The host (Textual panel or CLI) turns UI events into actions, awaits
`PanelController.dispatch`, then carries out the returned effects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

ToastSeverity = Literal["information", "warning", "error"]


# =============================================================================
# Actions
# =============================================================================


@dataclass(frozen=True)
class AddSnippet:
    title: str
    code: str = ""


@dataclass(frozen=True)
class RefreshSnippets:
    pass


@dataclass(frozen=True)
class SaveTitle:
    snippet_id: str
    title: str


@dataclass(frozen=True)
class SaveCode:
    snippet_id: str
    code: str


@dataclass(frozen=True)
class DeleteSnippet:
    snippet_id: str


@dataclass(frozen=True)
class CopySnippet:
    snippet_id: str


@dataclass(frozen=True)
class SetWidth:
    width: int


@dataclass(frozen=True)
class OpenPalette:
    pass


@dataclass(frozen=True)
class ClosePalette:
    pass


@dataclass(frozen=True)
class TogglePalette:
    pass


@dataclass(frozen=True)
class Search:
    query: str


@dataclass(frozen=True)
class Navigate:
    delta: int


@dataclass(frozen=True)
class Activate:
    pass


Action = Union[
    AddSnippet,
    RefreshSnippets,
    SaveTitle,
    SaveCode,
    DeleteSnippet,
    CopySnippet,
    SetWidth,
    OpenPalette,
    ClosePalette,
    TogglePalette,
    Search,
    Navigate,
    Activate,
]


# =============================================================================
# Effects
# =============================================================================


@dataclass(frozen=True)
class ShowToast:
    message: str
    severity: ToastSeverity = "information"


@dataclass(frozen=True)
class PromptNewSnippet:
    """Ask the user for a title and code, then dispatch AddSnippet."""


Effect = Union[ShowToast, PromptNewSnippet]
