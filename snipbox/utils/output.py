"""Console output shared by the snipbox CLI commands."""

import json
import sys
from collections.abc import Iterable

from rich.console import Console

from snipbox.models.snippets import Snippet

console = Console(force_terminal=True, color_system="auto")

# Toast severity -> rich style
TOAST_STYLES = {"information": "green", "warning": "yellow", "error": "red"}


def is_non_interactive() -> bool:
    """Return True when stdin is not a TTY, so prompts would hang a script."""
    return not sys.stdin.isatty()


def print_toast(message: str, severity: str = "information") -> None:
    """Print a panel toast as one coloured CLI line."""
    style = TOAST_STYLES.get(severity, "white")
    console.print(f"[{style}]{message}[/{style}]")


def print_snippets_json(snippets: Iterable[Snippet]) -> None:
    """Print snippets in their persisted form, bypassing rich markup."""
    print(json.dumps([s.to_dict() for s in snippets], indent=2, ensure_ascii=False))
