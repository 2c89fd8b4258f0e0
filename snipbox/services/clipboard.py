"""Clipboard writes with fallback methods."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Sequence

from snipbox.exceptions import ClipboardError

logger = logging.getLogger(__name__)

# Tried in order until one succeeds
CLIPBOARD_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
)


class SystemClipboard:
    """Copies text using the first available system clipboard tool.

    An optional `fallback` (e.g. a terminal OSC-52 copy) is used when no tool
    works. `copy` raises ClipboardError when nothing accepted the text;
    `write` reports the same outcome as a bool for the panel controller.
    """

    def __init__(
        self,
        commands: Sequence[Sequence[str]] = CLIPBOARD_COMMANDS,
        fallback: Callable[[str], None] | None = None,
    ):
        self.commands = commands
        self.fallback = fallback

    def copy(self, text: str) -> None:
        for command in self.commands:
            try:
                subprocess.run(list(command), input=text, text=True, check=True, timeout=5)
                return
            except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError):
                continue

        if self.fallback is None:
            raise ClipboardError(
                "No clipboard tool available",
                tried=", ".join(command[0] for command in self.commands),
            )
        try:
            self.fallback(text)
        except Exception as e:
            raise ClipboardError(f"Clipboard fallback failed: {e}") from e

    def write(self, text: str) -> bool:
        try:
            self.copy(text)
        except ClipboardError as e:
            logger.warning(str(e))
            return False
        return True
