"""
Command registry for the command palette.

The palette always lists its commands before any snippet, in registration
order.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ADD_COMMAND_ID = "__add__"
REFRESH_COMMAND_ID = "__refresh__"


@dataclass
class PaletteCommand:
    """A command that can be executed from the palette."""

    id: str  # Unique identifier, e.g., "__add__"
    name: str  # Display name: "Add snippet"
    description: str  # Shown as the hint, also matched by the filter


class CommandRegistry:
    """Registry of available commands for the palette."""

    def __init__(self, register_defaults: bool = True):
        self._commands: dict[str, PaletteCommand] = {}
        if register_defaults:
            self._register_defaults()

    def register(self, command: PaletteCommand) -> None:
        """Register a command. Re-registering an id keeps its position."""
        self._commands[command.id] = command
        logger.debug(f"Registered command: {command.id}")

    def unregister(self, command_id: str) -> bool:
        """Unregister a command. Returns True if found."""
        if command_id in self._commands:
            del self._commands[command_id]
            return True
        return False

    def get(self, command_id: str) -> PaletteCommand | None:
        """Get a command by ID."""
        return self._commands.get(command_id)

    def get_all(self) -> list[PaletteCommand]:
        """Get all commands in registration order."""
        return list(self._commands.values())

    def _register_defaults(self) -> None:
        self.register(
            PaletteCommand(
                id=ADD_COMMAND_ID,
                name="Add snippet",
                description="Create a new snippet",
            )
        )
        self.register(
            PaletteCommand(
                id=REFRESH_COMMAND_ID,
                name="Refresh snippets",
                description="Reload and merge packaged snippets",
            )
        )


# Global registry instance
_registry: CommandRegistry | None = None


def get_command_registry() -> CommandRegistry:
    """Get the global command registry instance."""
    global _registry
    if _registry is None:
        _registry = CommandRegistry()
    return _registry
