"""
Centralized error handling for the snipbox CLI

This module provides:
- Rich Console panels for user-facing error messages
- Logging setup for the CLI (stderr + detailed log file)
- Consistent exit codes via typer.Exit
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from snipbox.exceptions import (
    ClipboardError,
    ConfigurationError,
    MalformedDataError,
    SnipboxError,
    SourceUnavailableError,
    StoreError,
    ValidationError,
)

# Global console instance for error display
console = Console(stderr=True, force_terminal=True, color_system="auto")

logger = logging.getLogger("snipbox")

# Error type -> (panel title, suggestion)
_CATEGORIES: Dict[type, tuple] = {
    StoreError: ("Store Error", "Check that the store file is writable (see `snipbox config`)."),
    MalformedDataError: ("Store Error", "The stored collection was reset to empty."),
    SourceUnavailableError: ("Source Error", "Check the source URL or path and run refresh again."),
    ClipboardError: ("Clipboard Error", "Install pbcopy, wl-copy, xclip or xsel."),
    ValidationError: ("Validation Error", None),
    ConfigurationError: ("Configuration Error", "Run `snipbox config` to inspect settings."),
}


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
) -> None:
    """
    Set up logging for the CLI

    Args:
        verbose: Enable verbose (DEBUG) logging on stderr
        quiet: Only show errors on stderr
        log_file: Optional log file path (defaults to <config dir>/snipbox.log)
    """
    if verbose:
        console_level = logging.DEBUG
    elif quiet:
        console_level = logging.ERROR
    else:
        console_level = logging.WARNING

    detailed_formatter = logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s"
    )
    simple_formatter = logging.Formatter("%(levelname)s: %(message)s")

    logger.handlers.clear()
    logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(simple_formatter)
    logger.addHandler(console_handler)

    if log_file is None:
        from snipbox.config.settings import get_config_dir

        log_file = get_config_dir() / "snipbox.log"

    try:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)
    except OSError as e:
        # Continue without a log file
        if verbose:
            console.print(f"[yellow]Warning: Could not create log file {log_file}: {e}[/yellow]")


def _category_for(error: SnipboxError) -> tuple:
    for error_type, category in _CATEGORIES.items():
        if isinstance(error, error_type):
            return category
    return ("Error", None)


def handle_error(
    error: Exception,
    operation: str = "unknown",
    show_details: bool = False,
) -> None:
    """
    Log an error, show it to the user and exit with status 1

    Args:
        error: The exception to handle
        operation: Description of the operation that failed
        show_details: Whether to show the error context to the user
    """
    if isinstance(error, SnipboxError):
        logger.error(f"{operation} failed: {error}")
        display_error(error, show_details)
    else:
        logger.error(f"Unexpected error during {operation}: {error}", exc_info=True)
        wrapped = SnipboxError(
            f"An unexpected error occurred during {operation}",
            original_error=str(error),
            error_type=type(error).__name__,
        )
        display_error(wrapped, show_details=True)

    raise typer.Exit(1)


def display_error(error: SnipboxError, show_details: bool = False) -> None:
    """Display error to user with Rich formatting"""
    title, suggestion = _category_for(error)

    message = Text()
    message.append("❌ ", style="bold")
    message.append(error.message, style="bold red")

    if show_details and error.context:
        details_text = "\n".join(f"• {k}: {v}" for k, v in error.context.items())
        message.append(f"\n\nDetails:\n{details_text}", style="dim red")

    if suggestion:
        message.append(f"\n\n💡 Suggestion: {suggestion}", style="cyan")

    console.print(
        Panel(
            message,
            title=f"[bold]{title}[/bold]",
            title_align="left",
            border_style="red",
            padding=(0, 1),
        )
    )


def warn_user(message: str, **context: Any) -> None:
    """Display a warning message to the user"""
    text = Text()
    text.append("⚠️  ", style="bold")
    text.append(message, style="bold yellow")
    if context:
        text.append(" " + ", ".join(f"{k}={v}" for k, v in context.items()), style="dim")
    console.print(text)
