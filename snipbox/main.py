#!/usr/bin/env python3
"""
Main CLI entry point for snipbox
"""

import typer
from rich.table import Table

from snipbox import __version__
from snipbox.commands.snippets import app as snippets_app
from snipbox.config.settings import get_env_info, get_store_path, validate_all_env_vars
from snipbox.error_handling import setup_logging
from snipbox.utils.output import console


# Version command
def version():
    """Show snipbox version"""
    typer.echo(f"snipbox version {__version__}")


def config():
    """Show configuration and environment variables"""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Variable", style="cyan", no_wrap=True, min_width=20)
    table.add_column("Value", style="white")
    table.add_column("Default", style="dim")
    table.add_column("Description")

    for name, info in get_env_info().items():
        value = info["value"] if info["is_set"] else "[dim]unset[/dim]"
        if not info["valid"]:
            value = f"[red]{info['value']}[/red]"
        table.add_row(name, value, info["default"] or "", info["description"])

    console.print(table)
    console.print(f"\nStore file: [green]{get_store_path()}[/green]")

    errors = validate_all_env_vars()
    for error in errors:
        console.print(f"[red]• {error}[/red]")
    if errors:
        raise typer.Exit(1)


# Callback for global options
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
):
    """
    snipbox - code snippets with a command palette

    Keeps a local collection of snippets, merges a packaged or remote snippet
    list into it and copies snippets to the clipboard.

    [bold]Examples:[/bold]

    Import the packaged snippets:
        [cyan]snipbox refresh[/cyan]

    Add a snippet from a pipe:
        [cyan]history | tail -1 | snipbox add "Last command"[/cyan]

    Open the panel:
        [cyan]snipbox panel[/cyan]
    """
    if verbose and quiet:
        typer.echo("Error: --verbose and --quiet are mutually exclusive", err=True)
        raise typer.Exit(1)

    setup_logging(verbose=verbose, quiet=quiet)


def create_app() -> typer.Typer:
    """Create and configure the main CLI application"""
    app = typer.Typer(
        name="snipbox",
        rich_markup_mode="rich",
        no_args_is_help=True,
    )

    for command in snippets_app.registered_commands:
        app.registered_commands.append(command)

    app.command()(config)
    app.command()(version)
    app.callback()(main)
    return app


# Create the app instance
app = create_app()


def run():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    run()
