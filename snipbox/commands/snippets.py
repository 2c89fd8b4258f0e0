"""
Snippet commands for snipbox.

Every command builds a PanelController on the configured store, runs one
operation through it and prints the resulting toasts. Error toasts exit 1.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from snipbox.error_handling import handle_error
from snipbox.exceptions import SnipboxError
from snipbox.models.snippets import Snippet
from snipbox.services.actions import (
    AddSnippet,
    DeleteSnippet,
    Effect,
    Navigate,
    OpenPalette,
    RefreshSnippets,
    SaveCode,
    SaveTitle,
    Search,
    SetWidth,
    ShowToast,
)
from snipbox.services.clipboard import SystemClipboard
from snipbox.services.collection_ops import search_snippets
from snipbox.services.panel_controller import PanelController, create_panel_controller
from snipbox.ui.command_palette.palette_presenter import ResultType, snippet_hint
from snipbox.utils.output import (
    console,
    is_non_interactive,
    print_snippets_json,
    print_toast,
)

app = typer.Typer()


def _controller(source: Optional[str] = None, **kwargs) -> PanelController:
    return create_panel_controller(source_location=source, **kwargs)


def _report(effects: list[Effect]) -> None:
    """Print toasts; exit 1 when any of them is an error."""
    failed = False
    for effect in effects:
        if isinstance(effect, ShowToast):
            print_toast(effect.message, effect.severity)
            failed = failed or effect.severity == "error"
    if failed:
        raise typer.Exit(1)


async def _run(controller: PanelController, action) -> list[Effect]:
    await controller.load()
    return await controller.dispatch(action)


def _read_code(code: Optional[str]) -> str:
    """Use --code when given, else piped stdin, else nothing."""
    if code is not None:
        return code
    if not sys.stdin.isatty():
        return sys.stdin.read()
    return ""


def _truncate(text: str, width: int = 50) -> str:
    return text[: width - 3] + "..." if len(text) > width else text


@app.command("list")
def list_snippets(
    search: Optional[str] = typer.Option(
        None, "--search", "-s", help="Only show snippets whose title or code contains this"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List stored snippets."""
    try:
        controller = _controller()
        asyncio.run(controller.load())
    except SnipboxError as e:
        handle_error(e, "list")

    snippets = search_snippets(controller.snippets, search or "")

    if json_output:
        print_snippets_json(snippets)
        return

    if not snippets:
        if search:
            console.print(f"[yellow]No snippets match '{search}'[/yellow]")
        else:
            console.print("[yellow]No snippets stored. Run 'snipbox refresh' to import some.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Origin", style="green")
    table.add_column("Chars", style="yellow", justify="right")

    for snippet in snippets:
        table.add_row(
            snippet.id,
            _truncate(snippet.display_title),
            snippet_hint(snippet) or "[dim]-[/dim]",
            str(len(snippet.code)),
        )

    console.print(table)


@app.command()
def add(
    title: str = typer.Argument(help="Title of the new snippet"),
    code: Optional[str] = typer.Option(
        None, "--code", "-c", help="Snippet body (read from stdin when omitted)"
    ),
) -> None:
    """Add a local snippet."""
    if not title.strip():
        console.print("[red]Error: Snippet title cannot be empty[/red]")
        raise typer.Exit(1)
    try:
        _report(asyncio.run(_run(_controller(), AddSnippet(title, _read_code(code)))))
    except SnipboxError as e:
        handle_error(e, "add")


@app.command("edit-title")
def edit_title(
    snippet_id: str = typer.Argument(help="Snippet ID"),
    title: str = typer.Argument(help="New title"),
) -> None:
    """Rename a snippet."""
    if not title.strip():
        console.print("[red]Error: Snippet title cannot be empty[/red]")
        raise typer.Exit(1)
    try:
        _report(asyncio.run(_run(_controller(), SaveTitle(snippet_id, title))))
    except SnipboxError as e:
        handle_error(e, "edit-title")


@app.command()
def save(
    snippet_id: str = typer.Argument(help="Snippet ID"),
    code: Optional[str] = typer.Option(
        None, "--code", "-c", help="New snippet body (read from stdin when omitted)"
    ),
) -> None:
    """Replace a snippet's code."""
    try:
        _report(asyncio.run(_run(_controller(), SaveCode(snippet_id, _read_code(code)))))
    except SnipboxError as e:
        handle_error(e, "save")


@app.command()
def delete(
    snippet_id: str = typer.Argument(help="Snippet ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """Delete a snippet."""

    async def confirmed(_snippet: Snippet) -> bool:
        return True

    try:
        controller = _controller(confirm_delete=confirmed)
        asyncio.run(controller.load())
    except SnipboxError as e:
        handle_error(e, "delete")

    snippet = controller.get(snippet_id)
    if snippet is None:
        console.print(f"[yellow]No snippet with ID '{snippet_id}'[/yellow]")
        raise typer.Exit(1)

    # Confirmation (skip when stdin is not a TTY to avoid hanging scripts)
    if not force and not is_non_interactive():
        console.print(f"\n[yellow]This will delete '{snippet.display_title}'.[/yellow]")
        typer.confirm("Continue?", abort=True)

    try:
        _report(asyncio.run(controller.dispatch(DeleteSnippet(snippet_id))))
    except SnipboxError as e:
        handle_error(e, "delete")


@app.command()
def copy(snippet_id: str = typer.Argument(help="Snippet ID")) -> None:
    """Copy a snippet's code to the system clipboard."""
    try:
        controller = _controller()
        asyncio.run(controller.load())
        snippet = controller.get(snippet_id)
        if snippet is None:
            console.print(f"[yellow]No snippet with ID '{snippet_id}'[/yellow]")
            raise typer.Exit(1)
        SystemClipboard().copy(snippet.code)
    except SnipboxError as e:
        handle_error(e, "copy")

    console.print("[green]Copied![/green]")


@app.command()
def refresh(
    source: Optional[str] = typer.Option(
        None, "--source", help="URL or path of a snippet list (overrides SNIPBOX_SOURCE)"
    ),
) -> None:
    """Merge the external snippet list into the store."""
    try:
        _report(asyncio.run(_run(_controller(source), RefreshSnippets())))
    except SnipboxError as e:
        handle_error(e, "refresh")


@app.command()
def palette(
    query: str = typer.Argument("", help="Palette query"),
    select: int = typer.Option(
        0, "--select", help="Move the selection this many rows before printing"
    ),
) -> None:
    """Show what the command palette lists for a query."""
    try:
        controller = _controller()

        async def run_query() -> None:
            await controller.load()
            await controller.dispatch(OpenPalette())
            await controller.dispatch(Search(query))
            if select:
                await controller.dispatch(Navigate(select))

        asyncio.run(run_query())
    except SnipboxError as e:
        handle_error(e, "palette")

    state = controller.palette.state
    if not state.results:
        console.print(f"[yellow]No palette entries match '{query}'[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("", width=2)
    table.add_column("Kind", style="magenta")
    table.add_column("Title", style="white")
    table.add_column("Hint", style="dim")

    for i, result in enumerate(state.results):
        marker = "▶" if i == state.selected_index else ""
        kind = "command" if result.type == ResultType.COMMAND else "snippet"
        table.add_row(marker, kind, _truncate(result.title), result.hint)

    console.print(table)


@app.command()
def width(
    value: Optional[int] = typer.Argument(None, help="New panel width in cells"),
) -> None:
    """Show or set the panel width preference."""
    try:
        controller = _controller()
        if value is None:
            asyncio.run(controller.load())
        else:
            _report(asyncio.run(_run(controller, SetWidth(value))))
    except SnipboxError as e:
        handle_error(e, "width")

    console.print(f"Panel width: [cyan]{controller.width}[/cyan]")


@app.command()
def panel(
    store: Optional[Path] = typer.Option(None, "--store", help="Store file to open"),
    source: Optional[str] = typer.Option(None, "--source", help="Snippet list used by refresh"),
) -> None:
    """Open the interactive snippet panel."""
    from snipbox.ui.panel_app import run_panel

    try:
        run_panel(store_path=store, source_location=source)
    except SnipboxError as e:
        handle_error(e, "panel")
