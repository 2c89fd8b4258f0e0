"""Pilot-based tests for the snippet panel app."""

from __future__ import annotations

import pytest
from textual.widgets import Input, ListView

from snipbox.services.panel_controller import PanelController
from snipbox.ui.command_palette.palette_screen import (
    CommandPaletteScreen,
    PaletteResultWidget,
)
from snipbox.ui.modals import AddSnippetModal, DeleteConfirmScreen
from snipbox.ui.panel_app import SnippetPanelApp
from snipbox.ui.snippet_item import SnippetItem

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _make_app(repository, fake_source, fake_clipboard, snippets) -> SnippetPanelApp:
    await repository.save_snippets(snippets)
    controller = PanelController(
        repository=repository, source=fake_source, clipboard=fake_clipboard
    )
    return SnippetPanelApp(controller=controller)


def _titles(app: SnippetPanelApp) -> list[str]:
    return [item.snippet.display_title for item in app.query(SnippetItem)]


# ---------------------------------------------------------------------------
# Tests: List
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_mount_lists_snippets(repository, fake_source, fake_clipboard, sample_snippets):
    app = await _make_app(repository, fake_source, fake_clipboard, sample_snippets)
    async with app.run_test() as pilot:
        await pilot.pause()
        assert _titles(app) == ["Hello", "Docker ps", "(untitled)"]
        assert app.query_one("#width-input", Input).value == "42"


@pytest.mark.asyncio
async def test_search_filters_by_code(repository, fake_source, fake_clipboard, sample_snippets):
    app = await _make_app(repository, fake_source, fake_clipboard, sample_snippets)
    async with app.run_test() as pilot:
        await pilot.pause()
        app.query_one("#search", Input).value = "git stat"
        await pilot.pause()
        assert _titles(app) == ["(untitled)"]


@pytest.mark.asyncio
async def test_empty_search_result_message(repository, fake_source, fake_clipboard, sample_snippets):
    app = await _make_app(repository, fake_source, fake_clipboard, sample_snippets)
    async with app.run_test() as pilot:
        await pilot.pause()
        app.query_one("#search", Input).value = "kubectl"
        await pilot.pause()
        assert _titles(app) == []
        assert len(app.query("#empty-message")) == 1


@pytest.mark.asyncio
async def test_refresh_button_merges(repository, fake_source, fake_clipboard, sample_snippets):
    fake_source.payload = [{"id": "n", "title": "Imported"}]
    app = await _make_app(repository, fake_source, fake_clipboard, sample_snippets)
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.click("#btn-refresh")
        await app.workers.wait_for_complete()
        await pilot.pause()
        assert _titles(app)[-1] == "Imported"
        assert [s.id for s in await repository.load_snippets()][-1] == "n"


@pytest.mark.asyncio
async def test_toggle_panel(repository, fake_source, fake_clipboard, sample_snippets):
    app = await _make_app(repository, fake_source, fake_clipboard, sample_snippets)
    async with app.run_test() as pilot:
        await pilot.pause()
        panel = app.query_one("#panel")
        await pilot.press("ctrl+b")
        assert panel.display is False
        await pilot.press("ctrl+b")
        assert panel.display is True


@pytest.mark.asyncio
async def test_width_input_is_clamped(repository, fake_source, fake_clipboard, sample_snippets):
    app = await _make_app(repository, fake_source, fake_clipboard, sample_snippets)
    async with app.run_test() as pilot:
        await pilot.pause()
        width_input = app.query_one("#width-input", Input)
        width_input.value = "5"
        width_input.focus()
        await pilot.press("enter")
        await app.workers.wait_for_complete()
        await pilot.pause()
        assert app.controller.width == 22
        assert await repository.load_width() == 22
        assert width_input.value == "22"


# ---------------------------------------------------------------------------
# Tests: Item actions
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_delete_asks_for_confirmation(repository, fake_source, fake_clipboard, sample_snippets):
    app = await _make_app(repository, fake_source, fake_clipboard, sample_snippets)
    async with app.run_test() as pilot:
        await pilot.pause()
        item = app.query(SnippetItem).first()
        item.post_message(SnippetItem.ActionRequested("delete", item.snippet.id))
        await pilot.pause()
        assert isinstance(app.screen, DeleteConfirmScreen)

        await pilot.press("y")
        await app.workers.wait_for_complete()
        await pilot.pause()
        assert _titles(app) == ["Docker ps", "(untitled)"]


@pytest.mark.asyncio
async def test_delete_cancelled(repository, fake_source, fake_clipboard, sample_snippets):
    app = await _make_app(repository, fake_source, fake_clipboard, sample_snippets)
    async with app.run_test() as pilot:
        await pilot.pause()
        item = app.query(SnippetItem).first()
        item.post_message(SnippetItem.ActionRequested("delete", item.snippet.id))
        await pilot.pause()
        await pilot.press("n")
        await app.workers.wait_for_complete()
        await pilot.pause()
        assert len(await repository.load_snippets()) == 3


@pytest.mark.asyncio
async def test_copy_button(repository, fake_source, fake_clipboard, sample_snippets):
    app = await _make_app(repository, fake_source, fake_clipboard, sample_snippets)
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.click("SnippetItem #copy")
        await app.workers.wait_for_complete()
        assert fake_clipboard.written == ["echo hello"]


@pytest.mark.asyncio
async def test_save_code(repository, fake_source, fake_clipboard, sample_snippets):
    app = await _make_app(repository, fake_source, fake_clipboard, sample_snippets)
    async with app.run_test() as pilot:
        await pilot.pause()
        item = app.query(SnippetItem).last()
        item.post_message(SnippetItem.ActionRequested("save", item.snippet.id, "git status -s"))
        await pilot.pause()
        await app.workers.wait_for_complete()
        stored = {s.id: s for s in await repository.load_snippets()}
        assert stored["c"].code == "git status -s"
        assert stored["c"].local_edited is True


@pytest.mark.asyncio
async def test_add_from_modal(repository, fake_source, fake_clipboard, sample_snippets):
    app = await _make_app(repository, fake_source, fake_clipboard, sample_snippets)
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("ctrl+n")
        assert isinstance(app.screen, AddSnippetModal)
        await pilot.press(*"Uptime")
        await pilot.press("ctrl+s")
        await pilot.pause()
        await app.workers.wait_for_complete()
        await pilot.pause()
        assert _titles(app)[-1] == "Uptime"


# ---------------------------------------------------------------------------
# Tests: Palette
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_palette_opens_and_closes(repository, fake_source, fake_clipboard, sample_snippets):
    app = await _make_app(repository, fake_source, fake_clipboard, sample_snippets)
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("ctrl+k")
        await pilot.pause()
        assert isinstance(app.screen, CommandPaletteScreen)
        assert len(app.controller.palette.state.results) == 5

        await pilot.press("escape")
        await pilot.pause()
        assert not isinstance(app.screen, CommandPaletteScreen)
        assert not app.controller.palette.is_open


@pytest.mark.asyncio
async def test_palette_copies_selected_snippet(
    repository, fake_source, fake_clipboard, sample_snippets
):
    app = await _make_app(repository, fake_source, fake_clipboard, sample_snippets)
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("ctrl+k")
        await pilot.pause()
        await pilot.press(*"docker")
        await pilot.pause()
        assert [r.id for r in app.controller.palette.state.results] == ["b"]

        await pilot.press("enter")
        await pilot.pause()
        assert fake_clipboard.written == ["docker ps -a"]
        assert not isinstance(app.screen, CommandPaletteScreen)


@pytest.mark.asyncio
async def test_palette_navigation_is_clamped(
    repository, fake_source, fake_clipboard, sample_snippets
):
    app = await _make_app(repository, fake_source, fake_clipboard, sample_snippets)
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("ctrl+k")
        await pilot.pause()
        for _ in range(10):
            await pilot.press("down")
        assert app.controller.palette.state.selected_index == 4
        for _ in range(10):
            await pilot.press("up")
        assert app.controller.palette.state.selected_index == 0


@pytest.mark.asyncio
async def test_palette_add_command_prompts(
    repository, fake_source, fake_clipboard, sample_snippets
):
    app = await _make_app(repository, fake_source, fake_clipboard, sample_snippets)
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("ctrl+k")
        await pilot.pause()
        await pilot.press("enter")
        await pilot.pause()
        assert isinstance(app.screen, AddSnippetModal)


@pytest.mark.asyncio
async def test_palette_follows_refresh_finished_in_background(
    repository, fake_source, fake_clipboard, sample_snippets
):
    fake_source.payload = [{"id": "n", "title": "Docker compose", "code": "docker compose up"}]
    app = await _make_app(repository, fake_source, fake_clipboard, sample_snippets)
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("ctrl+k")
        await pilot.pause()
        await pilot.press(*"docker")
        await pilot.pause()
        await pilot.press("down")

        app.action_refresh_snippets()
        await app.workers.wait_for_complete()
        await pilot.pause()

        rows = app.screen.query(PaletteResultWidget)
        assert [row.result.id for row in rows] == ["b", "n"]
        assert app.screen.query_one("#palette-results", ListView).index == 0

        await pilot.press("down")
        await pilot.press("enter")
        await pilot.pause()
        assert fake_clipboard.written == ["docker compose up"]
