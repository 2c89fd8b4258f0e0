"""Tests for the palette command registry."""

from dataclasses import fields

from snipbox.ui.command_palette.palette_commands import (
    ADD_COMMAND_ID,
    REFRESH_COMMAND_ID,
    CommandRegistry,
    PaletteCommand,
    get_command_registry,
)


def test_defaults_in_order():
    commands = CommandRegistry().get_all()
    assert [c.id for c in commands] == [ADD_COMMAND_ID, REFRESH_COMMAND_ID]
    assert commands[0].name == "Add snippet"
    assert commands[0].description == "Create a new snippet"
    assert commands[1].name == "Refresh snippets"
    assert commands[1].description == "Reload and merge packaged snippets"


def test_register_and_unregister():
    registry = CommandRegistry(register_defaults=False)
    registry.register(PaletteCommand(id="x", name="X", description="does x"))
    assert registry.get("x").name == "X"
    assert registry.unregister("x") is True
    assert registry.unregister("x") is False
    assert registry.get_all() == []


def test_reregister_keeps_position():
    registry = CommandRegistry()
    registry.register(PaletteCommand(id=ADD_COMMAND_ID, name="Add", description="new"))
    assert [c.id for c in registry.get_all()] == [ADD_COMMAND_ID, REFRESH_COMMAND_ID]
    assert registry.get(ADD_COMMAND_ID).name == "Add"


def test_global_registry_is_shared():
    assert get_command_registry() is get_command_registry()


def test_commands_carry_only_what_the_palette_shows():
    assert [f.name for f in fields(PaletteCommand)] == ["id", "name", "description"]
