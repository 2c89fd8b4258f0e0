"""Tests for system clipboard writes."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from snipbox.exceptions import ClipboardError
from snipbox.services.clipboard import CLIPBOARD_COMMANDS, SystemClipboard


@patch("snipbox.services.clipboard.subprocess.run")
def test_first_working_tool_wins(mock_run):
    assert SystemClipboard().write("hello") is True
    mock_run.assert_called_once()
    args, kwargs = mock_run.call_args
    assert args[0] == list(CLIPBOARD_COMMANDS[0])
    assert kwargs["input"] == "hello"


@patch("snipbox.services.clipboard.subprocess.run")
def test_falls_through_missing_tools(mock_run):
    mock_run.side_effect = [
        FileNotFoundError("pbcopy"),
        subprocess.CalledProcessError(1, "wl-copy"),
        None,
    ]
    assert SystemClipboard().write("x") is True
    assert mock_run.call_count == 3
    assert mock_run.call_args[0][0][0] == "xclip"


@patch("snipbox.services.clipboard.subprocess.run", side_effect=FileNotFoundError)
def test_no_tool_and_no_fallback(mock_run):
    assert SystemClipboard().write("x") is False


@patch("snipbox.services.clipboard.subprocess.run", side_effect=FileNotFoundError)
def test_fallback_is_used(mock_run):
    fallback = MagicMock()
    assert SystemClipboard(fallback=fallback).write("code") is True
    fallback.assert_called_once_with("code")


@patch("snipbox.services.clipboard.subprocess.run", side_effect=FileNotFoundError)
def test_fallback_failure_is_reported_not_raised(mock_run):
    fallback = MagicMock(side_effect=RuntimeError("no terminal"))
    assert SystemClipboard(fallback=fallback).write("code") is False


@patch("snipbox.services.clipboard.subprocess.run", side_effect=FileNotFoundError)
def test_copy_raises_when_nothing_works(mock_run):
    with pytest.raises(ClipboardError) as exc_info:
        SystemClipboard().copy("x")
    assert exc_info.value.context["tried"] == "pbcopy, wl-copy, xclip, xsel"


@patch("snipbox.services.clipboard.subprocess.run", side_effect=FileNotFoundError)
def test_copy_wraps_fallback_failure(mock_run):
    fallback = MagicMock(side_effect=RuntimeError("no terminal"))
    with pytest.raises(ClipboardError, match="no terminal"):
        SystemClipboard(fallback=fallback).copy("code")
