"""Shared pytest fixtures for snipbox tests."""

import logging
from pathlib import Path

import pytest

from snipbox.models.snippets import Snippet
from snipbox.services.panel_controller import PanelController
from snipbox.services.snippet_repository import SnippetRepository
from snipbox.storage import MemoryStore


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.config/snipbox."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setattr("snipbox.config.settings.SNIPBOX_CONFIG_DIR", config_dir)
    monkeypatch.setenv("SNIPBOX_CONFIG_DIR", str(config_dir))
    monkeypatch.setenv("SNIPBOX_STORE_PATH", str(tmp_path / "storage.json"))
    monkeypatch.delenv("SNIPBOX_SOURCE", raising=False)
    monkeypatch.delenv("SNIPBOX_HTTP_TIMEOUT", raising=False)
    monkeypatch.delenv("SNIPBOX_LOG_LEVEL", raising=False)
    return config_dir


@pytest.fixture(autouse=True)
def reset_cli_logging():
    """Drop handlers the CLI callback attached to the snipbox logger."""
    yield
    snipbox_logger = logging.getLogger("snipbox")
    for handler in list(snipbox_logger.handlers):
        handler.close()
        snipbox_logger.removeHandler(handler)


@pytest.fixture
def store_path(tmp_path) -> Path:
    return tmp_path / "storage.json"


@pytest.fixture
def sample_snippets() -> list[Snippet]:
    return [
        Snippet(id="a", title="Hello", code="echo hello", local_edited=True),
        Snippet(id="b", title="Docker ps", code="docker ps -a", source="bundle.json"),
        Snippet(id="c", title="", code="git status"),
    ]


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def repository(memory_store) -> SnippetRepository:
    return SnippetRepository(memory_store)


class FakeSource:
    """In-memory snippet source."""

    tag = "bundle"
    identity = "fake.json"

    def __init__(self, payload=None, error: Exception | None = None):
        self.payload = payload if payload is not None else []
        self.error = error
        self.calls = 0

    async def fetch(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.payload


class FakeClipboard:
    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.written: list[str] = []

    def write(self, text: str) -> bool:
        if self.succeed:
            self.written.append(text)
        return self.succeed


@pytest.fixture
def fake_source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def fake_clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture
def make_controller(repository, fake_source, fake_clipboard):
    """Build a controller over the in-memory repository."""

    def _make(**kwargs) -> PanelController:
        kwargs.setdefault("repository", repository)
        kwargs.setdefault("source", fake_source)
        kwargs.setdefault("clipboard", fake_clipboard)
        return PanelController(**kwargs)

    return _make
