"""
External snippet sources.

A source hands the reconciliation engine a decoded JSON value. Any failure
(I/O, HTTP status, decoding) surfaces as SourceUnavailableError; there is no
automatic retry, the user refreshes again.
"""

from __future__ import annotations

import asyncio
import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any, Protocol

import requests

from snipbox.config.constants import (
    BUNDLED_SNIPPETS_FILE,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_SOURCE_TAG,
)
from snipbox.exceptions import SourceUnavailableError

logger = logging.getLogger(__name__)


class SnippetSource(Protocol):
    """Anything that can produce a raw candidate list."""

    tag: str  # prefix for fallback ids
    identity: str  # stamped on imported records as `source`

    async def fetch(self) -> Any: ...


class BundledSource:
    """Reads a JSON file from disk (the packaged list by default)."""

    def __init__(self, path: Path | str | None = None, tag: str = DEFAULT_SOURCE_TAG):
        if path is None:
            path = resources.files("snipbox.data").joinpath(BUNDLED_SNIPPETS_FILE)
        self.path = path
        self.tag = tag
        self.identity = str(path)

    def _read(self) -> Any:
        try:
            text = Path(str(self.path)).read_text(encoding="utf-8")
        except OSError as e:
            raise SourceUnavailableError(str(e), source=self.identity) from e
        try:
            return json.loads(text)
        except ValueError as e:
            raise SourceUnavailableError("Snippet file is not valid JSON", source=self.identity) from e

    async def fetch(self) -> Any:
        return await asyncio.to_thread(self._read)


class HttpSource:
    """Fetches a JSON list over HTTP(S) with requests."""

    def __init__(
        self,
        url: str,
        tag: str = DEFAULT_SOURCE_TAG,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self.url = url
        self.tag = tag
        self.identity = url
        self.timeout = timeout
        self._session = session or requests.Session()

    def _get(self) -> Any:
        try:
            response = self._session.get(
                self.url,
                timeout=self.timeout,
                headers={"Cache-Control": "no-store", "Accept": "application/json"},
            )
        except requests.RequestException as e:
            raise SourceUnavailableError(str(e), source=self.url) from e

        if not response.ok:
            raise SourceUnavailableError(
                "Snippet source returned an error status",
                source=self.url,
                status=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise SourceUnavailableError("Snippet source returned invalid JSON", source=self.url) from e

    async def fetch(self) -> Any:
        logger.info(f"Fetching snippets from {self.url}")
        return await asyncio.to_thread(self._get)


def make_source(location: str | None = None, timeout: float | None = None) -> SnippetSource:
    """Pick a source for a URL, a file path, or None (the packaged list)."""
    if location and location.startswith(("http://", "https://")):
        return HttpSource(location, timeout=timeout or DEFAULT_HTTP_TIMEOUT_SECONDS)
    if location:
        return BundledSource(Path(location).expanduser())
    return BundledSource()
