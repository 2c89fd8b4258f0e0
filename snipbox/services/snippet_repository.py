"""
Typed access to the two well-known store keys.

The collection is kept as a JSON array *string* under STORAGE_KEY, the panel
width as an integer under WIDTH_KEY. Reads always succeed: missing, unreadable
or malformed values fall back to an empty collection or the default width.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from snipbox.config.constants import (
    DEFAULT_WIDTH,
    MAX_WIDTH,
    MIN_WIDTH,
    STORAGE_KEY,
    WIDTH_KEY,
)
from snipbox.exceptions import MalformedDataError, StoreError, StoreWriteError
from snipbox.models.snippets import Snippet, decode_collection, encode_collection
from snipbox.storage import PersistentStore

logger = logging.getLogger(__name__)


def clamp_width(value: Any) -> int:
    """Coerce a stored or user-supplied width into [MIN_WIDTH, MAX_WIDTH]."""
    try:
        width = int(value)
    except (TypeError, ValueError):
        return DEFAULT_WIDTH
    return max(MIN_WIDTH, min(MAX_WIDTH, width))


class SnippetRepository:
    """Reads and writes the persisted collection and width preference."""

    def __init__(self, store: PersistentStore):
        self.store = store

    async def load_snippets(self) -> list[Snippet]:
        """Load the persisted collection, or [] if nothing usable is stored."""
        try:
            raw = await self.store.get(STORAGE_KEY, "[]")
        except StoreError as e:
            logger.warning(f"Could not read snippets, using empty collection: {e}")
            return []
        try:
            return decode_collection(raw if isinstance(raw, str) else None)
        except MalformedDataError as e:
            logger.warning(f"Discarding malformed stored snippets: {e}")
            return []

    async def save_snippets(self, snippets: Sequence[Snippet]) -> None:
        """Write the whole collection back.

        Raises:
            StoreWriteError: If the store rejects the write.
        """
        try:
            await self.store.set(STORAGE_KEY, encode_collection(snippets))
        except StoreWriteError:
            raise
        except StoreError as e:
            raise StoreWriteError(str(e), key=STORAGE_KEY) from e
        logger.debug(f"Persisted {len(snippets)} snippets")

    async def clear_snippets(self) -> None:
        await self.store.remove(STORAGE_KEY)

    async def load_width(self) -> int:
        try:
            raw = await self.store.get(WIDTH_KEY, DEFAULT_WIDTH)
        except StoreError as e:
            logger.warning(f"Could not read panel width: {e}")
            return DEFAULT_WIDTH
        return clamp_width(raw)

    async def save_width(self, width: Any) -> int:
        """Clamp and persist the width; returns the stored value.

        Raises:
            StoreWriteError: If the store rejects the write.
        """
        value = clamp_width(width)
        await self.store.set(WIDTH_KEY, value)
        return value
