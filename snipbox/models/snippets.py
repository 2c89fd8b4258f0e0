"""Snippet record and its persisted JSON form."""

from __future__ import annotations

import json
import logging
import secrets
import string
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, TypedDict

from snipbox.config.constants import LOCAL_ID_PREFIX, UNTITLED_PLACEHOLDER
from snipbox.exceptions import MalformedDataError

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


class _SnippetDictBase(TypedDict):
    id: str
    title: str
    code: str
    localEdited: bool


class SnippetDict(_SnippetDictBase, total=False):
    source: str


@dataclass(frozen=True)
class Snippet:
    """A single stored snippet.

    `source` identifies the external list a record was imported from. It is
    only set on imports that were never edited locally.
    """

    id: str
    title: str
    code: str = ""
    local_edited: bool = False
    source: str | None = None

    @property
    def display_title(self) -> str:
        return self.title or UNTITLED_PLACEHOLDER

    def to_dict(self) -> SnippetDict:
        data: SnippetDict = {
            "id": self.id,
            "title": self.title,
            "code": self.code,
            "localEdited": self.local_edited,
        }
        if self.source is not None:
            data["source"] = self.source
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Snippet:
        """Build a snippet from a loosely typed persisted object.

        Raises:
            MalformedDataError: If the object has no string id.
        """
        snippet_id = data.get("id")
        if not isinstance(snippet_id, str):
            raise MalformedDataError("Snippet record has no id", record=data)

        title = data.get("title")
        code = data.get("code")
        source = data.get("source")
        return cls(
            id=snippet_id,
            title=title if isinstance(title, str) else "",
            code=code if isinstance(code, str) else "",
            local_edited=data.get("localEdited") is True,
            source=source if isinstance(source, str) else None,
        )


def generate_snippet_id(existing: Iterable[str] = (), prefix: str = LOCAL_ID_PREFIX) -> str:
    """Generate a fresh local id like ``snip-k3x9a0b`` not present in `existing`."""
    taken = set(existing)
    while True:
        suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(7))
        candidate = f"{prefix}-{suffix}"
        if candidate not in taken:
            return candidate


def decode_collection(raw: str | None) -> list[Snippet]:
    """Decode a persisted collection string.

    Entries that are not objects or have no id are dropped. Duplicate ids
    keep their first occurrence.

    Raises:
        MalformedDataError: If the value is not JSON or not an array.
    """
    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MalformedDataError("Stored collection is not valid JSON") from e
    if not isinstance(parsed, list):
        raise MalformedDataError(
            "Stored collection is not an array", found=type(parsed).__name__
        )

    snippets: list[Snippet] = []
    seen: set[str] = set()
    for position, entry in enumerate(parsed):
        if not isinstance(entry, dict):
            logger.warning(f"Dropping non-object stored snippet at position {position}")
            continue
        try:
            snippet = Snippet.from_dict(entry)
        except MalformedDataError:
            logger.warning(f"Dropping stored snippet without id at position {position}")
            continue
        if snippet.id in seen:
            logger.warning(f"Dropping duplicate stored snippet {snippet.id!r}")
            continue
        seen.add(snippet.id)
        snippets.append(snippet)
    return snippets


def encode_collection(snippets: Sequence[Snippet]) -> str:
    """Encode a collection as the JSON array string kept in the store."""
    return json.dumps([s.to_dict() for s in snippets], ensure_ascii=False)


def find_snippet(snippets: Sequence[Snippet], snippet_id: str) -> Snippet | None:
    """Return the record with `snippet_id`, or None."""
    for snippet in snippets:
        if snippet.id == snippet_id:
            return snippet
    return None
