"""Pure transforms behind the local add / edit / delete operations.

Each function takes the latest collection and returns a new list. None of
them mutate their input.
"""

from __future__ import annotations

from collections.abc import Sequence

from snipbox.exceptions import ValidationError
from snipbox.models.snippets import Snippet, generate_snippet_id


def _index_of(snippets: Sequence[Snippet], snippet_id: str) -> int:
    for index, snippet in enumerate(snippets):
        if snippet.id == snippet_id:
            return index
    return -1


def add_snippet(snippets: Sequence[Snippet], title: str, code: str = "") -> list[Snippet]:
    """Append a new locally edited snippet with a fresh id.

    Raises:
        ValidationError: If the title is empty.
    """
    if not title or not title.strip():
        raise ValidationError("Snippet title is required", field="title")
    new = Snippet(
        id=generate_snippet_id(s.id for s in snippets),
        title=title,
        code=code or "",
        local_edited=True,
    )
    return [*snippets, new]


def update_title(
    snippets: Sequence[Snippet], current: Snippet, title: str
) -> list[Snippet]:
    """Rename `current`, inserting it if the collection lacks it.

    The stored record keeps its code and loses its source marker.

    Raises:
        ValidationError: If the new title is empty after trimming.
    """
    new_title = (title or "").strip()
    if not new_title:
        raise ValidationError("Snippet title is required", field="title")

    result = list(snippets)
    index = _index_of(result, current.id)
    if index == -1:
        result.append(
            Snippet(id=current.id, title=new_title, code=current.code, local_edited=True)
        )
    else:
        stored = result[index]
        result[index] = Snippet(
            id=stored.id, title=new_title, code=stored.code, local_edited=True
        )
    return result


def update_code(
    snippets: Sequence[Snippet], current: Snippet, code: str
) -> list[Snippet]:
    """Replace the code of `current`, inserting it if the collection lacks it."""
    result = list(snippets)
    index = _index_of(result, current.id)
    saved = Snippet(id=current.id, title=current.title, code=code or "", local_edited=True)
    if index == -1:
        result.append(saved)
    else:
        result[index] = saved
    return result


def remove_snippet(snippets: Sequence[Snippet], snippet_id: str) -> list[Snippet]:
    """Drop the record with `snippet_id`. Unknown ids leave the list as is."""
    return [s for s in snippets if s.id != snippet_id]


def search_snippets(snippets: Sequence[Snippet], query: str) -> list[Snippet]:
    """List filter for the panel: title or code contains the query."""
    q = (query or "").strip().lower()
    if not q:
        return list(snippets)
    return [s for s in snippets if q in (s.title or "").lower() or q in (s.code or "").lower()]
