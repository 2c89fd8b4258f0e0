"""
Reconciliation of the persisted collection with an external snippet list.

Local records always win: a candidate whose id is already present is dropped,
whatever the state of the stored record. New candidates are appended after
the existing records in list order. The merge is pure, so running it twice
against its own output changes nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from snipbox.config.constants import DEFAULT_SOURCE_TAG
from snipbox.exceptions import SourceUnavailableError
from snipbox.models.snippets import Snippet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of a merge, for reporting."""

    snippets: list[Snippet]
    added: int
    skipped: int


def normalize_candidate(
    item: Any,
    index: int,
    *,
    source_tag: str = DEFAULT_SOURCE_TAG,
    source: str | None = None,
) -> Snippet:
    """Turn one loosely typed candidate into an imported Snippet.

    Missing or mistyped fields get deterministic fallbacks derived from the
    candidate's position, so an unchanged list always yields the same ids.
    """
    fields = item if isinstance(item, dict) else {}
    raw_id = fields.get("id")
    raw_title = fields.get("title")
    raw_code = fields.get("code")
    return Snippet(
        id=raw_id if isinstance(raw_id, str) else f"{source_tag}-{index}",
        title=raw_title if isinstance(raw_title, str) else f"Snippet {index + 1}",
        code=raw_code if isinstance(raw_code, str) else "",
        local_edited=False,
        source=source,
    )


def merge_candidates(
    persisted: Sequence[Snippet],
    candidates: Any,
    *,
    source_tag: str = DEFAULT_SOURCE_TAG,
    source: str | None = None,
) -> ReconcileResult:
    """Merge and report how many candidates were added or skipped.

    Raises:
        SourceUnavailableError: If `candidates` is not a list.
    """
    if not isinstance(candidates, list):
        raise SourceUnavailableError(
            "Snippet source did not return a list",
            source=source,
            found=type(candidates).__name__,
        )

    merged = list(persisted)
    known_ids = {s.id for s in persisted}
    added = 0
    for index, item in enumerate(candidates):
        snippet = normalize_candidate(item, index, source_tag=source_tag, source=source)
        if snippet.id in known_ids:
            continue
        known_ids.add(snippet.id)
        merged.append(snippet)
        added += 1

    skipped = len(candidates) - added
    logger.debug(f"Reconciled {len(candidates)} candidates: {added} added, {skipped} skipped")
    return ReconcileResult(snippets=merged, added=added, skipped=skipped)


def reconcile(
    persisted: Sequence[Snippet],
    candidates: Any,
    *,
    source_tag: str = DEFAULT_SOURCE_TAG,
    source: str | None = None,
) -> list[Snippet]:
    """Merge `candidates` into `persisted` and return a new collection.

    Raises:
        SourceUnavailableError: If `candidates` is not a list. No partial
            merge happens; callers keep their prior collection.
    """
    return merge_candidates(
        persisted, candidates, source_tag=source_tag, source=source
    ).snippets
