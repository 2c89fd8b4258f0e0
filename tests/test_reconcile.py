"""Tests for merging an external snippet list into the stored collection."""

import pytest

from snipbox.exceptions import SourceUnavailableError
from snipbox.models.snippets import Snippet
from snipbox.services.reconcile import merge_candidates, normalize_candidate, reconcile


def _dicts(snippets):
    return [s.to_dict() for s in snippets]


class TestNormalizeCandidate:
    def test_complete_candidate_is_kept(self):
        snippet = normalize_candidate({"id": "x", "title": "T", "code": "c"}, 3)
        assert snippet == Snippet(id="x", title="T", code="c", local_edited=False)

    def test_missing_fields_use_positional_fallbacks(self):
        snippet = normalize_candidate({}, 4)
        assert snippet.id == "bundle-4"
        assert snippet.title == "Snippet 5"
        assert snippet.code == ""

    def test_mistyped_fields_use_fallbacks(self):
        snippet = normalize_candidate({"id": 7, "title": None, "code": ["x"]}, 0)
        assert snippet.id == "bundle-0"
        assert snippet.title == "Snippet 1"
        assert snippet.code == ""

    def test_non_object_candidate(self):
        snippet = normalize_candidate("just a string", 2, source_tag="remote")
        assert snippet.id == "remote-2"

    def test_source_is_stamped(self):
        snippet = normalize_candidate({"id": "x"}, 0, source="https://example.com/s.json")
        assert snippet.source == "https://example.com/s.json"
        assert snippet.local_edited is False

    def test_locally_edited_flag_is_ignored(self):
        snippet = normalize_candidate({"id": "x", "localEdited": True}, 0)
        assert snippet.local_edited is False


class TestReconcile:
    def test_import_into_empty_collection(self):
        result = reconcile([], [{"id": "a", "title": "Hello", "code": "x"}])
        assert _dicts(result) == [
            {"id": "a", "title": "Hello", "code": "x", "localEdited": False}
        ]

    def test_local_edit_wins_and_new_candidates_append(self):
        persisted = [Snippet(id="a", title="Hello", code="x", local_edited=True)]
        candidates = [
            {"id": "a", "title": "Renamed", "code": "y"},
            {"id": "b", "title": "New", "code": "z"},
        ]
        result = reconcile(persisted, candidates)
        assert _dicts(result) == [
            {"id": "a", "title": "Hello", "code": "x", "localEdited": True},
            {"id": "b", "title": "New", "code": "z", "localEdited": False},
        ]

    def test_untouched_import_is_not_updated(self):
        persisted = [Snippet(id="a", title="Old", code="1", source="s")]
        result = reconcile(persisted, [{"id": "a", "title": "Updated", "code": "2"}], source="s")
        assert result == persisted

    def test_is_idempotent(self, sample_snippets):
        candidates = [
            {"id": "a", "title": "Other"},
            {"title": "No id"},
            {"id": "d", "title": "Fresh", "code": "ls"},
            42,
        ]
        once = reconcile(sample_snippets, candidates)
        twice = reconcile(once, candidates)
        assert twice == once

    def test_output_ids_are_unique(self, sample_snippets):
        candidates = [
            {"id": "d", "title": "One"},
            {"id": "d", "title": "Two"},
            {"id": "b"},
            {},
            {},
        ]
        result = reconcile(sample_snippets, candidates)
        ids = [s.id for s in result]
        assert len(ids) == len(set(ids))
        assert [s.title for s in result if s.id == "d"] == ["One"]

    def test_fallback_ids_are_deterministic(self):
        candidates = [{"title": "first"}, {"id": "named"}, {"code": "third"}]
        first = reconcile([], candidates)
        second = reconcile([], candidates)
        assert [s.id for s in first] == [s.id for s in second] == [
            "bundle-0",
            "named",
            "bundle-2",
        ]

    def test_persisted_order_is_preserved(self, sample_snippets):
        result = reconcile(sample_snippets, [{"id": "z"}])
        assert [s.id for s in result] == ["a", "b", "c", "z"]

    def test_input_is_not_mutated(self, sample_snippets):
        before = list(sample_snippets)
        reconcile(sample_snippets, [{"id": "z"}])
        assert sample_snippets == before

    @pytest.mark.parametrize("payload", [None, {"id": "a"}, "[]", 3])
    def test_non_list_candidates_raise(self, payload):
        with pytest.raises(SourceUnavailableError):
            reconcile([], payload)


class TestMergeCandidates:
    def test_reports_counts(self, sample_snippets):
        result = merge_candidates(sample_snippets, [{"id": "a"}, {"id": "x"}, {"id": "y"}])
        assert result.added == 2
        assert result.skipped == 1
        assert len(result.snippets) == 5

    def test_empty_candidate_list(self, sample_snippets):
        result = merge_candidates(sample_snippets, [])
        assert result.snippets == sample_snippets
        assert result.added == 0
        assert result.skipped == 0
