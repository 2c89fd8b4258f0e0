"""Tests for the Snippet record and collection encoding."""

import json
import logging

import pytest

from snipbox.exceptions import MalformedDataError
from snipbox.models.snippets import (
    Snippet,
    decode_collection,
    encode_collection,
    find_snippet,
    generate_snippet_id,
)


class TestSnippet:
    def test_to_dict_uses_persisted_field_names(self):
        snippet = Snippet(id="a", title="T", code="c", local_edited=True)
        assert snippet.to_dict() == {"id": "a", "title": "T", "code": "c", "localEdited": True}

    def test_to_dict_includes_source_when_set(self):
        snippet = Snippet(id="a", title="T", source="bundle.json")
        assert snippet.to_dict()["source"] == "bundle.json"

    def test_from_dict_tolerates_wrong_types(self):
        snippet = Snippet.from_dict({"id": "a", "title": 3, "code": None, "localEdited": "yes"})
        assert snippet == Snippet(id="a", title="", code="", local_edited=False)

    @pytest.mark.parametrize("data", [{}, {"id": None}, {"id": 12}])
    def test_from_dict_requires_string_id(self, data):
        with pytest.raises(MalformedDataError):
            Snippet.from_dict(data)

    def test_from_dict_accepts_empty_string_id(self):
        assert Snippet.from_dict({"id": "", "title": "Blank"}).id == ""

    def test_display_title_placeholder(self):
        assert Snippet(id="a", title="").display_title == "(untitled)"
        assert Snippet(id="a", title="Named").display_title == "Named"


class TestGenerateSnippetId:
    def test_format(self):
        snippet_id = generate_snippet_id()
        prefix, suffix = snippet_id.split("-")
        assert prefix == "snip"
        assert len(suffix) == 7
        assert suffix.isalnum() and suffix.lower() == suffix

    def test_avoids_existing_ids(self, monkeypatch):
        picks = iter("aaaaaaa" "aaaaaaa" "bbbbbbb")
        monkeypatch.setattr("snipbox.models.snippets.secrets.choice", lambda _: next(picks))
        assert generate_snippet_id(["snip-aaaaaaa"]) == "snip-bbbbbbb"


class TestDecodeCollection:
    @pytest.mark.parametrize("raw", [None, ""])
    def test_empty_values(self, raw):
        assert decode_collection(raw) == []

    def test_round_trip(self, sample_snippets):
        assert decode_collection(encode_collection(sample_snippets)) == sample_snippets

    def test_invalid_json_raises(self):
        with pytest.raises(MalformedDataError):
            decode_collection("{not json")

    def test_non_array_raises(self):
        with pytest.raises(MalformedDataError):
            decode_collection(json.dumps({"id": "a"}))

    def test_bad_entries_are_dropped(self, caplog):
        raw = json.dumps(
            [
                {"id": "a", "title": "A"},
                "junk",
                {"title": "no id"},
                {"id": "a", "title": "duplicate"},
                {"id": "b"},
            ]
        )
        with caplog.at_level(logging.WARNING):
            snippets = decode_collection(raw)
        assert [s.id for s in snippets] == ["a", "b"]
        assert snippets[0].title == "A"
        assert "duplicate" in caplog.text


def test_find_snippet(sample_snippets):
    assert find_snippet(sample_snippets, "b") is sample_snippets[1]
    assert find_snippet(sample_snippets, "zzz") is None
