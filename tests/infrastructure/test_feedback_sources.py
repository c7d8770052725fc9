"""Tests for the feedback source adapters."""

import json

import pytest

from review_digest.application.use_cases.collect_feedback import collect_feedback
from review_digest.domain.errors import SourceError
from review_digest.domain.models import SourceItem
from review_digest.infrastructure.sources.json_file_source import JsonFileFeedbackSource
from review_digest.infrastructure.sources.memory_source import InMemoryFeedbackSource


class TestInMemorySource:
    def test_fetch_returns_copy(self) -> None:
        item = SourceItem(id="a", kind="post", text="hi")
        source = InMemoryFeedbackSource({"m1": [item]})

        fetched = source.fetch("m1")
        fetched.clear()

        assert source.fetch("m1") == [item]

    def test_unknown_subject_is_empty(self) -> None:
        assert InMemoryFeedbackSource().fetch("zzz") == []

    def test_add(self) -> None:
        source = InMemoryFeedbackSource()
        source.add("m1", SourceItem(id="a", kind="post"), SourceItem(id="b", kind="post"))
        assert [i.id for i in source.fetch("m1")] == ["a", "b"]


class TestJsonFileSource:
    def write(self, tmp_path, data) -> str:
        path = tmp_path / "corpus.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)

    def test_ratings_and_comments_shape(self, tmp_path) -> None:
        path = self.write(
            tmp_path,
            {
                "m1": {
                    "ratings": [
                        {"id": "r1", "comment": "Great!", "votes": 2, "stars": 8, "date": "2024-01-01"}
                    ],
                    "comments": [{"id": "c1", "content": "Agreed", "createdAt": "2024-01-02"}],
                }
            },
        )

        items = JsonFileFeedbackSource(path).fetch("m1")

        assert [(i.id, i.kind, i.text) for i in items] == [
            ("r1", "rating", "Great!"),
            ("c1", "post", "Agreed"),
        ]
        assert items[0].stars == 8.0
        assert items[1].created_at == "2024-01-02"

    def test_flat_list_shape(self, tmp_path) -> None:
        path = self.write(tmp_path, {"m2": [{"id": "p1", "kind": "post", "text": "Hello"}]})
        items = JsonFileFeedbackSource(path).fetch("m2")
        assert items == [SourceItem(id="p1", kind="post", text="Hello")]

    def test_unknown_subject_is_empty(self, tmp_path) -> None:
        path = self.write(tmp_path, {"m1": []})
        assert JsonFileFeedbackSource(path).fetch("other") == []

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(SourceError, match="cannot read"):
            JsonFileFeedbackSource(tmp_path / "missing.json").fetch("m1")

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(SourceError):
            JsonFileFeedbackSource(path).fetch("m1")

    def test_top_level_must_be_object(self, tmp_path) -> None:
        path = self.write(tmp_path, [1, 2])
        with pytest.raises(SourceError, match="JSON object"):
            JsonFileFeedbackSource(path).fetch("m1")

    def test_unsupported_payload(self, tmp_path) -> None:
        path = self.write(tmp_path, {"m1": "not a list"})
        with pytest.raises(SourceError, match="unsupported"):
            JsonFileFeedbackSource(path).fetch("m1")

    def test_items_without_id_are_rejected(self, tmp_path) -> None:
        path = self.write(
            tmp_path,
            {"m1": {"comments": [{"content": "one"}, {"content": "two"}, {"content": "three"}]}},
        )
        with pytest.raises(SourceError, match="without an id"):
            collect_feedback(JsonFileFeedbackSource(path), "m1")

    def test_malformed_item(self, tmp_path) -> None:
        path = self.write(tmp_path, {"m1": [{"id": "r1", "votes": "many"}]})
        with pytest.raises(SourceError, match="malformed"):
            JsonFileFeedbackSource(path).fetch("m1")
