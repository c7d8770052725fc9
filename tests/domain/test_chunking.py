"""Tests for source formatting and the chunk packer."""

import pytest

from review_digest.domain.models import SourceItem
from review_digest.domain.services.chunking import (
    CHUNK_SEPARATOR,
    format_source_text,
    pack_texts_to_chunks,
    source_texts,
)


class TestFormatting:
    def test_rating_with_stars(self) -> None:
        item = SourceItem(id="r1", kind="rating", text=" Loved it ", stars=8.0)
        assert format_source_text(item) == "Review (8/10): Loved it"

    def test_fractional_stars(self) -> None:
        item = SourceItem(id="r1", kind="rating", text="Fine", stars=7.5)
        assert format_source_text(item) == "Review (7.5/10): Fine"

    def test_post(self) -> None:
        item = SourceItem(id="c1", kind="post", text="Anyone else cry?")
        assert format_source_text(item) == "Post: Anyone else cry?"

    def test_source_texts_drops_empty(self) -> None:
        items = [
            SourceItem(id="r1", kind="rating", text="", stars=3.0),
            SourceItem(id="c1", kind="post", text="  "),
            SourceItem(id="c2", kind="post", text="Kept"),
        ]
        assert source_texts(items) == ["Post: Kept"]


class TestPacking:
    def test_closes_chunk_when_limit_would_be_exceeded(self) -> None:
        texts = ["a" * 10, "b" * 10, "c" * 10]
        chunks = pack_texts_to_chunks(texts, max_chars=25)
        assert [c.text for c in chunks] == ["a" * 10 + CHUNK_SEPARATOR + "b" * 10, "c" * 10]
        assert [c.item_count for c in chunks] == [2, 1]
        assert [c.char_len for c in chunks] == [22, 10]

    def test_exact_limit_fits(self) -> None:
        chunks = pack_texts_to_chunks(["a" * 10, "b" * 8], max_chars=20)
        assert len(chunks) == 1
        assert chunks[0].char_len == 20

    def test_oversized_text_gets_its_own_chunk(self) -> None:
        chunks = pack_texts_to_chunks(["y" * 5, "x" * 50, "z" * 5], max_chars=20)
        assert [c.text for c in chunks] == ["y" * 5, "x" * 50, "z" * 5]

    def test_empty(self) -> None:
        assert pack_texts_to_chunks([], max_chars=100) == []

    @pytest.mark.parametrize("max_chars", [15, 40, 120])
    def test_texts_never_split_and_limit_respected(self, max_chars: int) -> None:
        texts = [f"t{i}:" + "x" * (i * 7 % 53) for i in range(40)]
        chunks = pack_texts_to_chunks(texts, max_chars=max_chars)

        rebuilt = [part for c in chunks for part in c.text.split(CHUNK_SEPARATOR)]
        assert rebuilt == texts
        assert sum(c.item_count for c in chunks) == len(texts)
        for c in chunks:
            assert c.char_len == len(c.text)
            assert c.char_len <= max_chars or c.item_count == 1
