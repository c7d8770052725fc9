from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from review_digest.domain.models import SourceItem

DEFAULT_CHUNK_MAX_CHARS = 4000
CHUNK_SEPARATOR = "\n\n"


# ---------- Value Objects ----------


@dataclass(frozen=True)
class Chunk:
    text: str
    item_count: int
    char_len: int


# ---------- Source formatting ----------


def _format_stars(stars: float) -> str:
    return f"{stars:g}"


def format_source_text(item: SourceItem) -> str:
    """Prefix a source with its kind: scored ratings carry their score."""
    text = item.text.strip()
    if item.stars is not None:
        return f"Review ({_format_stars(item.stars)}/10): {text}"
    return f"Post: {text}"


def source_texts(items: Sequence[SourceItem]) -> list[str]:
    """Formatted texts of all items with content; empty items are dropped here."""
    return [format_source_text(it) for it in items if it.has_text]


# ---------- Chunk-Packer ----------


def pack_texts_to_chunks(
    texts: Sequence[str], max_chars: int = DEFAULT_CHUNK_MAX_CHARS
) -> list[Chunk]:
    """Greedy packing of whole texts into chunks of at most max_chars.

    A text is never split. When appending the next text would exceed the
    limit the current chunk is closed and the text starts a fresh one; a text
    longer than the limit on its own becomes a single oversized chunk.
    """
    chunks: list[Chunk] = []
    curr = ""
    count = 0

    for t in texts:
        addition = (CHUNK_SEPARATOR if curr else "") + t
        if len(curr) + len(addition) > max_chars:
            if curr:
                chunks.append(Chunk(text=curr, item_count=count, char_len=len(curr)))
            curr = t
            count = 1
        else:
            curr += addition
            count += 1

    if curr:
        chunks.append(Chunk(text=curr, item_count=count, char_len=len(curr)))

    return chunks
