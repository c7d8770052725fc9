"""Tests for the content-hash corpus fingerprint."""

from dataclasses import replace

from review_digest.domain.models import SourceItem
from review_digest.domain.services.fingerprint import corpus_fingerprint

RATINGS = [
    SourceItem(id="r2", kind="rating", text="Solid film.", votes=3, created_at="2024-01-02", stars=7),
    SourceItem(id="r1", kind="rating", text="Loved it!", votes=0, created_at="2024-01-01", stars=9),
]
POSTS = [
    SourceItem(id="c1", kind="post", text="Who else saw the cameo?", created_at="2024-01-03"),
]


def test_order_invariant():
    corpus = RATINGS + POSTS
    assert corpus_fingerprint(corpus) == corpus_fingerprint(list(reversed(corpus)))


def test_same_length_edit_keeps_hash():
    edited = [replace(POSTS[0], text="Who else saw the CAMEO?")]
    assert corpus_fingerprint(RATINGS + POSTS) == corpus_fingerprint(RATINGS + edited)


def test_length_change_changes_hash():
    edited = [replace(POSTS[0], text="Who else saw the cameo??")]
    assert corpus_fingerprint(RATINGS + POSTS) != corpus_fingerprint(RATINGS + edited)


def test_vote_change_changes_hash():
    bumped = [replace(RATINGS[0], votes=4), RATINGS[1]]
    assert corpus_fingerprint(RATINGS + POSTS) != corpus_fingerprint(bumped + POSTS)


def test_new_item_changes_hash():
    extra = SourceItem(id="c2", kind="post", text="", created_at=None)
    assert corpus_fingerprint(RATINGS + POSTS) != corpus_fingerprint(RATINGS + POSTS + [extra])


def test_post_votes_do_not_matter():
    bumped = [replace(POSTS[0], votes=10)]
    assert corpus_fingerprint(RATINGS + POSTS) == corpus_fingerprint(RATINGS + bumped)


def test_hex_digest():
    fp = corpus_fingerprint([])
    assert len(fp) == 64
    int(fp, 16)
