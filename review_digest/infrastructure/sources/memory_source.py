from __future__ import annotations

from collections.abc import Iterable, Mapping

from review_digest.application.ports.feedback_source_port import FeedbackSourcePort
from review_digest.domain.models import SourceItem


class InMemoryFeedbackSource(FeedbackSourcePort):
    """Feedback held in a dict keyed by subject id (local dev and tests)."""

    def __init__(self, corpus: Mapping[str, Iterable[SourceItem]] | None = None) -> None:
        self._corpus: dict[str, list[SourceItem]] = {
            subject: list(items) for subject, items in (corpus or {}).items()
        }

    def add(self, subject_id: str, *items: SourceItem) -> None:
        self._corpus.setdefault(subject_id, []).extend(items)

    def fetch(self, subject_id: str) -> list[SourceItem]:
        # unknown subjects simply have no feedback
        return list(self._corpus.get(subject_id, []))
