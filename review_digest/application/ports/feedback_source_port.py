from typing import Protocol, runtime_checkable

from review_digest.domain.models import SourceItem


@runtime_checkable
class FeedbackSourcePort(Protocol):
    def fetch(self, subject_id: str) -> list[SourceItem]:
        """Read-only snapshot of all ratings and posts for a subject."""
        ...
