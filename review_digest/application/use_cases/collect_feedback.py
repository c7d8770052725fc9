from __future__ import annotations

from review_digest.application.ports.feedback_source_port import FeedbackSourcePort
from review_digest.domain.errors import DomainError, SourceError
from review_digest.domain.models import SourceItem


def collect_feedback(source: FeedbackSourcePort, subject_id: str) -> list[SourceItem]:
    """Fetch a subject's feedback in source order with duplicate ids removed.

    Items without text are kept; each strategy decides what to do with them.

    Raises:
        SourceError: the source failed (DomainErrors from the source pass through)
    """
    try:
        items = source.fetch(subject_id)
    except DomainError:
        raise
    except Exception as ex:  # noqa: BLE001
        raise SourceError(f"feedback source failed for {subject_id!r}: {ex}") from ex

    seen: set[str] = set()
    unique: list[SourceItem] = []
    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)
        unique.append(item)
    return unique


def has_any_text(items: list[SourceItem]) -> bool:
    return any(item.has_text for item in items)
