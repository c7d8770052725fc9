"""Feedback source reading a JSON corpus file.

Accepted layout, keyed by subject id:

    {
      "tt0111161": {"ratings": [...], "comments": [...]},
      "tt0068646": [{"id": "p1", "kind": "post", "text": "..."}]
    }

Either a {"ratings", "comments"} object (rating/comment payload shapes) or a
flat list of items per subject.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from review_digest.application.ports.feedback_source_port import FeedbackSourcePort
from review_digest.domain.errors import SourceError
from review_digest.domain.models import SourceItem


def items_from_payload(payload: Any) -> list[SourceItem]:
    """Convert one subject's payload into SourceItems (ratings before comments)."""
    if isinstance(payload, Mapping):
        ratings = [dict(r, kind="rating") for r in payload.get("ratings") or []]
        comments = [dict(c, kind="post") for c in payload.get("comments") or []]
        return [SourceItem.from_dict(d) for d in ratings + comments]
    if isinstance(payload, list):
        return [SourceItem.from_dict(d) for d in payload]
    raise SourceError(f"unsupported feedback payload type: {type(payload).__name__}")


class JsonFileFeedbackSource(FeedbackSourcePort):
    """Reads the whole file on every fetch, so edits are picked up immediately."""

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding

    def _load(self) -> Mapping[str, Any]:
        try:
            with self.path.open("r", encoding=self.encoding) as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as ex:
            raise SourceError(f"cannot read feedback file {self.path}: {ex}") from ex
        if not isinstance(data, Mapping):
            raise SourceError(f"feedback file {self.path} must contain a JSON object")
        return data

    def fetch(self, subject_id: str) -> list[SourceItem]:
        payload = self._load().get(subject_id)
        if payload is None:
            return []
        try:
            return items_from_payload(payload)
        except SourceError:
            raise
        except (TypeError, ValueError) as ex:
            raise SourceError(f"malformed feedback for {subject_id!r}: {ex}") from ex
