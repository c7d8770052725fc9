from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class LabelScore:
    label: str  # "POSITIVE" | "NEGATIVE" | "NEUTRAL"
    score: float = 1.0


@runtime_checkable
class SentimentPort(Protocol):
    def classify(self, texts: Sequence[str]) -> list[LabelScore]:
        """Classify a batch; same order and count as the input."""
        ...
