"""Sentiment classifier adapter using a Hugging Face transformers pipeline.

Binary SST-2 style models only know POSITIVE/NEGATIVE; predictions whose
confidence stays below `neutral_threshold` are reported as NEUTRAL.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from importlib import import_module
from typing import Any

from review_digest.application.ports.classifier_port import LabelScore, SentimentPort
from review_digest.domain.errors import SentimentError
from review_digest.domain.models import NEUTRAL
from review_digest.domain.services.sentiment import normalize_label


class TransformersSentimentAdapter(SentimentPort):
    """Text-classification pipeline behind the SentimentPort.

    Args:
        model_name: Hugging Face model id
        device: "cpu", "cuda" or "mps"
        batch_size: Texts per forward pass inside the pipeline
        neutral_threshold: Scores below this become NEUTRAL (0 disables)
    """

    def __init__(
        self,
        model_name: str = "distilbert-base-uncased-finetuned-sst-2-english",
        device: str = "cpu",
        batch_size: int = 32,
        neutral_threshold: float = 0.0,
    ) -> None:
        self.model_name = model_name
        self.device = device
        self.batch_size = batch_size
        self.neutral_threshold = neutral_threshold
        self._pipeline: Any | None = None
        self._load_lock = threading.Lock()

    def _load_pipeline(self) -> Any:
        if self._pipeline is not None:
            return self._pipeline
        with self._load_lock:
            if self._pipeline is not None:
                return self._pipeline
            try:
                transformers = import_module("transformers")
                self._pipeline = transformers.pipeline(
                    "sentiment-analysis",
                    model=self.model_name,
                    device=self.device,
                )
            except Exception as ex:  # noqa: BLE001
                raise SentimentError(
                    f"Failed to load sentiment model '{self.model_name}': {ex}"
                ) from ex
            return self._pipeline

    def classify(self, texts: Sequence[str]) -> list[LabelScore]:
        if not texts:
            return []
        clf = self._load_pipeline()
        try:
            raw = clf(list(texts), batch_size=self.batch_size, truncation=True)
        except Exception as ex:  # noqa: BLE001
            raise SentimentError(f"Sentiment classification failed: {ex}") from ex
        if len(raw) != len(texts):
            raise SentimentError(f"expected {len(texts)} predictions, got {len(raw)}")
        return [self._to_label_score(pred) for pred in raw]

    def _to_label_score(self, pred: Any) -> LabelScore:
        score = float(pred.get("score", 0.0))
        if score < self.neutral_threshold:
            return LabelScore(label=NEUTRAL, score=score)
        return LabelScore(label=normalize_label(str(pred.get("label", ""))), score=score)
