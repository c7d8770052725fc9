from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import dataclass
from importlib import import_module
from typing import Any

from review_digest.application.ports.embedding_port import EmbeddingPort
from review_digest.domain.errors import EmbeddingError


@dataclass
class SentenceTransformersEmbeddingAdapter(EmbeddingPort):
    """Sentence-Transformers bi-encoder for sentence units.

    Vectors are returned L2-normalized; the model is loaded on first use.
    """

    model_name: str = "sentence-transformers/all-MiniLM-L6-v2"
    device: str = "cpu"  # "cuda" | "mps" when available
    batch_size: int = 64
    local_files_only: bool = False

    def __post_init__(self) -> None:
        self._model: Any | None = None
        self._load_lock = threading.Lock()

    def _ensure_model(self) -> Any:
        if self._model is not None:
            return self._model
        # batches run on a thread pool; only one of them may load the model
        with self._load_lock:
            if self._model is not None:
                return self._model
            try:
                st_module = import_module("sentence_transformers")
                self._model = st_module.SentenceTransformer(
                    self.model_name,
                    device=self.device,
                    local_files_only=self.local_files_only,
                )
            except Exception as ex:  # noqa: BLE001
                raise EmbeddingError(
                    f"Failed to load embedding model '{self.model_name}': {ex}"
                ) from ex
            return self._model

    def embed_texts(self, texts: Sequence[str]) -> list[list[float]]:
        if not texts:
            return []
        model = self._ensure_model()
        try:
            raw_vectors = model.encode(
                list(texts),
                batch_size=self.batch_size,
                normalize_embeddings=True,
                convert_to_numpy=True,
                show_progress_bar=False,
            )
        except Exception as ex:  # noqa: BLE001
            raise EmbeddingError(f"Embedding texts failed: {ex}") from ex
        return [[float(x) for x in vec] for vec in raw_vectors]
