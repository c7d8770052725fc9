from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class EmbeddingPort(Protocol):
    def embed_texts(self, texts: Sequence[str]) -> list[list[float]]:
        """Embed a batch; result i belongs to text i, dimension fixed per process."""
        ...
