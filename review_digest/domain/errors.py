"""Domain errors (typed) for the summarization engine.

Adapters translate third-party failures into this family so the application
layer never sees infrastructure exceptions.
"""


class DomainError(Exception):
    """Base class for domain-specific errors."""


class ValidationError(DomainError):
    """Invalid input/domain state."""


class EmbeddingError(DomainError):
    """Embedding backend failed or is misconfigured."""


class SentimentError(DomainError):
    """Sentiment classifier failed or returned a mismatched batch."""


class LLMError(DomainError):
    """LLM backend failed or is misconfigured."""


class ChunkParseError(LLMError):
    """LLM answer for one chunk did not match the required JSON shape.

    Keeps the raw completion and the underlying parse/validation error so the
    caller can report exactly what the model returned.
    """

    def __init__(self, raw: str, cause: Exception) -> None:
        super().__init__(f"malformed chunk summary: {cause}")
        self.raw = raw
        self.cause = cause


class CacheError(DomainError):
    """Summary cache backend failed (always non-fatal for the engine)."""


class SourceError(DomainError):
    """Feedback source could not be read."""
