"""Schema for the per-chunk JSON answer of the generative collaborator.

A response either validates into a ChunkSummary or becomes a ChunkParseError
carrying the raw text; nothing is defaulted or repaired.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from review_digest.domain.errors import ChunkParseError
from review_digest.domain.models import ChunkSummary, SentimentStats
from review_digest.domain.types import Result


class ChunkStatsModel(BaseModel):
    model_config = ConfigDict(extra="ignore", strict=True)

    positive: int = Field(ge=0)
    neutral: int = Field(ge=0)
    negative: int = Field(ge=0)
    total: int = Field(ge=0)


class ChunkSummaryModel(BaseModel):
    model_config = ConfigDict(extra="ignore", strict=True)

    pros: list[str]
    cons: list[str]
    stats: ChunkStatsModel
    quotes: list[str]

    def to_domain(self) -> ChunkSummary:
        s = self.stats
        return ChunkSummary(
            pros=list(self.pros),
            cons=list(self.cons),
            stats=SentimentStats.from_counts(s.positive, s.neutral, s.negative, s.total),
            quotes=list(self.quotes),
        )


def parse_chunk_summary(raw: str | None) -> Result[ChunkSummary, ChunkParseError]:
    """Validate one chunk answer against the required JSON shape."""
    text = raw or ""
    try:
        model = ChunkSummaryModel.model_validate_json(text)
    except PydanticValidationError as ex:
        return Result.failure(ChunkParseError(raw=text, cause=ex))
    return Result.success(model.to_domain())
