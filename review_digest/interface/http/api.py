"""HTTP API for review summaries.

Pure delegation: request models are converted to SourceItems, use cases do
the work, Result failures become HTTP errors.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Literal

import structlog
from fastapi import FastAPI, HTTPException
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from review_digest.domain.errors import DomainError, SourceError, ValidationError
from review_digest.domain.models import SourceItem
from review_digest.infrastructure.sources.memory_source import InMemoryFeedbackSource

logger = structlog.get_logger(__name__)


# Pydantic models for request/response validation
class RatingModel(BaseModel):
    """One rating as sent by the client."""

    model_config = ConfigDict(extra="ignore")

    id: str
    comment: str | None = None
    votes: int = 0
    date: str | None = None
    stars: float | None = None
    tags: list[str] = Field(default_factory=list)


class CommentModel(BaseModel):
    """One post/comment as sent by the client."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    content: str | None = None
    created_at: str | None = Field(
        default=None, validation_alias=AliasChoices("created_at", "createdAt")
    )


class ExtractiveRequestModel(BaseModel):
    """Request model for POST /v1/summaries/extractive."""

    subject_id: str = Field(validation_alias=AliasChoices("subject_id", "movieId"))
    ratings: list[RatingModel] = Field(default_factory=list)
    comments: list[CommentModel] = Field(default_factory=list)

    def to_items(self) -> list[SourceItem]:
        items = [
            SourceItem(
                id=r.id,
                kind="rating",
                text=r.comment or "",
                votes=max(0, r.votes),
                tags=tuple(r.tags),
                created_at=r.date,
                stars=r.stars,
            )
            for r in self.ratings
        ]
        items.extend(
            SourceItem(id=c.id, kind="post", text=c.content or "", created_at=c.created_at)
            for c in self.comments
        )
        return items


class SummaryResponseModel(BaseModel):
    """Response model for summary endpoints."""

    status: str
    strategy: str
    data: dict[str, Any]


# Global state (initialized on startup)
container: Any | None = None


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Initialize logging and the DI container on startup."""
    global container

    from review_digest.config.compose import build_container
    from review_digest.config.logging_config import setup_logging

    if container is None:
        container = build_container()
        setup_logging(container.settings)
    # Container will lazy-load adapters on first use
    yield


app = FastAPI(title="Review Digest API", version="1.0.0", lifespan=lifespan)


def _status_for(err: DomainError) -> int:
    if isinstance(err, ValidationError):
        return 400
    if isinstance(err, SourceError):
        return 502
    return 500


def _respond(result: Any, strategy: str, subject_id: str) -> SummaryResponseModel:
    if result.ok and result.value is not None:
        return SummaryResponseModel(status="success", strategy=strategy, data=result.value.to_dict())
    err = result.error
    logger.warning(
        "http_summary_failed",
        subject_id=subject_id,
        strategy=strategy,
        error_type=type(err).__name__,
    )
    raise HTTPException(status_code=_status_for(err), detail=f"{type(err).__name__}: {err}")


def _require_container() -> Any:
    if container is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return container


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/v1/summaries/extractive", response_model=SummaryResponseModel)
def summarize_extractive(req: ExtractiveRequestModel) -> SummaryResponseModel:
    """Extractive summary of an inline corpus (content-hash cached per subject).

    Example:
        POST /v1/summaries/extractive
        {
            "subject_id": "tt0111161",
            "ratings": [{"id": "r1", "comment": "...", "votes": 3, "stars": 9}],
            "comments": [{"id": "c1", "content": "...", "createdAt": "2024-05-01T00:00:00Z"}]
        }
    """
    c = _require_container()
    source = InMemoryFeedbackSource({req.subject_id: req.to_items()})
    result = c.get_extractive_use_case(source=source).summarize(req.subject_id)
    return _respond(result, "extractive", req.subject_id)


@app.get("/v1/subjects/{subject_id}/summary", response_model=SummaryResponseModel)
def subject_summary(
    subject_id: str, strategy: Literal["chunked", "extractive"] = "chunked"
) -> SummaryResponseModel:
    """Summary of a subject's stored feedback (configured feedback source)."""
    c = _require_container()
    if strategy == "extractive":
        result = c.get_extractive_use_case().summarize(subject_id)
    else:
        result = c.get_chunked_use_case().summarize(subject_id)
    return _respond(result, strategy, subject_id)
