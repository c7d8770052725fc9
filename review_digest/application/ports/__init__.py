"""Application ports package.

Re-exports every port so use cases and the composition root import from one place.
"""

from review_digest.application.ports.cache_port import SummaryCachePort
from review_digest.application.ports.classifier_port import LabelScore, SentimentPort
from review_digest.application.ports.clock_port import ClockPort
from review_digest.application.ports.embedding_port import EmbeddingPort
from review_digest.application.ports.feedback_source_port import FeedbackSourcePort
from review_digest.application.ports.llm_port import ChatMessage, LLMPort, LLMResponse

__all__ = [
    "ClockPort",
    "EmbeddingPort",
    "FeedbackSourcePort",
    "LabelScore",
    "LLMPort",
    "ChatMessage",
    "LLMResponse",
    "SentimentPort",
    "SummaryCachePort",
]
