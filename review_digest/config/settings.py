"""Application settings with environment-driven configuration.

This is the ONLY place where environment variables are read. All other
layers receive settings via dependency injection.
"""

import os
from dataclasses import dataclass, field


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class AppSettings:
    """Application settings loaded from environment variables."""

    # ===== Embedding Configuration =====
    embedding_model: str = field(
        default_factory=lambda: os.getenv(
            "EMBEDDING_MODEL", "sentence-transformers/all-MiniLM-L6-v2"
        )
    )
    embedding_device: str = field(default_factory=lambda: os.getenv("EMBEDDING_DEVICE", "cpu"))
    # Supported: "cpu" | "cuda" | "mps"
    embedding_batch_size: int = field(
        default_factory=lambda: int(os.getenv("EMBEDDING_BATCH_SIZE", "64"))
    )

    # ===== Sentiment Configuration =====
    sentiment_model: str = field(
        default_factory=lambda: os.getenv(
            "SENTIMENT_MODEL", "distilbert-base-uncased-finetuned-sst-2-english"
        )
    )
    sentiment_device: str = field(default_factory=lambda: os.getenv("SENTIMENT_DEVICE", "cpu"))
    sentiment_batch_size: int = field(
        default_factory=lambda: int(os.getenv("SENTIMENT_BATCH_SIZE", "32"))
    )
    sentiment_neutral_threshold: float = field(
        default_factory=lambda: float(os.getenv("SENTIMENT_NEUTRAL_THRESHOLD", "0.0"))
    )
    # 0.0 disables the NEUTRAL bucket for binary models

    # ===== LLM Configuration =====
    llm_base_url: str = field(default_factory=lambda: os.getenv("LLM_BASE_URL", ""))
    # Empty = api.openai.com
    llm_api_key: str = field(
        default_factory=lambda: os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY", "EMPTY")
    )
    llm_model: str = field(default_factory=lambda: os.getenv("LLM_MODEL", "gpt-4o-mini"))
    llm_temperature: float = field(
        default_factory=lambda: float(os.getenv("LLM_TEMPERATURE", "0.4"))
    )

    # ===== Extractive Strategy =====
    summary_k: int = field(default_factory=lambda: int(os.getenv("SUMMARY_K", "8")))
    mmr_lambda: float = field(default_factory=lambda: float(os.getenv("MMR_LAMBDA", "0.7")))
    pros_max: int = field(default_factory=lambda: int(os.getenv("PROS_MAX", "3")))
    cons_max: int = field(default_factory=lambda: int(os.getenv("CONS_MAX", "3")))
    tag_boost: float = field(default_factory=lambda: float(os.getenv("TAG_BOOST", "0.10")))
    sentiment_sample_cap: int = field(
        default_factory=lambda: int(os.getenv("SENTIMENT_SAMPLE_CAP", "250"))
    )

    # ===== Chunked Strategy =====
    chunk_max_chars: int = field(default_factory=lambda: int(os.getenv("CHUNK_MAX_CHARS", "4000")))
    chunk_max_workers: int = field(
        default_factory=lambda: int(os.getenv("CHUNK_MAX_WORKERS", "4"))
    )
    summary_ttl_s: int = field(default_factory=lambda: int(os.getenv("SUMMARY_TTL_S", "3600")))

    # ===== Cache Configuration =====
    cache_backend: str = field(default_factory=lambda: os.getenv("CACHE_BACKEND", "memory").lower())
    # Supported: "memory" | "redis"
    redis_host: str = field(default_factory=lambda: os.getenv("REDIS_HOST", "localhost"))
    redis_port: int = field(default_factory=lambda: int(os.getenv("REDIS_PORT", "6379")))
    redis_db: int = field(default_factory=lambda: int(os.getenv("REDIS_DB", "0")))
    redis_password: str = field(default_factory=lambda: os.getenv("REDIS_PASSWORD", ""))
    cache_key_prefix: str = field(
        default_factory=lambda: os.getenv("CACHE_KEY_PREFIX", "review-digest")
    )

    # ===== Feedback Source =====
    feedback_source: str = field(
        default_factory=lambda: os.getenv("FEEDBACK_SOURCE", "memory").lower()
    )
    # Supported: "memory" | "json"
    feedback_path: str = field(
        default_factory=lambda: os.getenv("FEEDBACK_PATH", "var/feedback.json")
    )

    # ===== Logging =====
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    log_json: bool = field(default_factory=lambda: _flag("LOG_JSON", "false"))
