"""Tests for environment-driven AppSettings."""

import pytest

from review_digest.config.settings import AppSettings

_ENV_VARS = (
    "LLM_API_KEY",
    "OPENAI_API_KEY",
    "SUMMARY_K",
    "MMR_LAMBDA",
    "CACHE_BACKEND",
    "LOG_LEVEL",
    "LOG_JSON",
    "SUMMARY_TTL_S",
    "FEEDBACK_SOURCE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_extractive_defaults(self) -> None:
        s = AppSettings()
        assert s.summary_k == 8
        assert s.mmr_lambda == pytest.approx(0.7)
        assert (s.pros_max, s.cons_max) == (3, 3)
        assert s.tag_boost == pytest.approx(0.10)
        assert s.sentiment_sample_cap == 250

    def test_chunked_defaults(self) -> None:
        s = AppSettings()
        assert s.chunk_max_chars == 4000
        assert s.summary_ttl_s == 3600

    def test_backend_defaults(self) -> None:
        s = AppSettings()
        assert s.cache_backend == "memory"
        assert s.feedback_source == "memory"
        assert s.llm_api_key == "EMPTY"
        assert s.log_level == "INFO"
        assert s.log_json is False


class TestOverrides:
    def test_numeric_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("SUMMARY_K", "5")
        monkeypatch.setenv("MMR_LAMBDA", "0.5")
        monkeypatch.setenv("SUMMARY_TTL_S", "60")
        s = AppSettings()
        assert s.summary_k == 5
        assert s.mmr_lambda == pytest.approx(0.5)
        assert s.summary_ttl_s == 60

    def test_case_normalization(self, monkeypatch) -> None:
        monkeypatch.setenv("CACHE_BACKEND", "Redis")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_JSON", "TRUE")
        s = AppSettings()
        assert s.cache_backend == "redis"
        assert s.log_level == "DEBUG"
        assert s.log_json is True

    def test_openai_key_fallback(self, monkeypatch) -> None:
        monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")
        assert AppSettings().llm_api_key == "sk-openai"

    def test_llm_key_wins_over_openai_key(self, monkeypatch) -> None:
        monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")
        monkeypatch.setenv("LLM_API_KEY", "sk-llm")
        assert AppSettings().llm_api_key == "sk-llm"

    def test_settings_are_frozen(self) -> None:
        s = AppSettings()
        with pytest.raises(AttributeError):
            s.summary_k = 3  # type: ignore[misc]
