from collections.abc import Sequence
from dataclasses import dataclass
from importlib import import_module
from typing import Any, cast

from review_digest.application.ports.llm_port import ChatMessage, LLMPort, LLMResponse
from review_digest.domain.errors import LLMError


@dataclass
class OpenAIChatAdapter(LLMPort):
    """Chat completions against OpenAI or any OpenAI-compatible server."""

    base_url: str | None = None  # None = api.openai.com; vLLM e.g. "http://localhost:8000/v1"
    api_key: str = "EMPTY"
    model: str = "gpt-4o-mini"
    temperature: float = 0.4
    max_tokens: int = 1024

    def __post_init__(self) -> None:
        # openai is imported on first chat() so tests never need it
        self._client: Any | None = None

    def _get_client(self) -> Any:
        if self._client is None:
            module = import_module("openai")
            self._client = module.OpenAI(base_url=self.base_url, api_key=self.api_key)
        return self._client

    def chat(
        self,
        messages: Sequence[ChatMessage],
        temperature: float | None = None,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> LLMResponse:
        try:
            client = self._get_client()
            payload: Any = [{"role": m.role, "content": m.content} for m in messages]
            kwargs: dict[str, Any] = {
                "model": self.model,
                "messages": cast(Any, payload),
                "temperature": self.temperature if temperature is None else temperature,
                "max_tokens": self.max_tokens if max_tokens is None else max_tokens,
            }
            if json_mode:
                kwargs["response_format"] = {"type": "json_object"}
            resp: Any = client.chat.completions.create(**kwargs)
            choice = resp.choices[0]
            usage = getattr(resp, "usage", None)
            return LLMResponse(
                text=choice.message.content or "",
                finish_reason=choice.finish_reason or "stop",
                usage_tokens=getattr(usage, "total_tokens", None),
            )
        except Exception as ex:  # noqa: BLE001
            raise LLMError(f"LLM communication failed: {ex}") from ex
