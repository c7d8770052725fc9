from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class ChatMessage:
    role: str  # "system" | "user" | "assistant"
    content: str


@dataclass(frozen=True)
class LLMResponse:
    text: str
    finish_reason: str = "stop"
    usage_tokens: int | None = None


@runtime_checkable
class LLMPort(Protocol):
    def chat(
        self,
        messages: Sequence[ChatMessage],
        temperature: float = 0.2,
        max_tokens: int = 512,
        json_mode: bool = False,
    ) -> LLMResponse: ...

    def complete(
        self, system_instruction: str, user_prompt: str, json_mode: bool = False
    ) -> str:
        """Convenience method: one system instruction plus one user prompt.

        Args:
            system_instruction: Fixed instruction for the model
            user_prompt: Request-specific content
            json_mode: Ask the backend for a JSON object answer

        Returns:
            Generated text (may be empty; callers decide how to handle that)
        """
        messages = [
            ChatMessage(role="system", content=system_instruction),
            ChatMessage(role="user", content=user_prompt),
        ]
        return self.chat(messages, json_mode=json_mode).text
