"""Outbound clients (Discord, OpenAI, Ollama) and shared response types."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["AIResponse", "AIServiceError", "TokenUsage"]


@dataclass(frozen=True, slots=True)
class TokenUsage:
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass(frozen=True, slots=True)
class AIResponse:
    """Generated text from a chat model."""

    text: str
    model: str
    token_usage: TokenUsage | None = None


class AIServiceError(RuntimeError):
    """Raised when a model call fails; the provider error is chained as ``__cause__``."""

    pass
