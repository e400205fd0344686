"""Helpers for interacting with OpenAI API"""
from __future__ import annotations

import logging

from openai import AsyncOpenAI, OpenAIError

from ace_prime.clients import AIResponse, AIServiceError, TokenUsage
from ace_prime.config import core

logger = logging.getLogger(__name__)

# Created on first use so the bot can start (in fallback mode) without a key.
_aoai: AsyncOpenAI | None = None


def is_available() -> bool:
    """True when an OpenAI API key is configured."""
    return bool(core.OPENAI_API_KEY and core.OPENAI_API_KEY.strip())


def _client() -> AsyncOpenAI:
    global _aoai
    if _aoai is None:
        if not is_available():
            raise AIServiceError(
                "OPENAI_API_KEY environment variable is required but not set"
            )
        _aoai = AsyncOpenAI(api_key=core.OPENAI_API_KEY)
    return _aoai


async def generate_response(
    messages: list[dict],
    *,
    model: str | None = None,
    temperature: float | None = None,
) -> AIResponse:
    """
    Send a chat completion request to OpenAI and return the reply with usage.

    Example message format:
    .. code-block:: python
        [
            {
                "role": "system",
                "content": "You are a helpful assistant."
            },
            {
                "role": "user",
                "content": "Hello, how are you?"
            }
        ]
    """
    use_model = model or core.MSG_MODEL_ID
    try:
        resp = await _client().chat.completions.create(
            model=use_model,
            messages=messages,
            temperature=core.TEMPERATURE if temperature is None else temperature,
        )
    except OpenAIError as exc:
        raise AIServiceError(f"OpenAI API call failed: {exc}") from exc

    content = resp.choices[0].message.content if resp.choices else None
    if not content or not content.strip():
        raise AIServiceError("OpenAI API returned empty response content")

    usage = getattr(resp, "usage", None)
    token_usage = (
        TokenUsage(
            prompt_tokens=usage.prompt_tokens,
            completion_tokens=usage.completion_tokens,
            total_tokens=usage.total_tokens,
        )
        if usage
        else None
    )

    return AIResponse(text=content.strip(), model=resp.model or use_model, token_usage=token_usage)
