"""Helpers for interacting with a local Ollama server"""
from __future__ import annotations

from ollama import AsyncClient

from ace_prime.clients import AIResponse, AIServiceError, TokenUsage
from ace_prime.config import core, local_llm

client = AsyncClient(host=local_llm.LOCAL_SERVER_URL, timeout=local_llm.REQUEST_TIMEOUT)


def is_available() -> bool:
    return local_llm.USE_LOCAL


async def generate_response(
    messages: list[dict],
    *,
    model: str | None = None,
    temperature: float | None = None,
) -> AIResponse:
    """
    Send a prompt to the local Ollama server and return its reply.

    Takes the same role-tagged ``messages`` list as :func:`ace_prime.clients.oai.generate_response`.
    """
    use_model = model or local_llm.LOCAL_MODEL_ID
    try:
        resp = await client.chat(
            model=use_model,
            messages=messages,
            options={"temperature": core.TEMPERATURE if temperature is None else temperature},
        )
    except Exception as exc:
        raise AIServiceError(f"Ollama call failed: {exc}") from exc

    content = (resp.message.content or "").strip()
    if not content:
        raise AIServiceError("Ollama returned empty response content")

    prompt_tokens = getattr(resp, "prompt_eval_count", None) or 0
    completion_tokens = getattr(resp, "eval_count", None) or 0

    return AIResponse(
        text=content,
        model=getattr(resp, "model", None) or use_model,
        token_usage=TokenUsage(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
        ),
    )
