"""
Pipeline stage for response generation.
"""
from __future__ import annotations

import logging

from ace_prime.clients import AIResponse, oai, ollama
from ace_prime.config import local_llm
from ace_prime.pipeline import PipelineContext, PipelineStage
from ace_prime.prompts import BuiltPrompt

from .names import AI_INVOCATION, PROMPT_BUILDING

logger = logging.getLogger(__name__)


class GenerationStage(PipelineStage):
    """
    Sends the built prompt to the configured model (local Ollama or OpenAI).
    """

    def __init__(self) -> None:
        super().__init__(AI_INVOCATION, dependencies=[PROMPT_BUILDING])

    async def process(self, data: BuiltPrompt, context: PipelineContext) -> AIResponse:
        if local_llm.USE_LOCAL:
            response = await ollama.generate_response(data.messages)
        else:
            response = await oai.generate_response(data.messages)

        usage = response.token_usage
        logger.info(
            "Model responded model=%s persona=%s message_id=%s total_tokens=%s",
            response.model,
            data.metadata.persona.value,
            data.metadata.message_id,
            usage.total_tokens if usage else None,
        )
        return response
