import discord

from ace_prime import response
from ace_prime.config import core
from ace_prime.event_hooks.message_hook import ai_available
from ace_prime.prompts import PromptError

import logging

logger = logging.getLogger(__name__)

async def handle(client: discord.Client):
    """Startup checks on client ready event."""
    logger.info(
        "%s v%s logged in as %s (ID: %s) in %d guild(s)",
        core.BOT_NAME,
        core.VERSION,
        client.user.name,
        client.user.id,
        len(client.guilds),
    )

    if not ai_available():
        logger.warning(
            "No model configured (set OPENAI_API_KEY or USE_LOCAL); running in fallback mode"
        )
        return

    # Fail loudly at startup rather than on the first message
    try:
        response.get_prompt_loader().preload_all()
    except PromptError as e:
        logger.error("Prompt preload failed: %s", e)
        raise

    # Builds and validates the pipeline graph once
    pipeline = response.get_response_pipeline()
    logger.info("Response pipeline ready: %s", " -> ".join(pipeline.stage_names))
