import logging

import discord

from ace_prime import response
from ace_prime.clients import oai, ollama
from ace_prime.config import core

logger = logging.getLogger(__name__)


def ai_available() -> bool:
    return ollama.is_available() or oai.is_available()


def _is_addressed(client: discord.Client, message: discord.Message) -> bool:
    # Direct messages are always addressed to us.
    if message.guild is None:
        return True
    bot_user = client.user
    return bot_user in message.mentions if bot_user else False


async def handle(client: discord.Client, message: discord.Message):
    """Handle incoming Discord messages. Never raises into the event loop."""

    try:
        await _handle(client, message)
    except Exception:
        logger.exception("Message handling failed for message %s", getattr(message, "id", None))


async def _handle(client: discord.Client, message: discord.Message) -> None:
    # 1) Ignore automated accounts, including ourselves
    if message.author.bot:
        return

    # 2) Ignore channels outside the allow-list (empty list = everywhere)
    if core.CHANNEL_IDS and message.channel.id not in core.CHANNEL_IDS:
        return

    if not _is_addressed(client, message):
        return

    logger.debug(
        "Processing message %s from user %s in channel %s",
        message.id,
        message.author.id,
        message.channel.id,
    )

    # 3) Without a model, still run persona selection for the audit trail
    if not ai_available():
        result = await response.handle(message, ai_enabled=False)
        if not result.success:
            logger.warning("Persona selection failed for message %s; dropping", message.id)
            return
        await _reply(message, core.FALLBACK_MESSAGE)
        return

    # 4) Full pipeline
    async with message.channel.typing():
        result = await response.handle(message)

    if not result.success:
        failure = result.errors[0] if result.errors else None
        logger.error(
            "Pipeline failed for message %s at stage %s: %s; dropping",
            message.id,
            failure.stage if failure else None,
            failure.error if failure else None,
        )
        return

    await _reply(message, result.output.text)


async def _reply(message: discord.Message, text: str) -> None:
    try:
        await message.reply(text)
    except discord.HTTPException as exc:
        logger.error("Failed to send reply to message %s: %s", message.id, exc)
