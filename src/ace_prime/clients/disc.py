"""Discord bot bootstrap utilities."""

from __future__ import annotations

import logging

import discord

from ace_prime.config import core
from ace_prime.event_hooks import message_hook, ready_hook

logger = logging.getLogger(__name__)

# --- Intents --------------------------------------------------------------- #
intents = discord.Intents.default()
intents.message_content = True


class ACEBot(discord.Client):
    """Primary Discord client; every message goes through the response pipeline."""

    def __init__(self) -> None:
        super().__init__(intents=intents)

    async def on_ready(self) -> None:
        await ready_hook.handle(self)

    async def on_message(self, message: discord.Message) -> None:
        await message_hook.handle(self, message)

    async def on_error(self, event_method: str, /, *args, **kwargs) -> None:
        logger.exception("Discord client error in %s", event_method)


def run() -> None:
    """Start the Discord bot using configuration from the environment."""

    if not core.DISCORD_API_TOKEN or not core.DISCORD_API_TOKEN.strip():
        logger.error("DISCORD_TOKEN is not set. Bot cannot start.")
        raise SystemExit(1)

    logger.info("Starting %s v%s", core.BOT_NAME, core.VERSION)
    bot = ACEBot()
    try:
        bot.run(core.DISCORD_API_TOKEN, log_handler=None)
    except discord.LoginFailure as exc:
        logger.error("Login failed: %s", exc)
        raise SystemExit(1) from exc
