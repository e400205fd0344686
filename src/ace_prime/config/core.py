import logging
import os
from typing import List

logger = logging.getLogger(__name__)

# Discord snowflake of the bot owner; the only identity that gets the butler persona.
DEFAULT_OWNER_ID = "618512174620475394"

DEFAULT_FALLBACK_MESSAGE = "ACE Prime is online. AI responses are currently disabled."


def _split_ids(raw: str) -> List[int]:
    return [int(cid.strip()) for cid in raw.split(",") if cid.strip()]


class Core:
    def __init__(self, config: dict | None = None) -> None:
        cfg = (config or {}).get("aceprime", {})
        discord_cfg = cfg.get("discord", {})
        models_cfg = cfg.get("models", {})

        token_env = str(discord_cfg.get("token_env", "DISCORD_TOKEN"))
        openai_env = str(discord_cfg.get("openai_key_env", "OPENAI_API_KEY"))

        self.DISCORD_API_TOKEN: str | None = os.getenv(token_env)
        self.OPENAI_API_KEY: str | None = os.getenv(openai_env)

        self.BOT_NAME: str = str(cfg.get("bot_name", os.getenv("BOT_NAME", "ACE Prime")))
        self.VERSION: str = str(cfg.get("version", "1.0.0"))

        # Owner id stays a string: the authority check is exact string equality.
        self.OWNER_ID: str = str(discord_cfg.get("owner_id") or os.getenv("OWNER_ID", DEFAULT_OWNER_ID)).strip()

        channel_ids_cfg = discord_cfg.get("channel_ids")
        if channel_ids_cfg:
            self.CHANNEL_IDS: List[int] = [int(cid) for cid in channel_ids_cfg]
        else:
            self.CHANNEL_IDS = _split_ids(os.getenv("CHANNEL_IDS", ""))

        self.MSG_MODEL_ID: str = str(models_cfg.get("message_model") or os.getenv("OPENAI_MODEL", "gpt-4"))
        self.TEMPERATURE: float = float(models_cfg.get("temperature", os.getenv("OPENAI_TEMPERATURE", "0.7")))

        self.FALLBACK_MESSAGE: str = str(cfg.get("fallback_message", DEFAULT_FALLBACK_MESSAGE))

        if not self.OWNER_ID:
            logger.warning("OWNER_ID is empty; no user will receive the butler persona.")
