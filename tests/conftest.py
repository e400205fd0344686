import os, sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add src/ to sys.path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

# Seed configuration before ace_prime.config is imported
os.environ.setdefault("DISCORD_TOKEN", "test-token")
os.environ.setdefault("OPENAI_API_KEY", "test-openai")
os.environ.setdefault("OWNER_ID", "1000")
os.environ.setdefault("OPENAI_MODEL", "test-model")
os.environ.setdefault("USE_LOCAL", "0")
os.environ.setdefault("PIPELINE_TRACE_FILE", "")

OWNER_ID = 1000


@pytest.fixture
def make_message():
    """Factory for discord.Message look-alikes."""

    def _make(
        *,
        author_id=42,
        name="tester",
        display_name="Tester",
        bot=False,
        content="hello there",
        message_id=555,
        channel_id=123,
        channel_name="general",
        guild_name="ACE HQ",
        mentions=(),
        reference=None,
    ):
        author = SimpleNamespace(
            id=author_id, name=name, discriminator="0", display_name=display_name, bot=bot
        )
        channel = MagicMock()
        channel.id = channel_id
        channel.name = channel_name
        channel.fetch_message = AsyncMock()
        guild = SimpleNamespace(id=7, name=guild_name) if guild_name else None
        return SimpleNamespace(
            id=message_id,
            author=author,
            member=author if guild else None,
            channel=channel,
            guild=guild,
            content=content,
            mentions=list(mentions),
            reference=reference,
            reply=AsyncMock(),
        )

    return _make
