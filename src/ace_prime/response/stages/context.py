"""
Pipeline stage that gathers the context shown to the model next to the user's text.
"""
from __future__ import annotations

import logging
import re
from typing import Any

import discord

from ace_prime.persona import PersonaSelection
from ace_prime.pipeline import PipelineContext, PipelineStage
from ace_prime.prompts import ContextSummary, PromptBuildInput

from .names import CONTEXT_AGGREGATION, PERSONA_SELECTION

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def strip_bot_mentions(message: Any) -> str:
    """Return the message text without mentions of bot accounts (usually us)."""

    content = getattr(message, "content", "") or ""
    for user in getattr(message, "mentions", None) or []:
        if getattr(user, "bot", False):
            content = re.sub(rf"<@!?{user.id}>", "", content)
    return _WHITESPACE.sub(" ", content).strip()


class ContextStage(PipelineStage):
    """
    Builds the :class:`PromptBuildInput`: cleaned user text plus a
    :class:`ContextSummary` with where the message was sent, who sent it and,
    for replies, what it replies to.
    """

    def __init__(self) -> None:
        super().__init__(CONTEXT_AGGREGATION, dependencies=[PERSONA_SELECTION])

    async def process(self, data: PersonaSelection, context: PipelineContext) -> PromptBuildInput:
        message = context.message

        additional: dict[str, str] = {}
        location = _describe_location(message)
        if location:
            additional["Channel"] = location

        member = getattr(message, "member", None) or getattr(message, "author", None)
        display_name = getattr(member, "display_name", None)
        if display_name:
            additional["Speaker"] = str(display_name)

        summary = ContextSummary(
            conversation_summary=await _referenced_message(message),
            additional_context=additional,
        )

        return PromptBuildInput(
            persona_selection=data,
            user_message=strip_bot_mentions(message),
            context=None if summary.is_empty() else summary,
        )


def _describe_location(message: Any) -> str | None:
    channel_name = getattr(getattr(message, "channel", None), "name", None)
    guild_name = getattr(getattr(message, "guild", None), "name", None)
    if channel_name and guild_name:
        return f"#{channel_name} in {guild_name}"
    if channel_name:
        return f"#{channel_name}"
    return "Direct message" if getattr(message, "guild", None) is None else None


async def _referenced_message(message: Any) -> str | None:
    """Text of the message being replied to, if any."""

    reference = getattr(message, "reference", None)
    if reference is None:
        return None

    referenced = getattr(reference, "resolved", None)
    if referenced is None and getattr(reference, "message_id", None):
        try:
            referenced = await message.channel.fetch_message(reference.message_id)
        except discord.HTTPException as exc:
            logger.warning("Could not fetch referenced message %s: %s", reference.message_id, exc)
            return None

    content = (getattr(referenced, "content", "") or "").strip()
    if not content:
        return None

    author = getattr(getattr(referenced, "author", None), "display_name", None) or "someone"
    return f"Replying to {author}: {content}"
