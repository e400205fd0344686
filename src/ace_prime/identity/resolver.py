"""Extract a user identity from an inbound Discord message."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = ["IdentityResolver", "UserIdentity"]


@dataclass(frozen=True, slots=True)
class UserIdentity:
    """Author of a message, detached from the discord.py objects."""

    id: str
    username: str
    discriminator: str
    display_name: str
    is_bot: bool


class IdentityResolver:
    """Stateless; one instance can serve every message."""

    def resolve_identity(self, message: Any) -> UserIdentity:
        author = message.author
        username = str(getattr(author, "name", "") or "")

        # Guild members carry a nickname; plain users fall back to the global name.
        member = getattr(message, "member", None) or author
        display_name = getattr(member, "display_name", None) or username

        return UserIdentity(
            id=str(author.id) if author.id is not None else "",
            username=username,
            discriminator=str(getattr(author, "discriminator", "0") or "0"),
            display_name=str(display_name),
            is_bot=bool(getattr(author, "bot", False)),
        )

    def is_valid_user(self, identity: UserIdentity) -> bool:
        return not identity.is_bot and len(identity.id) > 0
