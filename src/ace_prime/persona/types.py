from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

__all__ = ["InvalidUserError", "PersonaSelection", "PersonaType"]


class PersonaType(str, Enum):
    # Owner only: loyal, discreet, execution-focused.
    BUTLER = "BUTLER"
    # Everyone else: professional, structured, instructional.
    SUPERVISOR = "SUPERVISOR"


@dataclass(frozen=True, slots=True)
class PersonaSelection:
    """The persona chosen for one message, with the data needed to audit it."""

    persona: PersonaType
    user_id: str
    username: str
    is_owner: bool
    timestamp: datetime
    message_id: str
    channel_id: str


class InvalidUserError(ValueError):
    """Raised when a persona is requested for an automated account."""

    def __init__(self, user_id: str, reason: str = "Cannot select persona for bot user") -> None:
        self.user_id = user_id
        super().__init__(f"{reason} (user_id={user_id or '<empty>'})")
