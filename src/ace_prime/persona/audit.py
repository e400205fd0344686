"""Audit trail for persona decisions."""

from __future__ import annotations

import logging

from .types import PersonaSelection

__all__ = ["PersonaAuditLogger"]

AUDIT_LOGGER_NAME = "ace_prime.audit"


class PersonaAuditLogger:
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(AUDIT_LOGGER_NAME)

    def log_selection(self, selection: PersonaSelection) -> None:
        self._logger.info(
            "Persona selected persona=%s user_id=%s username=%s is_owner=%s message_id=%s channel_id=%s timestamp=%s",
            selection.persona.value,
            selection.user_id,
            selection.username,
            selection.is_owner,
            selection.message_id,
            selection.channel_id,
            selection.timestamp.isoformat(),
        )

    def log_error(self, error: BaseException, user_id: str, message_id: str) -> None:
        self._logger.error(
            "Persona selection error user_id=%s message_id=%s error=%s",
            user_id,
            message_id,
            error,
        )
