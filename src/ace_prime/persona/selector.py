"""
Persona selection: butler for the owner, supervisor for everyone else.

Selection must happen before the prompt is built, because the persona decides
which system prompt is loaded.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from ace_prime.identity import IdentityResolver, OwnerValidator, UserIdentity

from .audit import PersonaAuditLogger
from .types import InvalidUserError, PersonaSelection, PersonaType

__all__ = ["PersonaSelector"]


class PersonaSelector:
    def __init__(
        self,
        identity_resolver: IdentityResolver,
        owner_validator: OwnerValidator,
        audit_logger: PersonaAuditLogger,
    ) -> None:
        self._identity_resolver = identity_resolver
        self._owner_validator = owner_validator
        self._audit = audit_logger

    def select_persona(self, message: Any, identity: UserIdentity | None = None) -> PersonaSelection:
        """
        Select the persona for ``message``.

        ``identity`` may be passed when it was already resolved upstream.
        Every decision is audit-logged; failures are logged and re-raised.
        """
        author_id = str(getattr(getattr(message, "author", None), "id", "") or "")
        message_id = str(getattr(message, "id", "") or "")

        try:
            if identity is None:
                identity = self._identity_resolver.resolve_identity(message)

            if not self._identity_resolver.is_valid_user(identity):
                raise InvalidUserError(identity.id)

            is_owner = self._owner_validator.is_owner(identity)

            selection = PersonaSelection(
                persona=PersonaType.BUTLER if is_owner else PersonaType.SUPERVISOR,
                user_id=identity.id,
                username=identity.username,
                is_owner=is_owner,
                timestamp=datetime.now(timezone.utc),
                message_id=message_id,
                channel_id=str(getattr(getattr(message, "channel", None), "id", "") or ""),
            )
        except Exception as exc:
            self._audit.log_error(exc, author_id, message_id)
            raise

        self._audit.log_selection(selection)
        return selection

    def get_persona_type(self, message: Any) -> PersonaType:
        identity = self._identity_resolver.resolve_identity(message)
        return PersonaType.BUTLER if self._owner_validator.is_owner(identity) else PersonaType.SUPERVISOR
