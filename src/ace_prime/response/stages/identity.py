"""
Pipeline stage that resolves the author of the inbound message.
"""
from __future__ import annotations

import logging
from typing import Any

from ace_prime.identity import IdentityResolver, UserIdentity
from ace_prime.pipeline import PipelineContext, PipelineStage

from .names import IDENTITY_RESOLUTION

logger = logging.getLogger(__name__)


class IdentityStage(PipelineStage):
    def __init__(self, resolver: IdentityResolver | None = None) -> None:
        super().__init__(IDENTITY_RESOLUTION)
        self._resolver = resolver or IdentityResolver()

    async def process(self, data: Any, context: PipelineContext) -> UserIdentity:
        identity = self._resolver.resolve_identity(data)
        logger.debug("Resolved identity user_id=%s bot=%s", identity.id, identity.is_bot)
        return identity
