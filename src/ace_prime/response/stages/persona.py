"""
Pipeline stage that picks the persona. Must run before prompt building.
"""
from __future__ import annotations

from ace_prime.identity import UserIdentity
from ace_prime.persona import PersonaSelection, PersonaSelector
from ace_prime.pipeline import PipelineContext, PipelineStage

from .names import IDENTITY_RESOLUTION, PERSONA_SELECTION


class PersonaStage(PipelineStage):
    def __init__(self, selector: PersonaSelector) -> None:
        super().__init__(PERSONA_SELECTION, dependencies=[IDENTITY_RESOLUTION])
        self._selector = selector

    async def process(self, data: UserIdentity, context: PipelineContext) -> PersonaSelection:
        # Raises InvalidUserError for automated accounts.
        return self._selector.select_persona(context.message, identity=data)
