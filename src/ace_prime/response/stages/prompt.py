"""
Pipeline stage that assembles the final prompt from the persona and context.
"""
from __future__ import annotations

import dataclasses

from ace_prime.pipeline import PipelineContext, PipelineStage
from ace_prime.prompts import BuiltPrompt, PromptBuilder, PromptBuildInput

from .names import CONTEXT_AGGREGATION, PERSONA_SELECTION, PROMPT_BUILDING


class PromptStage(PipelineStage):
    def __init__(self, builder: PromptBuilder) -> None:
        super().__init__(PROMPT_BUILDING, dependencies=[PERSONA_SELECTION, CONTEXT_AGGREGATION])
        self._builder = builder

    async def process(self, data: PromptBuildInput, context: PipelineContext) -> BuiltPrompt:
        # The persona recorded by the persona stage wins over whatever the
        # input carries.
        selection = self.get_stage_result(context, PERSONA_SELECTION)
        build_input = dataclasses.replace(data, persona_selection=selection)
        return self._builder.build_and_validate(build_input)
