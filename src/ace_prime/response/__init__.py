"""Entry-point helpers for generating replies."""

from __future__ import annotations

import logging
from functools import lru_cache

from ace_prime.config import core, pipeline as pipeline_cfg, prompt as prompt_cfg
from ace_prime.identity import IdentityResolver, OwnerValidator
from ace_prime.persona import PersonaAuditLogger, PersonaSelector
from ace_prime.pipeline import Pipeline, PipelineBuilder, PipelineExecutionResult
from ace_prime.prompts import PromptBuilder, PromptLoader

from .stages import (
    AI_INVOCATION,
    CONTEXT_AGGREGATION,
    IDENTITY_RESOLUTION,
    PERSONA_SELECTION,
    PROMPT_BUILDING,
    ContextStage,
    GenerationStage,
    IdentityStage,
    PersonaStage,
    PromptStage,
)

logger = logging.getLogger(__name__)

__all__ = [
    "build_persona_pipeline",
    "build_response_pipeline",
    "get_persona_pipeline",
    "get_prompt_loader",
    "get_response_pipeline",
    "handle",
]

PIPELINE_LOGGER_NAME = "ace_prime.pipeline"


def _persona_selector() -> PersonaSelector:
    return PersonaSelector(
        IdentityResolver(),
        OwnerValidator(core.OWNER_ID),
        PersonaAuditLogger(),
    )


def _base_builder(pipeline_logger: logging.Logger | None) -> PipelineBuilder:
    return (
        PipelineBuilder()
        .with_logger(pipeline_logger or logging.getLogger(PIPELINE_LOGGER_NAME))
        .with_timeout(pipeline_cfg.TIMEOUT_SECONDS)
        .continue_on_error(pipeline_cfg.CONTINUE_ON_ERROR)
        .with_trace_file(pipeline_cfg.TRACE_FILE)
    )


def build_response_pipeline(
    loader: PromptLoader,
    *,
    selector: PersonaSelector | None = None,
    pipeline_logger: logging.Logger | None = None,
) -> Pipeline:
    """
    Build the full message pipeline:
    identity -> persona -> context -> prompt -> model.
    """
    pipeline = (
        _base_builder(pipeline_logger)
        .add_stage(IdentityStage())
        .add_stage(PersonaStage(selector or _persona_selector()))
        .add_stage(ContextStage())
        .add_stage(PromptStage(PromptBuilder(loader)))
        .add_stage(GenerationStage())
        .mark_critical(IDENTITY_RESOLUTION)
        .mark_critical(PERSONA_SELECTION)
        .mark_critical(PROMPT_BUILDING)
        .mark_critical(AI_INVOCATION)
        .build()
    )
    pipeline.validate_ordering(PERSONA_SELECTION, PROMPT_BUILDING)
    pipeline.validate_ordering(CONTEXT_AGGREGATION, PROMPT_BUILDING)
    return pipeline


def build_persona_pipeline(
    *,
    selector: PersonaSelector | None = None,
    pipeline_logger: logging.Logger | None = None,
) -> Pipeline:
    """Identity and persona only; used when no model is available."""

    return (
        _base_builder(pipeline_logger)
        .add_stage(IdentityStage())
        .add_stage(PersonaStage(selector or _persona_selector()))
        .mark_critical(IDENTITY_RESOLUTION)
        .mark_critical(PERSONA_SELECTION)
        .build()
    )


@lru_cache(maxsize=1)
def get_prompt_loader() -> PromptLoader:
    return PromptLoader(
        prompt_cfg.PROMPTS_DIR,
        hot_reload=prompt_cfg.HOT_RELOAD,
        min_length=prompt_cfg.MIN_LENGTH,
        max_length=prompt_cfg.MAX_LENGTH,
    )


@lru_cache(maxsize=1)
def get_response_pipeline() -> Pipeline:
    return build_response_pipeline(get_prompt_loader())


@lru_cache(maxsize=1)
def get_persona_pipeline() -> Pipeline:
    return build_persona_pipeline()


async def handle(message, *, ai_enabled: bool = True) -> PipelineExecutionResult:
    """Run the appropriate pipeline for ``message``."""

    pipeline = get_response_pipeline() if ai_enabled else get_persona_pipeline()
    return await pipeline.execute(message)
