"""Concrete stages of the response pipeline, in execution order."""

from .context import ContextStage, strip_bot_mentions
from .generation import GenerationStage
from .identity import IdentityStage
from .names import (
    AI_INVOCATION,
    CONTEXT_AGGREGATION,
    IDENTITY_RESOLUTION,
    PERSONA_SELECTION,
    PROMPT_BUILDING,
)
from .persona import PersonaStage
from .prompt import PromptStage

__all__ = [
    "AI_INVOCATION",
    "CONTEXT_AGGREGATION",
    "ContextStage",
    "GenerationStage",
    "IDENTITY_RESOLUTION",
    "IdentityStage",
    "PERSONA_SELECTION",
    "PROMPT_BUILDING",
    "PersonaStage",
    "PromptStage",
    "strip_bot_mentions",
]
