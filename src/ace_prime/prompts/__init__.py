"""Prompt loading, validation and assembly."""

from .builder import BuiltPrompt, ContextSummary, PromptBuilder, PromptBuildInput, PromptMetadata
from .errors import (
    PromptBuildError,
    PromptEmptyError,
    PromptError,
    PromptNotFoundError,
    PromptValidationError,
)
from .loader import PromptLoader, PromptType
from .validator import PromptValidator

__all__ = [
    "BuiltPrompt",
    "ContextSummary",
    "PromptBuildError",
    "PromptBuildInput",
    "PromptBuilder",
    "PromptEmptyError",
    "PromptError",
    "PromptLoader",
    "PromptMetadata",
    "PromptNotFoundError",
    "PromptType",
    "PromptValidationError",
    "PromptValidator",
]
