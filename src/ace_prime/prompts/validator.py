"""Stateless checks applied to prompt text after it is read from disk."""

from __future__ import annotations

import re
from typing import Any

from .errors import PromptEmptyError, PromptValidationError

__all__ = ["PromptValidator"]


class PromptValidator:
    # Prompts are static text; a placeholder means a template leaked in.
    FORBIDDEN_PATTERNS = (
        re.compile(r"\$\{[^}]*\}"),
        re.compile(r"\{\{[^}]*\}\}"),
    )

    @classmethod
    def validate(cls, prompt_text: Any, prompt_name: str) -> None:
        if not isinstance(prompt_text, str):
            raise PromptValidationError(
                f"Prompt '{prompt_name}' validation failed: expected str, got {type(prompt_text).__name__}"
            )

        if not prompt_text.strip():
            raise PromptEmptyError(prompt_name)

        for pattern in cls.FORBIDDEN_PATTERNS:
            if pattern.search(prompt_text):
                raise PromptValidationError(
                    f"Prompt '{prompt_name}' validation failed: contains forbidden pattern "
                    f"{pattern.pattern}; prompts must not contain template placeholders"
                )

    @staticmethod
    def validate_min_length(prompt_text: str, prompt_name: str, min_length: int) -> None:
        length = len(prompt_text.strip())
        if length < min_length:
            raise PromptValidationError(
                f"Prompt '{prompt_name}' validation failed: length {length} is less than "
                f"minimum {min_length} characters"
            )

    @staticmethod
    def validate_max_length(prompt_text: str, prompt_name: str, max_length: int) -> None:
        if len(prompt_text) > max_length:
            raise PromptValidationError(
                f"Prompt '{prompt_name}' validation failed: length {len(prompt_text)} exceeds "
                f"maximum {max_length} characters"
            )
