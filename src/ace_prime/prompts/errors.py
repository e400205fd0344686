from __future__ import annotations

__all__ = [
    "PromptBuildError",
    "PromptEmptyError",
    "PromptError",
    "PromptNotFoundError",
    "PromptValidationError",
]


class PromptError(RuntimeError):
    """Base class for prompt loading and assembly failures."""


class PromptNotFoundError(PromptError):
    def __init__(self, prompt_name: str, path: str) -> None:
        self.prompt_name = prompt_name
        self.path = path
        super().__init__(f"Prompt file not found: {prompt_name} (expected at {path})")


class PromptEmptyError(PromptError):
    def __init__(self, prompt_name: str) -> None:
        self.prompt_name = prompt_name
        super().__init__(f"Prompt '{prompt_name}' is empty or whitespace-only")


class PromptValidationError(PromptError):
    """Prompt text exists but is unusable (placeholders, length, type)."""


class PromptBuildError(PromptError):
    """The inputs for a prompt are missing or inconsistent."""
