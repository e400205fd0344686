"""
Assemble the final chat-completion payload for one message.

The system message is always, in this order:

1. the persona's system prompt (butler or supervisor)
2. the developer prompt
3. a ``--- Context ---`` block, only when there is context to show

followed by the user's message, passed through untouched.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List

from ace_prime.persona import PersonaSelection, PersonaType

from .errors import PromptBuildError, PromptEmptyError, PromptError
from .loader import PromptLoader, PromptType

logger = logging.getLogger(__name__)

__all__ = [
    "BuiltPrompt",
    "ContextSummary",
    "PromptBuildInput",
    "PromptBuilder",
    "PromptMetadata",
]

_SYSTEM_PROMPTS = {
    PersonaType.BUTLER: PromptType.BUTLER_SYSTEM,
    PersonaType.SUPERVISOR: PromptType.SUPERVISOR_SYSTEM,
}


@dataclass(frozen=True, slots=True)
class ContextSummary:
    """Pre-summarized context injected into the system message."""

    conversation_summary: str | None = None
    project_context: str | None = None
    user_preferences: str | None = None
    additional_context: Dict[str, str] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not (
            self.conversation_summary
            or self.project_context
            or self.user_preferences
            or self.additional_context
        )


@dataclass(frozen=True, slots=True)
class PromptBuildInput:
    persona_selection: PersonaSelection | None
    user_message: str
    context: ContextSummary | None = None


@dataclass(frozen=True, slots=True)
class PromptMetadata:
    persona: PersonaType
    user_id: str
    message_id: str
    built_at: datetime
    has_context: bool


@dataclass(frozen=True, slots=True)
class BuiltPrompt:
    """Role-tagged messages ready for the model, plus audit metadata."""

    messages: List[dict[str, str]]
    metadata: PromptMetadata


class PromptBuilder:
    def __init__(self, loader: PromptLoader) -> None:
        self._loader = loader

    def _load(self, prompt_type: PromptType, label: str) -> str:
        try:
            text = self._loader.load(prompt_type)
        except PromptError as exc:
            logger.error("Failed to load %s: %s", label, exc)
            raise

        if not text.strip():
            raise PromptEmptyError(prompt_type.value)

        logger.debug("Loaded %s (%d chars)", label, len(text))
        return text

    @staticmethod
    def format_context_block(context: ContextSummary) -> str:
        parts: list[str] = []

        if context.conversation_summary:
            parts.append(f"Conversation Context:\n{context.conversation_summary}")
        if context.project_context:
            parts.append(f"Project Context:\n{context.project_context}")
        if context.user_preferences:
            parts.append(f"User Preferences:\n{context.user_preferences}")

        additional = "\n\n".join(
            f"{key}:\n{value}" for key, value in context.additional_context.items()
        )
        if additional:
            parts.append(additional)

        return "\n\n".join(parts)

    def _assemble_system_message(
        self, system_prompt: str, developer_prompt: str, context: ContextSummary | None
    ) -> str:
        components = [system_prompt, developer_prompt]

        if context is not None:
            block = self.format_context_block(context)
            if block.strip():
                components.append(f"\n--- Context ---\n{block}")

        return "\n\n".join(components)

    def build(self, build_input: PromptBuildInput) -> BuiltPrompt:
        started = time.monotonic()
        selection = build_input.persona_selection

        if selection is None:
            raise PromptBuildError(
                "PromptBuilder requires a PersonaSelection; persona selection must run "
                "before prompt building"
            )
        if selection.persona not in _SYSTEM_PROMPTS:
            raise PromptBuildError(f"Unknown persona type: {selection.persona!r}")
        if not build_input.user_message or not build_input.user_message.strip():
            raise PromptBuildError("User message is required and cannot be empty")

        system_prompt = self._load(
            _SYSTEM_PROMPTS[selection.persona], f"system prompt for {selection.persona.value}"
        )
        developer_prompt = self._load(PromptType.DEVELOPER, "developer prompt")

        system_content = self._assemble_system_message(
            system_prompt, developer_prompt, build_input.context
        )

        messages = [
            {"role": "system", "content": system_content},
            {"role": "user", "content": build_input.user_message},
        ]

        metadata = PromptMetadata(
            persona=selection.persona,
            user_id=selection.user_id,
            message_id=selection.message_id,
            built_at=datetime.now(timezone.utc),
            has_context=build_input.context is not None and not build_input.context.is_empty(),
        )

        logger.info(
            "Prompt built persona=%s message_id=%s system_chars=%d user_chars=%d execution_time_ms=%.2f",
            selection.persona.value,
            selection.message_id,
            len(system_content),
            len(build_input.user_message),
            (time.monotonic() - started) * 1000,
        )

        return BuiltPrompt(messages=messages, metadata=metadata)

    def validate(self, prompt: BuiltPrompt) -> None:
        """Final shape check before the prompt leaves the process."""

        messages = prompt.messages
        if len(messages) < 2:
            raise PromptBuildError(
                f"Invalid prompt: expected at least 2 messages (system + user), got {len(messages)}"
            )
        if messages[0].get("role") != "system":
            raise PromptBuildError(
                f"Invalid prompt: first message must have role 'system', got {messages[0].get('role')!r}"
            )
        if messages[-1].get("role") != "user":
            raise PromptBuildError(
                f"Invalid prompt: last message must have role 'user', got {messages[-1].get('role')!r}"
            )
        for message in messages:
            if not (message.get("content") or "").strip():
                raise PromptBuildError(
                    f"Invalid prompt: message with role {message.get('role')!r} has empty content"
                )

    def build_and_validate(self, build_input: PromptBuildInput) -> BuiltPrompt:
        prompt = self.build(build_input)
        self.validate(prompt)
        return prompt
