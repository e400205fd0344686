"""
File-backed prompt source.

Prompt texts live as Markdown files in one directory, one file per
:class:`PromptType`. In cached mode a prompt is read and validated once and
then served from memory; with hot reload every :meth:`PromptLoader.load` goes
back to disk so edits show up without a restart.

The loader is shared by concurrent pipeline runs, so the cache is guarded by a
lock.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Dict

from .errors import PromptError, PromptNotFoundError, PromptValidationError
from .validator import PromptValidator

logger = logging.getLogger(__name__)

__all__ = ["PromptLoader", "PromptType"]


class PromptType(str, Enum):
    BUTLER_SYSTEM = "butler.system.md"
    SUPERVISOR_SYSTEM = "supervisor.system.md"
    DEVELOPER = "developer.md"


class PromptLoader:
    def __init__(
        self,
        prompts_dir: str | Path,
        *,
        hot_reload: bool = False,
        min_length: int = 10,
        max_length: int = 10000,
    ) -> None:
        self.prompts_dir = Path(prompts_dir)
        self.hot_reload = hot_reload
        self.min_length = min_length
        self.max_length = max_length

        self._cache: Dict[PromptType, str] = {}
        self._lock = threading.Lock()

        logger.info(
            "PromptLoader initialized prompts_dir=%s hot_reload=%s", self.prompts_dir, self.hot_reload
        )

    def _path(self, prompt_type: PromptType) -> Path:
        return self.prompts_dir / prompt_type.value

    def _read(self, prompt_type: PromptType) -> str:
        path = self._path(prompt_type)
        logger.debug("Loading prompt from disk: %s (%s)", prompt_type.value, path)

        if not path.is_file():
            raise PromptNotFoundError(prompt_type.value, str(path))

        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PromptError(f"Failed to read prompt file {path}: {exc}") from exc

    def _validate(self, text: str, prompt_type: PromptType) -> None:
        try:
            PromptValidator.validate(text, prompt_type.value)
            PromptValidator.validate_min_length(text, prompt_type.value, self.min_length)
            PromptValidator.validate_max_length(text, prompt_type.value, self.max_length)
        except PromptError as exc:
            logger.error("Prompt validation failed: %s: %s", prompt_type.value, exc)
            raise

    def load(self, prompt_type: PromptType) -> str:
        """Return the text for ``prompt_type``, validating it on first read."""

        if self.hot_reload:
            text = self._read(prompt_type)
            self._validate(text, prompt_type)
            return text

        with self._lock:
            cached = self._cache.get(prompt_type)
            if cached is not None:
                return cached

            text = self._read(prompt_type)
            self._validate(text, prompt_type)
            self._cache[prompt_type] = text

        logger.info("Prompt loaded and cached: %s (%d chars)", prompt_type.value, len(text))
        return text

    def preload_all(self) -> None:
        """Load every known prompt; raise once with every failure listed."""

        failures: list[str] = []
        for prompt_type in PromptType:
            try:
                self.load(prompt_type)
            except PromptError as exc:
                logger.error("Failed to preload prompt %s: %s", prompt_type.value, exc)
                failures.append(f"{prompt_type.value}: {exc}")

        if failures:
            raise PromptValidationError(
                f"Failed to preload {len(failures)} prompt(s): {'; '.join(failures)}"
            )

        logger.info("All prompts preloaded successfully (%d)", len(PromptType))

    def clear_cache(self) -> None:
        with self._lock:
            cleared = len(self._cache)
            self._cache.clear()
        logger.info("Prompt cache cleared (%d entries)", cleared)

    def cache_stats(self) -> dict[str, Any]:
        with self._lock:
            return {
                "size": len(self._cache),
                "hot_reload": self.hot_reload,
                "cached_prompts": [p.value for p in self._cache],
            }

    def is_cached(self, prompt_type: PromptType) -> bool:
        with self._lock:
            return prompt_type in self._cache
