"""Fluent assembly of :class:`~ace_prime.pipeline.orchestrator.Pipeline` objects."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import MissingLoggerError
from .orchestrator import Pipeline, PipelineConfig
from .stage import PipelineStage

__all__ = ["PipelineBuilder"]


class PipelineBuilder:
    """
    Collects stages and settings, then builds a validated pipeline.

    Stages run in the order they are added. All graph validation happens in
    :class:`Pipeline` itself, so ``build`` raises the same errors a direct
    construction would.
    """

    def __init__(self) -> None:
        self._stages: list[PipelineStage] = []
        self._critical: list[str] = []
        self._logger: logging.Logger | None = None
        self._timeout_seconds: float | None = None
        self._continue_on_error: bool | None = None
        self._trace_file: Path | None = None

    def add_stage(self, stage: PipelineStage) -> "PipelineBuilder":
        self._stages.append(stage)
        return self

    def mark_critical(self, stage_name: str) -> "PipelineBuilder":
        """A critical stage stops the run when it fails, whatever the config says."""
        self._critical.append(stage_name)
        return self

    def with_logger(self, logger: logging.Logger) -> "PipelineBuilder":
        self._logger = logger
        return self

    def with_timeout(self, timeout_seconds: float | None) -> "PipelineBuilder":
        """Zero or a negative value disables the run budget."""
        self._timeout_seconds = timeout_seconds if timeout_seconds and timeout_seconds > 0 else None
        return self

    def continue_on_error(self, enabled: bool) -> "PipelineBuilder":
        self._continue_on_error = enabled
        return self

    def with_trace_file(self, trace_file: str | Path | None) -> "PipelineBuilder":
        self._trace_file = Path(trace_file) if trace_file else None
        return self

    def build(self) -> Pipeline:
        if self._logger is None:
            raise MissingLoggerError()

        config = PipelineConfig(
            logger=self._logger,
            timeout_seconds=self._timeout_seconds,
            continue_on_error=self._continue_on_error if self._continue_on_error is not None else False,
            trace_file=self._trace_file,
        )
        return Pipeline(list(self._stages), config, self._critical)
