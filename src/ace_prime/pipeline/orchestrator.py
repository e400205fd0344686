"""
Core engine for the message pipeline.

A :class:`Pipeline` owns an ordered list of stages and validates their
dependency graph once, when it is constructed. ``execute`` then runs the
stages strictly in that order for one inbound message, threading each stage's
output into the next and deciding per failure whether the run can go on.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

from .errors import (
    DependencyOrderViolationError,
    DuplicateStageNameError,
    EmptyPipelineError,
    MissingDependencyError,
    OrderingViolationError,
    PipelineConfigurationError,
    StageExecutionError,
    StageTimeoutError,
    UnknownDependencyError,
)
from .stage import PipelineContext, PipelineStage, StageFailure, StageResult
from .tracer import PipelineTracer

__all__ = ["Pipeline", "PipelineConfig", "PipelineExecutionResult"]


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Run configuration shared by every execution of a pipeline."""

    logger: logging.Logger
    # Budget for a whole run, in seconds. None disables it.
    timeout_seconds: float | None = None
    # Keep going after a non-critical stage fails.
    continue_on_error: bool = False
    # When set, every run writes a JSON trace here.
    trace_file: Path | None = None

    def __post_init__(self) -> None:
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise PipelineConfigurationError(
                f"timeout_seconds must be positive or None, got {self.timeout_seconds!r}"
            )


@dataclass(frozen=True, slots=True)
class PipelineExecutionResult:
    """Outcome of one ``Pipeline.execute`` call."""

    output: Any
    stage_results: Mapping[str, StageResult]
    execution_time_ms: float
    success: bool
    errors: list[StageFailure] = field(default_factory=list)

    @property
    def failed_stage(self) -> str | None:
        return self.errors[0].stage if self.errors else None


class Pipeline:
    """
    Orchestrates the execution of pipeline stages.

    Guarantees:
    - stages run one at a time, in the order they were given
    - every declared dependency exists and runs before its dependent
    - a failing critical stage stops the run immediately
    - a failed run is reported as data; ``execute`` does not raise for it
    """

    def __init__(
        self,
        stages: Sequence[PipelineStage],
        config: PipelineConfig,
        critical_stages: Iterable[str] = (),
    ) -> None:
        self._stages: tuple[PipelineStage, ...] = tuple(stages)
        self._config = config
        self._logger = config.logger
        self._critical: frozenset[str] = frozenset(critical_stages)
        self._index: dict[str, int] = {}

        self._validate()

    # ------------------------------------------------------------------ #
    # Construction-time validation
    # ------------------------------------------------------------------ #

    def _validate(self) -> None:
        if not self._stages:
            raise EmptyPipelineError()

        for position, stage in enumerate(self._stages):
            if not isinstance(stage, PipelineStage):
                raise TypeError(f"Pipeline expects PipelineStage instances, got {type(stage).__name__}")
            if stage.name in self._index:
                raise DuplicateStageNameError(stage.name)
            self._index[stage.name] = position

        # The list is a total order, so index(dep) < index(stage) on every
        # edge is enough to rule out cycles.
        for position, stage in enumerate(self._stages):
            for dependency in stage.dependencies:
                dep_position = self._index.get(dependency)
                if dep_position is None:
                    raise UnknownDependencyError(stage.name, dependency)
                if dep_position >= position:
                    raise DependencyOrderViolationError(stage.name, position, dependency, dep_position)

        unknown_critical = self._critical.difference(self._index)
        if unknown_critical:
            self._logger.warning(
                "Critical stage(s) not present in pipeline: %s", sorted(unknown_critical)
            )

        self._logger.info(
            "Pipeline validated successfully stages=%s critical=%s",
            self.stage_names,
            sorted(self._critical),
        )

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    @property
    def stage_names(self) -> list[str]:
        return [stage.name for stage in self._stages]

    @property
    def critical_stages(self) -> frozenset[str]:
        return self._critical

    @property
    def config(self) -> PipelineConfig:
        return self._config

    def has_stage(self, stage_name: str) -> bool:
        return stage_name in self._index

    def is_critical(self, stage_name: str) -> bool:
        return stage_name in self._critical

    def validate_ordering(self, before: str, after: str) -> None:
        """
        Assert that stage ``before`` is present and runs strictly before ``after``.

        Used once after building a pipeline, e.g. to guarantee persona
        selection happens before the prompt is built.
        """
        before_index = self._index.get(before)
        after_index = self._index.get(after)

        if before_index is None:
            raise OrderingViolationError(
                before, before_index, after, after_index,
                f"Stage '{before}' is missing from the pipeline",
            )
        if after_index is None:
            raise OrderingViolationError(
                before, before_index, after, after_index,
                f"Stage '{after}' is missing from the pipeline",
            )
        if before_index >= after_index:
            raise OrderingViolationError(
                before, before_index, after, after_index,
                f"Stage '{before}' must run before '{after}'",
            )

        self._logger.info(
            "Stage ordering validated before=%s (%d) after=%s (%d)",
            before, before_index, after, after_index,
        )

    # ------------------------------------------------------------------ #
    # Execution
    # ------------------------------------------------------------------ #

    async def execute(self, message: Any) -> PipelineExecutionResult:
        """
        Run every stage for ``message`` and return the aggregate result.
        """
        if not self._stages:
            raise RuntimeError("Cannot execute a pipeline without stages")

        context = PipelineContext(message=message)
        tracer = PipelineTracer(self._config.trace_file) if self._config.trace_file else None
        message_id = getattr(message, "id", None)

        self._logger.info(
            "Pipeline execution started message_id=%s stages=%d", message_id, len(self._stages)
        )

        previous_output: Any = message

        for stage in self._stages:
            self._logger.debug(
                "Executing stage %s message_id=%s previous=%s",
                stage.name, message_id, context.completed_stages,
            )

            try:
                result = await self._run_stage(stage, previous_output, context)
            except StageTimeoutError as exc:
                context.record_failure(stage.name, exc)
                self._logger.error("Stage timed out: %s message_id=%s", stage.name, message_id)
                if tracer:
                    tracer.capture(stage.name, context, status="timeout")
                return self._abort(context, previous_output, tracer, message_id)
            except StageExecutionError as exc:
                # Already recorded on the context by the stage itself.
                error: Exception = exc
            except MissingDependencyError as exc:
                context.record_failure(stage.name, exc)
                error = exc
            else:
                context.add_result(result)
                previous_output = result.data
                self._logger.debug(
                    "Stage completed: %s message_id=%s execution_time_ms=%s",
                    stage.name, message_id, result.metadata.get("execution_time_ms"),
                )
                if tracer:
                    tracer.capture(stage.name, context)
                continue

            is_critical = stage.name in self._critical
            self._logger.error(
                "Stage failed: %s message_id=%s critical=%s error=%s",
                stage.name, message_id, is_critical, error,
            )
            if tracer:
                tracer.capture(stage.name, context, status="failed")

            if is_critical or not self._config.continue_on_error:
                return self._abort(context, previous_output, tracer, message_id)

            # Non-critical: the failed stage has no output, so the next stage
            # receives the last successful one.

        execution_time_ms = round(context.elapsed_ms(), 2)
        success = not context.errors

        self._logger.info(
            "Pipeline execution completed message_id=%s execution_time_ms=%s completed=%d/%d errors=%d",
            message_id, execution_time_ms, len(context.stage_results), len(self._stages), len(context.errors),
        )
        if tracer:
            tracer.finish(success=success, output=previous_output)

        return PipelineExecutionResult(
            output=previous_output,
            stage_results=dict(context.stage_results),
            execution_time_ms=execution_time_ms,
            success=success,
            errors=list(context.errors),
        )

    async def _run_stage(
        self, stage: PipelineStage, data: Any, context: PipelineContext
    ) -> StageResult:
        timeout = self._config.timeout_seconds
        if timeout is None:
            return await stage.run(data, context)

        remaining = timeout - context.elapsed_ms() / 1000
        if remaining <= 0:
            raise StageTimeoutError(stage.name, timeout)

        try:
            return await asyncio.wait_for(stage.run(data, context), timeout=remaining)
        except asyncio.TimeoutError as exc:
            raise StageTimeoutError(stage.name, timeout) from exc

    def _abort(
        self,
        context: PipelineContext,
        previous_output: Any,
        tracer: PipelineTracer | None,
        message_id: Any,
    ) -> PipelineExecutionResult:
        execution_time_ms = round(context.elapsed_ms(), 2)

        self._logger.error(
            "Pipeline execution stopped message_id=%s failed_stage=%s completed=%s execution_time_ms=%s",
            message_id, context.errors[-1].stage if context.errors else context.current_stage,
            context.completed_stages, execution_time_ms,
        )
        if tracer:
            tracer.finish(success=False, output=previous_output)

        return PipelineExecutionResult(
            output=previous_output,
            stage_results=dict(context.stage_results),
            execution_time_ms=execution_time_ms,
            success=False,
            errors=list(context.errors),
        )
