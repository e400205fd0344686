"""
Stage contract and per-run state for the message pipeline.
"""
from __future__ import annotations

import inspect
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from .errors import MissingDependencyError, StageExecutionError, StageResultNotFoundError

__all__ = ["PipelineContext", "PipelineStage", "StageFailure", "StageResult"]


@dataclass(frozen=True, slots=True)
class StageResult:
    """Output of one stage. ``data`` is handed verbatim to the next stage."""

    data: Any
    stage_name: str
    completed_at: datetime
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class StageFailure:
    stage: str
    error: BaseException


@dataclass(slots=True)
class PipelineContext:
    """
    Mutable accumulator for a single pipeline run.
    """
    # The inbound record (a discord.Message in production).
    message: Any

    # Completed stage results, in execution order. Append-only per run.
    stage_results: dict[str, StageResult] = field(default_factory=dict)

    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # Monotonic clock reading taken at creation; used for elapsed time.
    started_monotonic: float = field(default_factory=time.monotonic)

    current_stage: str | None = None

    errors: list[StageFailure] = field(default_factory=list)

    def add_result(self, result: StageResult) -> None:
        if result.stage_name in self.stage_results:
            raise ValueError(
                f"Result for stage '{result.stage_name}' was already recorded in this run"
            )
        self.stage_results[result.stage_name] = result

    def record_failure(self, stage: str, error: BaseException) -> None:
        self.errors.append(StageFailure(stage=stage, error=error))

    @property
    def completed_stages(self) -> list[str]:
        return list(self.stage_results)

    def elapsed_ms(self) -> float:
        return (time.monotonic() - self.started_monotonic) * 1000


class PipelineStage(ABC):
    """
    Abstract base class for a single named step in the pipeline.

    Subclasses implement :meth:`process`. The orchestrator only ever calls
    :meth:`run`, which checks declared dependencies, times the call and wraps
    any failure in :class:`StageExecutionError`.

    Stages are shared between concurrent runs, so per-run state belongs on the
    :class:`PipelineContext`, never on ``self``.
    """

    def __init__(self, name: str, dependencies: Iterable[str] = ()) -> None:
        if not name:
            raise ValueError("Stage name must be a non-empty string")
        self._name = name
        # Ordered set: keeps declaration order, drops repeats.
        self._dependencies = tuple(dict.fromkeys(dependencies))

    @property
    def name(self) -> str:
        return self._name

    @property
    def dependencies(self) -> tuple[str, ...]:
        return self._dependencies

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._name!r}, dependencies={list(self._dependencies)!r})"

    @abstractmethod
    async def process(self, data: Any, context: PipelineContext) -> Any:
        """
        Transform the previous stage's output.

        Args:
            data: Output of the previous stage (the inbound record for the first stage).
            context: The current run's context.

        Returns:
            The value passed to the next stage.
        """
        pass

    def validate_dependencies(self, context: PipelineContext) -> None:
        for dependency in self._dependencies:
            if dependency not in context.stage_results:
                raise MissingDependencyError(self._name, dependency, context.completed_stages)

    def get_stage_result(self, context: PipelineContext, stage_name: str) -> Any:
        """Return the ``data`` produced earlier in this run by ``stage_name``."""

        result = context.stage_results.get(stage_name)
        if result is None:
            raise StageResultNotFoundError(self._name, stage_name)
        return result.data

    async def run(self, data: Any, context: PipelineContext) -> StageResult:
        self.validate_dependencies(context)

        context.current_stage = self._name
        started = time.monotonic()

        try:
            output = self.process(data, context)
            # Concrete stages may be plain functions; only await real awaitables.
            if inspect.isawaitable(output):
                output = await output
        except Exception as exc:
            context.record_failure(self._name, exc)
            raise StageExecutionError(self._name, exc) from exc

        return StageResult(
            data=output,
            stage_name=self._name,
            completed_at=datetime.now(timezone.utc),
            metadata={
                "execution_time_ms": round((time.monotonic() - started) * 1000, 2),
                "pipeline_elapsed_ms": round(context.elapsed_ms(), 2),
            },
        )
