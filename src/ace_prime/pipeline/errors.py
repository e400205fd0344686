"""
Exception hierarchy for the stage pipeline.

Two families exist. :class:`PipelineConfigurationError` subclasses are raised
while a pipeline is being assembled and mean the bot must not start.
:class:`StageError` subclasses are raised while a single message is being
processed; the orchestrator records them on the run instead of letting them
escape ``Pipeline.execute``.
"""

from __future__ import annotations

from typing import Iterable

__all__ = [
    "PipelineError",
    "PipelineConfigurationError",
    "EmptyPipelineError",
    "DuplicateStageNameError",
    "UnknownDependencyError",
    "DependencyOrderViolationError",
    "MissingLoggerError",
    "OrderingViolationError",
    "StageError",
    "MissingDependencyError",
    "StageResultNotFoundError",
    "StageExecutionError",
    "StageTimeoutError",
]


class PipelineError(Exception):
    """Root of every pipeline-related failure."""


# --------------------------------------------------------------------------- #
# Construction-time errors
# --------------------------------------------------------------------------- #


class PipelineConfigurationError(PipelineError):
    """The pipeline was assembled incorrectly."""


class EmptyPipelineError(PipelineConfigurationError):
    def __init__(self) -> None:
        super().__init__("Pipeline must have at least one stage")


class DuplicateStageNameError(PipelineConfigurationError):
    def __init__(self, stage_name: str) -> None:
        self.stage_name = stage_name
        super().__init__(f"Duplicate stage name: '{stage_name}'")


class UnknownDependencyError(PipelineConfigurationError):
    def __init__(self, stage_name: str, dependency: str) -> None:
        self.stage_name = stage_name
        self.dependency = dependency
        super().__init__(
            f"Stage '{stage_name}' depends on '{dependency}' which is not in the pipeline"
        )


class DependencyOrderViolationError(PipelineConfigurationError):
    def __init__(
        self,
        stage_name: str,
        stage_index: int,
        dependency: str,
        dependency_index: int,
    ) -> None:
        self.stage_name = stage_name
        self.stage_index = stage_index
        self.dependency = dependency
        self.dependency_index = dependency_index
        super().__init__(
            f"Stage '{stage_name}' (position {stage_index}) depends on '{dependency}' "
            f"(position {dependency_index}); dependencies must come before dependents"
        )


class MissingLoggerError(PipelineConfigurationError):
    def __init__(self) -> None:
        super().__init__("Pipeline requires a logger")


class OrderingViolationError(PipelineConfigurationError):
    """Two stages are missing or not in the required before/after order."""

    def __init__(
        self,
        before: str,
        before_index: int | None,
        after: str,
        after_index: int | None,
        reason: str,
    ) -> None:
        self.before = before
        self.before_index = before_index
        self.after = after
        self.after_index = after_index
        super().__init__(
            f"{reason} (before='{before}' at {before_index}, after='{after}' at {after_index})"
        )


# --------------------------------------------------------------------------- #
# Per-run errors
# --------------------------------------------------------------------------- #


class StageError(PipelineError):
    """A stage could not produce a result for the current run."""

    def __init__(self, stage_name: str, message: str) -> None:
        self.stage_name = stage_name
        super().__init__(message)


class MissingDependencyError(StageError):
    def __init__(self, stage_name: str, dependency: str, completed: Iterable[str]) -> None:
        self.dependency = dependency
        self.completed = list(completed)
        super().__init__(
            stage_name,
            f"Stage '{stage_name}' requires '{dependency}' to complete first. "
            f"Completed stages: [{', '.join(self.completed)}]",
        )


class StageResultNotFoundError(StageError):
    def __init__(self, stage_name: str, requested: str) -> None:
        self.requested = requested
        super().__init__(
            stage_name,
            f"Stage '{stage_name}' attempted to access result from '{requested}' "
            "but that stage has not completed",
        )


class StageExecutionError(StageError):
    """Wraps whatever the stage transformation raised; see ``cause``."""

    def __init__(self, stage_name: str, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(stage_name, f"Stage '{stage_name}' failed: {cause}")


class StageTimeoutError(StageError):
    def __init__(self, stage_name: str, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(
            stage_name,
            f"Pipeline timed out after {timeout_seconds:g}s at stage '{stage_name}'",
        )
