"""
Generic stage pipeline.

Build one with :class:`PipelineBuilder`::

    pipeline = (
        PipelineBuilder()
        .add_stage(IdentityStage())
        .add_stage(PersonaStage(selector))
        .mark_critical("persona_selection")
        .with_logger(logger)
        .build()
    )
    result = await pipeline.execute(message)

Construction validates the stage graph; ``execute`` never raises for a stage
failure and reports it on the returned :class:`PipelineExecutionResult`.
"""

from __future__ import annotations

from .builder import PipelineBuilder
from .errors import (
    DependencyOrderViolationError,
    DuplicateStageNameError,
    EmptyPipelineError,
    MissingDependencyError,
    MissingLoggerError,
    OrderingViolationError,
    PipelineConfigurationError,
    PipelineError,
    StageError,
    StageExecutionError,
    StageResultNotFoundError,
    StageTimeoutError,
    UnknownDependencyError,
)
from .orchestrator import Pipeline, PipelineConfig, PipelineExecutionResult
from .stage import PipelineContext, PipelineStage, StageFailure, StageResult

__all__ = [
    "DependencyOrderViolationError",
    "DuplicateStageNameError",
    "EmptyPipelineError",
    "MissingDependencyError",
    "MissingLoggerError",
    "OrderingViolationError",
    "Pipeline",
    "PipelineBuilder",
    "PipelineConfig",
    "PipelineConfigurationError",
    "PipelineContext",
    "PipelineError",
    "PipelineExecutionResult",
    "PipelineStage",
    "StageError",
    "StageExecutionError",
    "StageFailure",
    "StageResult",
    "StageResultNotFoundError",
    "StageTimeoutError",
    "UnknownDependencyError",
]
