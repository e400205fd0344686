"""
Debug tracer for the stage pipeline.
Captures a snapshot after each stage and writes the run to disk as JSON.
"""
from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any

from .stage import PipelineContext

logger = logging.getLogger(__name__)


class PipelineTracer:
    """
    Records the evolution of a single pipeline run.
    """

    def __init__(self, trace_file: str | Path) -> None:
        self.trace_file = Path(trace_file)
        self.steps: list[dict[str, Any]] = []
        self.start_time = time.time()
        self.last_step_time = self.start_time
        self.last_error_count = 0
        self.trace_id = f"trace_{int(self.start_time * 1000)}"

    def capture(self, stage_name: str, context: PipelineContext, *, status: str = "ok") -> None:
        """
        Capture a snapshot of the context after a stage ran (or failed).
        """
        now = time.time()
        latency_ms = (now - self.last_step_time) * 1000
        elapsed_ms = (now - self.start_time) * 1000

        new_errors = context.errors[self.last_error_count:]

        snapshot: dict[str, Any] = {
            "stage": stage_name,
            "status": status,
            "latency_ms": round(latency_ms, 2),
            "elapsed_ms": round(elapsed_ms, 2),
            "completed_stages": context.completed_stages,
        }

        result = context.stage_results.get(stage_name)
        if result is not None:
            snapshot["metadata"] = dict(result.metadata)
            snapshot["output_type"] = type(result.data).__name__

        if new_errors:
            snapshot["errors"] = [
                {"stage": failure.stage, "error": str(failure.error)} for failure in new_errors
            ]

        self.steps.append(snapshot)
        self.last_step_time = now
        self.last_error_count = len(context.errors)

    def finish(self, *, success: bool, output: Any = None) -> None:
        """
        Write the trace to disk. Tracing never fails the run.
        """
        try:
            self.trace_file.parent.mkdir(parents=True, exist_ok=True)

            total_latency_ms = (time.time() - self.start_time) * 1000

            data = {
                "trace_id": self.trace_id,
                "start_time": self.start_time,
                "total_latency_ms": round(total_latency_ms, 2),
                "success": success,
                "output_type": type(output).__name__,
                "steps": self.steps,
            }

            with self.trace_file.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, default=str)

        except OSError as e:
            logger.error("Failed to write pipeline trace: %s", e)
