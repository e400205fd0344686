import os

from .loader import as_bool


class PipelineSettings:
    def __init__(self, config: dict | None = None) -> None:
        pipeline_cfg = (config or {}).get("aceprime", {}).get("pipeline", {})
        self.CONTINUE_ON_ERROR: bool = as_bool(
            pipeline_cfg.get("continue_on_error", os.getenv("PIPELINE_CONTINUE_ON_ERROR", "0"))
        )

        timeout_raw = pipeline_cfg.get("timeout_seconds", os.getenv("PIPELINE_TIMEOUT_SECONDS", "60"))
        timeout = float(timeout_raw) if str(timeout_raw).strip() else 0.0
        # A zero or negative timeout disables the per-run budget.
        self.TIMEOUT_SECONDS: float | None = timeout if timeout > 0 else None

        trace_raw = pipeline_cfg.get("trace_file", os.getenv("PIPELINE_TRACE_FILE", ""))
        self.TRACE_FILE: str | None = str(trace_raw).strip() or None
