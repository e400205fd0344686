import json
from datetime import datetime

from ace_prime.pipeline import PipelineContext, StageResult
from ace_prime.pipeline.tracer import PipelineTracer


def test_tracer_capture_and_finish(tmp_path):
    trace_file = tmp_path / "runtime" / "pipeline_trace.json"
    tracer = PipelineTracer(trace_file)

    context = PipelineContext(message="msg")
    context.add_result(
        StageResult(data={"k": 1}, stage_name="a", completed_at=datetime.now(), metadata={"execution_time_ms": 1.5})
    )
    tracer.capture("a", context)

    context.record_failure("b", ValueError("nope"))
    tracer.capture("b", context, status="failed")

    tracer.finish(success=False, output={"k": 1})

    data = json.loads(trace_file.read_text())
    assert data["trace_id"].startswith("trace_")
    assert data["success"] is False
    assert data["output_type"] == "dict"

    first, second = data["steps"]
    assert first["stage"] == "a"
    assert first["metadata"] == {"execution_time_ms": 1.5}
    assert first["output_type"] == "dict"
    assert "errors" not in first
    assert second["status"] == "failed"
    assert second["errors"] == [{"stage": "b", "error": "nope"}]
    assert "latency_ms" in second and "elapsed_ms" in second
