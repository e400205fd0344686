import logging

import pytest

from ace_prime.pipeline import (
    DuplicateStageNameError,
    MissingLoggerError,
    Pipeline,
    PipelineBuilder,
)


def test_build_requires_logger(stage):
    builder = PipelineBuilder().add_stage(stage("a"))

    with pytest.raises(MissingLoggerError):
        builder.build()


def test_builder_chains_and_preserves_order(stage, pipeline_logger):
    builder = PipelineBuilder()

    assert builder.add_stage(stage("a")) is builder
    assert builder.mark_critical("a") is builder
    assert builder.with_logger(pipeline_logger) is builder
    assert builder.with_timeout(2.5) is builder

    pipeline = builder.add_stage(stage("b", ["a"])).add_stage(stage("c")).build()

    assert isinstance(pipeline, Pipeline)
    assert pipeline.stage_names == ["a", "b", "c"]
    assert pipeline.critical_stages == frozenset({"a"})
    assert pipeline.config.timeout_seconds == 2.5


def test_continue_on_error_defaults_to_false(stage, pipeline_logger):
    pipeline = PipelineBuilder().add_stage(stage("a")).with_logger(pipeline_logger).build()

    assert pipeline.config.continue_on_error is False
    assert pipeline.config.timeout_seconds is None
    assert pipeline.config.trace_file is None


def test_continue_on_error_and_trace_file(stage, pipeline_logger, tmp_path):
    pipeline = (
        PipelineBuilder()
        .add_stage(stage("a"))
        .with_logger(pipeline_logger)
        .continue_on_error(True)
        .with_trace_file(str(tmp_path / "t.json"))
        .build()
    )

    assert pipeline.config.continue_on_error is True
    assert pipeline.config.trace_file == tmp_path / "t.json"


def test_build_propagates_validation_errors(stage, pipeline_logger):
    builder = PipelineBuilder().add_stage(stage("a")).add_stage(stage("a")).with_logger(pipeline_logger)

    with pytest.raises(DuplicateStageNameError):
        builder.build()


@pytest.mark.parametrize("timeout", [0, -3])
def test_non_positive_timeout_disables_budget(stage, pipeline_logger, timeout):
    pipeline = PipelineBuilder().add_stage(stage("a")).with_logger(pipeline_logger).with_timeout(timeout).build()

    assert pipeline.config.timeout_seconds is None
