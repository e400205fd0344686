import logging

import pytest

from ace_prime.pipeline import PipelineStage


class RecordingStage(PipelineStage):
    """Stage that records its inputs and returns ``"<name>(<input>)"``."""

    def __init__(self, name, dependencies=(), *, fail=None):
        super().__init__(name, dependencies)
        self.fail = fail
        self.inputs = []

    async def process(self, data, context):
        self.inputs.append(data)
        if self.fail is not None:
            raise self.fail
        return f"{self.name}({data})"


@pytest.fixture
def stage():
    return RecordingStage


@pytest.fixture
def pipeline_logger():
    return logging.getLogger("tests.pipeline")
