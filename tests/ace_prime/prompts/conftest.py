import pytest

from ace_prime.prompts import PromptLoader

BUTLER = "You are the butler. Serve the owner quietly."
SUPERVISOR = "You are the supervisor. Be structured."
DEVELOPER = "Keep replies short and accurate."


@pytest.fixture
def prompts_dir(tmp_path):
    (tmp_path / "butler.system.md").write_text(BUTLER, encoding="utf-8")
    (tmp_path / "supervisor.system.md").write_text(SUPERVISOR, encoding="utf-8")
    (tmp_path / "developer.md").write_text(DEVELOPER, encoding="utf-8")
    return tmp_path


@pytest.fixture
def loader(prompts_dir):
    return PromptLoader(prompts_dir)
