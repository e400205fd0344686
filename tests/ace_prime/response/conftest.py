from unittest.mock import MagicMock

import pytest

from ace_prime.identity import IdentityResolver, OwnerValidator
from ace_prime.persona import PersonaSelector
from ace_prime.prompts import PromptLoader


@pytest.fixture
def loader(tmp_path):
    (tmp_path / "butler.system.md").write_text("BUTLER: serve the owner.", encoding="utf-8")
    (tmp_path / "supervisor.system.md").write_text("SUPERVISOR: guide the member.", encoding="utf-8")
    (tmp_path / "developer.md").write_text("DEVELOPER: keep it short.", encoding="utf-8")
    return PromptLoader(tmp_path)


@pytest.fixture
def selector():
    return PersonaSelector(IdentityResolver(), OwnerValidator("1000"), MagicMock())
