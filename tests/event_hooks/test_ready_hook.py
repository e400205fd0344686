from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from ace_prime.event_hooks import ready_hook
from ace_prime.prompts import PromptNotFoundError

CLIENT = SimpleNamespace(user=SimpleNamespace(name="ACE Prime", id=999), guilds=[object()])


@pytest.fixture
def loader(monkeypatch):
    loader = MagicMock()
    monkeypatch.setattr(ready_hook.response, "get_prompt_loader", lambda: loader)
    return loader


@pytest.mark.asyncio
async def test_fallback_mode_skips_preload(monkeypatch, loader):
    monkeypatch.setattr(ready_hook, "ai_available", lambda: False)

    await ready_hook.handle(CLIENT)

    loader.preload_all.assert_not_called()


@pytest.mark.asyncio
async def test_preloads_prompts_and_builds_pipeline(monkeypatch, loader):
    monkeypatch.setattr(ready_hook, "ai_available", lambda: True)
    pipeline = SimpleNamespace(stage_names=["a", "b"])
    monkeypatch.setattr(ready_hook.response, "get_response_pipeline", lambda: pipeline)

    await ready_hook.handle(CLIENT)

    loader.preload_all.assert_called_once_with()


@pytest.mark.asyncio
async def test_preload_failure_propagates(monkeypatch, loader):
    monkeypatch.setattr(ready_hook, "ai_available", lambda: True)
    loader.preload_all.side_effect = PromptNotFoundError("developer.md", "/nowhere/developer.md")

    with pytest.raises(PromptNotFoundError):
        await ready_hook.handle(CLIENT)
