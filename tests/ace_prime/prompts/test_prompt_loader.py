import pytest

from ace_prime.prompts import (
    PromptEmptyError,
    PromptLoader,
    PromptNotFoundError,
    PromptType,
    PromptValidationError,
)


def test_load_reads_file(loader):
    assert loader.load(PromptType.DEVELOPER) == "Keep replies short and accurate."


def test_missing_file_raises_not_found(tmp_path):
    loader = PromptLoader(tmp_path)

    with pytest.raises(PromptNotFoundError) as excinfo:
        loader.load(PromptType.BUTLER_SYSTEM)

    assert excinfo.value.prompt_name == "butler.system.md"


def test_whitespace_file_raises_empty(prompts_dir):
    (prompts_dir / "developer.md").write_text("   \n\t", encoding="utf-8")

    with pytest.raises(PromptEmptyError):
        PromptLoader(prompts_dir).load(PromptType.DEVELOPER)


@pytest.mark.parametrize("text", ["Hello ${name}, welcome aboard", "Hello {{ name }}, welcome aboard"])
def test_placeholders_rejected(prompts_dir, text):
    (prompts_dir / "developer.md").write_text(text, encoding="utf-8")

    with pytest.raises(PromptValidationError):
        PromptLoader(prompts_dir).load(PromptType.DEVELOPER)


def test_length_limits(prompts_dir):
    (prompts_dir / "developer.md").write_text("too short", encoding="utf-8")
    with pytest.raises(PromptValidationError):
        PromptLoader(prompts_dir).load(PromptType.DEVELOPER)

    (prompts_dir / "developer.md").write_text("x" * 50, encoding="utf-8")
    with pytest.raises(PromptValidationError):
        PromptLoader(prompts_dir, max_length=20).load(PromptType.DEVELOPER)


def test_cached_mode_serves_first_read(prompts_dir, loader):
    first = loader.load(PromptType.DEVELOPER)
    (prompts_dir / "developer.md").write_text("A completely different prompt", encoding="utf-8")

    assert loader.load(PromptType.DEVELOPER) == first
    assert loader.is_cached(PromptType.DEVELOPER)


def test_hot_reload_reads_every_call(prompts_dir):
    loader = PromptLoader(prompts_dir, hot_reload=True)
    loader.load(PromptType.DEVELOPER)
    (prompts_dir / "developer.md").write_text("A completely different prompt", encoding="utf-8")

    assert loader.load(PromptType.DEVELOPER) == "A completely different prompt"
    assert not loader.is_cached(PromptType.DEVELOPER)


def test_clear_cache_forces_reload(prompts_dir, loader):
    loader.load(PromptType.DEVELOPER)
    (prompts_dir / "developer.md").write_text("A completely different prompt", encoding="utf-8")

    loader.clear_cache()

    assert loader.cache_stats()["size"] == 0
    assert loader.load(PromptType.DEVELOPER) == "A completely different prompt"


def test_preload_all(loader):
    loader.preload_all()

    stats = loader.cache_stats()
    assert stats["size"] == 3
    assert set(stats["cached_prompts"]) == {p.value for p in PromptType}


def test_preload_all_reports_every_failure(prompts_dir):
    (prompts_dir / "butler.system.md").unlink()
    (prompts_dir / "developer.md").write_text("", encoding="utf-8")

    with pytest.raises(PromptValidationError) as excinfo:
        PromptLoader(prompts_dir).preload_all()

    message = str(excinfo.value)
    assert "2 prompt(s)" in message
    assert "butler.system.md" in message
    assert "developer.md" in message


def test_undecodable_file_is_aggregated_by_preload(prompts_dir):
    (prompts_dir / "developer.md").write_bytes(b"\xff\xfe bad bytes here ok")

    with pytest.raises(PromptValidationError) as excinfo:
        PromptLoader(prompts_dir).preload_all()

    message = str(excinfo.value)
    assert "1 prompt(s)" in message
    assert "developer.md" in message
