"""Tests for the prompt library."""

import threading
from pathlib import Path

import pytest

from previewguard.services.prompts import (
    SANITIZE_PROMPT,
    PromptLibrary,
    get_prompt_library,
    get_sanitize_prompt,
)


@pytest.fixture
def prompts_dir(tmp_path):
    (tmp_path / "greeting.md").write_text("Say hello.", encoding="utf-8")
    return tmp_path


class TestPromptLibrary:
    def test_loads_on_first_use(self, prompts_dir):
        library = PromptLibrary(prompts_dir)
        assert not library.is_loaded("greeting.md")

        assert library.get("greeting.md") == "Say hello."
        assert library.is_loaded("greeting.md")

    def test_cached_entry_never_changes(self, prompts_dir):
        library = PromptLibrary(prompts_dir)
        first = library.get("greeting.md")

        (prompts_dir / "greeting.md").write_text("Say goodbye.", encoding="utf-8")

        assert library.get("greeting.md") is first

    def test_missing_file_raises(self, prompts_dir):
        library = PromptLibrary(prompts_dir)
        with pytest.raises(FileNotFoundError):
            library.get("missing.md")
        assert not library.is_loaded("missing.md")

    def test_concurrent_first_use_reads_once(self, prompts_dir, monkeypatch):
        reads = []
        original_read_text = Path.read_text

        def counting_read_text(self, *args, **kwargs):
            reads.append(self.name)
            return original_read_text(self, *args, **kwargs)

        monkeypatch.setattr(Path, "read_text", counting_read_text)

        library = PromptLibrary(prompts_dir)
        results = []
        threads = [
            threading.Thread(target=lambda: results.append(library.get("greeting.md")))
            for _ in range(8)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert reads == ["greeting.md"]
        assert results == ["Say hello."] * 8


class TestSanitizePrompt:
    def test_bundled_prompt(self):
        get_prompt_library.cache_clear()
        prompt = get_sanitize_prompt()

        assert "Preview" in prompt
        assert "END OF CODE" in prompt
        assert get_prompt_library().is_loaded(SANITIZE_PROMPT)

    def test_prompts_dir_override(self, tmp_path, monkeypatch):
        (tmp_path / SANITIZE_PROMPT).write_text("Custom sanitizer prompt", encoding="utf-8")
        monkeypatch.setenv("PROMPTS_DIR", str(tmp_path))
        get_prompt_library.cache_clear()

        try:
            assert get_sanitize_prompt() == "Custom sanitizer prompt"
        finally:
            get_prompt_library.cache_clear()
