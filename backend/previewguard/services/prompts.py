"""Prompt library — instruction texts loaded from disk once per process."""

import threading
from functools import lru_cache
from pathlib import Path
from typing import Optional

import structlog

from previewguard.config import get_settings

logger = structlog.get_logger()

DEFAULT_PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"

SANITIZE_PROMPT = "react_code_sanitizer.md"


class PromptLibrary:
    """Read-mostly cache of prompt files.

    Lifecycle:
        - An entry is read from disk the first time it is requested.
        - Once stored it is never replaced or mutated (str is immutable).
        - Population happens under a lock so concurrent first callers read the
          file once; reads of an already-loaded entry take no lock.
    """

    def __init__(self, prompts_dir: Path):
        self.prompts_dir = Path(prompts_dir)
        self._cache: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, name: str) -> str:
        """Return the prompt text, loading it on first use."""
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        with self._lock:
            if name not in self._cache:
                path = self.prompts_dir / name
                text = path.read_text(encoding="utf-8")
                self._cache[name] = text
                logger.info("prompt_loaded", prompt=name, length=len(text))
            return self._cache[name]

    def is_loaded(self, name: str) -> bool:
        return name in self._cache


@lru_cache
def get_prompt_library() -> PromptLibrary:
    prompts_dir: Optional[str] = get_settings().PROMPTS_DIR
    return PromptLibrary(Path(prompts_dir) if prompts_dir else DEFAULT_PROMPTS_DIR)


def get_sanitize_prompt() -> str:
    """System instruction for the React code sanitizer."""
    return get_prompt_library().get(SANITIZE_PROMPT)
