"""
Shared fixtures for PreviewGuard tests.

Provides sample components and a scripted CodeTransformer so the sanitizer
loop can be exercised without a network call.
"""

import os

import pytest

# Set test environment variables BEFORE importing the app
os.environ["ADMIN_API_KEY"] = ""
os.environ["LLM_API_KEY"] = "test-key"
os.environ["PROMPTS_DIR"] = ""

from previewguard.config import get_settings
from previewguard.services.transformer import CodeTransformer, CompletionStatus, TransformResult


VALID_PREVIEW = """function Preview() {
  const [count, setCount] = React.useState(0)
  return (
    <div className="p-8">
      <h1>Welcome to the bakery</h1>
      <button onClick={() => setCount(count + 1)}>Clicked {count} times</button>
    </div>
  )
}"""

RAW_GENERATED = """'use client'
import React, { useState } from 'react'
import { Phone } from 'lucide-react'

interface HeroProps {
  title: string
}

export default function HomePage() {
  const [open, setOpen] = useState(false)
  return (
    <main className="min-h-screen">
      <h1>Fresh bread every morning</h1>
      <button onClick={() => setOpen(!open)}>Menu</button>
    </main>
  )
}
"""


class FakeTransformer(CodeTransformer):
    """Returns scripted responses in order and records every call.

    A scripted item that is an Exception is raised instead of returned.
    """

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls: list[tuple[str, str]] = []

    async def transform(self, instruction: str, user_message: str) -> TransformResult:
        self.calls.append((instruction, user_message))
        if not self.responses:
            raise AssertionError("FakeTransformer ran out of scripted responses")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def completed(text: str, status: CompletionStatus = CompletionStatus.STOP) -> TransformResult:
    return TransformResult(text=text, completion_status=status)


@pytest.fixture
def valid_preview() -> str:
    return VALID_PREVIEW


@pytest.fixture
def raw_generated() -> str:
    return RAW_GENERATED


@pytest.fixture
def fake_transformer():
    """Factory: fake_transformer(resp1, resp2, ...)."""

    def _make(*responses):
        return FakeTransformer(responses)

    return _make


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached per process; tests that patch env need a clean cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
